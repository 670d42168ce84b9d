"""Coloured status lines for warnings and successes."""

from __future__ import annotations

import os

from rich.console import Console
from rich.text import Text


def no_emoji() -> bool:
    """Return True when the NO_EMOJI environment variable is set."""
    return "NO_EMOJI" in os.environ


def _emit(symbol: str, message: str, colour: str) -> None:
    console = Console(highlight=False, emoji=False, markup=False)
    console.print(Text(f"{symbol} {message}", style=colour), soft_wrap=True)


def warn(message: str) -> None:
    """Print a red warning line."""
    _emit("!" if no_emoji() else "⚠️ ", message, "red")


def success(message: str) -> None:
    """Print a green success line."""
    _emit("✓" if no_emoji() else "✅", message, "green")