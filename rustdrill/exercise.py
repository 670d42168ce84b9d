"""Exercise descriptions, compilation and completion state."""

from __future__ import annotations

import contextlib
import os
import re
import subprocess
import threading
import tomllib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from rustdrill.ui import no_emoji

RUSTC_COLOR_ARGS = ("--color", "always")
RUSTC_EDITION_ARGS = ("--edition", "2021")
RUSTC_NO_DEBUG_ARGS = ("-C", "strip=debuginfo")
I_AM_DONE_REGEX = re.compile(r"^\s*///?\s*I\s+AM\s+NOT\s+DONE", re.MULTILINE)
CONTEXT = 2
CLIPPY_CARGO_TOML_PATH = "./exercises/22_clippy/Cargo.toml"


def temp_file() -> str:
    """Return a temporary binary name unique to this process and thread."""
    return f"./temp_{os.getpid()}_{threading.get_ident()}"


def clean() -> None:
    """Remove the temporary binary, ignoring a missing file."""
    with contextlib.suppress(OSError):
        os.remove(temp_file())


class Mode(Enum):
    """How an exercise is checked."""

    COMPILE = "compile"
    TEST = "test"
    CLIPPY = "clippy"


@dataclass(frozen=True)
class ContextLine:
    """A source line shown around the pending marker."""

    line: str
    number: int
    important: bool


@dataclass(frozen=True)
class ExerciseOutput:
    """Captured output of a finished command."""

    stdout: str
    stderr: str


class CompilationError(Exception):
    """The exercise failed to compile; ``output`` holds the compiler output."""

    def __init__(self, output: ExerciseOutput) -> None:
        super().__init__(output.stderr)
        self.output = output


class ExecutionError(Exception):
    """The compiled exercise exited unsuccessfully; ``output`` holds its output."""

    def __init__(self, output: ExerciseOutput) -> None:
        super().__init__(output.stderr)
        self.output = output


def _output_of(result: subprocess.CompletedProcess) -> ExerciseOutput:
    return ExerciseOutput(
        stdout=result.stdout.decode("utf-8", errors="replace"),
        stderr=result.stderr.decode("utf-8", errors="replace"),
    )


def _invoke(args: Sequence[str], failure: str) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(list(args), capture_output=True)
    except OSError as exc:
        raise RuntimeError(failure) from exc


def _lines(source: str) -> list[str]:
    parts = source.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    return [part.removesuffix("\r") for part in parts]


class CompiledExercise:
    """A successfully compiled exercise; closing it removes the binary."""

    def __init__(self, exercise: Exercise) -> None:
        self.exercise = exercise
        self._closed = False

    def run(self) -> ExerciseOutput:
        """Run the compiled binary, raising ExecutionError on failure."""
        return self.exercise._run()

    def close(self) -> None:
        """Remove the compiled binary."""
        if not self._closed:
            clean()
            self._closed = True

    def __enter__(self) -> CompiledExercise:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@dataclass(frozen=True)
class Exercise:
    """One exercise as described in info.toml."""

    name: str
    path: Path
    mode: Mode
    hint: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Exercise:
        """Build an exercise from one table of info.toml."""
        return cls(
            name=str(data["name"]),
            path=Path(data["path"]),
            mode=Mode(data["mode"]),
            hint=str(data["hint"]),
        )

    def __str__(self) -> str:
        return str(self.path)

    def _rustc_args(self, *, test: bool = False) -> list[str]:
        return [
            "rustc",
            *(["--test"] if test else []),
            str(self.path),
            "-o",
            temp_file(),
            *RUSTC_COLOR_ARGS,
            *RUSTC_EDITION_ARGS,
            *RUSTC_NO_DEBUG_ARGS,
        ]

    def _write_clippy_manifest(self) -> None:
        manifest = (
            "[package]\n"
            f'name = "{self.name}"\n'
            'version = "0.0.1"\n'
            'edition = "2021"\n'
            "[[bin]]\n"
            f'name = "{self.name}"\n'
            f'path = "{self.name}.rs"'
        )
        message = (
            "Failed to write Clippy Cargo.toml file."
            if no_emoji()
            else "Failed to write 📎 Clippy 📎 Cargo.toml file."
        )
        try:
            Path(CLIPPY_CARGO_TOML_PATH).write_text(manifest, encoding="utf-8")
        except OSError as exc:
            raise RuntimeError(message) from exc

    def compile(self) -> CompiledExercise:
        """Compile the exercise, raising CompilationError on failure."""
        failure = "Failed to run 'compile' command."
        if self.mode is Mode.COMPILE:
            result = _invoke(self._rustc_args(), failure)
        elif self.mode is Mode.TEST:
            result = _invoke(self._rustc_args(test=True), failure)
        else:
            self._write_clippy_manifest()
            # Build a binary too so clippy exercises can be run afterwards.
            _invoke(self._rustc_args(), "Failed to compile!")
            _invoke(
                ["cargo", "clean", "--manifest-path", CLIPPY_CARGO_TOML_PATH, *RUSTC_COLOR_ARGS],
                "Failed to run 'cargo clean'",
            )
            result = _invoke(
                [
                    "cargo",
                    "clippy",
                    "--manifest-path",
                    CLIPPY_CARGO_TOML_PATH,
                    *RUSTC_COLOR_ARGS,
                    "--",
                    "-D",
                    "warnings",
                    "-D",
                    "clippy::float_cmp",
                ],
                failure,
            )

        if result.returncode == 0:
            return CompiledExercise(self)
        clean()
        raise CompilationError(_output_of(result))

    def _run(self) -> ExerciseOutput:
        arg = "--show-output" if self.mode is Mode.TEST else ""
        result = _invoke([temp_file(), arg], "Failed to run 'run' command")
        output = _output_of(result)
        if result.returncode == 0:
            return output
        raise ExecutionError(output)

    def state(self) -> list[ContextLine] | None:
        """Return None when done, else the lines around the pending marker."""
        source = self.path.read_text(encoding="utf-8")
        if not I_AM_DONE_REGEX.search(source):
            return None

        lines = _lines(source)
        matched = next(
            index for index, line in enumerate(lines) if I_AM_DONE_REGEX.search(line)
        )
        first = max(matched - CONTEXT, 0)
        last = matched + CONTEXT
        return [
            ContextLine(line=line, number=index + 1, important=index == matched)
            for index, line in enumerate(lines)
            if first <= index <= last
        ]

    def looks_done(self) -> bool:
        """True when the pending marker has been removed from the source."""
        return self.state() is None


def load_exercises(text: str) -> list[Exercise]:
    """Parse the contents of info.toml into exercises, in file order."""
    return [Exercise.from_dict(entry) for entry in tomllib.loads(text)["exercises"]]