"""Run, verify and watch small Rust exercises from the terminal, with worked solutions."""

__version__ = "0.1.0"