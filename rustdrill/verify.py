"""Checking exercises: compile, run and report on completion."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from enum import Enum, auto

from rich.console import Console
from rich.status import Status
from rich.text import Text

from rustdrill.exercise import (
    CompilationError,
    CompiledExercise,
    Exercise,
    ExecutionError,
    Mode,
)
from rustdrill.ui import no_emoji, success, warn

_BAR_WIDTH = 60
_SEPARATOR = "===================="


class RunMode(Enum):
    """Whether a passing exercise should prompt the user to move on."""

    INTERACTIVE = auto()
    NON_INTERACTIVE = auto()


class VerificationFailed(Exception):
    """An exercise did not compile, did not pass, or is not marked done."""

    def __init__(self, exercise: Exercise) -> None:
        super().__init__(str(exercise))
        self.exercise = exercise


def _console() -> Console:
    return Console(highlight=False, markup=False, emoji=False, soft_wrap=True)


@contextmanager
def _spinner(message: str) -> Iterator[Status]:
    status = _console().status(message, spinner="dots")
    status.start()
    try:
        yield status
    finally:
        status.stop()


def _show_progress(position: int, total: int, percentage: float) -> None:
    done = min(_BAR_WIDTH * position // total, _BAR_WIDTH) if total else _BAR_WIDTH
    remaining = "" if done >= _BAR_WIDTH else ">" + "-" * (_BAR_WIDTH - done - 1)
    text = Text("Progress: [")
    text.append("#" * done, style="green")
    text.append(remaining, style="red")
    text.append(f"] {position}/{total} ({percentage:.1f} %)")
    _console().print(text)


def _compile(exercise: Exercise, status: Status) -> CompiledExercise:
    try:
        return exercise.compile()
    except CompilationError as exc:
        status.stop()
        warn(f"Compiling of {exercise} failed! Please try again. Here's the output:")
        print(exc.output.stderr)
        raise VerificationFailed(exercise) from exc


def verify(
    exercises: Iterable[Exercise],
    progress: tuple[int, int],
    verbose: bool,
    success_hints: bool,
) -> None:
    """Check each exercise in turn; raise VerificationFailed at the first one left undone."""
    num_done, total = progress
    step = 100.0 / total if total else 0.0
    percentage = num_done / total * 100.0 if total else 100.0
    position = num_done
    _show_progress(position, total, percentage)

    for exercise in exercises:
        try:
            if exercise.mode is Mode.TEST:
                passed = compile_and_test(exercise, RunMode.INTERACTIVE, verbose, success_hints)
            elif exercise.mode is Mode.COMPILE:
                passed = compile_and_run_interactively(exercise, success_hints)
            else:
                passed = compile_only(exercise, success_hints)
        except VerificationFailed:
            passed = False
        if not passed:
            raise VerificationFailed(exercise)
        percentage += step
        position += 1
        _show_progress(position, total, percentage)


def test(exercise: Exercise, verbose: bool) -> None:
    """Compile and run the exercise's test harness without prompting."""
    compile_and_test(exercise, RunMode.NON_INTERACTIVE, verbose, False)


def compile_only(exercise: Exercise, success_hints: bool) -> bool:
    """Compile the exercise without running it."""
    with _spinner(f"Compiling {exercise}...") as status:
        with _compile(exercise, status):
            pass
    return prompt_for_completion(exercise, None, success_hints)


def compile_and_run_interactively(exercise: Exercise, success_hints: bool) -> bool:
    """Compile the exercise, run it and show its output on completion."""
    with _spinner(f"Compiling {exercise}...") as status:
        with _compile(exercise, status) as compiled:
            status.update(f"Running {exercise}...")
            try:
                output = compiled.run()
            except ExecutionError as exc:
                status.stop()
                warn(f"Ran {exercise} with errors")
                print(exc.output.stdout)
                print(exc.output.stderr)
                raise VerificationFailed(exercise) from exc
    return prompt_for_completion(exercise, output.stdout, success_hints)


def compile_and_test(
    exercise: Exercise,
    run_mode: RunMode,
    verbose: bool,
    success_hints: bool,
) -> bool:
    """Compile the exercise as a test harness and run it."""
    with _spinner(f"Testing {exercise}...") as status:
        with _compile(exercise, status) as compiled:
            try:
                output = compiled.run()
            except ExecutionError as exc:
                status.stop()
                warn(f"Testing of {exercise} failed! Please try again. Here's the output:")
                print(exc.output.stdout)
                raise VerificationFailed(exercise) from exc

    if verbose:
        print(output.stdout)
    if run_mode is RunMode.INTERACTIVE:
        return prompt_for_completion(exercise, None, success_hints)
    return True


def _print_separator(console: Console) -> None:
    console.print(Text(_SEPARATOR, style="bold"))


def prompt_for_completion(
    exercise: Exercise,
    prompt_output: str | None,
    success_hints: bool,
) -> bool:
    """Return True if the exercise is done; otherwise report success and show the marker."""
    context = exercise.state()
    if context is None:
        return True

    if exercise.mode is Mode.COMPILE:
        success(f"Successfully ran {exercise}!")
    elif exercise.mode is Mode.TEST:
        success(f"Successfully tested {exercise}!")
    else:
        success(f"Successfully compiled {exercise}!")

    plain = no_emoji()
    clippy_message = (
        "The code is compiling, and Clippy is happy!"
        if plain
        else "The code is compiling, and 📎 Clippy 📎 is happy!"
    )
    success_message = {
        Mode.COMPILE: "The code is compiling!",
        Mode.TEST: "The code is compiling, and the tests pass!",
        Mode.CLIPPY: clippy_message,
    }[exercise.mode]

    console = _console()
    print()
    if plain:
        print(f"~*~ {success_message} ~*~")
    else:
        print(f"🎉 🎉  {success_message} 🎉 🎉")
    print()

    if prompt_output is not None:
        print("Output:")
        _print_separator(console)
        print(prompt_output)
        _print_separator(console)
        print()
    if success_hints:
        print("Hints:")
        _print_separator(console)
        print(exercise.hint)
        _print_separator(console)
        print()

    print("You can keep working on this exercise,")
    console.print(
        Text("or jump into the next one by removing the ")
        .append("`I AM NOT DONE`", style="bold")
        .append(" comment:")
    )
    print()
    for context_line in context:
        text = Text()
        text.append(f"{context_line.number:>2}", style="bold blue")
        text.append(" ")
        text.append("|", style="blue")
        text.append("  ")
        text.append(context_line.line, style="bold" if context_line.important else "")
        console.print(text)

    return False