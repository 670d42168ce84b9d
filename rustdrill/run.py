"""Running a single exercise and resetting it."""

from __future__ import annotations

import subprocess

from rich.console import Console

from rustdrill.exercise import CompilationError, Exercise, ExecutionError, Mode
from rustdrill.ui import success, warn
from rustdrill.verify import VerificationFailed
from rustdrill.verify import test as run_tests


class RunFailed(Exception):
    """The exercise could not be compiled, run or reset."""


def run(exercise: Exercise, verbose: bool) -> None:
    """Compile and run (or test) one exercise, raising RunFailed on failure."""
    if exercise.mode is Mode.TEST:
        try:
            run_tests(exercise, verbose)
        except VerificationFailed as exc:
            raise RunFailed(str(exercise)) from exc
    else:
        compile_and_run(exercise)


def reset(exercise: Exercise) -> subprocess.Popen:
    """Stash the changes made to the exercise file with git."""
    try:
        return subprocess.Popen(["git", "stash", "--", str(exercise.path)])
    except OSError as exc:
        raise RunFailed(str(exercise)) from exc


def compile_and_run(exercise: Exercise) -> None:
    """Compile the exercise, run the binary and show its output."""
    status = Console(highlight=False, markup=False, emoji=False).status(
        f"Compiling {exercise}...", spinner="dots"
    )
    status.start()
    try:
        try:
            compiled = exercise.compile()
        except CompilationError as exc:
            status.stop()
            warn(f"Compilation of {exercise} failed!, Compiler error message:\n")
            print(exc.output.stderr)
            raise RunFailed(str(exercise)) from exc

        with compiled:
            status.update(f"Running {exercise}...")
            try:
                output = compiled.run()
            except ExecutionError as exc:
                status.stop()
                print(exc.output.stdout)
                print(exc.output.stderr)
                warn(f"Ran {exercise} with errors")
                raise RunFailed(str(exercise)) from exc
    finally:
        status.stop()

    print(output.stdout)
    success(f"Successfully ran {exercise}")