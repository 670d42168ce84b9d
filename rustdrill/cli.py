"""Command-line interface: list, run, verify and watch exercises."""

from __future__ import annotations

import argparse
import os
import queue
import subprocess
import sys
import threading
from collections.abc import Callable, Sequence
from enum import Enum, auto
from pathlib import Path
from typing import TextIO

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from rustdrill.exercise import Exercise, load_exercises
from rustdrill.project import RustAnalyzerProject
from rustdrill.run import RunFailed, reset, run
from rustdrill.ui import no_emoji
from rustdrill.verify import VerificationFailed, verify

_VERSION = "0.1.0"
_INFO_FILE = "info.toml"
_WATCHED_EVENTS = frozenset({"created", "modified", "moved"})

WELCOME = """\
       welcome to...

  +-------------------------+
  |        rustdrill        |
  +-------------------------+"""

DEFAULT_OUT = """\
Thanks for installing rustdrill!

Is this your first time? Don't worry, rustdrill was made for beginners! We are
going to teach you a lot of things about Rust, but before we can get
started, here's a couple of notes about how rustdrill operates:

1. The central concept behind rustdrill is that you solve exercises. These
   exercises usually have some sort of syntax error in them, which will cause
   them to fail compilation or testing. Sometimes there's a logic error instead
   of a syntax error. No matter what error, it's your job to find it and fix it!
   You'll know when you fixed it because then, the exercise will compile and
   rustdrill will be able to move on to the next exercise.
2. If you run rustdrill in watch mode (which we recommend), it'll automatically
   start with the first exercise. Don't get confused by an error message popping
   up as soon as you run rustdrill! This is part of the exercise that you're
   supposed to solve, so open the exercise file in an editor and start your
   detective work!
3. If you're stuck on an exercise, there is a helpful hint you can view by typing
   'hint' (in watch mode), or running `rustdrill hint exercise_name`.
4. If you want to use `rust-analyzer` with exercises, which provides features like
   autocompletion, run the command `rustdrill lsp`.

Got all that? Great! To get started, run `rustdrill watch` in order to get the first
exercise. Make sure to have your editor open!"""

FINISH_LINE = """\
+----------------------------------------------------+
|          You made it to the Fe-nish line!          |
+----------------------------------------------------+

We hope you enjoyed learning about the various aspects of Rust!
You can also contribute your own exercises to help the greater community!"""

_SHELL_HELP = """\
Commands available to you in watch mode:
  hint   - prints the current exercise's hint
  clear  - clears the screen
  quit   - quits watch mode
  !<cmd> - executes a command, like `!rustc --explain E0381`
  help   - displays this help message

Watch mode automatically re-evaluates the current exercise
when you edit a file's contents."""


class WatchStatus(Enum):
    """How watch mode ended."""

    FINISHED = auto()
    UNFINISHED = auto()


class ExerciseNotFound(LookupError):
    """No exercise matches the requested name, or none is left to do."""


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the command line."""
    parser = argparse.ArgumentParser(
        prog="rustdrill",
        description="A collection of small exercises to get you used to "
        "writing and reading Rust code",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_VERSION}")
    parser.add_argument(
        "--nocapture", action="store_true", help="Show outputs from the test exercises"
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    commands.add_parser("verify", help="Verify all exercises according to the recommended order")

    watch_parser = commands.add_parser("watch", help="Rerun `verify` when files were edited")
    watch_parser.add_argument(
        "--success-hints", action="store_true", help="Show hints on success"
    )

    for command, text in (
        ("run", "Run/Test a single exercise"),
        ("reset", 'Reset a single exercise using "git stash -- <filename>"'),
        ("hint", "Return a hint for the given exercise"),
    ):
        sub = commands.add_parser(command, help=text)
        sub.add_argument("name", help="The name of the exercise")

    list_parser = commands.add_parser("list", help="List the exercises available")
    list_parser.add_argument(
        "-p", "--paths", action="store_true", help="Show only the paths of the exercises"
    )
    list_parser.add_argument(
        "-n", "--names", action="store_true", help="Show only the names of the exercises"
    )
    list_parser.add_argument(
        "-f",
        "--filter",
        default=None,
        help="Provide a string to match exercise names. Comma separated patterns are accepted",
    )
    list_parser.add_argument(
        "-u", "--unsolved", action="store_true", help="Display only exercises not yet solved"
    )
    list_parser.add_argument(
        "-s", "--solved", action="store_true", help="Display only exercises that have been solved"
    )

    commands.add_parser("lsp", help="Enable rust-analyzer for exercises")
    return parser


def find_exercise(name: str, exercises: Sequence[Exercise]) -> Exercise:
    """Return the named exercise, or the first unfinished one for "next"."""
    if name == "next":
        found = next((exercise for exercise in exercises if not exercise.looks_done()), None)
        if found is None:
            raise ExerciseNotFound(
                "🎉 Congratulations! You have done all the exercises!\n"
                "🔚 There are no more exercises to do next!"
            )
        return found
    found = next((exercise for exercise in exercises if exercise.name == name), None)
    if found is None:
        raise ExerciseNotFound(f"No exercise found for '{name}'!")
    return found


def list_exercises(
    exercises: Sequence[Exercise],
    paths: bool = False,
    names: bool = False,
    filter_text: str | None = None,
    unsolved: bool = False,
    solved: bool = False,
    out: TextIO | None = None,
) -> int:
    """Write the exercise table and progress line; return the number done."""
    out = sys.stdout if out is None else out
    if not paths and not names:
        out.write(f"{'Name':<17}\t{'Path':<46}\t{'Status':<7}\n")

    patterns = [part for part in (filter_text or "").lower().split(",") if part.strip()]
    done_count = 0
    for exercise in exercises:
        fname = str(exercise.path)
        matches = any(part in exercise.name or part in fname for part in patterns)
        done = exercise.looks_done()
        if done:
            done_count += 1
        status = "Done" if done else "Pending"
        wanted = (done and solved) or (not done and unsolved) or (not solved and not unsolved)
        if wanted and (matches or filter_text is None):
            if paths:
                line = fname
            elif names:
                line = exercise.name
            else:
                line = f"{exercise.name:<17}\t{fname:<46}\t{status:<7}"
            out.write(f"{line}\n")
            out.flush()

    total = len(exercises)
    percentage = f"{done_count / total * 100.0:.1f}" if total else "NaN"
    out.write(
        f"Progress: You completed {done_count} / {total} exercises ({percentage} %).\n"
    )
    return done_count


def handle_shell_command(
    line: str,
    failed_hint: Callable[[], str | None],
    should_quit: threading.Event,
) -> None:
    """Carry out one command typed in watch mode."""
    command = line.strip()
    if command == "hint":
        hint = failed_hint()
        if hint is not None:
            print(hint)
    elif command == "clear":
        print("\x1b[2J\x1b[1;1H")
    elif command == "quit":
        should_quit.set()
        print("Bye!")
    elif command == "help":
        print(_SHELL_HELP)
    elif command.startswith("!"):
        external = command[1:]
        parts = external.split()
        if not parts:
            print("no command provided")
        else:
            try:
                subprocess.run(parts)
            except OSError as exc:
                print(f"failed to execute command `{external}`: {exc}")
    else:
        print(f"unknown command: {command}")


def spawn_watch_shell(
    failed_hint: Callable[[], str | None],
    should_quit: threading.Event,
) -> threading.Thread:
    """Start a background thread reading watch-mode commands from stdin."""
    print(
        "Welcome to watch mode! You can type 'help' to get an overview "
        "of the commands you can use here."
    )

    def shell() -> None:
        while True:
            try:
                line = sys.stdin.readline()
            except (OSError, ValueError) as exc:
                print(f"error reading command: {exc}")
                return
            if not line:
                return
            handle_shell_command(line, failed_hint, should_quit)

    thread = threading.Thread(target=shell, name="watch-shell", daemon=True)
    thread.start()
    return thread


class _QueueHandler(FileSystemEventHandler):
    def __init__(self, sink: queue.Queue[str]) -> None:
        super().__init__()
        self._sink = sink

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in _WATCHED_EVENTS:
            return
        for path in (event.src_path, getattr(event, "dest_path", "")):
            if path:
                self._sink.put(os.fsdecode(path))


def _collect(events: queue.Queue[str], wait: float, quiet: float) -> list[str]:
    """Wait for a burst of events and return its distinct paths once it settles."""
    try:
        first = events.get(timeout=wait)
    except queue.Empty:
        return []
    paths = dict.fromkeys([first])
    while True:
        try:
            paths[events.get(timeout=quiet)] = None
        except queue.Empty:
            return list(paths)


def _ends_with(path: Path, suffix: Path) -> bool:
    tail = suffix.parts
    if not tail:
        return True
    return len(tail) <= len(path.parts) and path.parts[-len(tail):] == tail


def _clear_screen() -> None:
    print("\x1bc")


def watch(exercises: Sequence[Exercise], verbose: bool, success_hints: bool) -> WatchStatus:
    """Verify exercises and re-verify whenever an exercise file changes."""
    events: queue.Queue[str] = queue.Queue()
    should_quit = threading.Event()
    observer = Observer()
    observer.schedule(_QueueHandler(events), "./exercises", recursive=True)
    observer.start()
    try:
        _clear_screen()
        try:
            verify(exercises, (0, len(exercises)), verbose, success_hints)
        except VerificationFailed as exc:
            current_hint = [exc.exercise.hint]
        else:
            return WatchStatus.FINISHED

        spawn_watch_shell(lambda: current_hint[0], should_quit)
        while True:
            for changed in _collect(events, wait=1.0, quiet=1.0):
                event_path = Path(changed)
                if event_path.suffix != ".rs" or not event_path.exists():
                    continue
                filepath = event_path.resolve()
                edited = next(
                    (e for e in exercises if _ends_with(filepath, e.path)), None
                )
                pending = [edited] if edited is not None else []
                pending.extend(
                    e
                    for e in exercises
                    if not e.looks_done() and not _ends_with(filepath, e.path)
                )
                num_done = sum(
                    1
                    for e in exercises
                    if e.looks_done() and not _ends_with(filepath, e.path)
                )
                _clear_screen()
                try:
                    verify(pending, (num_done, len(exercises)), verbose, success_hints)
                except VerificationFailed as exc:
                    current_hint[0] = exc.exercise.hint
                else:
                    return WatchStatus.FINISHED
            if should_quit.is_set():
                return WatchStatus.UNFINISHED
    finally:
        observer.stop()
        observer.join()


def rustc_exists() -> bool:
    """True when `rustc --version` can be run successfully."""
    try:
        result = subprocess.run(
            ["rustc", "--version"],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError:
        return False
    return result.returncode == 0


def _lsp() -> int:
    project = RustAnalyzerProject()
    try:
        project.get_sysroot_src()
    except OSError as exc:
        raise RuntimeError(
            "Couldn't find toolchain path, do you have `rustc` installed?"
        ) from exc
    project.exercises_to_json()

    if not project.crates:
        print("Failed find any exercises, make sure you're in the exercises folder")
        return 0
    try:
        project.write_to_disk()
    except OSError:
        print("Failed to write rust-project.json to disk for rust-analyzer")
        return 0
    print("Successfully generated rust-project.json")
    print("rust-analyzer will now parse exercises, restart your language server or editor")
    return 0


def _watch(exercises: Sequence[Exercise], verbose: bool, success_hints: bool) -> int:
    try:
        status = watch(exercises, verbose, success_hints)
    except OSError as exc:
        print(f"Error: Could not watch your progress. Error message was {exc!r}.")
        print(
            "Most likely you've run out of disk space or your 'inotify limit' "
            "has been reached."
        )
        return 1
    if status is WatchStatus.FINISHED:
        emoji = "★" if no_emoji() else "🎉"
        print(f"{emoji} All exercises completed! {emoji}")
        print(f"\n{FINISH_LINE}\n")
    else:
        print("We hope you're enjoying learning about Rust!")
        print(
            "If you want to continue working on the exercises at a later point, "
            "you can simply run `rustdrill watch` again"
        )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return the exit status."""
    args = build_parser().parse_args(argv)

    if args.command is None:
        print(f"\n{WELCOME}\n")

    if not Path(_INFO_FILE).exists():
        program = Path(sys.argv[0]).name or "rustdrill"
        print(f"{program} must be run from the rustdrill directory")
        print("Try `cd rustdrill/`!")
        return 1

    if not rustc_exists():
        print("We cannot find `rustc`.")
        print("Try running `rustc --version` to diagnose your problem.")
        print("For instructions on how to install Rust, check the README.")
        return 1

    exercises = load_exercises(Path(_INFO_FILE).read_text(encoding="utf-8"))
    verbose = args.nocapture

    if args.command is None:
        print(f"{DEFAULT_OUT}\n")
        return 0

    if args.command == "list":
        try:
            list_exercises(
                exercises, args.paths, args.names, args.filter, args.unsolved, args.solved
            )
        except BrokenPipeError:
            return 0
        except OSError:
            return 1
        return 0

    if args.command in ("run", "reset", "hint"):
        try:
            exercise = find_exercise(args.name, exercises)
        except ExerciseNotFound as exc:
            print(exc)
            return 1
        if args.command == "hint":
            print(exercise.hint)
            return 0
        try:
            if args.command == "run":
                run(exercise, verbose)
            else:
                reset(exercise).wait()
        except RunFailed:
            return 1
        return 0

    if args.command == "verify":
        try:
            verify(exercises, (0, len(exercises)), verbose, False)
        except VerificationFailed:
            return 1
        return 0

    if args.command == "lsp":
        return _lsp()

    return _watch(exercises, verbose, args.success_hints)


if __name__ == "__main__":
    raise SystemExit(main())