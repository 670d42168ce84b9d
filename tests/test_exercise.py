import os
import subprocess
from pathlib import Path
from unittest import mock

import pytest

from rustdrill.exercise import (
    CompilationError,
    CompiledExercise,
    ContextLine,
    Exercise,
    ExecutionError,
    Mode,
    clean,
    load_exercises,
    temp_file,
)

PENDING = "// fake_exercise\n\n// I AM NOT DONE\n\nfn main() {\n\n}\n"
FINISHED = "// fake_exercise\n\nfn main() {\n\n}\n"


def _exercise(tmp_path, content, name="example", mode=Mode.COMPILE):
    path = tmp_path / f"{name}.rs"
    path.write_text(content, encoding="utf-8")
    return Exercise(name=name, path=path, mode=mode, hint="")


def _completed(returncode=0, stdout=b"", stderr=b""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


def test_pending_state(tmp_path):
    exercise = _exercise(tmp_path, PENDING, "pending_exercise")
    expected = [
        ContextLine(line="// fake_exercise", number=1, important=False),
        ContextLine(line="", number=2, important=False),
        ContextLine(line="// I AM NOT DONE", number=3, important=True),
        ContextLine(line="", number=4, important=False),
        ContextLine(line="fn main() {", number=5, important=False),
    ]
    assert exercise.state() == expected
    assert exercise.looks_done() is False


def test_finished_exercise(tmp_path):
    exercise = _exercise(tmp_path, FINISHED, "finished_exercise")
    assert exercise.state() is None
    assert exercise.looks_done() is True


def test_marker_on_first_line_clips_context(tmp_path):
    exercise = _exercise(tmp_path, "// I AM NOT DONE\nfn main() {}\n")
    assert exercise.state() == [
        ContextLine(line="// I AM NOT DONE", number=1, important=True),
        ContextLine(line="fn main() {}", number=2, important=False),
    ]


def test_triple_slash_marker_counts_as_pending(tmp_path):
    exercise = _exercise(tmp_path, "fn main() {}\n   /// I  AM NOT   DONE\n")
    state = exercise.state()
    assert [line.important for line in state] == [False, True]


def test_missing_file_raises(tmp_path):
    exercise = Exercise("ghost", tmp_path / "ghost.rs", Mode.COMPILE, "")
    with pytest.raises(OSError):
        exercise.state()


def test_clean(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Path(temp_file()).touch()
    exercise = _exercise(tmp_path, PENDING)
    compiled = CompiledExercise(exercise)
    compiled.close()
    assert not Path(temp_file()).exists()


def test_clean_ignores_missing_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    clean()
    assert not Path(temp_file()).exists()


def test_temp_file_contains_process_id():
    assert temp_file().startswith(f"./temp_{os.getpid()}_")


def test_exercise_with_output(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    exercise = _exercise(tmp_path, "#[test]\nfn passing() {}\n", "testSuccess", Mode.TEST)
    with mock.patch(
        "subprocess.run",
        side_effect=[_completed(), _completed(stdout=b"THIS TEST TOO SHALL PASS\n")],
    ) as run:
        with exercise.compile() as compiled:
            out = compiled.run()
    assert "THIS TEST TOO SHALL PASS" in out.stdout
    compile_args = run.call_args_list[0].args[0]
    assert compile_args[:3] == ["rustc", "--test", str(exercise.path)]
    assert "--edition" in compile_args
    assert run.call_args_list[1].args[0] == [temp_file(), "--show-output"]


def test_compile_mode_has_no_test_flag(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    exercise = _exercise(tmp_path, FINISHED)
    with mock.patch("subprocess.run", return_value=_completed()) as run:
        compiled = exercise.compile()
        compiled.run()
    assert run.call_args_list[0].args[0][:2] == ["rustc", str(exercise.path)]
    assert run.call_args_list[1].args[0] == [temp_file(), ""]


def test_compile_failure_raises_and_cleans(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Path(temp_file()).touch()
    exercise = _exercise(tmp_path, "fn main() {\n    let\n}\n", "compFailure")
    with mock.patch("subprocess.run", return_value=_completed(1, b"", b"expected pattern")):
        with pytest.raises(CompilationError) as info:
            exercise.compile()
    assert info.value.output.stderr == "expected pattern"
    assert not Path(temp_file()).exists()


def test_run_failure_raises_execution_error(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    exercise = _exercise(tmp_path, FINISHED, mode=Mode.TEST)
    with mock.patch(
        "subprocess.run",
        side_effect=[_completed(), _completed(101, b"test failed", b"panicked")],
    ):
        compiled = exercise.compile()
        with pytest.raises(ExecutionError) as info:
            compiled.run()
    assert info.value.output.stdout == "test failed"
    assert info.value.output.stderr == "panicked"


def test_missing_compiler_raises_runtime_error(tmp_path):
    exercise = _exercise(tmp_path, FINISHED)
    with mock.patch("subprocess.run", side_effect=FileNotFoundError("rustc")):
        with pytest.raises(RuntimeError, match="Failed to run 'compile' command."):
            exercise.compile()


def test_clippy_writes_manifest(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "exercises" / "22_clippy").mkdir(parents=True)
    exercise = _exercise(tmp_path, FINISHED, "clippy1", Mode.CLIPPY)
    with mock.patch("subprocess.run", return_value=_completed()) as run:
        exercise.compile().close()
    manifest = (tmp_path / "exercises" / "22_clippy" / "Cargo.toml").read_text()
    assert manifest == (
        '[package]\nname = "clippy1"\nversion = "0.0.1"\nedition = "2021"\n'
        '[[bin]]\nname = "clippy1"\npath = "clippy1.rs"'
    )
    commands = [call.args[0][:2] for call in run.call_args_list]
    assert commands == [["rustc", str(exercise.path)], ["cargo", "clean"], ["cargo", "clippy"]]
    assert run.call_args_list[2].args[0][-4:] == ["-D", "warnings", "-D", "clippy::float_cmp"]


def test_clippy_manifest_failure_message(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("NO_EMOJI", "1")
    exercise = _exercise(tmp_path, FINISHED, "clippy1", Mode.CLIPPY)
    with pytest.raises(RuntimeError, match="Failed to write Clippy Cargo.toml file."):
        exercise.compile()


def test_str_is_path(tmp_path):
    exercise = _exercise(tmp_path, FINISHED)
    assert str(exercise) == str(exercise.path)


def test_load_exercises():
    text = (
        '[[exercises]]\nname = "intro1"\npath = "exercises/00_intro/intro1.rs"\n'
        'mode = "compile"\nhint = "No hints this time ;)"\n\n'
        '[[exercises]]\nname = "if1"\npath = "exercises/03_if/if1.rs"\n'
        'mode = "test"\nhint = "Hello!"\n'
    )
    exercises = load_exercises(text)
    assert [e.name for e in exercises] == ["intro1", "if1"]
    assert [e.mode for e in exercises] == [Mode.COMPILE, Mode.TEST]
    assert exercises[0].path == Path("exercises/00_intro/intro1.rs")
    assert exercises[1].hint == "Hello!"


def test_from_dict_rejects_unknown_mode():
    with pytest.raises(ValueError):
        Exercise.from_dict({"name": "x", "path": "x.rs", "mode": "Compile", "hint": ""})


def test_from_dict_requires_fields():
    with pytest.raises(KeyError):
        Exercise.from_dict({"name": "x", "path": "x.rs", "mode": "test"})