import re
import subprocess
from pathlib import Path

import pytest

from rustdrill.cli import find_exercise, main, rustc_exists, watch
from rustdrill.exercise import Exercise, Mode, load_exercises

SOURCES = {
    "compFailure.rs": "fn main() {\n    let\n}\n",
    "compNoExercise.rs": "fn main() {\n}\n",
    "testFailure.rs": "#[test]\nfn passing() {\n    asset!(true);\n}\n",
    "testNotPassed.rs": "#[test]\nfn not_passing() {\n    assert!(false);\n}\n",
    "finished_exercise.rs": "// fake_exercise\n\nfn main() {\n\n}\n",
    "pending_exercise.rs": "// fake_exercise\n\n// I AM NOT DONE\n\nfn main() {\n\n}\n",
    "pending_test_exercise.rs": "// I AM NOT DONE\n\n#[test]\nfn it_works() {}\n",
    "compSuccess.rs": "fn main() {\n}\n",
    "testSuccess.rs": (
        "#[test]\nfn passing() {\n"
        '    println!("THIS TEST TOO SHALL PASS");\n    assert!(true);\n}\n'
    ),
}

SUCCESS = [
    ("compSuccess", "compile", ""),
    ("testSuccess", "test", ""),
]
FAILURE = [
    ("compFailure", "compile", ""),
    ("compNoExercise", "compile", ""),
    ("testFailure", "test", "Hello!"),
    ("testNotPassed", "test", ""),
]
STATE = [
    ("pending_exercise", "compile", ""),
    ("pending_test_exercise", "test", ""),
    ("finished_exercise", "compile", ""),
]

COMPILE_ERRORS = ("asset!(", "    let\n}")


class FakeToolchain:
    def __init__(self, rustc_installed=True):
        self.rustc_installed = rustc_installed
        self.source = ""

    def __call__(self, command, *args, **kwargs):
        command = list(command)
        if command[0] == "rustc":
            if not self.rustc_installed:
                raise FileNotFoundError("rustc")
            if command[1:] == ["--version"]:
                return subprocess.CompletedProcess(command, 0, b"", b"")
            source_path = next(part for part in command if part.endswith(".rs"))
            self.source = Path(source_path).read_text(encoding="utf-8")
            if any(marker in self.source for marker in COMPILE_ERRORS):
                return subprocess.CompletedProcess(command, 1, b"", b"error: expected pattern")
            Path(command[command.index("-o") + 1]).write_bytes(b"")
            return subprocess.CompletedProcess(command, 0, b"", b"")
        if command[0] == "cargo":
            return subprocess.CompletedProcess(command, 0, b"", b"")
        printed = "\n".join(re.findall(r'println!\("([^"]*)"\)', self.source))
        code = 101 if "assert!(false)" in self.source else 0
        return subprocess.CompletedProcess(command, code, printed.encode(), b"")


def make_project(root, entries):
    blocks = [
        f'[[exercises]]\nname = "{name}"\npath = "{name}.rs"\nmode = "{mode}"\nhint = "{hint}"\n'
        for name, mode, hint in entries
    ]
    (root / "info.toml").write_text("\n".join(blocks), encoding="utf-8")
    for name, _, _ in entries:
        (root / f"{name}.rs").write_text(SOURCES[f"{name}.rs"], encoding="utf-8")
    return root


@pytest.fixture
def toolchain(monkeypatch):
    fake = FakeToolchain()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


@pytest.fixture
def success_dir(tmp_path, monkeypatch, toolchain):
    monkeypatch.chdir(tmp_path)
    return make_project(tmp_path, SUCCESS)


@pytest.fixture
def failure_dir(tmp_path, monkeypatch, toolchain):
    monkeypatch.chdir(tmp_path)
    return make_project(tmp_path, FAILURE)


@pytest.fixture
def state_dir(tmp_path, monkeypatch, toolchain):
    monkeypatch.chdir(tmp_path)
    return make_project(tmp_path, STATE)


def test_runs_without_arguments(success_dir, capsys):
    (success_dir / "default_out.txt").write_text("Thanks for installing!", encoding="utf-8")
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "welcome to..." in out
    assert "Thanks for installing!" in out


def test_fails_when_in_wrong_dir(tmp_path, monkeypatch, toolchain, capsys):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 1
    assert "must be run from" in capsys.readouterr().out


def test_version_is_printed_anywhere(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["--version"]) == 0
    assert capsys.readouterr().out == "v4.4.0\n"


def test_missing_rustc_fails(success_dir, monkeypatch, capsys):
    monkeypatch.setattr(subprocess, "run", FakeToolchain(rustc_installed=False))
    assert main(["verify"]) == 1
    assert "We cannot find `rustc`." in capsys.readouterr().out


def test_verify_all_success(success_dir):
    assert main(["verify"]) == 0


def test_verify_fails_if_some_fails(failure_dir):
    assert main(["verify"]) == 1


def test_run_single_compile_success(success_dir):
    assert main(["run", "compSuccess"]) == 0


def test_run_single_compile_failure(failure_dir):
    assert main(["run", "compFailure"]) == 1


def test_run_single_test_success(success_dir):
    assert main(["run", "testSuccess"]) == 0


def test_run_single_test_failure(failure_dir):
    assert main(["run", "testFailure"]) == 1


def test_run_single_test_not_passed(failure_dir, capsys):
    assert main(["run", "testNotPassed.rs"]) == 1
    assert "No exercise found for 'testNotPassed.rs'!" in capsys.readouterr().out


def test_run_failing_test_exercise_by_name(failure_dir):
    assert main(["run", "testNotPassed"]) == 1


def test_run_single_test_no_filename(failure_dir):
    assert main(["run"]) == 1


def test_run_single_test_no_exercise(failure_dir):
    assert main(["run", "compNoExercise.rs"]) == 1


def test_unknown_subcommand_fails(success_dir):
    assert main(["frobnicate"]) == 1


def test_get_hint_for_single_test(failure_dir, capsys):
    assert main(["hint", "testFailure"]) == 0
    assert capsys.readouterr().out == "Hello!\n"


def test_run_compile_exercise_does_not_prompt(state_dir, capsys):
    assert main(["run", "pending_exercise"]) == 0
    assert "I AM NOT DONE" not in capsys.readouterr().out


def test_run_test_exercise_does_not_prompt(state_dir, capsys):
    assert main(["run", "pending_test_exercise"]) == 0
    assert "I AM NOT DONE" not in capsys.readouterr().out


def test_run_single_test_success_with_output(success_dir, capsys):
    assert main(["--nocapture", "run", "testSuccess"]) == 0
    assert "THIS TEST TOO SHALL PAS" in capsys.readouterr().out


def test_run_single_test_success_without_output(success_dir, capsys):
    assert main(["run", "testSuccess"]) == 0
    assert "THIS TEST TOO SHALL PAS" not in capsys.readouterr().out


def test_list_succeeds_with_header(success_dir, capsys):
    assert main(["list"]) == 0
    first_line = capsys.readouterr().out.splitlines()[0]
    assert first_line.split() == ["Name", "Path", "Status"]


def test_list_no_pending(success_dir, capsys):
    assert main(["list"]) == 0
    out = capsys.readouterr().out
    assert "Pending" not in out
    assert "You completed 2 / 2 exercises" in out


def test_list_both_done_and_pending(state_dir, capsys):
    assert main(["list"]) == 0
    out = capsys.readouterr().out
    assert "Done" in out
    assert "Pending" in out


def test_list_solved_only(state_dir, capsys):
    assert main(["list", "--solved"]) == 0
    assert "Pending" not in capsys.readouterr().out


def test_list_unsolved_only(state_dir, capsys):
    assert main(["list", "--unsolved"]) == 0
    assert "Done" not in capsys.readouterr().out


def test_list_names_with_filter(success_dir, capsys):
    assert main(["list", "-n", "-f", "comp"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "compSuccess"
    assert len(lines) == 2
    assert lines[1].startswith("Progress: You completed 2 / 2 exercises")


def test_list_paths(state_dir, capsys):
    assert main(["list", "-p", "-u"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[:-1] == ["pending_exercise.rs", "pending_test_exercise.rs"]


def test_find_exercise_returns_match(failure_dir):
    exercises = load_exercises("info.toml")
    found = find_exercise("testFailure", exercises)
    assert found.name == "testFailure"
    assert found.hint == "Hello!"


def test_find_exercise_raises_for_unknown_name():
    exercises = [Exercise(name="a", path=Path("a.rs"), mode=Mode.COMPILE)]
    with pytest.raises(LookupError, match="No exercise found for 'b'!"):
        find_exercise("b", exercises)


def test_rustc_exists_with_toolchain(toolchain):
    assert rustc_exists() is True


def test_rustc_exists_without_toolchain(monkeypatch):
    monkeypatch.setattr(subprocess, "run", FakeToolchain(rustc_installed=False))
    assert rustc_exists() is False


def test_watch_returns_when_everything_is_done(success_dir, capsys):
    (success_dir / "exercises").mkdir()
    assert watch(load_exercises("info.toml"), False) is None
    assert "Successfully ran compSuccess.rs!" in capsys.readouterr().out


def test_watch_rejects_missing_directory(success_dir):
    with pytest.raises(FileNotFoundError):
        watch(load_exercises("info.toml"), False)


def test_watch_command_reports_missing_directory(success_dir, capsys):
    assert main(["watch"]) == 1
    assert "Could not watch your progress" in capsys.readouterr().out


def test_watch_command_celebrates_completion(success_dir, capsys):
    (success_dir / "exercises").mkdir()
    assert main(["watch"]) == 0
    assert "You made it to the Fe-nish line!" in capsys.readouterr().out