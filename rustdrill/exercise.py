"""Exercises: their description, compilation, execution and completion state."""

from __future__ import annotations

import contextlib
import enum
import os
import re
import subprocess
import threading
import tomllib
from dataclasses import dataclass
from pathlib import Path

RUSTC_COLOR_ARGS = ("--color", "always")
I_AM_DONE_REGEX = re.compile(r"^\s*///?\s*I\s+AM\s+NOT\s+DONE", re.MULTILINE)
CONTEXT = 2
CLIPPY_CARGO_TOML_PATH = "./exercises/clippy/Cargo.toml"


def temp_file() -> str:
    """Return a binary name unique to this process and thread."""
    return f"./temp_{os.getpid()}_{threading.get_ident()}"


def clean() -> None:
    """Remove the compiled binary of this thread, if there is one."""
    with contextlib.suppress(OSError):
        os.remove(temp_file())


class Mode(enum.Enum):
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
class State:
    """Completion state; a pending exercise carries the lines around its marker."""

    context: tuple[ContextLine, ...] = ()

    @property
    def done(self) -> bool:
        return not self.context


@dataclass(frozen=True)
class ExerciseOutput:
    """Captured output of a finished command."""

    stdout: str
    stderr: str


class ExerciseError(Exception):
    """A command working on an exercise failed."""

    def __init__(self, exercise: Exercise, output: ExerciseOutput, message: str) -> None:
        super().__init__(message)
        self.exercise = exercise
        self.output = output


class CompilationError(ExerciseError):
    """The exercise did not compile."""

    def __init__(self, exercise: Exercise, output: ExerciseOutput) -> None:
        super().__init__(exercise, output, f"compilation of {exercise} failed")


class ExecutionError(ExerciseError):
    """The compiled exercise exited with an error."""

    def __init__(self, exercise: Exercise, output: ExerciseOutput) -> None:
        super().__init__(exercise, output, f"{exercise} ran with errors")


def _execute(command: list[str]) -> subprocess.CompletedProcess:
    return subprocess.run(command, capture_output=True)


def _output(result: subprocess.CompletedProcess) -> ExerciseOutput:
    return ExerciseOutput(
        stdout=(result.stdout or b"").decode("utf-8", errors="replace"),
        stderr=(result.stderr or b"").decode("utf-8", errors="replace"),
    )


def _lines(source: str) -> list[str]:
    lines = source.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


@dataclass
class Exercise:
    """One exercise as described in the exercise list."""

    name: str
    path: Path
    mode: Mode
    hint: str = ""

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self.mode = Mode(self.mode)

    def compile(self) -> CompiledExercise:
        """Compile the exercise; raise CompilationError when that fails."""
        binary = temp_file()
        if self.mode is Mode.CLIPPY:
            result = self._compile_with_clippy(binary)
        else:
            command = ["rustc"]
            if self.mode is Mode.TEST:
                command.append("--test")
            command += [str(self.path), "-o", binary, *RUSTC_COLOR_ARGS]
            result = _execute(command)
        if result.returncode != 0:
            clean()
            raise CompilationError(self, _output(result))
        return CompiledExercise(self)

    def _compile_with_clippy(self, binary: str) -> subprocess.CompletedProcess:
        manifest = (
            f'[package]\nname = "{self.name}"\nversion = "0.0.1"\nedition = "2018"\n'
            f'[[bin]]\nname = "{self.name}"\npath = "{self.name}.rs"'
        )
        try:
            Path(CLIPPY_CARGO_TOML_PATH).write_text(manifest, encoding="utf-8")
        except OSError as error:
            if "NO_EMOJI" in os.environ:
                message = "Failed to write Clippy Cargo.toml file."
            else:
                message = "Failed to write 📎 Clippy 📎 Cargo.toml file."
            raise OSError(message) from error
        # A binary is built as well so clippy exercises can be run afterwards.
        _execute(["rustc", str(self.path), "-o", binary, *RUSTC_COLOR_ARGS])
        # Clippy only reports every lint after a clean build.
        _execute(
            ["cargo", "clean", "--manifest-path", CLIPPY_CARGO_TOML_PATH, *RUSTC_COLOR_ARGS]
        )
        return _execute(
            [
                "cargo",
                "clippy",
                "--manifest-path",
                CLIPPY_CARGO_TOML_PATH,
                *RUSTC_COLOR_ARGS,
                "--",
                "-D",
                "warnings",
            ]
        )

    def _run(self) -> ExerciseOutput:
        command = [temp_file()]
        if self.mode is Mode.TEST:
            command.append("--show-output")
        result = _execute(command)
        output = _output(result)
        if result.returncode != 0:
            raise ExecutionError(self, output)
        return output

    def state(self) -> State:
        """Read the source and report whether the pending marker is still there."""
        source = self.path.read_text(encoding="utf-8")
        if not I_AM_DONE_REGEX.search(source):
            return State()
        lines = _lines(source)
        matched = next(
            (index for index, line in enumerate(lines) if I_AM_DONE_REGEX.search(line)),
            None,
        )
        if matched is None:
            raise RuntimeError(f"could not locate the pending marker in {self.path}")
        first = max(matched - CONTEXT, 0)
        return State(
            tuple(
                ContextLine(line=line, number=index + 1, important=index == matched)
                for index, line in enumerate(lines[first : matched + CONTEXT + 1], start=first)
            )
        )

    def looks_done(self) -> bool:
        """Whether the marker is gone; the exercise is not compiled for this."""
        return self.state().done

    def __str__(self) -> str:
        return str(self.path)


class CompiledExercise:
    """A compiled exercise; its binary is removed when it is closed."""

    def __init__(self, exercise: Exercise) -> None:
        self.exercise = exercise

    def run(self) -> ExerciseOutput:
        """Run the binary; raise ExecutionError when it fails."""
        return self.exercise._run()

    def close(self) -> None:
        clean()

    def __enter__(self) -> CompiledExercise:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def load_exercises(path) -> list[Exercise]:
    """Load the exercise list from an info.toml file."""
    with open(path, "rb") as handle:
        data = tomllib.load(handle)
    exercises = []
    for entry in data.get("exercises", []):
        try:
            exercises.append(
                Exercise(
                    name=entry["name"],
                    path=Path(entry["path"]),
                    mode=Mode(entry["mode"]),
                    hint=entry["hint"],
                )
            )
        except KeyError as error:
            raise ValueError(f"exercise entry is missing {error.args[0]!r}") from error
    return exercises