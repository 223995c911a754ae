"""Checking exercises in order and reporting what still needs work."""

from __future__ import annotations

import os
from collections.abc import Iterable

import click

from .exercise import (
    CompilationError,
    CompiledExercise,
    Exercise,
    ExecutionError,
    Mode,
)
from .ui import Spinner, success, warn


class ExerciseFailed(Exception):
    """An exercise failed to compile, run or pass its tests."""

    def __init__(self, exercise: Exercise) -> None:
        super().__init__(f"{exercise} failed")
        self.exercise = exercise


class VerificationFailed(ExerciseFailed):
    """Verification stopped at an exercise that failed or is not marked done."""

    def __init__(self, exercise: Exercise) -> None:
        super().__init__(exercise)
        self.args = (f"verification stopped at {exercise}",)


def verify(exercises: Iterable[Exercise], verbose: bool = False) -> None:
    """Check each exercise in turn; raise VerificationFailed at the first that is not done."""
    for exercise in exercises:
        try:
            if exercise.mode is Mode.TEST:
                passed = _compile_and_test(exercise, interactive=True, verbose=verbose)
            elif exercise.mode is Mode.COMPILE:
                passed = _compile_and_run_interactively(exercise)
            else:
                passed = _compile_only(exercise)
        except ExerciseFailed as error:
            raise VerificationFailed(exercise) from error
        if not passed:
            raise VerificationFailed(exercise)


def test(exercise: Exercise, verbose: bool = False) -> None:
    """Compile and run the exercise's tests; raise ExerciseFailed when they fail."""
    _compile_and_test(exercise, interactive=False, verbose=verbose)


def _compile(exercise: Exercise, spinner: Spinner) -> CompiledExercise:
    try:
        return exercise.compile()
    except CompilationError as error:
        spinner.finish_and_clear()
        warn(f"Compiling of {exercise} failed! Please try again. Here's the output:")
        click.echo(error.output.stderr)
        raise ExerciseFailed(exercise) from error


def _compile_only(exercise: Exercise) -> bool:
    with Spinner(f"Compiling {exercise}...") as spinner:
        _compile(exercise, spinner).close()
    success(f"Successfully compiled {exercise}!")
    return prompt_for_completion(exercise, None)


def _compile_and_run_interactively(exercise: Exercise) -> bool:
    with Spinner(f"Compiling {exercise}...") as spinner:
        with _compile(exercise, spinner) as compiled:
            spinner.set_message(f"Running {exercise}...")
            try:
                output = compiled.run()
            except ExecutionError as error:
                spinner.finish_and_clear()
                warn(f"Ran {exercise} with errors")
                click.echo(error.output.stdout)
                click.echo(error.output.stderr)
                raise ExerciseFailed(exercise) from error
    success(f"Successfully ran {exercise}!")
    return prompt_for_completion(exercise, output.stdout)


def _compile_and_test(exercise: Exercise, interactive: bool, verbose: bool) -> bool:
    with Spinner(f"Testing {exercise}...") as spinner:
        with _compile(exercise, spinner) as compiled:
            try:
                output = compiled.run()
            except ExecutionError as error:
                spinner.finish_and_clear()
                warn(f"Testing of {exercise} failed! Please try again. Here's the output:")
                click.echo(error.output.stdout)
                raise ExerciseFailed(exercise) from error
    if verbose:
        click.echo(output.stdout)
    success(f"Successfully tested {exercise}")
    if interactive:
        return prompt_for_completion(exercise, None)
    return True


def _separator() -> str:
    return click.style("====================", bold=True)


def prompt_for_completion(exercise: Exercise, prompt_output: str | None) -> bool:
    """Return True when the exercise is marked done, else show where the marker is."""
    state = exercise.state()
    if state.done:
        return True

    no_emoji = "NO_EMOJI" in os.environ
    if exercise.mode is Mode.COMPILE:
        success_msg = "The code is compiling!"
    elif exercise.mode is Mode.TEST:
        success_msg = "The code is compiling, and the tests pass!"
    elif no_emoji:
        success_msg = "The code is compiling, and Clippy is happy!"
    else:
        success_msg = "The code is compiling, and 📎 Clippy 📎 is happy!"

    click.echo()
    if no_emoji:
        click.echo(f"~*~ {success_msg} ~*~")
    else:
        click.echo(f"🎉 🎉  {success_msg} 🎉 🎉")
    click.echo()

    if prompt_output is not None:
        click.echo("Output:")
        click.echo(_separator())
        click.echo(prompt_output)
        click.echo(_separator())
        click.echo()

    marker = click.style("`I AM NOT DONE`", bold=True)
    click.echo("You can keep working on this exercise,")
    click.echo(f"or jump into the next one by removing the {marker} comment:")
    click.echo()
    for context_line in state.context:
        text = (
            click.style(context_line.line, bold=True)
            if context_line.important
            else context_line.line
        )
        number = click.style(f"{context_line.number:>2}", fg="blue", bold=True)
        bar = click.style("|", fg="blue")
        click.echo(f"{number} {bar}  {text}")
    return False