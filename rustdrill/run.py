"""Running a single exercise on request."""

from __future__ import annotations

import click

from .exercise import CompilationError, Exercise, ExecutionError, Mode
from .ui import Spinner, success, warn
from .verify import ExerciseFailed, test


def run(exercise: Exercise, verbose: bool = False) -> None:
    """Compile and run one exercise, or run its tests.

    Raises ExerciseFailed when compiling, running or testing fails.
    """
    if exercise.mode is Mode.TEST:
        test(exercise, verbose)
    else:
        _compile_and_run(exercise)


def _compile_and_run(exercise: Exercise) -> None:
    with Spinner(f"Compiling {exercise}...") as spinner:
        try:
            compiled = exercise.compile()
        except CompilationError as error:
            spinner.finish_and_clear()
            warn(f"Compilation of {exercise} failed!, Compiler error message:\n")
            click.echo(error.output.stderr)
            raise ExerciseFailed(exercise) from error
        with compiled:
            spinner.set_message(f"Running {exercise}...")
            try:
                output = compiled.run()
            except ExecutionError as error:
                spinner.finish_and_clear()
                click.echo(error.output.stdout)
                click.echo(error.output.stderr)
                warn(f"Ran {exercise} with errors")
                raise ExerciseFailed(exercise) from error
    click.echo(output.stdout)
    success(f"Successfully ran {exercise}")