"""The command line: listing, running, hinting, verifying and watching exercises."""

from __future__ import annotations

import errno
import os
import queue
import subprocess
import sys
import threading
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from itertools import dropwhile
from pathlib import Path

import click
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .exercise import Exercise, load_exercises
from .run import run
from .verify import ExerciseFailed, VerificationFailed, verify

VERSION = "4.4.0"
INFO_FILE = "info.toml"
DEFAULT_OUT_FILE = "default_out.txt"
WATCH_DIR = "exercises"
_DEBOUNCE_SECONDS = 2.0

_WELCOME = r"""
       welcome to...

   ___ _   _ ___| |_ __| |_ __(_) | |
  | '__| | | / __| __/ _` | '__| | | |
  | |  | |_| \__ \ || (_| | |  | | | |
  |_|   \__,_|___/\__\__,_|_|  |_|_|_|
"""

_FINISH_LINE = """\
+----------------------------------------------------+
|          You made it to the Fe-nish line!          |
+--------------------------  ------------------------+
                          \\/                         
     ▒▒          ▒▒▒▒▒▒▒▒      ▒▒▒▒▒▒▒▒          ▒▒   
   ▒▒▒▒  ▒▒    ▒▒        ▒▒  ▒▒        ▒▒    ▒▒  ▒▒▒▒ 
   ▒▒▒▒  ▒▒  ▒▒            ▒▒            ▒▒  ▒▒  ▒▒▒▒ 
 ░░▒▒▒▒░░▒▒  ▒▒            ▒▒            ▒▒  ▒▒░░▒▒▒▒ 
   ▓▓▓▓▓▓▓▓  ▓▓      ▓▓██  ▓▓  ▓▓██      ▓▓  ▓▓▓▓▓▓▓▓ 
     ▒▒▒▒    ▒▒      ████  ▒▒  ████      ▒▒░░  ▒▒▒▒   
       ▒▒  ▒▒▒▒▒▒        ▒▒▒▒▒▒        ▒▒▒▒▒▒  ▒▒     
         ▒▒▒▒▒▒▒▒▒▒▓▓▓▓▓▓▒▒▒▒▒▒▒▒▓▓▒▒▓▓▒▒▒▒▒▒▒▒       
           ▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒         
             ▒▒▒▒▒▒▒▒▒▒██▒▒▒▒▒▒██▒▒▒▒▒▒▒▒▒▒           
           ▒▒  ▒▒▒▒▒▒▒▒▒▒██████▒▒▒▒▒▒▒▒▒▒  ▒▒         
         ▒▒    ▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒    ▒▒       
       ▒▒    ▒▒    ▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒    ▒▒    ▒▒     
       ▒▒  ▒▒    ▒▒                  ▒▒    ▒▒  ▒▒     
           ▒▒  ▒▒                      ▒▒  ▒▒         
"""


@dataclass
class _Session:
    exercises: list[Exercise]
    verbose: bool


def find_exercise(name: str, exercises: Iterable[Exercise]) -> Exercise:
    """Return the exercise called name; raise LookupError when there is none."""
    for exercise in exercises:
        if exercise.name == name:
            return exercise
    raise LookupError(f"No exercise found for '{name}'!")


def rustc_exists() -> bool:
    """Whether `rustc --version` can be run successfully."""
    try:
        result = subprocess.run(["rustc", "--version"], stdout=subprocess.DEVNULL)
    except OSError:
        return False
    return result.returncode == 0


class _Hint:
    """The hint of the exercise that failed last, shared with the watch shell."""

    def __init__(self, text: str) -> None:
        self._lock = threading.Lock()
        self._text = text

    def set(self, text: str) -> None:
        with self._lock:
            self._text = text

    def get(self) -> str:
        with self._lock:
            return self._text


class _ChangeHandler(FileSystemEventHandler):
    def __init__(self, changes: queue.Queue) -> None:
        super().__init__()
        self._changes = changes

    def on_created(self, event) -> None:
        self._record(event)

    def on_modified(self, event) -> None:
        self._record(event)

    def _record(self, event) -> None:
        if not event.is_directory:
            self._changes.put(Path(os.fsdecode(event.src_path)))


def _clear_screen() -> None:
    click.echo("\x1bc")


def _watch_shell(hint: _Hint) -> None:
    while True:
        try:
            line = sys.stdin.readline()
        except (OSError, ValueError) as error:
            click.echo(f"error reading command: {error}")
            return
        if not line:
            return
        command = line.strip()
        if command == "hint":
            click.echo(hint.get())
        elif command == "clear":
            click.echo("\x1b[2J\x1b[1;1H")
        else:
            click.echo(f"unknown command: {command}")


def _spawn_watch_shell(hint: _Hint) -> None:
    click.echo(
        "Type 'hint' or open the corresponding README.md file to get help "
        "or type 'clear' to clear the screen."
    )
    threading.Thread(target=_watch_shell, args=(hint,), daemon=True).start()


def _debounced(changes: queue.Queue) -> list[Path]:
    """Wait for a change, then gather further ones until things stay quiet."""
    paths = [changes.get()]
    while True:
        try:
            path = changes.get(timeout=_DEBOUNCE_SECONDS)
        except queue.Empty:
            return paths
        if path not in paths:
            paths.append(path)


def _ends_with(path: Path, suffix: Path) -> bool:
    tail = Path(suffix).parts
    return bool(tail) and path.parts[-len(tail):] == tail


def _pending_after(changed: Path, exercises: Sequence[Exercise]) -> Iterator[Exercise]:
    """The changed exercise and those after it, then every other unfinished one."""

    def is_changed(exercise: Exercise) -> bool:
        return _ends_with(changed, exercise.path)

    yield from dropwhile(lambda exercise: not is_changed(exercise), exercises)
    yield from (
        exercise
        for exercise in exercises
        if not exercise.looks_done() and not is_changed(exercise)
    )


def watch(exercises: Iterable[Exercise], verbose: bool = False) -> None:
    """Verify the exercises, then verify again on each change until all are done.

    Raises OSError when the exercises directory cannot be watched.
    """
    exercises = list(exercises)
    directory = Path(WATCH_DIR)
    if not directory.is_dir():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(directory))
    changes: queue.Queue = queue.Queue()
    observer = Observer()
    observer.schedule(_ChangeHandler(changes), str(directory), recursive=True)
    observer.start()
    try:
        _clear_screen()
        try:
            verify(exercises, verbose)
            return
        except VerificationFailed as failure:
            hint = _Hint(failure.exercise.hint)
        _spawn_watch_shell(hint)
        while True:
            for changed in _debounced(changes):
                if changed.suffix != ".rs" or not changed.exists():
                    continue
                _clear_screen()
                try:
                    verify(_pending_after(changed.resolve(), exercises), verbose)
                    return
                except VerificationFailed as failure:
                    hint.set(failure.exercise.hint)
    finally:
        observer.stop()
        observer.join()


def _print_welcome() -> None:
    click.echo(_WELCOME)


def _print_finish_line() -> None:
    emoji = "★" if "NO_EMOJI" in os.environ else "🎉"
    click.echo(f"{emoji} All exercises completed! {emoji}")
    click.echo()
    click.echo(_FINISH_LINE, nl=False)
    click.echo()
    click.echo("We hope you enjoyed learning about the various aspects of Rust!")
    click.echo("If you noticed any issues, please don't hesitate to report them.")
    click.echo("You can also contribute your own exercises to help the greater community!")
    click.echo()
    click.echo("Before reporting an issue or contributing, please read the contributing guidelines.")


@click.group(
    invoke_without_command=True,
    help="Small exercises to get you used to writing and reading Rust code.",
)
@click.option("--nocapture", is_flag=True, help="show outputs from the test exercises")
@click.option("-v", "--version", "show_version", is_flag=True, help="show the executable version")
@click.pass_context
def _cli(ctx: click.Context, nocapture: bool, show_version: bool) -> None:
    if show_version:
        click.echo(f"v{VERSION}")
        ctx.exit(0)
    if ctx.invoked_subcommand is None:
        _print_welcome()
    if not Path(INFO_FILE).exists():
        click.echo(f"{ctx.find_root().info_name} must be run from the exercises directory")
        click.echo(f"Try changing into the directory that holds {INFO_FILE}!")
        ctx.exit(1)
    if not rustc_exists():
        click.echo("We cannot find `rustc`.")
        click.echo("Try running `rustc --version` to diagnose your problem.")
        click.echo("For instructions on how to install Rust, check the README.")
        ctx.exit(1)
    ctx.obj = _Session(exercises=load_exercises(INFO_FILE), verbose=nocapture)
    if ctx.invoked_subcommand is None:
        click.echo(Path(DEFAULT_OUT_FILE).read_text(encoding="utf-8"))
        ctx.exit(0)


@_cli.command("verify", help="Verifies all exercises according to the recommended order")
@click.pass_context
def _verify_command(ctx: click.Context) -> None:
    try:
        verify(ctx.obj.exercises, ctx.obj.verbose)
    except ExerciseFailed:
        ctx.exit(1)


@_cli.command("watch", help="Reruns `verify` when files were edited")
@click.pass_context
def _watch_command(ctx: click.Context) -> None:
    try:
        watch(ctx.obj.exercises, ctx.obj.verbose)
    except OSError as error:
        click.echo(f"Error: Could not watch your progress. Error message was {error!r}.")
        click.echo(
            "Most likely you've run out of disk space or your 'inotify limit' has been reached."
        )
        ctx.exit(1)
    _print_finish_line()


@_cli.command("run", help="Runs/Tests a single exercise")
@click.argument("name")
@click.pass_context
def _run_command(ctx: click.Context, name: str) -> None:
    try:
        exercise = find_exercise(name, ctx.obj.exercises)
    except LookupError as error:
        click.echo(error.args[0])
        ctx.exit(1)
    try:
        run(exercise, ctx.obj.verbose)
    except ExerciseFailed:
        ctx.exit(1)


@_cli.command("hint", help="Returns a hint for the given exercise")
@click.argument("name")
@click.pass_context
def _hint_command(ctx: click.Context, name: str) -> None:
    try:
        exercise = find_exercise(name, ctx.obj.exercises)
    except LookupError as error:
        click.echo(error.args[0])
        ctx.exit(1)
    click.echo(exercise.hint)


@_cli.command("list", help="Lists the exercises available")
@click.option("-p", "--paths", is_flag=True, help="show only the paths of the exercises")
@click.option("-n", "--names", is_flag=True, help="show only the names of the exercises")
@click.option(
    "-f",
    "--filter",
    "filter_text",
    default=None,
    help="a string to match exercise names; comma separated patterns are accepted",
)
@click.option("-u", "--unsolved", is_flag=True, help="display only exercises not yet solved")
@click.option("-s", "--solved", is_flag=True, help="display only exercises that have been solved")
@click.pass_context
def _list_command(
    ctx: click.Context,
    paths: bool,
    names: bool,
    filter_text: str | None,
    unsolved: bool,
    solved: bool,
) -> None:
    exercises = ctx.obj.exercises
    if not paths and not names:
        click.echo(f"{'Name':<17}\t{'Path':<46}\t{'Status':<7}")
    patterns = [pattern for pattern in (filter_text or "").lower().split(",") if pattern.strip()]
    done_count = 0
    for exercise in exercises:
        fname = str(exercise.path)
        done = exercise.looks_done()
        done_count += done
        matches = any(pattern in exercise.name or pattern in fname for pattern in patterns)
        wanted = (done and solved) or (not done and unsolved) or (not solved and not unsolved)
        if not (wanted and (matches or filter_text is None)):
            continue
        if paths:
            line = fname
        elif names:
            line = exercise.name
        else:
            status = "Done" if done else "Pending"
            line = f"{exercise.name:<17}\t{fname:<46}\t{status:<7}"
        try:
            click.echo(line)
        except BrokenPipeError:
            ctx.exit(0)
        except OSError:
            ctx.exit(1)
    percentage = done_count / len(exercises) * 100 if exercises else float("nan")
    click.echo(
        f"Progress: You completed {done_count} / {len(exercises)} exercises ({percentage:.2f} %)."
    )
    ctx.exit(0)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return its exit status."""
    try:
        result = _cli.main(
            args=list(argv) if argv is not None else None,
            prog_name="rustdrill",
            standalone_mode=False,
        )
    except click.ClickException as error:
        error.show()
        return 1
    except click.Abort:
        return 1
    return result if isinstance(result, int) else 0