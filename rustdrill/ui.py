"""Terminal feedback: coloured status lines and a progress spinner."""

from __future__ import annotations

import os
import sys
import threading

import click

_FRAMES = "⠁⠂⠄⡀⢀⠠⠐⠈"
_CLEAR_LINE = "\r\x1b[2K"
_TICK_SECONDS = 0.1


def _no_emoji() -> bool:
    return "NO_EMOJI" in os.environ


def warn(message: str) -> None:
    """Print a warning line in red."""
    marker = "!" if _no_emoji() else "⚠️ "
    click.echo(f"{click.style(marker, fg='red')} {click.style(message, fg='red')}")


def success(message: str) -> None:
    """Print a success line in green."""
    marker = "✓" if _no_emoji() else "✅"
    click.echo(f"{click.style(marker, fg='green')} {click.style(message, fg='green')}")


class Spinner:
    """A spinner drawn on standard error while work is in progress.

    Nothing is drawn when standard error is not a terminal.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        self._stream = sys.stderr
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._frame = 0
        self._thread: threading.Thread | None = None
        isatty = getattr(self._stream, "isatty", None)
        if isatty is not None and isatty():
            self._draw()
            self._thread = threading.Thread(target=self._tick, daemon=True)
            self._thread.start()

    @property
    def active(self) -> bool:
        """Whether the spinner is still being drawn."""
        return self._thread is not None

    def _draw(self, advance: bool = False) -> None:
        with self._lock:
            if advance:
                self._frame += 1
            frame = _FRAMES[self._frame % len(_FRAMES)]
            self._stream.write(f"{_CLEAR_LINE}{frame} {self.message}")
            self._stream.flush()

    def _tick(self) -> None:
        while not self._stop.wait(_TICK_SECONDS):
            self._draw(advance=True)

    def set_message(self, message: str) -> None:
        """Replace the text shown next to the spinner."""
        self.message = message
        if self.active:
            self._draw()

    def finish_and_clear(self) -> None:
        """Stop the spinner and erase its line."""
        thread = self._thread
        if thread is None:
            return
        self._stop.set()
        thread.join()
        self._thread = None
        with self._lock:
            self._stream.write(_CLEAR_LINE)
            self._stream.flush()

    def __enter__(self) -> Spinner:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.finish_and_clear()