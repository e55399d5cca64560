"""
Terminal handle — the single owner of interactive prompts and banners.

The controlling terminal is a shared resource: concurrent operations
must not interleave prompts or command banners.  Every write or read
that belongs to one logical exchange happens while holding ``lock``.
"""

from __future__ import annotations

import logging
import threading
from typing import IO

import click

logger = logging.getLogger(__name__)

AFFIRMATIVE = frozenset({"", "y", "yes"})

# Banner labels, padded to the same width.
_LABELS = {
    "pending": ("Pending", "yellow"),
    "running": ("Running", "green"),
    "canceled": ("Canceled", "red"),
    "info": ("Info", "cyan"),
}


class Terminal:
    """Serialized access to stdin/stdout for prompts and banners.

    Args:
        stdin: Text stream answers are read from (default: process stdin).
        stdout: Text stream prompts and banners go to (default: stdout).
    """

    def __init__(self, stdin: IO[str] | None = None, stdout: IO[str] | None = None):
        self._stdin = stdin
        self._stdout = stdout
        self.lock = threading.RLock()

    @property
    def stdin(self) -> IO[str]:
        return self._stdin if self._stdin is not None else click.get_text_stream("stdin")

    @property
    def stdout(self) -> IO[str]:
        return self._stdout if self._stdout is not None else click.get_text_stream("stdout")

    def echo(self, message: str = "", err: bool = False, **style) -> None:
        with self.lock:
            click.secho(message, file=None if err else self.stdout, err=err, **style)

    def banner(self, label: str, command: str) -> None:
        """Print ``<Label> `command```, e.g. before running a command."""
        text, color = _LABELS.get(label, (label.title(), "white"))
        with self.lock:
            click.secho(f"{text:>9} ", file=self.stdout, fg=color, bold=True, nl=False)
            click.echo(f"`{command}`", file=self.stdout)

    def confirm(self, prompt: str) -> bool:
        """Ask a yes/no question and block for one line of input.

        Empty input, ``y`` and ``yes`` (any case) are affirmative.
        Anything else, including EOF, is negative.
        """
        with self.lock:
            click.echo(f"{prompt} [Y/n] ", file=self.stdout, nl=False)
            self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                click.echo(file=self.stdout)
                logger.debug("EOF at confirmation prompt, treating as 'no'")
                return False
            answer = line.strip().lower()
        logger.debug("Confirmation answer: %r", answer)
        return answer in AFFIRMATIVE
