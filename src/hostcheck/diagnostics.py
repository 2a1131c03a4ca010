"""Diagnostic output and the host's error-printing toggle."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO

import typer


class DiagnosticChannel:
    """Error stream, kept apart from normal program output.

    Writes go to ``stream`` when one is given, otherwise to stderr as it is
    at the moment of the write (so pytest's capsys and CliRunner see them).
    """

    def __init__(
        self, stream: TextIO | None = None, logger: logging.Logger | None = None
    ) -> None:
        self.stream = stream
        self.logger = logger

    def blank_line(self) -> None:
        typer.echo("", file=self.stream, err=self.stream is None)

    def write(self, message: str) -> None:
        """Write an error-styled line to the stream without logging it."""
        typer.secho(
            message, file=self.stream, err=self.stream is None, fg=typer.colors.RED
        )

    def error(self, message: str) -> None:
        self.write(message)
        if self.logger is not None:
            self.logger.error(message)


class HostDiagnostics:
    """Process-wide switch controlling whether the host prints its own errors.

    Code under test reports through ``push_error``. While
    ``print_error_messages`` is off those reports are dropped and counted,
    which lets a test exercise a failure path without flooding the output.
    """

    def __init__(
        self,
        channel: DiagnosticChannel | None = None,
        print_error_messages: bool = True,
    ) -> None:
        self.channel = channel or DiagnosticChannel()
        self._print_error_messages = print_error_messages
        self.suppressed_count = 0

    @property
    def print_error_messages(self) -> bool:
        return self._print_error_messages

    @print_error_messages.setter
    def print_error_messages(self, value: bool) -> None:
        self._print_error_messages = bool(value)

    def push_error(self, message: str) -> None:
        if not self._print_error_messages:
            self.suppressed_count += 1
            return
        self.channel.error(message)

    @contextmanager
    def preserved(self) -> Iterator[HostDiagnostics]:
        """Restore the current toggle value when the block exits, however it exits."""
        saved = self._print_error_messages
        try:
            yield self
        finally:
            self._print_error_messages = saved


_default: HostDiagnostics | None = None


def default_diagnostics() -> HostDiagnostics:
    """Return the process-wide instance, creating it on first use."""
    global _default
    if _default is None:
        _default = HostDiagnostics()
    return _default
