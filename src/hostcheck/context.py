"""Assertion context handed to every test function."""

from __future__ import annotations

from enum import Enum
from typing import Any

from hostcheck.diagnostics import (
    DiagnosticChannel,
    HostDiagnostics,
    default_diagnostics,
)


class ContextState(str, Enum):
    PASSING = "passing"
    FAILED = "failed"


class AssertionContext:
    """Collects the outcome of the assertions made by one test invocation.

    Failing assertions never raise. They flip ``failed`` (permanently, for
    this instance), print a diagnostic and return ``False`` so the caller can
    bail out early if it wants to::

        def test_addition(ctx):
            if not ctx.assert_equal(1 + 1, 2):
                return
            ctx.assert_true(2 > 1, "ordering")

    The runner reads ``ctx.failed`` once the test function returns.
    """

    def __init__(
        self,
        diagnostics: HostDiagnostics | None = None,
        channel: DiagnosticChannel | None = None,
    ) -> None:
        self.diagnostics = diagnostics or default_diagnostics()
        self.channel = channel or self.diagnostics.channel
        self._failed = False

    @property
    def failed(self) -> bool:
        return self._failed

    @property
    def state(self) -> ContextState:
        return ContextState.FAILED if self._failed else ContextState.PASSING

    def assert_true(self, condition: bool, message: str = "") -> bool:
        if condition:
            return True
        self._failed = True
        self.print_blank_line()
        if message:
            self.print_error(f"assertion failed:  {message}")
        else:
            self.print_error("assertion failed.")
        return False

    def assert_equal(self, left: Any, right: Any, message: str = "") -> bool:
        if left == right:
            return True
        self._failed = True
        self.print_blank_line()
        headline = message or "(left == right)"
        self.print_error(
            f"assertion failed:  {headline}\n  left: {left!r}\n right: {right!r}"
        )
        return False

    def assert_fail(self, message: str = "") -> bool:
        """Mark a code path that must never be reached."""
        self._failed = True
        self.print_blank_line()
        if message:
            self.print_error(f"Test execution should have failed: {message}")
        else:
            self.print_error("Test execution should have failed")
        return False

    # The runner restores the toggle after the test; nothing here undoes it.
    def disable_diagnostics(self) -> None:
        self.diagnostics.print_error_messages = False

    def enable_diagnostics(self) -> None:
        self.diagnostics.print_error_messages = True

    def print_blank_line(self) -> None:
        # Terminates whatever unfinished line came before the error.
        self.channel.blank_line()

    def print_error(self, message: str) -> None:
        self.channel.error(message)
