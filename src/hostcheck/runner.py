from __future__ import annotations

import importlib
import logging
import sys
import time
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from typing import Any

from hostcheck.config import is_target
from hostcheck.context import AssertionContext
from hostcheck.diagnostics import (
    DiagnosticChannel,
    HostDiagnostics,
    default_diagnostics,
)

TestFunction = Callable[[AssertionContext], Any]


@dataclass
class TestTarget:
    __test__ = False

    name: str
    func: TestFunction


@dataclass
class TestOutcome:
    __test__ = False

    name: str
    passed: bool
    error: str | None = None
    duration_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class RunSummary:
    outcomes: list[TestOutcome] = field(default_factory=list)
    interrupted: bool = False

    @property
    def passed_count(self) -> int:
        return sum(1 for o in self.outcomes if o.passed)

    @property
    def failed_count(self) -> int:
        return len(self.outcomes) - self.passed_count

    @property
    def all_passed(self) -> bool:
        return not self.interrupted and all(o.passed for o in self.outcomes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "outcomes": [o.to_dict() for o in self.outcomes],
            "passed": self.passed_count,
            "failed": self.failed_count,
            "interrupted": self.interrupted,
        }


@contextmanager
def _prepended_sys_path(paths: Sequence[str]) -> Iterator[None]:
    added = [p for p in paths if p not in sys.path]
    sys.path[:0] = added
    try:
        yield
    finally:
        for p in added:
            if p in sys.path:
                sys.path.remove(p)


def resolve_target(spec: str, search_paths: Sequence[str] = ()) -> TestTarget:
    """Import ``module:function`` and return it as a runnable target."""
    if not is_target(spec):
        raise ValueError(f"Invalid test target '{spec}': expected 'module:function'")
    module_name, func_name = spec.split(":", 1)

    with _prepended_sys_path(search_paths):
        importlib.invalidate_caches()
        try:
            module = importlib.import_module(module_name)
        except Exception as e:
            # SyntaxError and import-time failures land here as well as ImportError
            raise ValueError(
                f"Cannot import '{module_name}' for target '{spec}': {type(e).__name__}: {e}"
            ) from e

    func = getattr(module, func_name, None)
    if func is None:
        raise ValueError(f"Module '{module_name}' has no attribute '{func_name}'")
    if not callable(func):
        raise ValueError(f"Target '{spec}' is not callable")
    return TestTarget(name=spec, func=func)


class Runner:
    """Invokes test functions one at a time, each with a fresh AssertionContext.

    The host's error-printing toggle is saved before every test and restored
    afterwards, whether the test passed, failed or raised.
    """

    def __init__(
        self,
        diagnostics: HostDiagnostics | None = None,
        channel: DiagnosticChannel | None = None,
        logger: logging.Logger | None = None,
    ):
        self.diagnostics = diagnostics or default_diagnostics()
        self.channel = channel or self.diagnostics.channel
        self.logger = logger or logging.getLogger("hostcheck")
        self.interrupted = False

    def run_test(self, target: TestTarget) -> TestOutcome:
        """Run a single test and report whether any of its assertions failed."""
        ctx = AssertionContext(diagnostics=self.diagnostics, channel=self.channel)
        error: str | None = None
        start = time.monotonic()

        with self.diagnostics.preserved():
            try:
                target.func(ctx)
            except Exception as e:
                error = f"{type(e).__name__}: {e}"
                self.logger.exception(f"Test '{target.name}' raised")
                self.channel.blank_line()
                # Already logged with its traceback above; stream only.
                self.channel.write(f"test raised an exception:  {error}")

        duration = time.monotonic() - start
        passed = not ctx.failed and error is None
        self.logger.debug(
            f"Test '{target.name}' {'passed' if passed else 'failed'} in {duration:.3f}s"
        )
        return TestOutcome(
            name=target.name,
            passed=passed,
            error=error,
            duration_seconds=duration,
        )

    def run(self, targets: Sequence[TestTarget]) -> RunSummary:
        """Run targets in the order given. Ctrl+C keeps the outcomes gathered so far."""
        summary = RunSummary()
        total = len(targets)
        print(f"Running {total} test(s)...")
        self.logger.debug(f"Starting run of {total} test(s)")

        try:
            for index, target in enumerate(targets, start=1):
                outcome = self.run_test(target)
                summary.outcomes.append(outcome)
                status = "PASS" if outcome.passed else "FAIL"
                print(f"  [{index}/{total}] {status}  {target.name}")
        except KeyboardInterrupt:
            self.interrupted = True
            summary.interrupted = True
            self.logger.warning(
                f"Run interrupted by user (Ctrl+C) after {len(summary.outcomes)} of {total} test(s)"
            )

        self.logger.debug(
            f"Run finished: {summary.passed_count} passed, {summary.failed_count} failed"
        )
        return summary
