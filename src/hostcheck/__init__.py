"""Assertion helpers for scripted integration tests against a host engine."""

from hostcheck.context import AssertionContext, ContextState
from hostcheck.diagnostics import DiagnosticChannel, HostDiagnostics, default_diagnostics
from hostcheck.runner import Runner, RunSummary, TestOutcome, TestTarget, resolve_target

__all__ = [
    "AssertionContext",
    "ContextState",
    "DiagnosticChannel",
    "HostDiagnostics",
    "RunSummary",
    "Runner",
    "TestOutcome",
    "TestTarget",
    "default_diagnostics",
    "resolve_target",
]
