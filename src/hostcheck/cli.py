from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="hostcheck", help="Run assertion-based host integration tests")


@app.command()
def run(
    targets: list[str] | None = typer.Argument(
        None, help="Tests to run as module:function (overrides the config list)"
    ),
    config: str | None = typer.Option(
        None, "--config", "-c", help="Path to hostcheck YAML config"
    ),
    search_path: list[str] | None = typer.Option(
        None, "--search-path", "-s", help="Extra directory to import tests from"
    ),
    log_file: str = typer.Option(
        "hostcheck-debug.log", "--log-file", help="Debug log destination"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
    no_host_errors: bool = typer.Option(
        False, "--no-host-errors", help="Start every test with host error printing off"
    ),
):
    """Run the given tests, one at a time, and exit non-zero if any failed."""
    from hostcheck.config import RunConfig, load_config
    from hostcheck.diagnostics import DiagnosticChannel, HostDiagnostics
    from hostcheck.runner import Runner, resolve_target
    from hostcheck.verbose import setup_logger

    run_config: RunConfig | None = None
    if config is not None:
        config_path = Path(config)
        if not config_path.exists():
            typer.echo(f"Error: config file not found: {config}", err=True)
            raise typer.Exit(1)
        try:
            run_config = load_config(config_path)
        except ValueError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)

    specs = list(targets or [])
    if not specs and run_config is not None:
        specs = list(run_config.tests)
    if not specs:
        typer.echo("Error: no tests given (pass targets or --config)", err=True)
        raise typer.Exit(1)

    search_paths = [str(Path(p).resolve()) for p in search_path or []]
    if run_config is not None:
        search_paths.extend(run_config.search_paths)

    print_errors = not no_host_errors
    if run_config is not None and not run_config.print_error_messages:
        print_errors = False

    try:
        resolved = [resolve_target(spec, search_paths) for spec in specs]
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    logger = setup_logger(Path(log_file), verbose=verbose, logger_name="hostcheck_main")
    channel = DiagnosticChannel(logger=logger)
    diagnostics = HostDiagnostics(channel=channel, print_error_messages=print_errors)
    runner = Runner(diagnostics=diagnostics, channel=channel, logger=logger)

    summary = runner.run(resolved)

    if summary.interrupted:
        typer.echo("Run interrupted.")
    typer.echo(f"{summary.passed_count} passed, {summary.failed_count} failed")
    if not verbose:
        typer.echo(f"Debug log: {log_file}")

    if not summary.all_passed:
        raise typer.Exit(1)


_EXAMPLE_CONFIG = """\
search_paths:
  - ./scripts
print_error_messages: true
tests:
  - smoke_tests:test_arithmetic
  - smoke_tests:test_host_error_is_silenced
"""

_EXAMPLE_SCRIPT = '''\
"""Example tests. Each function receives an AssertionContext."""


def test_arithmetic(ctx):
    ctx.assert_true(1 + 1 == 2)
    ctx.assert_equal(2 * 3, 6, "multiplication")


def test_host_error_is_silenced(ctx):
    ctx.disable_diagnostics()
    ctx.diagnostics.push_error("expected failure inside the host")
    ctx.enable_diagnostics()
    ctx.assert_true(ctx.diagnostics.print_error_messages)
'''


@app.command()
def init(
    dir: str = typer.Option(
        "hostcheck", "--dir", help="Directory to initialize test project in"
    ),
):
    """Initialize a new test project with an example config and script."""
    project_dir = Path(dir)
    project_dir.mkdir(parents=True, exist_ok=True)

    example = project_dir / "hostcheck.yaml"
    if example.exists():
        typer.echo(f"hostcheck.yaml already exists in {dir}, skipping.")
        return

    example.write_text(_EXAMPLE_CONFIG)
    scripts = project_dir / "scripts"
    scripts.mkdir(parents=True, exist_ok=True)
    (scripts / "smoke_tests.py").write_text(_EXAMPLE_SCRIPT)

    typer.echo(f"Initialized test project in {dir}:")
    typer.echo("  hostcheck.yaml          - example run config")
    typer.echo("  scripts/smoke_tests.py  - example tests")
