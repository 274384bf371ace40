# tprunner/cli/run_cmds.py

import asyncio

import click
import structlog

from tprunner.cli.utils import job_options, logging_options, setup_logging_from_context
from tprunner.client import JobApiClient
from tprunner.config import MAX_REQUESTS, ApiConfig, JobIdentity, MonitorConfig
from tprunner.protocols import RunOutcome
from tprunner.runtime import ConsoleInterface, ExecutionMonitor
from tprunner.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.run")


async def _monitor_job(
    api_config: ApiConfig,
    identity: JobIdentity,
    monitor_config: MonitorConfig,
    console: ConsoleInterface,
) -> RunOutcome:
    """Opens one API client for the whole run and drives the monitor with it."""
    async with JobApiClient(api_config) as client:
        monitor = ExecutionMonitor(client, identity, monitor_config, console=console)
        return await monitor.run()


def _report_outcome(outcome: RunOutcome) -> int:
    """Prints the outcome the way callers script against and returns the exit code."""
    if outcome.report_url:
        click.echo(outcome.report_url)

    if outcome.success:
        return 0
    click.echo(outcome.error, err=True)
    return 1


def _run_job(
    api_config: ApiConfig,
    identity: JobIdentity,
    monitor_config: MonitorConfig,
    console: ConsoleInterface,
) -> int:
    """
    Runs the monitor on a fresh event loop. asyncio.run() cancels the
    main task on CTRL-C, which aborts a pending poll wait right away.
    """
    try:
        outcome = asyncio.run(_monitor_job(api_config, identity, monitor_config, console))
    except KeyboardInterrupt:
        log.warning("Run interrupted by KeyboardInterrupt (CTRL-C).")
        click.echo("Interrupted.", err=True)
        return 130  # Standard exit code for SIGINT
    except Exception as e:
        log.critical("Monitor exited with an unhandled exception.", exc_info=True)
        click.echo(f"Error: An unexpected issue occurred: {e}", err=True)
        return 1

    console.post_outcome(outcome)
    return _report_outcome(outcome)


@click.command(name="run")
@job_options
@click.option(
    "--max-requests",
    type=click.IntRange(min=1),
    default=MAX_REQUESTS,
    show_default=True,
    help="Maximum number of status requests before exiting with a timeout error.",
)
@click.option(
    "--queue/--no-queue",
    default=True,
    show_default=True,
    help="Queue the run behind executions of the job that are already running.",
)
@logging_options
@click.pass_context
def run_cli(
    ctx: click.Context,
    project_id: str,
    job_id: str,
    api_key: str,
    max_requests: int,
    queue: bool,
    **kwargs,
):
    """Run a job given its id and project id, and wait for the result."""
    setup_logging_from_context(
        ctx,
        local_log_level=kwargs.get("log_level"),
        local_log_file=kwargs.get("log_file"),
        local_json_logs=kwargs.get("json_logs"),
    )
    verbose = bool((ctx.obj or {}).get("VERBOSE", False))

    try:
        identity = JobIdentity(project_id=project_id, job_id=job_id)
        api_config = ApiConfig(api_key=api_key)
        monitor_config = MonitorConfig(queue=queue, max_polls=max_requests, verbose=verbose)
    except ValueError as e:
        raise click.UsageError(str(e), ctx=ctx) from e

    log.info("Executing 'run' command", project_id=project_id, job_id=job_id, max_requests=max_requests)

    console = ConsoleInterface(verbose=verbose)
    console.post_header(identity)

    exit_code = _run_job(api_config, identity, monitor_config, console)

    log.info("'run' command finished.", exit_code=exit_code)
    ctx.exit(exit_code)

# 🔼⚙️
