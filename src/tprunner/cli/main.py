# tprunner/cli/main.py

"""
Main CLI entry point for tprunner using Click.
Handles global options like verbosity and logging level.
"""

import click
import structlog

from tprunner import __version__
from tprunner.cli.job_cmds import job_cli
from tprunner.cli.run_cmds import run_cli
from tprunner.cli.utils import logging_options, setup_logging_from_context
from tprunner.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.main")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-V", "--version", package_name="tprunner")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Outputs more detailed information about requests.",
)
@logging_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    log_level: str | None,
    log_file: str | None,
    json_logs: bool | None,
):
    """
    tprunner: run TestProject jobs from the command line.

    Starts a job, waits for it to finish and exits non-zero when it does
    not pass. Option values fall back to environment variables.
    """
    ctx.ensure_object(dict)

    ctx.obj["VERBOSE"] = verbose
    ctx.obj["LOG_LEVEL"] = log_level
    ctx.obj["LOG_FILE"] = log_file
    ctx.obj["JSON_LOGS"] = json_logs if json_logs is not None else False

    setup_logging_from_context(ctx, default_log_level="WARNING")
    log.debug(
        "Main CLI group initialized",
        verbose=verbose,
        log_level=log_level,
        log_file=log_file,
        json_logs=json_logs,
    )


cli.add_command(job_cli)
cli.add_command(run_cli)

if __name__ == "__main__":
    cli()

# 🖥️⚙️
