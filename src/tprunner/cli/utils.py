# tprunner/cli/utils.py

import logging

import click
import structlog

from tprunner.telemetry.logger import setup_logging as core_setup_logging

log = structlog.get_logger("cli.utils")

LOG_LEVEL_CHOICES = click.Choice(list(logging._nameToLevel.keys()), case_sensitive=False)


def logging_options(f):
    """Decorator to add logging options to any command."""
    f = click.option(
        "-l",
        "--log-level",
        type=LOG_LEVEL_CHOICES,
        default=None,
        envvar="TPRUNNER_LOG_LEVEL",
        help="Set the logging level.",
    )(f)
    f = click.option(
        "--log-file",
        type=click.Path(dir_okay=False, writable=True, resolve_path=True),
        default=None,
        envvar="TPRUNNER_LOG_FILE",
        help="Path to write logs to a file (JSON format).",
    )(f)
    f = click.option(
        "--json-logs",
        is_flag=True,
        default=None,
        envvar="TPRUNNER_JSON_LOGS",
        help="Output console logs as JSON.",
    )(f)
    return f


def job_options(f):
    """Decorator adding the options that identify a job and authenticate against the API."""
    f = click.option(
        "--api-key",
        type=str,
        required=True,
        envvar="TP_API_KEY",
        show_envvar=True,
        help="The TestProject account API key.",
    )(f)
    f = click.option(
        "--job-id",
        type=str,
        required=True,
        envvar="TP_JOB_ID",
        show_envvar=True,
        help="The job id. Copy it from the job menu in the project page.",
    )(f)
    f = click.option(
        "--project-id",
        type=str,
        required=True,
        envvar="TP_PROJECT_ID",
        show_envvar=True,
        help="The project id. Copy it from the project page.",
    )(f)
    return f


def setup_logging_from_context(
    ctx: click.Context,
    local_log_level: str | None = None,
    local_log_file: str | None = None,
    local_json_logs: bool | None = None,
    default_log_level: str = "WARNING",
) -> None:
    """
    Setup logging using context values, allowing local overrides.
    """
    obj = ctx.obj or {}
    log_level_str = local_log_level or obj.get("LOG_LEVEL") or default_log_level
    log_file_path = local_log_file or obj.get("LOG_FILE")
    use_json_logs = local_json_logs if local_json_logs is not None else obj.get("JSON_LOGS", False)

    numeric_level = logging.getLevelName(log_level_str.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING
        log_level_str = "WARNING"

    core_setup_logging(
        level=numeric_level,
        json_logs=use_json_logs,
        log_file=log_file_path,
    )

    log.debug(
        "CLI logging initialized via utils",
        level=log_level_str,
        file=log_file_path or "console",
        json=use_json_logs,
    )

# 🔼⚙️
