# tprunner/runtime/console.py

"""
Echoes run progress to the terminal when verbose output is requested.
"""

from collections.abc import Mapping
from typing import Any

import click
import structlog
from rich.pretty import pretty_repr

from tprunner.config.models import JobIdentity
from tprunner.protocols import ExecutionStatus, JobMetadata, RunOutcome
from tprunner.telemetry import StructLogger

log: StructLogger = structlog.get_logger("runtime.console")


def format_payload(data: Mapping[str, Any]) -> str:
    return pretty_repr(dict(data), expand_all=True)


class ConsoleInterface:
    """
    A thin bridge between the monitor and the terminal. Every method is a
    no-op unless verbose output is enabled, so it never affects control flow.
    """

    def __init__(self, verbose: bool = False):
        self.is_active = verbose
        log.debug("Console interface initialized.", verbose=verbose)

    def post_header(self, identity: JobIdentity) -> None:
        if not self.is_active:
            return
        click.echo(f"- Project:  {identity.project_id}")
        click.echo(f"- Job:      {identity.job_id}")
        click.echo("-------------------------------")

    def post_job_details(self, details: JobMetadata) -> None:
        if not self.is_active:
            return
        click.echo(f"Job: {format_payload(details.data)}")

    def post_execution_started(self, execution_id: str) -> None:
        if not self.is_active:
            return
        click.echo(f"Job Started: {execution_id}")

    def post_status(self, status: ExecutionStatus) -> None:
        if not self.is_active:
            return
        click.echo(format_payload(status.raw or {"state": status.state, "report": status.report_url}))

    def post_outcome(self, outcome: RunOutcome) -> None:
        if not self.is_active:
            return
        click.echo(pretty_repr(outcome))


# 🔼⚙️
