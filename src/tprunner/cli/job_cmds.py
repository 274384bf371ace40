# tprunner/cli/job_cmds.py

import asyncio

import click
import structlog
from rich.pretty import pretty_repr

from tprunner.cli.utils import job_options, logging_options, setup_logging_from_context
from tprunner.client import JobApiClient
from tprunner.config import ApiConfig, JobIdentity
from tprunner.exceptions import ApiError
from tprunner.protocols import AgentMetadata, JobMetadata
from tprunner.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.job")


async def _fetch_job_summary(
    api_config: ApiConfig, identity: JobIdentity
) -> tuple[JobMetadata, AgentMetadata]:
    async with JobApiClient(api_config) as client:
        details = await client.fetch_job_details(identity)
        agent = await client.fetch_job_agent(identity)
    return details, agent


# Create a command group for job-related commands
@click.group(name="job")
def job_cli():
    """Commands for inspecting jobs without running them."""
    pass


@job_cli.command(name="show")
@job_options
@logging_options
@click.pass_context
def show_job(ctx: click.Context, project_id: str, job_id: str, api_key: str, **kwargs):
    """Fetch and display a job and the agent it runs on."""
    setup_logging_from_context(
        ctx,
        local_log_level=kwargs.get("log_level"),
        local_log_file=kwargs.get("log_file"),
        local_json_logs=kwargs.get("json_logs"),
    )

    try:
        identity = JobIdentity(project_id=project_id, job_id=job_id)
        api_config = ApiConfig(api_key=api_key)
    except ValueError as e:
        raise click.UsageError(str(e), ctx=ctx) from e

    log.info("Executing 'job show' command", project_id=project_id, job_id=job_id)

    try:
        details, agent = asyncio.run(_fetch_job_summary(api_config, identity))
    except ApiError as e:
        log.error("Failed to fetch job information", error=str(e))
        click.echo(f"Error: Could not retrieve job '{job_id}' in project '{project_id}':\n{e}", err=True)
        ctx.exit(1)
    except Exception as e:
        log.critical("An unexpected error occurred during 'job show'", error=str(e), exc_info=True)
        click.echo(f"Error: An unexpected issue occurred: {e}", err=True)
        ctx.exit(1)

    click.echo("Job:")
    click.echo(pretty_repr(dict(details.data), expand_all=True))
    click.echo("Agent:")
    click.echo(pretty_repr(dict(agent.data), expand_all=True))

# 🔼⚙️
