"""CLI commands that build and publish roadmap reports."""

import asyncio
import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ..config import ActionsContext, GitHubSettings
from ..github_client.client import GitHubClient
from ..github_client.queries import GitHubQueries
from ..reporting.reports import BaseReport, MonthlyRoadmapReport, WeeklyRoadmapReport
from ..reporting.summary import write_job_summary
from .options import DEBUG_OPTION, DRY_RUN_OPTION, REPO_OPTION, TOKEN_OPTION

console = Console()
logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=debug)],
        force=True,
    )


def _run_report(
    report_cls: type[BaseReport],
    link_text: str,
    repo: str | None,
    token: str | None,
    dry_run: bool,
    debug: bool,
) -> None:
    configure_logging(debug)

    try:
        settings = GitHubSettings.from_env(token=token, repository=repo)
        client = GitHubClient(token=settings.token)
        queries = GitHubQueries.from_client(client, settings.owner, settings.repo)
        actions = ActionsContext()
        report = report_cls(queries, actions=actions)

        console.print(f"🔍 Building {report.name} report for {settings.full_name}")

        if dry_run:
            rendered = asyncio.run(report.build())
            console.print(
                f"[yellow]Dry run, not publishing '{rendered.title}'[/yellow]"
            )
            console.print(rendered.body, markup=False, highlight=False)
            return

        result = asyncio.run(report.create())
    except Exception as e:
        console.print(f"❌ [red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    verb = "Created" if result.created else "Updated"
    console.print(
        f"✅ [green]{verb}[/green] #{result.issue.number}: {result.issue.html_url}"
    )

    if actions.step_summary_path:
        write_job_summary(
            actions.step_summary_path, report.title, link_text, result.issue.html_url
        )
        logger.debug(f"Wrote job summary to {actions.step_summary_path}")


def monthly(
    repo: str | None = REPO_OPTION,
    token: str | None = TOKEN_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Create or update the monthly roadmap reminder issue.

    Examples:
        github-reports monthly --repo aws-powertools/powertools-lambda-python
        github-reports monthly -r my-org/my-repo --dry-run
    """
    _run_report(
        MonthlyRoadmapReport, "View monthly report", repo, token, dry_run, debug
    )


def weekly(
    repo: str | None = REPO_OPTION,
    token: str | None = TOKEN_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Create or update the weekly roadmap reminder issue."""
    _run_report(WeeklyRoadmapReport, "View weekly report", repo, token, dry_run, debug)
