"""Roadmap reports: gather facets, render, publish one tracking issue."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime

from ..config import ActionsContext
from ..github_client.queries import GitHubQueries
from ..github_client.search import build_tracking_query
from ..utils.date_utils import month_name, utc_now
from .aggregate import FacetFetcher, aggregate
from .constants import REPORT_ROADMAP_LABEL
from .facets import (
    get_bug_issues,
    get_issues_in_priority_milestone,
    get_issues_to_triage,
    get_long_running_prs,
    get_pending_release_issues,
    get_top_feature_requests,
    get_top_most_commented,
    get_top_oldest_issues,
)
from .reconciler import IssueReconciler, ReconcileResult
from .templates import (
    MONTHLY_TITLE_PREFIX,
    WEEKLY_TITLE,
    MonthlyRoadmapTemplate,
    RenderedReport,
    WeeklyRoadmapTemplate,
)

logger = logging.getLogger(__name__)


class BaseReport(ABC):
    """Shared plumbing for reports published as a single tracking issue."""

    name = "report"

    def __init__(
        self,
        queries: GitHubQueries,
        actions: ActionsContext | None = None,
        title: str | None = None,
        search_query: str | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize the report.

        Args:
            queries: Repository queries for the target repository
            actions: GitHub Actions run context; read from the environment if omitted
            title: Override for the issue title
            search_query: Override for the query that finds the existing issue
            clock: Current time, used for the reporting period and day counts
        """
        self.queries = queries
        self.actions = actions or ActionsContext()
        self.clock = clock
        self.now = clock()
        self.title = title or self.default_title()
        self.search_query = search_query or build_tracking_query(
            self.title, queries.owner, queries.repo, label=REPORT_ROADMAP_LABEL
        )

    @abstractmethod
    def default_title(self) -> str:
        """Issue title used when none is given."""
        pass

    @abstractmethod
    def facets(self) -> dict[str, FacetFetcher]:
        """Facet name mapped to the fetcher producing its rows."""
        pass

    @abstractmethod
    def render(self, facets: dict[str, list]) -> RenderedReport:
        pass

    async def build(self) -> RenderedReport:
        """Fetch every facet concurrently and render the report."""
        logger.info(
            f"Fetching GitHub data for {self.name} report",
            extra=self.actions.log_context(),
        )
        facets = await aggregate(self.facets())

        logger.info(f"Building {self.name} report '{self.title}'")
        return self.render(facets)

    async def create(self, report: str | None = None) -> ReconcileResult:
        """Create or update the tracking issue.

        Args:
            report: Previously built body to publish; built when omitted

        Returns:
            ReconcileResult with the published issue
        """
        body = report if report is not None else (await self.build()).body

        logger.info(f"Creating issue with {self.name} report '{self.title}'")
        reconciler = IssueReconciler(self.queries)
        return await reconciler.reconcile(
            self.search_query,
            title=self.title,
            body=body,
            labels=[REPORT_ROADMAP_LABEL],
        )


class MonthlyRoadmapReport(BaseReport):
    name = "monthly roadmap"

    def default_title(self) -> str:
        return f"{MONTHLY_TITLE_PREFIX} - {month_name(self.now)}"

    def facets(self) -> dict[str, FacetFetcher]:
        return {
            "feature_requests": lambda: get_top_feature_requests(
                self.queries, self.now
            ),
            "long_running_prs": lambda: get_long_running_prs(self.queries, self.now),
            "oldest_issues": lambda: get_top_oldest_issues(self.queries, self.now),
            "most_active_issues": lambda: get_top_most_commented(
                self.queries, self.now
            ),
        }

    def render(self, facets: dict[str, list]) -> RenderedReport:
        template = MonthlyRoadmapTemplate(
            month=month_name(self.now),
            feature_requests=facets["feature_requests"],
            most_active_issues=facets["most_active_issues"],
            long_running_prs=facets["long_running_prs"],
            oldest_issues=facets["oldest_issues"],
            workflow_run_url=self.actions.workflow_run_url(),
        )
        report = template.build()
        return RenderedReport(title=self.title, body=report.body)


class WeeklyRoadmapReport(BaseReport):
    name = "weekly roadmap"

    def default_title(self) -> str:
        return WEEKLY_TITLE

    def facets(self) -> dict[str, FacetFetcher]:
        return {
            "untriaged_issues": lambda: get_issues_to_triage(self.queries, self.now),
            "bug_issues": lambda: get_bug_issues(self.queries, self.now),
            "long_running_prs": lambda: get_long_running_prs(self.queries, self.now),
            "pending_release_issues": lambda: get_pending_release_issues(
                self.queries, self.now
            ),
            "priority_milestone_issues": lambda: get_issues_in_priority_milestone(
                self.queries, self.now
            ),
        }

    def render(self, facets: dict[str, list]) -> RenderedReport:
        template = WeeklyRoadmapTemplate(
            untriaged_issues=facets["untriaged_issues"],
            bug_issues=facets["bug_issues"],
            long_running_prs=facets["long_running_prs"],
            pending_release_issues=facets["pending_release_issues"],
            priority_milestone_issues=facets["priority_milestone_issues"],
            workflow_run_url=self.actions.workflow_run_url(),
        )
        report = template.build()
        return RenderedReport(title=self.title, body=report.body)
