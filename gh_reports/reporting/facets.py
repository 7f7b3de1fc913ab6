"""Report facets: one repository query each, converted into report rows."""

import logging
from datetime import datetime

from ..github_client.models import MAX_PAGE_SIZE, QueryOptions
from ..github_client.queries import GitHubQueries
from .constants import (
    BLOCKED_LABELS,
    BUG_LABEL,
    FEATURE_REQUEST_LABEL,
    LONG_RUNNING_WITHOUT_UPDATE_THRESHOLD,
    MILESTONE_ISSUES_LIMIT,
    PENDING_RELEASE_LABEL,
    PRIORITY_MILESTONE_MARKER,
    TOP_BUG_ISSUES_LIMIT,
    TOP_FEATURE_REQUESTS_LIMIT,
    TOP_LONG_RUNNING_PR_LIMIT,
    TOP_MOST_COMMENTED_LIMIT,
    TOP_OLDEST_ISSUES_LIMIT,
    TOP_UNTRIAGED_LIMIT,
    TRIAGE_LABEL,
)
from .rows import (
    BugIssue,
    HighlyCommentedIssue,
    LongRunningPullRequest,
    MilestoneIssue,
    OldestIssue,
    PendingReleaseIssue,
    PopularFeatureRequest,
    UntriagedIssue,
)

logger = logging.getLogger(__name__)


async def get_top_feature_requests(
    queries: GitHubQueries, now: datetime | None = None
) -> list[PopularFeatureRequest]:
    """Feature requests with the most +1 reactions."""
    logger.info("Fetching most popular feature requests")
    issues = await queries.list_issues(
        QueryOptions(
            sort_by="reactions-+1",
            direction="desc",
            labels=[FEATURE_REQUEST_LABEL],
            limit=TOP_FEATURE_REQUESTS_LIMIT,
        )
    )
    return [PopularFeatureRequest.from_issue(issue, now) for issue in issues]


async def get_top_most_commented(
    queries: GitHubQueries, now: datetime | None = None
) -> list[HighlyCommentedIssue]:
    """Open issues with the most comments."""
    logger.info("Fetching most commented issues")
    issues = await queries.list_issues(
        QueryOptions(
            sort_by="comments", direction="desc", limit=TOP_MOST_COMMENTED_LIMIT
        )
    )
    return [HighlyCommentedIssue.from_issue(issue, now) for issue in issues]


async def get_top_oldest_issues(
    queries: GitHubQueries, now: datetime | None = None
) -> list[OldestIssue]:
    """Oldest open issues that are not blocked."""
    logger.info("Fetching issues sorted by creation date")
    issues = await queries.list_issues(
        QueryOptions(
            sort_by="created",
            direction="asc",
            exclude_labels=list(BLOCKED_LABELS),
            limit=TOP_OLDEST_ISSUES_LIMIT,
        )
    )
    return [OldestIssue.from_issue(issue, now) for issue in issues]


async def get_long_running_prs(
    queries: GitHubQueries,
    now: datetime | None = None,
    min_days_without_update: int = LONG_RUNNING_WITHOUT_UPDATE_THRESHOLD,
) -> list[LongRunningPullRequest]:
    """Long-running pull requests without recent updates, blocked ones excluded.

    Args:
        queries: Repository queries
        now: Reference time for the ``last_update`` column
        min_days_without_update: Pull requests updated more recently are skipped
    """
    logger.info("Fetching PRs sorted by long-running")
    prs = await queries.list_pull_requests(
        QueryOptions(
            sort_by="long-running",
            direction="desc",
            exclude_labels=list(BLOCKED_LABELS),
            min_staleness_days=min_days_without_update,
            limit=TOP_LONG_RUNNING_PR_LIMIT,
        )
    )
    return [LongRunningPullRequest.from_pull_request(pr, now) for pr in prs]


async def get_issues_to_triage(
    queries: GitHubQueries, now: datetime | None = None
) -> list[UntriagedIssue]:
    logger.info("Fetching issues to triage")
    issues = await queries.list_issues(
        QueryOptions(
            sort_by="created",
            direction="asc",
            labels=[TRIAGE_LABEL],
            limit=TOP_UNTRIAGED_LIMIT,
        )
    )
    return [UntriagedIssue.from_issue(issue, now) for issue in issues]


async def get_bug_issues(
    queries: GitHubQueries, now: datetime | None = None
) -> list[BugIssue]:
    logger.info("Fetching bug issues")
    issues = await queries.list_issues(
        QueryOptions(
            sort_by="created",
            direction="asc",
            labels=[BUG_LABEL],
            exclude_labels=list(BLOCKED_LABELS),
            limit=TOP_BUG_ISSUES_LIMIT,
        )
    )
    return [BugIssue.from_issue(issue, now) for issue in issues]


async def get_pending_release_issues(
    queries: GitHubQueries, now: datetime | None = None
) -> list[PendingReleaseIssue]:
    """Issues in any state labelled as pending release."""
    logger.info("Fetching pending release issues")
    issues = await queries.list_issues(
        QueryOptions(
            sort_by="created",
            direction="asc",
            labels=[PENDING_RELEASE_LABEL],
            state="all",
        )
    )
    return [PendingReleaseIssue.from_issue(issue, now) for issue in issues]


async def get_issues_in_priority_milestone(
    queries: GitHubQueries, now: datetime | None = None
) -> list[MilestoneIssue]:
    """Issues in the first open milestone marked ``(priority)``.

    Returns an empty list when no open milestone carries the marker.
    """
    logger.info("Fetching issues in prioritary milestone")
    milestones = await queries.list_milestones(
        QueryOptions(state="open", page_size=MAX_PAGE_SIZE, limit=MAX_PAGE_SIZE)
    )

    priority_milestone = next(
        (
            milestone
            for milestone in milestones
            if PRIORITY_MILESTONE_MARKER in milestone.title.lower()
        ),
        None,
    )
    if priority_milestone is None:
        logger.debug("No open priority milestone found")
        return []

    issues = await queries.list_issues(
        QueryOptions(
            sort_by="created",
            direction="asc",
            milestone=priority_milestone.number,
            page_size=MAX_PAGE_SIZE,
            limit=MILESTONE_ISSUES_LIMIT,
        )
    )
    return [MilestoneIssue.from_issue(issue, now) for issue in issues]
