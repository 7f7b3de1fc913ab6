"""Markdown templates for roadmap reports.

Templates are pure: the reporting period and the workflow run link are
passed in, so the same rows always render the same title and body.
"""

from collections.abc import Sequence

from pydantic import BaseModel, Field

from .constants import (
    BLOCKED_LABELS,
    LONG_RUNNING_WITHOUT_UPDATE_THRESHOLD,
    PRIORITY_MILESTONE_PREVIEW,
)
from .markdown import Table, UnorderedList

INTRO = (
    "Quick report of top 3 issues/PRs to assist in roadmap updates. "
    "Issues or PRs with the following labels are excluded:"
)
DISCLAIMER = (
    "> **NOTE**: It does not guarantee they will be in the roadmap. "
    "Some might already be and there might be a blocker."
)

STALENESS_NOTE = (
    f"Pull Requests updated in the last {LONG_RUNNING_WITHOUT_UPDATE_THRESHOLD} "
    "days are excluded."
)

MONTHLY_TITLE_PREFIX = "Roadmap update reminder"
WEEKLY_TITLE = "Roadmap update reminder weekly"


class RenderedReport(BaseModel):
    """Title and Markdown body ready to publish."""

    title: str = Field(..., description="Canonical issue title for the period")
    body: str = Field(..., description="Markdown issue body")


def _table(rows: Sequence[BaseModel]) -> str:
    return Table.from_records([row.model_dump() for row in rows])


def _footer(workflow_run_url: str) -> str:
    if not workflow_run_url:
        return ""
    return f"> generated by: {workflow_run_url}"


class MonthlyRoadmapTemplate:
    """Monthly roadmap reminder: feature requests, activity, long-running PRs."""

    def __init__(
        self,
        month: str,
        feature_requests: Sequence[BaseModel] = (),
        most_active_issues: Sequence[BaseModel] = (),
        long_running_prs: Sequence[BaseModel] = (),
        oldest_issues: Sequence[BaseModel] = (),
        workflow_run_url: str = "",
    ):
        """Initialize the template.

        Args:
            month: Full month name of the reporting period, e.g. ``May``
            feature_requests: Popular feature request rows
            most_active_issues: Highly commented issue rows
            long_running_prs: Long-running pull request rows
            oldest_issues: Oldest issue rows
            workflow_run_url: Link rendered as footer; omitted when empty
        """
        self.month = month
        self.feature_requests = list(feature_requests)
        self.most_active_issues = list(most_active_issues)
        self.long_running_prs = list(long_running_prs)
        self.oldest_issues = list(oldest_issues)
        self.workflow_run_url = workflow_run_url

    @property
    def title(self) -> str:
        return f"{MONTHLY_TITLE_PREFIX} - {self.month}"

    def build(self) -> RenderedReport:
        body = f"""
{INTRO}

{UnorderedList.from_array(BLOCKED_LABELS)}

{DISCLAIMER}

## Top Feature Requests

{_table(self.feature_requests)}

## Top Most Commented Issues

{_table(self.most_active_issues)}

## Top Long Running Pull Requests

{_table(self.long_running_prs)}

## Top Oldest Issues

{_table(self.oldest_issues)}

{_footer(self.workflow_run_url)}
"""
        return RenderedReport(title=self.title, body=body)


class WeeklyRoadmapTemplate:
    """Weekly roadmap reminder: triage, bugs, pending release, priority milestone."""

    title = WEEKLY_TITLE

    def __init__(
        self,
        untriaged_issues: Sequence[BaseModel] = (),
        bug_issues: Sequence[BaseModel] = (),
        long_running_prs: Sequence[BaseModel] = (),
        pending_release_issues: Sequence[BaseModel] = (),
        priority_milestone_issues: Sequence[BaseModel] = (),
        workflow_run_url: str = "",
    ):
        self.untriaged_issues = list(untriaged_issues)
        self.bug_issues = list(bug_issues)
        self.long_running_prs = list(long_running_prs)
        self.pending_release_issues = list(pending_release_issues)
        self.priority_milestone_issues = list(priority_milestone_issues)
        self.workflow_run_url = workflow_run_url

    def build(self) -> RenderedReport:
        first_milestone_issues = self.priority_milestone_issues[
            :PRIORITY_MILESTONE_PREVIEW
        ]
        remaining_milestone_issues = self.priority_milestone_issues[
            PRIORITY_MILESTONE_PREVIEW:
        ]

        # GitHub Markdown is indentation sensitive, keep the body flush left
        body = f"""
{INTRO}

{UnorderedList.from_array(BLOCKED_LABELS)}

{DISCLAIMER}

## Untriaged Issues

{_table(self.untriaged_issues)}

## Top Bug Issues

{_table(self.bug_issues)}

## Top Long Running Pull Requests

{STALENESS_NOTE}

{_table(self.long_running_prs)}

## Items pending release

{_table(self.pending_release_issues)}

## Prioritary Milestone Issues

{_table(first_milestone_issues)}

<details>

<summary>Remaining Prioritary Milestone Issues</summary>

{_table(remaining_milestone_issues)}

</details>

{_footer(self.workflow_run_url)}
"""
        return RenderedReport(title=self.title, body=body)
