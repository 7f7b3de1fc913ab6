"""Flat report rows derived from issues and pull requests.

Field order is column order when a list of rows is rendered as a table.
"""

from datetime import datetime

from pydantic import BaseModel

from ..github_client.models import GitHubIssue
from ..utils.date_utils import diff_in_days_from_today, format_long_date


def _linked_title(issue: GitHubIssue) -> str:
    return f"[{issue.title}]({issue.html_url})"


def _last_update(issue: GitHubIssue, now: datetime | None) -> str:
    return f"{diff_in_days_from_today(issue.updated_at, now)} days"


def _format_labels(issue: GitHubIssue) -> str:
    return "<br>".join(f"`{label.name}`" for label in issue.labels)


class IssueRow(BaseModel):
    """Shared columns for issue reporting."""

    title: str
    created_at: str
    last_update: str
    labels: str

    @classmethod
    def from_issue(cls, issue: GitHubIssue, now: datetime | None = None):
        return cls(
            title=_linked_title(issue),
            created_at=format_long_date(issue.created_at),
            last_update=_last_update(issue, now),
            labels=_format_labels(issue),
        )


class PopularFeatureRequest(IssueRow):
    reaction_count: int

    @classmethod
    def from_issue(cls, issue: GitHubIssue, now: datetime | None = None):
        base = IssueRow.from_issue(issue, now)
        return cls(**base.model_dump(), reaction_count=issue.reactions)


class HighlyCommentedIssue(IssueRow):
    comment_count: int

    @classmethod
    def from_issue(cls, issue: GitHubIssue, now: datetime | None = None):
        base = IssueRow.from_issue(issue, now)
        return cls(**base.model_dump(), comment_count=issue.comments)


class OldestIssue(IssueRow):
    pass


class UntriagedIssue(IssueRow):
    pass


class BugIssue(IssueRow):
    pass


class PendingReleaseIssue(IssueRow):
    pass


class MilestoneIssue(BaseModel):
    """Issue in a milestone; shows the assignee instead of the creation date."""

    title: str
    last_update: str
    labels: str
    assignee: str

    @classmethod
    def from_issue(cls, issue: GitHubIssue, now: datetime | None = None):
        return cls(
            title=_linked_title(issue),
            last_update=_last_update(issue, now),
            labels=_format_labels(issue),
            assignee=issue.assignee.login if issue.assignee else "No assignee",
        )


class PullRequestRow(BaseModel):
    """Shared columns for pull request reporting."""

    title: str
    created_at: str
    last_update: str
    reviewers: str
    labels: str

    @classmethod
    def from_pull_request(cls, pr: GitHubIssue, now: datetime | None = None):
        return cls(
            title=_linked_title(pr),
            created_at=format_long_date(pr.created_at),
            last_update=_last_update(pr, now),
            reviewers="<br>".join(person.login for person in pr.requested_reviewers),
            labels=_format_labels(pr),
        )


class LongRunningPullRequest(PullRequestRow):
    pass
