"""Pydantic models for GitHub data structures.

These models map directly to GitHub's REST API v3 response structures.
API Reference: https://docs.github.com/en/rest/issues
"""

from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

MAX_PAGE_SIZE = 100

DEFAULT_LIMIT = 10
DEFAULT_PAGE_SIZE = 30
DEFAULT_DIRECTION = "asc"
DEFAULT_STATE = "open"

Direction = Literal["asc", "desc"]
State = Literal["open", "closed", "all"]


class ResourceKind(str, Enum):
    """Kinds of resources listed through the REST API."""

    ISSUE = "issue"
    PULL_REQUEST = "pull_request"
    MILESTONE = "milestone"


# Sorting options for issues.
# API Reference: https://docs.github.com/en/rest/issues/issues#list-repository-issues
# `reactions-+1` is not documented but the endpoint honours it.
ISSUES_SORT_BY = ("created", "updated", "comments", "reactions-+1")

# Sorting options for pull requests.
# API Reference: https://docs.github.com/en/rest/pulls/pulls#list-pull-requests
# `popularity` sorts by comment count, `long-running` by age of PRs that
# were opened more than a month ago and saw activity within the last month.
PULL_REQUESTS_SORT_BY = ("created", "updated", "popularity", "long-running")

# API Reference: https://docs.github.com/en/rest/issues/milestones
MILESTONES_SORT_BY = ("due_on", "completeness")

SORT_BY_KIND: dict[ResourceKind, tuple[str, ...]] = {
    ResourceKind.ISSUE: ISSUES_SORT_BY,
    ResourceKind.PULL_REQUEST: PULL_REQUESTS_SORT_BY,
    ResourceKind.MILESTONE: MILESTONES_SORT_BY,
}


class GitHubUser(BaseModel):
    """GitHub user model representing a user account.

    Maps to GitHub REST API User object.
    API Reference: https://docs.github.com/en/rest/users/users
    """

    login: str = Field(..., description="GitHub username/login (string)")
    id: int = Field(..., description="Unique user identifier (integer)")


class GitHubLabel(BaseModel):
    """GitHub label model representing repository labels.

    Maps to GitHub REST API Label object.
    API Reference: https://docs.github.com/en/rest/issues/labels
    """

    name: str = Field(..., description="Name of the label (string)")
    color: str = Field(
        "", description="Hexadecimal color code without leading # (string)"
    )
    description: str | None = Field(
        None, description="Short description of the label (string, max 100 characters)"
    )


class GitHubIssue(BaseModel):
    """GitHub issue or pull request.

    The issues endpoint returns pull requests too; ``kind`` tells them apart.
    API Reference: https://docs.github.com/en/rest/issues/issues
    """

    number: int = Field(..., description="Issue number within the repository (integer)")
    title: str = Field(..., description="Short description/title of the issue (string)")
    html_url: str = Field(..., description="Web URL of the issue (string)")
    state: str = Field(..., description="Current state: 'open', 'closed' (string)")
    body: str | None = Field(
        None, description="Detailed description of the issue in markdown (string)"
    )
    kind: ResourceKind = Field(
        ResourceKind.ISSUE, description="Whether this record is an issue or a PR"
    )
    labels: list[GitHubLabel] = Field(
        default_factory=list, description="Array of labels attached to the issue"
    )
    user: GitHubUser | None = Field(None, description="Creator/author of the issue")
    assignee: GitHubUser | None = Field(None, description="Primary assignee")
    assignees: list[GitHubUser] = Field(
        default_factory=list, description="All assignees"
    )
    requested_reviewers: list[GitHubUser] = Field(
        default_factory=list, description="Reviewers requested on a pull request"
    )
    comments: int = Field(0, description="Number of comments (integer)")
    reactions: int = Field(0, description="Total number of reactions (integer)")
    milestone_number: int | None = Field(
        None, description="Number of the milestone the issue belongs to"
    )
    created_at: datetime = Field(
        ..., description="Timestamp of issue creation (ISO 8601)"
    )
    updated_at: datetime = Field(
        ..., description="Timestamp of last issue update (ISO 8601)"
    )

    @model_validator(mode="after")
    def _check_timestamps(self) -> "GitHubIssue":
        if self.updated_at < self.created_at:
            raise ValueError(
                f"Issue #{self.number} updated_at precedes created_at"
            )
        return self

    @property
    def is_pull_request(self) -> bool:
        return self.kind == ResourceKind.PULL_REQUEST

    @property
    def label_names(self) -> frozenset[str]:
        return frozenset(label.name for label in self.labels)

    @classmethod
    def from_api(
        cls, data: dict[str, Any], kind: ResourceKind | None = None
    ) -> "GitHubIssue":
        """Decode a REST payload from the issues, pulls or search endpoints.

        Args:
            data: Raw JSON object returned by the API
            kind: Force the resource kind (pulls endpoint); when None the kind
                is inferred from the presence of a ``pull_request`` key

        Returns:
            GitHubIssue instance
        """
        if kind is None:
            kind = (
                ResourceKind.PULL_REQUEST
                if data.get("pull_request") is not None
                else ResourceKind.ISSUE
            )

        reactions = data.get("reactions") or {}
        milestone = data.get("milestone") or {}

        return cls(
            number=data["number"],
            title=data["title"],
            html_url=data["html_url"],
            state=data["state"],
            body=data.get("body"),
            kind=kind,
            labels=data.get("labels") or [],
            user=data.get("user"),
            assignee=data.get("assignee"),
            assignees=data.get("assignees") or [],
            requested_reviewers=data.get("requested_reviewers") or [],
            comments=data.get("comments") or 0,
            reactions=reactions.get("total_count", 0),
            milestone_number=milestone.get("number"),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )


class GitHubMilestone(BaseModel):
    """GitHub milestone model.

    API Reference: https://docs.github.com/en/rest/issues/milestones
    """

    number: int = Field(..., description="The number of the milestone")
    title: str = Field(..., description="The title of the milestone")
    state: str = Field(..., description="The state of the milestone")
    html_url: str = Field("", description="Web URL of the milestone")
    description: str | None = Field(None, description="Milestone description")
    open_issues: int = Field(0, description="Open issues in the milestone")
    closed_issues: int = Field(0, description="Closed issues in the milestone")
    due_on: datetime | None = Field(None, description="Due date (ISO 8601)")
    created_at: datetime = Field(..., description="Creation timestamp (ISO 8601)")
    updated_at: datetime = Field(..., description="Last update timestamp (ISO 8601)")

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "GitHubMilestone":
        return cls.model_validate(data)


class SearchResult(BaseModel):
    """Result of a single issues-and-pull-requests search call.

    Items are ranked by the API; the first item is the best match, not the
    only one.
    """

    items: list[GitHubIssue] = Field(default_factory=list)
    total_count: int = Field(0, description="Total matches reported by the API")
    incomplete_results: bool = Field(
        False, description="True when the search timed out before completing"
    )


class PageRequest(BaseModel):
    """Parameters for one paginated list call."""

    owner: str
    repo: str
    sort: str | None = None
    direction: Direction = DEFAULT_DIRECTION
    per_page: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    state: State = DEFAULT_STATE
    labels: list[str] | None = None
    milestone: int | None = None

    def to_params(self) -> dict[str, Any]:
        """Query string parameters for the REST list endpoints."""
        params: dict[str, Any] = {
            "state": self.state,
            "direction": self.direction,
            "per_page": self.per_page,
        }
        if self.sort:
            params["sort"] = self.sort
        if self.labels:
            params["labels"] = ",".join(self.labels)
        if self.milestone is not None:
            params["milestone"] = self.milestone
        return params


class QueryOptions(BaseModel):
    """Options for listing issues, pull requests or milestones.

    ``min_age_days`` and ``min_staleness_days`` of None, zero or a negative
    number disable the corresponding filter.
    """

    sort_by: str | None = Field(None, description="Sort key for the resource kind")
    direction: Direction = Field(DEFAULT_DIRECTION, description="asc or desc")
    page_size: int = Field(
        DEFAULT_PAGE_SIZE,
        ge=1,
        le=MAX_PAGE_SIZE,
        description="Page size for each list API call",
    )
    limit: int = Field(DEFAULT_LIMIT, gt=0, description="Max results to return")
    exclude_labels: list[str] = Field(
        default_factory=list, description="Reject resources carrying any of these"
    )
    min_age_days: int | None = Field(
        None, description="Only keep resources created at least this many days ago"
    )
    min_staleness_days: int | None = Field(
        None, description="Only keep resources not updated for this many days"
    )
    state: State = Field(DEFAULT_STATE, description="open, closed or all")
    labels: list[str] | None = Field(
        None, description="Only list resources carrying all of these labels"
    )
    milestone: int | None = Field(None, description="Milestone number to list")

    @field_validator("exclude_labels", mode="before")
    @classmethod
    def _none_means_no_exclusions(cls, value: Any) -> Any:
        return [] if value is None else value

    def validate_sort_for(self, kind: ResourceKind) -> None:
        """Raise ValueError if ``sort_by`` is not valid for the resource kind."""
        allowed = SORT_BY_KIND[kind]
        if self.sort_by is not None and self.sort_by not in allowed:
            raise ValueError(
                f"Invalid sort '{self.sort_by}' for {kind.value}. "
                f"Expected one of: {', '.join(allowed)}"
            )

    def to_page_request(self, owner: str, repo: str) -> PageRequest:
        return PageRequest(
            owner=owner,
            repo=repo,
            sort=self.sort_by,
            direction=self.direction,
            per_page=self.page_size,
            state=self.state,
            labels=self.labels,
            milestone=self.milestone,
        )
