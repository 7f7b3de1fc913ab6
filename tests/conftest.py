"""Test configuration and fixtures."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from gh_reports.github_client.models import (
    GitHubIssue,
    GitHubMilestone,
    PageRequest,
    ResourceKind,
    SearchResult,
)
from gh_reports.github_client.queries import GitHubQueries

NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


def _iso(dt: datetime) -> str:
    return dt.strftime("%Y-%m-%dT%H:%M:%SZ")


@pytest.fixture
def now() -> datetime:
    """Fixed reference time shared by filters, rows and reports."""
    return NOW


@pytest.fixture
def issue_payload() -> Callable[..., dict[str, Any]]:
    """Build raw REST issue payloads as returned by the issues endpoint."""

    def _build(
        number: int = 1,
        title: str | None = None,
        labels: tuple[str, ...] = (),
        age_days: int = 30,
        stale_days: int = 0,
        pull_request: bool = False,
        comments: int = 0,
        reactions: int = 0,
        assignee: str | None = None,
        reviewers: tuple[str, ...] = (),
        milestone: int | None = None,
        state: str = "open",
    ) -> dict[str, Any]:
        created_at = NOW - timedelta(days=age_days)
        updated_at = max(created_at, NOW - timedelta(days=stale_days))
        payload: dict[str, Any] = {
            "number": number,
            "title": title or f"Issue {number}",
            "html_url": f"https://github.com/test-org/test-repo/issues/{number}",
            "state": state,
            "body": f"Body of issue {number}",
            "labels": [{"name": name, "color": "ededed"} for name in labels],
            "user": {"login": "reporter", "id": 1},
            "assignee": {"login": assignee, "id": 2} if assignee else None,
            "assignees": [{"login": assignee, "id": 2}] if assignee else [],
            "requested_reviewers": [
                {"login": login, "id": 10 + index}
                for index, login in enumerate(reviewers)
            ],
            "comments": comments,
            "reactions": {"total_count": reactions, "+1": reactions},
            "milestone": {"number": milestone} if milestone is not None else None,
            "created_at": _iso(created_at),
            "updated_at": _iso(updated_at),
        }
        if pull_request:
            payload["pull_request"] = {
                "url": f"https://api.github.com/repos/test-org/test-repo/pulls/{number}"
            }
        return payload

    return _build


@pytest.fixture
def make_issue(
    issue_payload: Callable[..., dict[str, Any]],
) -> Callable[..., GitHubIssue]:
    """Build decoded GitHubIssue records."""

    def _build(number: int = 1, **kwargs: Any) -> GitHubIssue:
        return GitHubIssue.from_api(issue_payload(number, **kwargs))

    return _build


@pytest.fixture
def make_milestone() -> Callable[..., GitHubMilestone]:
    def _build(
        number: int = 1, title: str = "v1.0", state: str = "open"
    ) -> GitHubMilestone:
        return GitHubMilestone(
            number=number,
            title=title,
            state=state,
            html_url=f"https://github.com/test-org/test-repo/milestone/{number}",
            created_at=NOW - timedelta(days=60),
            updated_at=NOW - timedelta(days=1),
        )

    return _build


class FakePageSource:
    """In-memory PageSource that records how many pages were pulled."""

    def __init__(self, pages: list[list[Any]], error: Exception | None = None):
        self._pages = pages
        self.error = error
        self.pages_served = 0
        self.closed = False
        self.requests: list[tuple[ResourceKind, PageRequest]] = []

    async def pages(self, kind: ResourceKind, request: PageRequest):
        self.requests.append((kind, request))
        try:
            for page in self._pages:
                self.pages_served += 1
                yield page
            if self.error is not None:
                raise self.error
        finally:
            self.closed = True


@pytest.fixture
def page_source() -> Callable[..., FakePageSource]:
    """Factory for in-memory page sources."""

    def _build(pages: list[list[Any]], error: Exception | None = None) -> FakePageSource:
        return FakePageSource(pages, error)

    return _build


class FakeForge:
    """In-memory GitHub repository acting as PageSource, SearchClient and IssueWriter.

    Search matches open issues whose title starts the query and, when the
    query carries a ``label:`` qualifier, that carry the label.
    """

    def __init__(self, owner: str = "test-org", repo: str = "test-repo"):
        self.owner = owner
        self.repo = repo
        self.issues: list[GitHubIssue] = []
        self.milestones: list[GitHubMilestone] = []
        self.created: list[int] = []
        self.updated: list[int] = []
        self.searches: list[str] = []

    async def pages(self, kind: ResourceKind, request: PageRequest):
        if kind == ResourceKind.MILESTONE:
            records: list[Any] = list(self.milestones)
        elif kind == ResourceKind.PULL_REQUEST:
            records = [issue for issue in self.issues if issue.is_pull_request]
        else:
            # The issues endpoint also returns pull requests
            records = list(self.issues)

        if kind != ResourceKind.MILESTONE:
            if request.state != "all":
                records = [r for r in records if r.state == request.state]
            if request.labels:
                records = [
                    r for r in records if set(request.labels) <= r.label_names
                ]
            if request.milestone is not None:
                records = [r for r in records if r.milestone_number == request.milestone]

        for start in range(0, len(records), request.per_page):
            yield records[start : start + request.per_page]

    async def search(self, query: str) -> SearchResult:
        self.searches.append(query)
        label = next(
            (
                part[len("label:") :]
                for part in query.split()
                if part.startswith("label:")
            ),
            None,
        )
        items = [
            issue
            for issue in self.issues
            if issue.state == "open"
            and not issue.is_pull_request
            and query.startswith(f"{issue.title} ")
            and (label is None or label in issue.label_names)
        ]
        return SearchResult(items=items, total_count=len(items))

    async def create(
        self, owner: str, repo: str, payload: dict[str, Any]
    ) -> GitHubIssue:
        number = max((issue.number for issue in self.issues), default=0) + 1
        issue = GitHubIssue.from_api(
            {
                "number": number,
                "title": payload["title"],
                "html_url": f"https://github.com/{owner}/{repo}/issues/{number}",
                "state": "open",
                "body": payload.get("body"),
                "labels": [{"name": name} for name in payload.get("labels", [])],
                "created_at": _iso(NOW),
                "updated_at": _iso(NOW),
            }
        )
        self.issues.append(issue)
        self.created.append(number)
        return issue

    async def update(
        self, owner: str, repo: str, issue_number: int, payload: dict[str, Any]
    ) -> GitHubIssue:
        index = next(
            i for i, issue in enumerate(self.issues) if issue.number == issue_number
        )
        changes: dict[str, Any] = {
            key: value
            for key, value in payload.items()
            if key in ("title", "body", "state")
        }
        if "labels" in payload:
            changes["labels"] = [{"name": name} for name in payload["labels"]]
        updated = GitHubIssue.model_validate(
            {**self.issues[index].model_dump(), **changes}
        )
        self.issues[index] = updated
        self.updated.append(issue_number)
        return updated


@pytest.fixture
def fake_forge() -> FakeForge:
    return FakeForge()


@pytest.fixture
def forge_queries(fake_forge: FakeForge, now: datetime) -> GitHubQueries:
    """Queries wired to the in-memory forge with a frozen clock."""
    return GitHubQueries(
        fake_forge.owner,
        fake_forge.repo,
        source=fake_forge,
        searcher=fake_forge,
        writer=fake_forge,
        clock=lambda: now,
    )
