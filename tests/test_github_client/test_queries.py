"""Tests for the repository query entry points."""

import logging
from datetime import datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock, Mock

import pytest
from github.GithubException import GithubException

from gh_reports.github_client.models import QueryOptions, ResourceKind, SearchResult
from gh_reports.github_client.queries import GitHubQueries


def _queries(
    source: Any, now: datetime, searcher: Any = None, writer: Any = None
) -> GitHubQueries:
    return GitHubQueries(
        "test-org",
        "test-repo",
        source=source,
        searcher=searcher or Mock(),
        writer=writer or Mock(),
        clock=lambda: now,
    )


class TestListIssues:
    """Test list_issues."""

    @pytest.mark.asyncio
    async def test_limit_one_returns_first_in_source_order(
        self, make_issue: Any, page_source: Any, now: datetime
    ) -> None:
        """Test limit=1 against five issues returns the first one."""
        source = page_source([[make_issue(n) for n in (11, 12, 13, 14, 15)]])

        issues = await _queries(source, now).list_issues(QueryOptions(limit=1))

        assert [issue.number for issue in issues] == [11]

    @pytest.mark.asyncio
    async def test_all_excluded_by_label(
        self, make_issue: Any, page_source: Any, now: datetime
    ) -> None:
        """Test five issues carrying an excluded label yield nothing."""
        source = page_source(
            [[make_issue(n, labels=("do-not-merge",)) for n in range(1, 6)]]
        )

        issues = await _queries(source, now).list_issues(
            QueryOptions(exclude_labels=["do-not-merge"])
        )

        assert issues == []

    @pytest.mark.asyncio
    async def test_skips_pull_requests(
        self, make_issue: Any, page_source: Any, now: datetime
    ) -> None:
        source = page_source([[make_issue(1, pull_request=True), make_issue(2)]])

        issues = await _queries(source, now).list_issues()

        assert [issue.number for issue in issues] == [2]

    @pytest.mark.asyncio
    async def test_passes_page_request(self, page_source: Any, now: datetime) -> None:
        """Test options become the page request handed to the source."""
        source = page_source([[]])

        await _queries(source, now).list_issues(
            QueryOptions(
                sort_by="comments", direction="desc", page_size=5, labels=["bug"]
            )
        )

        kind, request = source.requests[0]
        assert kind == ResourceKind.ISSUE
        assert request.owner == "test-org"
        assert request.sort == "comments"
        assert request.direction == "desc"
        assert request.per_page == 5
        assert request.labels == ["bug"]

    @pytest.mark.asyncio
    async def test_invalid_sort_raises_before_fetching(
        self, page_source: Any, now: datetime
    ) -> None:
        source = page_source([[]])

        with pytest.raises(ValueError, match="Invalid sort"):
            await _queries(source, now).list_issues(QueryOptions(sort_by="long-running"))

        assert source.requests == []

    @pytest.mark.asyncio
    async def test_transport_error_propagates(
        self, make_issue: Any, page_source: Any, now: datetime
    ) -> None:
        """Test errors are not masked as empty results."""
        error = GithubException(500, {"message": "Server Error"}, None)
        source = page_source([], error=error)

        with pytest.raises(GithubException):
            await _queries(source, now).list_issues()

    @pytest.mark.asyncio
    async def test_logs_before_and_after(
        self, make_issue: Any, page_source: Any, now: datetime, caplog: Any
    ) -> None:
        """Test one info record before and one debug record after the call."""
        source = page_source([[make_issue(1), make_issue(2)]])

        with caplog.at_level(logging.DEBUG, logger="gh_reports.github_client.queries"):
            await _queries(source, now).list_issues()

        records = [
            r for r in caplog.records if r.name == "gh_reports.github_client.queries"
        ]
        assert [r.levelno for r in records] == [logging.INFO, logging.DEBUG]
        assert "Listed 2 issue(s)" in records[1].getMessage()


class TestListPullRequests:
    """Test list_pull_requests."""

    @pytest.mark.asyncio
    async def test_keeps_stale_pull_requests(
        self, make_issue: Any, page_source: Any, now: datetime
    ) -> None:
        source = page_source(
            [
                [
                    make_issue(1, pull_request=True, stale_days=1),
                    make_issue(2, pull_request=True, stale_days=10),
                    make_issue(3, pull_request=True, stale_days=20, labels=("on-hold",)),
                ]
            ]
        )

        prs = await _queries(source, now).list_pull_requests(
            QueryOptions(
                sort_by="long-running",
                min_staleness_days=7,
                exclude_labels=["on-hold"],
            )
        )

        assert [pr.number for pr in prs] == [2]
        assert source.requests[0][0] == ResourceKind.PULL_REQUEST


class TestListMilestones:
    @pytest.mark.asyncio
    async def test_lists_milestones(
        self, make_milestone: Any, page_source: Any, now: datetime
    ) -> None:
        source = page_source([[make_milestone(1), make_milestone(2, "Next (priority)")]])

        milestones = await _queries(source, now).list_milestones(
            QueryOptions(sort_by="due_on")
        )

        assert [m.title for m in milestones] == ["v1.0", "Next (priority)"]
        assert source.requests[0][0] == ResourceKind.MILESTONE


class TestFindBySearch:
    """Test find_by_search."""

    @pytest.mark.asyncio
    async def test_returns_ranked_result(
        self, make_issue: Any, page_source: Any, now: datetime
    ) -> None:
        searcher = MagicMock()
        searcher.search = AsyncMock(
            return_value=SearchResult(
                items=[make_issue(8), make_issue(3)],
                total_count=2,
                incomplete_results=True,
            )
        )

        result = await _queries(page_source([]), now, searcher=searcher).find_by_search(
            "Roadmap is:issue"
        )

        searcher.search.assert_awaited_once_with("Roadmap is:issue")
        assert [issue.number for issue in result.items] == [8, 3]
        assert result.incomplete_results

    @pytest.mark.asyncio
    async def test_error_propagates(self, page_source: Any, now: datetime) -> None:
        searcher = MagicMock()
        searcher.search = AsyncMock(
            side_effect=GithubException(422, {"message": "Validation Failed"}, None)
        )

        with pytest.raises(GithubException):
            await _queries(page_source([]), now, searcher=searcher).find_by_search("x")


class TestWrites:
    """Test create_issue and update_issue."""

    @pytest.mark.asyncio
    async def test_create_requires_title(self, page_source: Any, now: datetime) -> None:
        """Test missing title fails before any request."""
        writer = MagicMock()
        writer.create = AsyncMock()

        with pytest.raises(ValueError, match="Issue title is required"):
            await _queries(page_source([]), now, writer=writer).create_issue(None)

        writer.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_requires_number(self, page_source: Any, now: datetime) -> None:
        writer = MagicMock()
        writer.update = AsyncMock()

        with pytest.raises(ValueError, match="Issue number is required"):
            await _queries(page_source([]), now, writer=writer).update_issue(
                None, title="x"
            )

        writer.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_drops_unset_fields(
        self, make_issue: Any, page_source: Any, now: datetime
    ) -> None:
        writer = MagicMock()
        writer.create = AsyncMock(return_value=make_issue(42))

        issue = await _queries(page_source([]), now, writer=writer).create_issue(
            "Weekly", body="body", labels=["report-roadmap"]
        )

        assert issue.number == 42
        writer.create.assert_awaited_once_with(
            "test-org",
            "test-repo",
            {"title": "Weekly", "body": "body", "labels": ["report-roadmap"]},
        )

    @pytest.mark.asyncio
    async def test_update_sends_patch_fields(
        self, make_issue: Any, page_source: Any, now: datetime
    ) -> None:
        writer = MagicMock()
        writer.update = AsyncMock(return_value=make_issue(42))

        await _queries(page_source([]), now, writer=writer).update_issue(
            42, body="new body", state="closed"
        )

        writer.update.assert_awaited_once_with(
            "test-org", "test-repo", 42, {"body": "new body", "state": "closed"}
        )

    @pytest.mark.asyncio
    async def test_write_error_propagates(self, page_source: Any, now: datetime) -> None:
        writer = MagicMock()
        writer.update = AsyncMock(
            side_effect=GithubException(404, {"message": "Not Found"}, None)
        )

        with pytest.raises(GithubException):
            await _queries(page_source([]), now, writer=writer).update_issue(1, body="b")
