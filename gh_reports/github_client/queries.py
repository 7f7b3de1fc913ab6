"""Typed repository queries built on paginated collection and filters."""

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from ..utils.date_utils import utc_now
from .client import GitHubClient
from .collector import collect
from .filters import FilterPipeline
from .gateway import GitHubGateway
from .interfaces import IssueWriter, PageSource, SearchClient
from .models import (
    GitHubIssue,
    GitHubMilestone,
    QueryOptions,
    ResourceKind,
    SearchResult,
)

logger = logging.getLogger(__name__)


def _drop_unset(payload: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


class GitHubQueries:
    """Entry points used by every report: list, search, create and update.

    Transport errors (``github.GithubException``) are logged and re-raised;
    nothing here turns a failure into an empty result.
    """

    def __init__(
        self,
        owner: str,
        repo: str,
        source: PageSource,
        searcher: SearchClient,
        writer: IssueWriter,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize queries for one repository.

        Args:
            owner: Repository owner (user or organization)
            repo: Repository name
            source: Paginated listing collaborator
            searcher: Issue search collaborator
            writer: Issue create/update collaborator
            clock: Reference time used by age and staleness filters
        """
        self.owner = owner
        self.repo = repo
        self.source = source
        self.searcher = searcher
        self.writer = writer
        self.clock = clock

    @classmethod
    def from_client(
        cls, client: GitHubClient, owner: str, repo: str
    ) -> "GitHubQueries":
        gateway = GitHubGateway(client)
        return cls(owner, repo, gateway, gateway, gateway)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    async def _list(
        self, kind: ResourceKind, options: QueryOptions, pipeline: FilterPipeline
    ) -> list[Any]:
        options.validate_sort_for(kind)
        request = options.to_page_request(self.owner, self.repo)
        return await collect(self.source.pages(kind, request), pipeline, options.limit)

    async def list_issues(
        self, options: QueryOptions | None = None
    ) -> list[GitHubIssue]:
        """List issues, skipping pull requests and excluded labels.

        Args:
            options: Query options; defaults to the 10 oldest open issues

        Returns:
            Up to ``options.limit`` issues in API order
        """
        options = options or QueryOptions()
        logger.info(
            f"Listing issues. Filtered by labels: '{options.labels}', "
            f"Sorted by: '{options.sort_by}', "
            f"Excluding labels: '{options.exclude_labels}', Limit: {options.limit}"
        )

        try:
            issues = await self._list(
                ResourceKind.ISSUE,
                options,
                FilterPipeline.for_issues(options, now=self.clock()),
            )
        except Exception as e:
            logger.error(f"Unable to list issues. Error: {e}")
            raise

        logger.debug(f"Listed {len(issues)} issue(s) from {self.full_name}")
        return issues

    async def list_pull_requests(
        self, options: QueryOptions | None = None
    ) -> list[GitHubIssue]:
        """List pull requests, skipping those with excluded labels."""
        options = options or QueryOptions()
        logger.info(
            f"Listing pull requests. Sorted by: '{options.sort_by}', "
            f"Excluding labels: '{options.exclude_labels}', Limit: {options.limit}"
        )

        try:
            pull_requests = await self._list(
                ResourceKind.PULL_REQUEST,
                options,
                FilterPipeline.for_pull_requests(options, now=self.clock()),
            )
        except Exception as e:
            logger.error(f"Unable to list pull requests. Error: {e}")
            raise

        logger.debug(
            f"Listed {len(pull_requests)} pull request(s) from {self.full_name}"
        )
        return pull_requests

    async def list_milestones(
        self, options: QueryOptions | None = None
    ) -> list[GitHubMilestone]:
        """List milestones; label and age filters do not apply to milestones."""
        options = options or QueryOptions()
        logger.info(
            f"Listing milestones. State: '{options.state}', "
            f"Sorted by: '{options.sort_by}', Limit: {options.limit}"
        )

        try:
            milestones = await self._list(
                ResourceKind.MILESTONE,
                options,
                FilterPipeline(options, now=self.clock()),
            )
        except Exception as e:
            logger.error(f"Unable to list milestones. Error: {e}")
            raise

        logger.debug(f"Listed {len(milestones)} milestone(s) from {self.full_name}")
        return milestones

    async def find_by_search(self, query: str) -> SearchResult:
        """Search issues and pull requests.

        GitHub Search qualifiers:
        https://docs.github.com/en/search-github/searching-on-github

        Example:
            >>> await queries.find_by_search("New bug is:issue label:bug in:title")

        Returns:
            SearchResult whose first item is the best match
        """
        logger.info(f"Searching whether issue exists. Search params: '{query}'")

        try:
            result = await self.searcher.search(query)
        except Exception as e:
            logger.error(f"Unable to search for issues at this time. Error: {e}")
            raise

        logger.debug(
            f"Search returned {len(result.items)} item(s) "
            f"(total: {result.total_count}, incomplete: {result.incomplete_results})"
        )
        return result

    async def create_issue(
        self,
        title: str | None,
        body: str | None = None,
        labels: list[str] | None = None,
        assignees: list[str] | None = None,
        milestone: int | None = None,
    ) -> GitHubIssue:
        """Create a new issue.

        API: https://docs.github.com/en/rest/issues/issues#create-an-issue

        Raises:
            ValueError: If title is missing (raised before any request)
        """
        if not title:
            raise ValueError("Issue title is required in CREATE operations.")

        logger.info(f"Creating issue '{title}' in {self.full_name}")
        payload = _drop_unset(
            {
                "title": title,
                "body": body,
                "labels": labels,
                "assignees": assignees,
                "milestone": milestone,
            }
        )

        try:
            issue = await self.writer.create(self.owner, self.repo, payload)
        except Exception as e:
            logger.error(
                f"Unable to create issue in repository '{self.full_name}'. Error: {e}"
            )
            raise

        logger.debug(f"Created issue #{issue.number}: {issue.html_url}")
        return issue

    async def update_issue(
        self,
        issue_number: int | None,
        title: str | None = None,
        body: str | None = None,
        labels: list[str] | None = None,
        assignees: list[str] | None = None,
        state: str | None = None,
        milestone: int | None = None,
    ) -> GitHubIssue:
        """Update an existing issue in place; unset fields are left untouched.

        Raises:
            ValueError: If issue_number is missing (raised before any request)
        """
        if issue_number is None:
            raise ValueError("Issue number is required in UPDATE operations.")

        logger.info(f"Updating existing issue {issue_number}")
        payload = _drop_unset(
            {
                "title": title,
                "body": body,
                "labels": labels,
                "assignees": assignees,
                "state": state,
                "milestone": milestone,
            }
        )

        try:
            issue = await self.writer.update(
                self.owner, self.repo, issue_number, payload
            )
        except Exception as e:
            logger.error(f"Unable to update issue number '{issue_number}'. Error: {e}")
            raise

        logger.debug(f"Updated issue #{issue.number}: {issue.html_url}")
        return issue
