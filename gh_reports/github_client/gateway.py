"""Async adapter over the blocking PyGitHub transport."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from typing import Any

from .client import GitHubClient
from .models import GitHubIssue, PageRequest, ResourceKind, SearchResult

logger = logging.getLogger(__name__)


class GitHubGateway:
    """Exposes ``GitHubClient`` as PageSource, SearchClient and IssueWriter.

    Each blocking request runs in a worker thread so independent report
    facets can wait on the network concurrently.
    """

    def __init__(self, client: GitHubClient):
        self.client = client

    async def pages(
        self, kind: ResourceKind, request: PageRequest
    ) -> AsyncGenerator[list[Any], None]:
        """Yield pages in API order until a page is empty or none is left."""
        page = 1
        while True:
            records, has_next = await asyncio.to_thread(
                self.client.list_page, kind, request, page
            )
            logger.debug(
                f"Fetched {kind.value} page {page} with {len(records)} record(s)"
            )
            if not records:
                return

            yield records

            if not has_next:
                return
            page += 1

    async def search(self, query: str) -> SearchResult:
        return await asyncio.to_thread(self.client.search_issues, query)

    async def create(
        self, owner: str, repo: str, payload: dict[str, Any]
    ) -> GitHubIssue:
        return await asyncio.to_thread(self.client.create_issue, owner, repo, payload)

    async def update(
        self, owner: str, repo: str, issue_number: int, payload: dict[str, Any]
    ) -> GitHubIssue:
        return await asyncio.to_thread(
            self.client.update_issue, owner, repo, issue_number, payload
        )
