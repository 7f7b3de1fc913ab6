"""Capability interfaces consumed by the query facade."""

from collections.abc import AsyncGenerator
from typing import Any, Protocol

from .models import GitHubIssue, PageRequest, ResourceKind, SearchResult


class PageSource(Protocol):
    """Yields pages of records for a resource kind.

    Each call to ``pages`` starts a fresh, lazy sequence; the consumer
    decides when to stop.
    """

    def pages(
        self, kind: ResourceKind, request: PageRequest
    ) -> AsyncGenerator[list[Any], None]: ...


class SearchClient(Protocol):
    async def search(self, query: str) -> SearchResult: ...


class IssueWriter(Protocol):
    async def create(
        self, owner: str, repo: str, payload: dict[str, Any]
    ) -> GitHubIssue: ...

    async def update(
        self, owner: str, repo: str, issue_number: int, payload: dict[str, Any]
    ) -> GitHubIssue: ...
