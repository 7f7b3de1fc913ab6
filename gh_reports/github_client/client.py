"""GitHub API client using PyGitHub."""

import logging
import re
from typing import Any

from github import Auth, Github

from .models import (
    GitHubIssue,
    GitHubMilestone,
    PageRequest,
    ResourceKind,
    SearchResult,
)

logger = logging.getLogger(__name__)

NEXT_LINK_PATTERN = re.compile(r'<[^>]+>;\s*rel="next"')

ENDPOINTS = {
    ResourceKind.ISSUE: "issues",
    ResourceKind.PULL_REQUEST: "pulls",
    ResourceKind.MILESTONE: "milestones",
}


class GitHubClient:
    """Thin REST transport for a single repository.

    Requests go through PyGitHub's ``Requester`` so authentication, retries
    and error mapping (``GithubException`` and subclasses) stay with
    PyGitHub. Raw payloads are decoded into our models without the lazy
    attribute completion of PyGitHub objects, which would cost one extra
    request per listed item.
    """

    def __init__(self, token: str, github: Github | None = None):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub personal access token
            github: Pre-built PyGitHub instance (mainly for tests)
        """
        if not token and github is None:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )

        self.token = token
        self.github = github or Github(auth=Auth.Token(token))

    def _request(
        self,
        verb: str,
        url: str,
        parameters: dict[str, Any] | None = None,
        payload: dict[str, Any] | None = None,
    ) -> tuple[dict[str, Any], Any]:
        return self.github.requester.requestJsonAndCheck(
            verb, url, parameters=parameters, input=payload
        )

    @staticmethod
    def _has_next_page(headers: dict[str, Any]) -> bool:
        link = headers.get("link") or ""
        return bool(NEXT_LINK_PATTERN.search(str(link)))

    @staticmethod
    def _decode(kind: ResourceKind, item: dict[str, Any]) -> Any:
        if kind == ResourceKind.MILESTONE:
            return GitHubMilestone.from_api(item)
        if kind == ResourceKind.PULL_REQUEST:
            return GitHubIssue.from_api(item, kind=ResourceKind.PULL_REQUEST)
        return GitHubIssue.from_api(item)

    def list_page(
        self, kind: ResourceKind, request: PageRequest, page: int
    ) -> tuple[list[Any], bool]:
        """Fetch one page of a repository listing.

        Args:
            kind: Resource kind to list
            request: Listing parameters
            page: 1-based page number

        Returns:
            Tuple of (decoded records, whether the API advertises a next page)
        """
        url = f"/repos/{request.owner}/{request.repo}/{ENDPOINTS[kind]}"
        parameters = request.to_params()
        parameters["page"] = page

        headers, data = self._request("GET", url, parameters=parameters)
        records = [self._decode(kind, item) for item in data or []]

        return records, self._has_next_page(headers)

    def search_issues(self, query: str) -> SearchResult:
        """Run one issues-and-pull-requests search call.

        Args:
            query: GitHub search query with qualifiers

        Returns:
            SearchResult with ranked items
        """
        _, data = self._request("GET", "/search/issues", parameters={"q": query})
        return SearchResult(
            items=[GitHubIssue.from_api(item) for item in data.get("items", [])],
            total_count=data.get("total_count", 0),
            incomplete_results=data.get("incomplete_results", False),
        )

    def create_issue(
        self, owner: str, repo: str, payload: dict[str, Any]
    ) -> GitHubIssue:
        """Create an issue from a REST payload (title, body, labels, ...)."""
        _, data = self._request(
            "POST", f"/repos/{owner}/{repo}/issues", payload=payload
        )
        return GitHubIssue.from_api(data)

    def update_issue(
        self, owner: str, repo: str, issue_number: int, payload: dict[str, Any]
    ) -> GitHubIssue:
        """Patch an existing issue with the given fields."""
        _, data = self._request(
            "PATCH", f"/repos/{owner}/{repo}/issues/{issue_number}", payload=payload
        )
        return GitHubIssue.from_api(data)
