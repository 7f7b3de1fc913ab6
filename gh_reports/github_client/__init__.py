"""GitHub client package for API interaction."""

from .client import GitHubClient
from .gateway import GitHubGateway
from .models import (
    GitHubIssue,
    GitHubLabel,
    GitHubMilestone,
    GitHubUser,
    QueryOptions,
    ResourceKind,
    SearchResult,
)
from .queries import GitHubQueries
from .search import build_tracking_query

__all__ = [
    "GitHubClient",
    "GitHubGateway",
    "GitHubQueries",
    "GitHubIssue",
    "GitHubLabel",
    "GitHubMilestone",
    "GitHubUser",
    "QueryOptions",
    "ResourceKind",
    "SearchResult",
    "build_tracking_query",
]
