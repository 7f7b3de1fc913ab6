"""Composable filters applied to each page of listed resources.

Every criterion reads only the resource, the query options and a fixed
reference time, so criteria can be combined in any order with the same
result.
"""

from collections.abc import Callable, Iterable, Sequence
from datetime import datetime
from typing import Any

from ..utils.date_utils import date_with_days_delta, ensure_utc, utc_now
from .models import GitHubIssue, QueryOptions

Criterion = Callable[[GitHubIssue, QueryOptions, datetime], bool]


def exclude_pull_requests(
    resource: GitHubIssue, options: QueryOptions, now: datetime
) -> bool:
    """Reject pull requests returned by the issues endpoint."""
    return not resource.is_pull_request


def exclude_labels(resource: GitHubIssue, options: QueryOptions, now: datetime) -> bool:
    """Reject resources carrying any of ``options.exclude_labels``.

    An empty exclusion list lets everything through.
    """
    if not options.exclude_labels:
        return True
    return resource.label_names.isdisjoint(options.exclude_labels)


def min_age(resource: GitHubIssue, options: QueryOptions, now: datetime) -> bool:
    """Keep resources created at least ``options.min_age_days`` days ago.

    Example:
        With ``min_age_days=7`` an issue opened today is rejected and one
        opened 10 days ago is kept. None, 0 or negative values disable it.
    """
    if options.min_age_days is None or options.min_age_days <= 0:
        return True
    cutoff = date_with_days_delta(-options.min_age_days, now)
    return ensure_utc(resource.created_at) <= cutoff


def min_staleness(
    resource: GitHubIssue, options: QueryOptions, now: datetime
) -> bool:
    """Keep resources not updated for at least ``options.min_staleness_days``."""
    if options.min_staleness_days is None or options.min_staleness_days <= 0:
        return True
    cutoff = date_with_days_delta(-options.min_staleness_days, now)
    return ensure_utc(resource.updated_at) <= cutoff


ISSUE_CRITERIA: tuple[Criterion, ...] = (
    exclude_pull_requests,
    exclude_labels,
    min_age,
    min_staleness,
)

PULL_REQUEST_CRITERIA: tuple[Criterion, ...] = (
    exclude_labels,
    min_age,
    min_staleness,
)


class FilterPipeline:
    """Logical AND of criteria over a single set of query options."""

    def __init__(
        self,
        options: QueryOptions,
        criteria: Sequence[Criterion] = (),
        now: datetime | None = None,
    ):
        self.options = options
        self.criteria = tuple(criteria)
        self.now = ensure_utc(now) if now is not None else utc_now()

    @classmethod
    def for_issues(
        cls, options: QueryOptions, now: datetime | None = None
    ) -> "FilterPipeline":
        return cls(options, ISSUE_CRITERIA, now)

    @classmethod
    def for_pull_requests(
        cls, options: QueryOptions, now: datetime | None = None
    ) -> "FilterPipeline":
        return cls(options, PULL_REQUEST_CRITERIA, now)

    def passes(self, resource: Any) -> bool:
        return all(
            criterion(resource, self.options, self.now) for criterion in self.criteria
        )

    def apply(self, page: Iterable[Any]) -> list[Any]:
        return [resource for resource in page if self.passes(resource)]
