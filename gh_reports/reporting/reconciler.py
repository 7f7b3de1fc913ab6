"""Search-then-create-or-update publishing of tracking issues."""

import logging
from enum import Enum

from pydantic import BaseModel, Field

from ..github_client.models import GitHubIssue
from ..github_client.queries import GitHubQueries

logger = logging.getLogger(__name__)


class ReconcileState(str, Enum):
    SEARCHING = "searching"
    FOUND = "found"
    NOT_FOUND = "not_found"
    UPDATING = "updating"
    CREATING = "creating"
    DONE = "done"


class ReconcileAction(str, Enum):
    CREATED = "created"
    UPDATED = "updated"


class ReconcileResult(BaseModel):
    """Outcome of one reconciliation run."""

    issue: GitHubIssue = Field(..., description="The created or updated issue")
    action: ReconcileAction = Field(..., description="Whether the issue was new")
    transitions: list[ReconcileState] = Field(
        default_factory=list, description="States visited, in order"
    )

    @property
    def created(self) -> bool:
        return self.action == ReconcileAction.CREATED


class IssueReconciler:
    """Keep exactly one open tracking issue per search query up to date.

    The tracking issue has no stored identifier; it is re-found every run
    with the search query and the first ranked match wins. Concurrent runs
    against the same repository may both miss and both create.
    """

    def __init__(self, queries: GitHubQueries):
        self.queries = queries
        self.state = ReconcileState.SEARCHING
        self._transitions: list[ReconcileState] = []

    def _enter(self, state: ReconcileState) -> None:
        logger.debug(f"Reconciler: {self.state.value} -> {state.value}")
        self.state = state
        self._transitions.append(state)

    async def reconcile(
        self,
        search_query: str,
        title: str,
        body: str,
        labels: list[str] | None = None,
        assignees: list[str] | None = None,
        state: str | None = None,
        milestone: int | None = None,
    ) -> ReconcileResult:
        """Update the issue matching ``search_query`` or create a new one.

        Search, create and update failures propagate; nothing is retried.

        Args:
            search_query: GitHub search query that re-finds the tracking issue
            title: Issue title
            body: Markdown issue body
            labels: Labels to set on the issue
            assignees: Logins to assign
            state: New state, only applied when updating
            milestone: Milestone number

        Returns:
            ReconcileResult with the resulting issue and the action taken
        """
        self.state = ReconcileState.SEARCHING
        self._transitions = [ReconcileState.SEARCHING]

        result = await self.queries.find_by_search(search_query)

        if result.items:
            reporting_issue = result.items[0]
            self._enter(ReconcileState.FOUND)
            if len(result.items) > 1:
                logger.debug(
                    f"Search matched {len(result.items)} issues, "
                    f"using #{reporting_issue.number}"
                )

            self._enter(ReconcileState.UPDATING)
            issue = await self.queries.update_issue(
                reporting_issue.number,
                title=title,
                body=body,
                labels=labels,
                assignees=assignees,
                state=state,
                milestone=milestone,
            )
            action = ReconcileAction.UPDATED
        else:
            self._enter(ReconcileState.NOT_FOUND)
            self._enter(ReconcileState.CREATING)
            issue = await self.queries.create_issue(
                title,
                body=body,
                labels=labels,
                assignees=assignees,
                milestone=milestone,
            )
            action = ReconcileAction.CREATED

        self._enter(ReconcileState.DONE)
        logger.info(f"Tracking issue {action.value}: #{issue.number} {issue.html_url}")
        return ReconcileResult(
            issue=issue, action=action, transitions=list(self._transitions)
        )
