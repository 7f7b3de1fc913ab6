"""Configuration for GitHub access and the GitHub Actions run context."""

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field


class GitHubSettings(BaseModel):
    """Repository coordinates and credentials, passed explicitly to clients."""

    token: str = Field(..., description="GitHub token used for API calls")
    owner: str = Field(..., description="Repository owner (user or organization)")
    repo: str = Field(..., description="Repository name")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_env(
        cls,
        token: str | None = None,
        repository: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "GitHubSettings":
        """Build settings from explicit values, falling back to the environment.

        Args:
            token: GitHub token; defaults to GITHUB_TOKEN
            repository: ``owner/repo``; defaults to GITHUB_REPOSITORY
            environ: Environment mapping, defaults to ``os.environ``

        Raises:
            ValueError: If the token is missing or the repository is malformed
        """
        env = os.environ if environ is None else environ
        token = token or env.get("GITHUB_TOKEN")
        repository = repository or env.get("GITHUB_REPOSITORY")

        if not token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )
        owner, repo = parse_repository(repository)
        return cls(token=token, owner=owner, repo=repo)


def parse_repository(repository: str | None) -> tuple[str, str]:
    """Split ``owner/repo`` into its parts.

    Raises:
        ValueError: If the value is empty or not in ``owner/repo`` form
    """
    if not repository:
        raise ValueError(
            "Repository is required. Set GITHUB_REPOSITORY environment variable "
            "or pass --repo owner/name."
        )

    parts = repository.strip().split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValueError(
            f"Invalid repository '{repository}'. Expected format: owner/repo"
        )
    return parts[0], parts[1]


class ActionsContext:
    """GitHub Actions run metadata read from the workflow environment."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        env = os.environ if environ is None else environ
        self.is_github_actions: bool = bool(env.get("GITHUB_ACTIONS"))
        self.server_url: str = env.get("GITHUB_SERVER_URL", "https://github.com")
        self.repository: str = env.get("GITHUB_REPOSITORY", "")
        self.run_id: str = env.get("GITHUB_RUN_ID", "")
        self.event_name: str = env.get("GITHUB_EVENT_NAME", "")
        self.workflow_name: str = env.get("GITHUB_WORKFLOW", "")
        self.job_name: str = env.get("GITHUB_JOB", "")
        self.trigger_commit_sha: str = env.get("GITHUB_SHA", "")
        self.trigger_actor: str = env.get("GITHUB_TRIGGERING_ACTOR", "")
        self.step_summary_path: str | None = env.get("GITHUB_STEP_SUMMARY") or None

    def workflow_run_url(self) -> str:
        """Link to the current workflow run, empty outside GitHub Actions."""
        if not self.is_github_actions:
            return ""
        return f"{self.server_url}/{self.repository}/actions/runs/{self.run_id}"

    def log_context(self) -> dict[str, str]:
        """Run attributes attached to report log records."""
        return {
            "event_name": self.event_name,
            "workflow_name": self.workflow_name,
            "repository": self.repository,
            "trigger_commit": self.trigger_commit_sha,
            "trigger_actor": self.trigger_actor,
            "job_name": self.job_name,
        }
