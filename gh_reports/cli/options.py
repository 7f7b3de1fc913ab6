"""Shared CLI option definitions so every report command uses the same flags."""

import typer

REPO_OPTION = typer.Option(
    None,
    "--repo",
    "-r",
    help="Repository as owner/name (defaults to GITHUB_REPOSITORY env var)",
)

TOKEN_OPTION = typer.Option(
    None, "--token", "-t", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
)

DRY_RUN_OPTION = typer.Option(
    False, "--dry-run", "-d", help="Render the report without publishing it"
)

DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
