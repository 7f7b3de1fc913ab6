"""Main CLI entry point."""

import typer
from dotenv import load_dotenv
from rich.console import Console

from .report import monthly, weekly

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="github-reports",
    help="Repository hygiene reports published as GitHub issues",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="monthly", context_settings={"help_option_names": ["-h", "--help"]})(
    monthly
)
app.command(name="weekly", context_settings={"help_option_names": ["-h", "--help"]})(
    weekly
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from gh_reports import __version__

    console.print(f"GitHub Reports v{__version__}")


if __name__ == "__main__":
    app()
