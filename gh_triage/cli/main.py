"""Main CLI entry point."""

import typer
from rich.console import Console

from .events import handle_comment
from .triage import issues, prs, regressions

app = typer.Typer(
    name="gh-triage",
    help="Lifecycle triage for GitHub issues and pull requests",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


# All commands including main command support -h shorthand via context_settings


app.command(name="issues", context_settings={"help_option_names": ["-h", "--help"]})(
    issues
)
app.command(name="prs", context_settings={"help_option_names": ["-h", "--help"]})(
    prs
)
app.command(
    name="regressions", context_settings={"help_option_names": ["-h", "--help"]}
)(regressions)
app.command(
    name="handle-comment", context_settings={"help_option_names": ["-h", "--help"]}
)(handle_comment)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from gh_triage import __version__

    console.print(f"gh-triage v{__version__}")


if __name__ == "__main__":
    app()
