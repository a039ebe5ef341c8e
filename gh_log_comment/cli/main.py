"""Main CLI entry point."""

import typer
from dotenv import load_dotenv
from rich.console import Console

from .comment import add_or_update, remove

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="gh-log-comment",
    help="Post Jenkins build logs as GitHub pull request comments",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(
    name="add-or-update", context_settings={"help_option_names": ["-h", "--help"]}
)(add_or_update)
app.command(name="remove", context_settings={"help_option_names": ["-h", "--help"]})(
    remove
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from gh_log_comment import __version__

    console.print(f"gh-log-comment v{__version__}")


# Single-command apps behind the gh-add-or-update-comment and gh-remove-comment
# console scripts used by existing pipelines.
add_or_update_app = typer.Typer(add_completion=False)
add_or_update_app.command()(add_or_update)

remove_app = typer.Typer(add_completion=False)
remove_app.command()(remove)


if __name__ == "__main__":
    app()
