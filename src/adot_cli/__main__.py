from __future__ import annotations
from typing import Optional

import requests
import typer
from rich import print
from rich.markup import escape

from adot_core.errors import AdotError
from adot_core.logutil import redact, setup_logging
from adot_core.readme import ensure_footer
from adot_core.settings import Settings
from adot_core.workflows import post_microblog, refresh_location

__version__ = "1.0.0"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="CLI tool for microblogging and location tracking",
)


def _fail(err: Exception) -> None:
    print(f"[red]Error:[/red] {escape(redact(str(err)))}")
    raise typer.Exit(code=1)


def _version(value: bool) -> None:
    if value:
        print(f"adot {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version, is_eager=True, help="Show version"
    ),
):
    setup_logging(Settings().log_level)


@app.command()
def microblog(content: str = typer.Argument(..., help="The content of the microblog post")):
    """Create a new microblog post."""
    try:
        post = post_microblog(content, Settings())
    except AdotError as e:
        _fail(e)
    print(f"[green]Inserted:[/green] {post.id} {escape(post.content)}")


@app.command()
def location():
    """Send your current location to the document store."""
    try:
        record = refresh_location(
            Settings(),
            report=lambda msg: print(f"[cyan]{escape(msg)}[/cyan]"),
        )
    except (AdotError, requests.RequestException) as e:
        _fail(e)
    print(
        f"[green]Updated location:[/green] {escape(record.city)}, "
        f"{escape(record.region)}, {escape(record.country)} ({escape(record.timezone)})"
    )


@app.command()
def readme(
    path: Optional[str] = typer.Option(None, help="README file to update"),
):
    """Append the attribution footer to a README if it is missing."""
    target = path or Settings().readme_path
    try:
        changed = ensure_footer(target)
    except (OSError, UnicodeDecodeError) as e:
        _fail(e)
    if changed:
        print(f"[green]Footer added to {escape(target)}[/green]")
    else:
        print(f"[yellow]Footer already present in {escape(target)}[/yellow]")


if __name__ == "__main__":
    app()
