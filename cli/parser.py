"""CLI application and command routing."""

import logging

import typer
from typing_extensions import Annotated

from cli import setup_logging
from cli.commands import add, delete, export, move, serve, show
from cli.context import CLIContext, set_context

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="planisphere",
    help="Personal calendar: view, add, move and export events.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show info messages"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only show errors"),
    ] = False,
    user: Annotated[
        str | None,
        typer.Option("--user", "-u", help="User id for writes (default: PLANISPHERE_USER)"),
    ] = None,
) -> None:
    """Set up logging and the shared command context."""
    ctx = CLIContext(verbose=verbose, quiet=quiet, user_id=user)
    setup_logging(verbose=verbose, quiet=quiet, config=ctx.config)
    set_context(ctx)


app.command("show")(show)
app.command("add")(add)
app.command("delete")(delete)
app.command("move")(move)
app.command("export")(export)
app.command("serve")(serve)
