"""CLI commands package."""

from cli.commands.add import add
from cli.commands.delete import delete
from cli.commands.export import export
from cli.commands.move import move
from cli.commands.serve import serve
from cli.commands.show import show

__all__ = [
    "add",
    "delete",
    "export",
    "move",
    "serve",
    "show",
]
