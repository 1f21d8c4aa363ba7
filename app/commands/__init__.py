"""Custom management commands.

Modules in this package register click commands with ``@command``;
``register_commands`` imports them all and attaches them to the CLI's
``cmd`` group.
"""

import importlib
import pkgutil
from collections.abc import Callable

import click

_COMMANDS: list[click.Command] = []


def command(name: str, help: str | None = None) -> Callable[[Callable], click.Command]:
    """Declare a custom command."""

    def decorator(func: Callable) -> click.Command:
        cmd = click.command(name=name, help=help)(func)
        _COMMANDS.append(cmd)
        return cmd

    return decorator


def register_commands(group: click.Group) -> None:
    """Import every command module and add its commands to ``group``."""
    for module in pkgutil.iter_modules(__path__):
        importlib.import_module(f"{__name__}.{module.name}")
    for cmd in _COMMANDS:
        group.add_command(cmd)


def info(message: str) -> None:
    click.echo(message)


def success(message: str) -> None:
    click.secho(message, fg="green")


def warning(message: str) -> None:
    click.secho(message, fg="yellow")


def error(message: str) -> None:
    click.secho(message, fg="red", err=True)
