import shlex

import click

from ums.infrastructure.cli.user_commands import (
    user_create,
    user_delete,
    user_list,
    user_show,
)
from ums.infrastructure.logging import configure_logging


@click.group()
@click.option("--verbose", "-v", is_flag=True, envvar="UMS_VERBOSE", help="Enable debug logging.")
@click.option("--log-json", is_flag=True, envvar="UMS_LOG_JSON", help="Log as JSON lines.")
def cli(verbose: bool, log_json: bool) -> None:
    """UMS: User Management Service"""
    configure_logging(verbose=verbose, log_json=log_json)


@cli.group()
def users() -> None:
    """Manage users."""


@cli.command("batch")
@click.argument("script", type=click.File("r"), default="-")
@click.pass_context
def batch(ctx: click.Context, script) -> None:
    """Run 'users' subcommands, one per line, against the same store.

    Blank lines and lines starting with '#' are skipped. A failing line
    reports its error and the batch goes on; the exit code is 1 if any
    line failed.
    """
    failed = 0
    for raw in script:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        click.echo(f"> {line}")
        try:
            args = shlex.split(line)
        except ValueError as exc:
            click.echo(f"Error: cannot parse line: {exc}", err=True)
            failed += 1
            continue

        try:
            users.main(args=args, prog_name="users", standalone_mode=False)
        except click.ClickException as exc:
            exc.show()
            failed += 1

    if failed:
        ctx.exit(1)


# Register subcommands
users.add_command(user_create)
users.add_command(user_delete)
users.add_command(user_list)
users.add_command(user_show)
