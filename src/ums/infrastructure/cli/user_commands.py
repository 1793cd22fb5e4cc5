"""CLI commands for the User entity."""

from __future__ import annotations

import json
from typing import IO, Any

import click

from ums.application.create_user import CreateUserCommand
from ums.application.delete_user import DeleteUserCommand
from ums.application.get_user import GetUserQuery
from ums.application.get_users import GetUsersQuery
from ums.infrastructure.bootstrap import build_mediator
from ums.mediation.exceptions import ValidationError
from ums.mediation.request import Request
from ums.mediation.result import Ok


class ValidationFailed(click.ClickException):
    """Prints the failures as a JSON array of {field, rule, message}."""

    exit_code = 2

    def __init__(self, error: ValidationError) -> None:
        super().__init__(
            json.dumps([failure.as_dict() for failure in error.failures], indent=2)
        )

    def show(self, file: IO[Any] | None = None) -> None:
        click.echo(self.format_message(), file=file, err=file is None)


def _dispatch(request: Request) -> Any:
    """Send a request and translate expected failures into click errors."""
    outcome = build_mediator().try_send(request)
    if isinstance(outcome, Ok):
        return outcome.value
    if isinstance(outcome.error, ValidationError):
        raise ValidationFailed(outcome.error)
    raise click.ClickException(str(outcome.error))


@click.command("show")
@click.option("--id", "user_id", required=True, type=int, help="User ID to display.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print as JSON.")
def user_show(user_id: int, as_json: bool) -> None:
    """Show a single user."""
    dto = _dispatch(GetUserQuery(user_id))

    if as_json:
        click.echo(json.dumps(dto.as_dict()))
        return
    click.echo(f"User #{dto.id}")
    click.echo(f"Name:  {dto.name}")
    click.echo(f"Email: {dto.email_address}")


@click.command("list")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print as JSON.")
def user_list(as_json: bool) -> None:
    """List all users."""
    users = _dispatch(GetUsersQuery())

    if as_json:
        click.echo(json.dumps([dto.as_dict() for dto in users]))
        return
    if not users:
        click.echo("No users found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Email':<32}")
    click.echo("-" * 64)
    for dto in users:
        click.echo(f"{dto.id:<6} {dto.name:<24} {dto.email_address:<32}")


@click.command("create")
@click.option("--name", default="", help="Full name.")
@click.option("--email", default="", help="Email address.")
def user_create(name: str, email: str) -> None:
    """Create a new user."""
    _dispatch(CreateUserCommand(name=name, email_address=email))
    click.echo(f"User '{name.strip()}' created.")


@click.command("delete")
@click.option("--id", "user_id", required=True, type=int, help="User ID to delete.")
def user_delete(user_id: int) -> None:
    """Delete a user (no-op if it does not exist)."""
    _dispatch(DeleteUserCommand(user_id))
    click.echo(f"User #{user_id} deleted.")
