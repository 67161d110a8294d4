"""Flask CLI commands: ``flask users list`` and ``flask sessions prune``."""
import click
from flask import current_app
from flask.cli import AppGroup

users_cli = AppGroup("users", help="Inspect the user directory.")
sessions_cli = AppGroup("sessions", help="Maintain the session store.")


@users_cli.command("list")
def list_users():
    """Print every user in the directory."""
    users = current_app.extensions["user_repository"].all()
    click.echo("=== Users ===")
    for user in users:
        click.echo(f"ID: {user.id}, Name: {user.name}, Email: {user.email}")
    click.echo(f"Total: {len(users)}")


@sessions_cli.command("prune")
def prune_sessions():
    """Remove expired sessions from the store."""
    removed = current_app.session_interface.store.prune()
    click.echo(f"Pruned {removed} expired session(s)")


def register_commands(app):
    app.cli.add_command(users_cli)
    app.cli.add_command(sessions_cli)
