"""
Operator commands

    flask --app app create-admin "Ana" ana@example.com secret123
    flask --app app promote-admin ana@example.com
"""

import click
from werkzeug.exceptions import HTTPException

from storefront.services import accounts


def register_commands(app):

    @app.cli.command('create-admin')
    @click.argument('name')
    @click.argument('email')
    @click.argument('password')
    def create_admin_command(name, email, password):
        """Create an admin account, or promote the user with EMAIL."""
        try:
            user = accounts.create_admin(name, email, password)
        except HTTPException as e:
            raise click.ClickException(e.description)
        click.echo(f'Admin ready: {user.email} (id={user.id})')

    @app.cli.command('promote-admin')
    @click.argument('email')
    def promote_admin_command(email):
        """Give the existing user with EMAIL the admin role."""
        user = accounts.promote_to_admin(email)
        if user is None:
            raise click.ClickException(f'No user registered with {accounts.normalize_email(email)}')
        click.echo(f'Existing user promoted to admin: {user.email}')
