import json
import logging
from functools import wraps

import click
import yaml
from pydantic import BaseModel

from box_client.client import BoxClient
from box_client.config import load_config
from box_client.exceptions import BoxClientError


def echo_json(value) -> None:
    if isinstance(value, BaseModel):
        click.echo(value.model_dump_json(indent=2, exclude_none=True))
    elif isinstance(value, list):
        items = [v.model_dump(mode="json", exclude_none=True) for v in value]
        click.echo(json.dumps(items, indent=2))
    else:
        click.echo(json.dumps(value, indent=2))


def with_client(f):
    """Pass the BoxClient from the context as the first argument and turn client errors into CLI errors."""
    @wraps(f)
    @click.pass_obj
    def wrapped(obj, *args, **kwargs):
        client: BoxClient = obj["CLIENT"]
        try:
            return f(client, *args, **kwargs)
        except BoxClientError as e:
            raise click.ClickException(str(e)) from e
    return wrapped


@click.group()
@click.option(
    '--config',
    'config_path',
    envvar='BOX_CONFIG',
    type=click.Path(exists=True, dir_okay=False),
    help='YAML file with client settings (BOX_* environment variables override it)'
)
@click.option('--verbose', '-v', is_flag=True, help='Log HTTP requests')
@click.pass_context
def cli(ctx, config_path, verbose):
    """Manage Box groups and group memberships."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    try:
        config = load_config(config_path)
    except (ValueError, yaml.YAMLError) as e:
        raise click.ClickException(str(e)) from e

    client = BoxClient.from_config(config)
    ctx.ensure_object(dict)
    ctx.obj['CLIENT'] = client
    ctx.call_on_close(client.close)


@cli.command("list")
@click.option('--filter', 'name_filter', default=None, help='Only groups whose name starts with this value')
@with_client
def list_groups(client, name_filter):
    """List all groups."""
    echo_json(client.groups.list_groups(name_filter))


@cli.command("create")
@click.argument('name')
@with_client
def create_group(client, name):
    """Create a group."""
    _, group = client.groups.create_group(name)
    echo_json(group)


@cli.command("rename")
@click.argument('group_id')
@click.argument('name')
@with_client
def rename_group(client, group_id, name):
    """Rename a group."""
    _, group = client.groups.update_group(group_id, name)
    echo_json(group)


@cli.command("delete")
@click.argument('group_id')
@with_client
def delete_group(client, group_id):
    """Delete a group."""
    response, deleted = client.groups.delete_group(group_id)
    if not deleted:
        raise click.ClickException(f"Group {group_id} not deleted (HTTP {response.status_code})")
    click.echo(f"Deleted group {group_id}")


@cli.command("members")
@click.argument('group_id')
@click.option('--offset', type=int, default=None)
@click.option('--limit', type=int, default=None)
@with_client
def list_members(client, group_id, offset, limit):
    """List one page of a group's memberships."""
    _, memberships = client.groups.list_membership(group_id, offset=offset, limit=limit)
    echo_json(memberships)


@cli.command("membership")
@click.argument('membership_id')
@with_client
def get_membership(client, membership_id):
    """Show a membership."""
    _, membership = client.groups.get_membership(membership_id)
    echo_json(membership)


@cli.command("add-member")
@click.argument('user_id')
@click.argument('group_id')
@click.option('--role', type=click.Choice(['member', 'admin']), default=None)
@with_client
def add_member(client, user_id, group_id, role):
    """Add a user to a group."""
    _, membership = client.groups.add_user_to_group(user_id, group_id, role or "")
    echo_json(membership)


@cli.command("set-role")
@click.argument('membership_id')
@click.argument('role', type=click.Choice(['member', 'admin']))
@with_client
def set_role(client, membership_id, role):
    """Change the role of a membership."""
    _, membership = client.groups.update_membership(membership_id, role)
    echo_json(membership)


@cli.command("remove-member")
@click.argument('membership_id')
@with_client
def remove_member(client, membership_id):
    """Remove a membership."""
    client.groups.delete_membership(membership_id)
    click.echo(f"Removed membership {membership_id}")


@cli.command("collaborations")
@click.argument('group_id')
@click.option('--offset', type=int, default=None)
@click.option('--limit', type=int, default=None)
@with_client
def collaborations(client, group_id, offset, limit):
    """List collaborations granted to a group."""
    _, result = client.groups.group_collaborations(group_id, offset=offset, limit=limit)
    echo_json(result)


if __name__ == '__main__':
    cli()
