# cli.py
import functools
import json
import logging
from typing import Any, Dict

import click

from files_client import file_requests
from files_client.api_versions import get_base_path
from files_client.config.settings import get_settings
from files_client.errors import FileRequestError
from files_client.schemas import RenditionType, RestRequest, ShareType

# Configure logging
logger = logging.getLogger(__name__)


def describe_request(request: RestRequest) -> Dict[str, Any]:
    """Render a descriptor as a JSON-friendly dict."""
    described: Dict[str, Any] = {
        "method": request.method.value,
        "path": request.path,
        "query_params": dict(request.query_params),
        "url": request.url,
        "headers": dict(request.headers),
        "body": None,
    }
    if request.body is not None:
        body: Dict[str, Any] = {"content_type": request.body.content_type}
        json_body = request.json_body()
        if json_body is not None:
            body["json"] = json_body
        if request.body.parts is not None:
            body["parts"] = [part.model_dump(exclude_none=True) for part in request.body.parts]
        body["size_bytes"] = len(request.body.content)
        described["body"] = body
    return described


def emits_request(func):
    """Print the returned descriptor; report builder errors as usage errors."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            request = func(*args, **kwargs)
        except FileRequestError as e:
            raise click.UsageError(str(e))
        click.echo(json.dumps(describe_request(request), indent=2))
    return wrapper


@click.group()
@click.option("--log-level", default=None, help="Override the configured logging level")
def cli(log_level):
    """Build Files API request descriptors and print them as JSON"""
    settings = get_settings()
    logging.basicConfig(
        level=(log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    click.echo("Current Configuration:")
    click.echo(f"  API Version: {settings.api_version}")
    click.echo(f"  Services Path: {settings.services_path}")
    click.echo(f"  Base Path: {get_base_path()}")
    click.echo(f"  Chatter Entity Encoding: {settings.chatter_entity_encoding}")
    click.echo(f"  Log Level: {settings.log_level}")


@cli.command()
@click.option("--user-id", default=None, help="User Id, defaults to the context user")
@click.option("--page", "page_num", type=int, default=None, help="Page number")
@emits_request
def owned_files(user_id, page_num):
    """Files owned by a user"""
    return file_requests.owned_files_list(user_id, page_num)


@cli.command()
@click.option("--user-id", default=None, help="User Id, defaults to the context user")
@click.option("--page", "page_num", type=int, default=None, help="Page number")
@emits_request
def group_files(user_id, page_num):
    """Files in the groups a user belongs to"""
    return file_requests.files_in_users_groups(user_id, page_num)


@cli.command()
@click.option("--user-id", default=None, help="User Id, defaults to the context user")
@click.option("--page", "page_num", type=int, default=None, help="Page number")
@emits_request
def shared_files(user_id, page_num):
    """Files shared with a user"""
    return file_requests.files_shared_with_user(user_id, page_num)


@cli.command()
@click.argument("sfdc_id")
@click.option("--version", default=None, help="File version, defaults to the latest")
@emits_request
def details(sfdc_id, version):
    """Details of one file"""
    return file_requests.file_details(sfdc_id, version)


@cli.command()
@click.argument("sfdc_ids", nargs=-1)
@emits_request
def batch_details(sfdc_ids):
    """Details of several files in one request"""
    return file_requests.batch_file_details(list(sfdc_ids))


@cli.command()
@click.argument("sfdc_id")
@click.option("--type", "rendition_type",
              type=click.Choice([r.value for r in RenditionType], case_sensitive=False),
              required=True,
              help="Rendition format")
@click.option("--version", default=None, help="File version, defaults to the latest")
@click.option("--page", "page_num", type=int, default=None, help="Page number, starting at 0")
@emits_request
def rendition(sfdc_id, rendition_type, version, page_num):
    """Preview rendition of a file page"""
    return file_requests.file_rendition(sfdc_id, version, rendition_type, page_num)


@cli.command()
@click.argument("sfdc_id")
@click.option("--version", default=None, help="File version, defaults to the latest")
@emits_request
def contents(sfdc_id, version):
    """Binary contents of a file"""
    return file_requests.file_contents(sfdc_id, version)


@cli.command()
@click.argument("sfdc_id")
@click.option("--page", "page_num", type=int, default=None, help="Page number")
@emits_request
def shares(sfdc_id, page_num):
    """Entities a file is shared with"""
    return file_requests.file_shares(sfdc_id, page_num)


@cli.command()
@click.argument("file_id")
@click.argument("entity_id")
@click.option("--share-type",
              type=click.Choice([s.value for s in ShareType]),
              default=ShareType.VIEWER.value,
              help="V - View, C - Collaboration, I - Inferred")
@emits_request
def add_share(file_id, entity_id, share_type):
    """Share a file with a user or group"""
    return file_requests.add_file_share(file_id, entity_id, share_type)


@cli.command()
@click.argument("share_id")
@emits_request
def delete_share(share_id):
    """Delete a file share"""
    return file_requests.delete_file_share(share_id)


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--name", default=None, help="File name, defaults to the base name of PATH")
@click.option("--title", default=None, help="File title")
@click.option("--description", default=None, help="File description")
@click.option("--mime-type", default=None, help="Mime type of the file")
@emits_request
def upload(path, name, title, description, mime_type):
    """Upload a new file"""
    name = name or click.format_filename(path, shorten=True)
    return file_requests.upload_file(path, name, title, description, mime_type)


if __name__ == "__main__":
    cli()
