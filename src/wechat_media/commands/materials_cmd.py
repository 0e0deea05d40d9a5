"""CLI commands for the material library."""

from __future__ import annotations

import logging
from typing import Annotated, Optional

import typer
from rich.console import Console

from wechat_media.auth import TokenService
from wechat_media.client import WeChatClient
from wechat_media.config import get_config
from wechat_media.services.materials import MaterialService
from wechat_media.store import FileCredentialStore
from wechat_media.utils.errors import WeChatMediaError, handle_error
from wechat_media.utils.output import OutputFormat, print_output

logger = logging.getLogger(__name__)

console = Console(stderr=True)
app = typer.Typer(name="materials", help="Browse permanent materials.")

COLUMNS = ["media_id", "name", "url"]


@app.command("list")
def list_materials(
    config_path: Annotated[Optional[str], typer.Option("--config", "-c", help="Path to config.yaml")] = None,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """List the first page of image materials."""
    try:
        logger.info("Loading configuration")
        config = get_config(config_path)
    except WeChatMediaError as e:
        handle_error(e)
        raise typer.Exit(1)

    auth = TokenService(config, FileCredentialStore(config.token_file))
    client = WeChatClient(config, auth, verbose=verbose)
    service = MaterialService(client)

    try:
        logger.info("Fetching image materials")
        items = service.list_image_assets()
        if not items:
            console.print("[dim]No image materials found.[/dim]")
            raise typer.Exit(0)

        rows = [item.model_dump() for item in items]
        print_output(rows, output, columns=COLUMNS, title="Image Materials")
    except WeChatMediaError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()
