"""CLI commands for access token management."""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from rich.console import Console

from wechat_media.auth import TokenService
from wechat_media.config import get_config
from wechat_media.store import FileCredentialStore
from wechat_media.utils.errors import WeChatMediaError, handle_error
from wechat_media.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="auth", help="Manage the cached access token.")

ConfigOption = Annotated[Optional[str], typer.Option("--config", "-c", help="Path to config.yaml")]
OutputOption = Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")]


def _status_row(auth: TokenService, state: str) -> dict[str, object]:
    status = auth.get_status()
    return {
        "status": state,
        "expires_at": str(status.expires_at) if status.expires_at else "N/A",
        "seconds_remaining": status.seconds_remaining or 0,
    }


@app.command()
def login(
    config_path: ConfigOption = None,
    output: OutputOption = OutputFormat.TABLE,
) -> None:
    """Obtain a valid access token (cached or fresh) and show its status."""
    auth = None
    try:
        config = get_config(config_path)
        auth = TokenService(config, FileCredentialStore(config.token_file))
        console.print("Authenticating...", style="yellow")
        auth.get_access_token()
        print_output(_status_row(auth, "authenticated"), output, title="Authentication")
    except WeChatMediaError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        if auth is not None:
            auth.close()


@app.command()
def refresh(
    config_path: ConfigOption = None,
    output: OutputOption = OutputFormat.TABLE,
) -> None:
    """Force a token refresh and persist the result."""
    auth = None
    try:
        config = get_config(config_path)
        auth = TokenService(config, FileCredentialStore(config.token_file))
        console.print("Force refreshing access token...", style="yellow")
        auth.get_access_token(force_refresh=True)
        print_output(_status_row(auth, "refreshed"), output, title="Token Refreshed")
    except WeChatMediaError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        if auth is not None:
            auth.close()


@app.command()
def status(
    config_path: ConfigOption = None,
    output: OutputOption = OutputFormat.TABLE,
) -> None:
    """Show the cached token's state. Makes no network call."""
    try:
        config = get_config(config_path)
    except WeChatMediaError as e:
        handle_error(e)
        raise typer.Exit(1)

    auth = TokenService(config, FileCredentialStore(config.token_file))
    token_status = auth.get_status()
    result = {
        "has_token": token_status.has_token,
        "is_expired": token_status.is_expired,
        "expires_at": str(token_status.expires_at) if token_status.expires_at else "N/A",
        "seconds_remaining": token_status.seconds_remaining or 0,
    }
    print_output(result, output, title="Token Status")
    auth.close()


@app.command()
def clear(config_path: ConfigOption = None) -> None:
    """Delete the cached access token file."""
    try:
        config = get_config(config_path)
        removed = FileCredentialStore(config.token_file).clear()
    except WeChatMediaError as e:
        handle_error(e)
        raise typer.Exit(1)

    if removed:
        console.print(f"Removed {config.token_file}", style="green")
    else:
        console.print("[dim]No cached token to remove.[/dim]")
