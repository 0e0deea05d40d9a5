"""WeChat media CLI — entry point.

Lists image materials of a WeChat Official Account, keeping the
access token cached on disk between runs.
"""

from __future__ import annotations

import logging

import typer

from wechat_media.commands.auth_cmd import app as auth_app
from wechat_media.commands.materials_cmd import app as materials_app

app = typer.Typer(
    name="wechat-media",
    help="CLI tool for browsing a WeChat Official Account's material library.",
    no_args_is_help=True,
)

# Register command groups
app.add_typer(auth_app, name="auth")
app.add_typer(materials_app, name="materials")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """WeChat media CLI — manage the access token and list materials."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


if __name__ == "__main__":
    app()
