"""Starter kit CLI — entry-point for all backend operations.

Usage:
    python cli/main.py --help

Sub-commands:
    serve     → run the FastAPI app under uvicorn
    posts     → query WordPress posts through the GraphQL gateway
    deploy    → git branch / tag deploys
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from starterkit.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any working
# directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from cli.commands.deploy import deploy_app
from cli.commands.posts import posts_app
from starterkit.config import settings

app = typer.Typer(
    name="starterkit",
    help="Starter kit backend CLI.",
    no_args_is_help=True,
)

app.add_typer(posts_app, name="posts")
app.add_typer(deploy_app, name="deploy")


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: HOST or 127.0.0.1)."),
    port: Optional[int] = typer.Option(None, help="Port (default: PORT or 8000)."),
    reload: bool = typer.Option(False, help="Reload on code changes."),
) -> None:
    """Run the HTTP server."""
    import uvicorn

    host = host or settings.host
    port = port or settings.port
    typer.echo(f"[serve] Listening on http://{host}:{port}")
    uvicorn.run("starterkit.api.app:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
