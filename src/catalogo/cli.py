"""Command-line utilities for local development.

Creates and seeds the database, mints bearer tokens accepted by the API and
starts a development server.
"""

import subprocess
import sys

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.catalogo.runtime.context import get_config

console = Console()

app = typer.Typer(
    name="catalogo-dev",
    help="Catalogo development CLI - database, tokens and local server",
    rich_markup_mode="rich",
)

db_app = typer.Typer(help="🗄️ Database commands")
token_app = typer.Typer(help="🔑 Bearer token commands")

app.add_typer(db_app, name="db")
app.add_typer(token_app, name="token")


@db_app.command(name="init")
def db_init(
    seed: bool = typer.Option(False, help="Insert reference brands and categories"),
) -> None:
    """Create every table in the configured database."""
    from src.catalogo.runtime.init_db import init_db

    inserted = init_db(seed=seed)
    console.print(
        f"[green]✅ Tables created in[/green] {get_config().database.url}"
    )
    if seed:
        _print_seed_summary(inserted)


@db_app.command(name="seed")
def db_seed() -> None:
    """Insert reference brands and categories into empty tables."""
    from src.catalogo.core.services import DbManageService, DbSessionService

    database_service = DbSessionService()
    try:
        inserted = DbManageService(database_service.engine).seed()
    finally:
        database_service.dispose()
    _print_seed_summary(inserted)


def _print_seed_summary(inserted: dict[str, int]) -> None:
    table = Table(title="Reference data")
    table.add_column("Table", style="cyan")
    table.add_column("Rows inserted", justify="right")
    for name, count in inserted.items():
        table.add_row(name, str(count))
    console.print(table)


@token_app.command(name="issue")
def token_issue(
    subject: str = typer.Option("dev-user", help="Subject (sub) claim"),
    role: list[str] | None = typer.Option(
        None, "--role", help="Role to grant; repeat for several (default: admin role)"
    ),
    expires_in: int | None = typer.Option(
        None, help="Lifetime in seconds (default: jwt.expires_in_seconds)"
    ),
) -> None:
    """Mint a signed bearer token for calling the API locally."""
    from fastapi import HTTPException

    from src.catalogo.core.services import JwtGeneratorService

    roles = role or [get_config().authorization.admin_role]
    try:
        token = JwtGeneratorService().generate_jwt(
            subject=subject, roles=roles, expires_in_seconds=expires_in
        )
    except HTTPException as e:
        console.print(f"[red]Could not issue token: {e.detail}[/red]")
        raise typer.Exit(1) from e

    console.print(
        Panel.fit(
            f"[bold]sub[/bold]: {subject}\n[bold]roles[/bold]: {', '.join(roles)}",
            title="Bearer token",
        )
    )
    # Plain print so the token can be piped
    print(token)


@app.command(name="serve")
def serve(
    host: str | None = typer.Option(None, help="Host to bind (default: app.host)"),
    port: int | None = typer.Option(None, help="Port to bind (default: app.port)"),
    reload: bool = typer.Option(True, help="Enable auto-reload on code changes"),
) -> None:
    """Start the API with uvicorn."""
    cfg = get_config().app
    cmd = [
        sys.executable,
        "-m",
        "uvicorn",
        "src.catalogo.api.http.app:app",
        "--host",
        host or cfg.host,
        "--port",
        str(port or cfg.port),
        "--no-access-log",
    ]
    if reload:
        cmd.append("--reload")

    console.print(f"[blue]Running:[/blue] {' '.join(cmd)}")
    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        console.print("\n[yellow]Server stopped by user[/yellow]")
    except subprocess.CalledProcessError as e:
        console.print(f"[red]Server exited with code {e.returncode}[/red]")
        raise typer.Exit(e.returncode) from e


if __name__ == "__main__":
    app()
