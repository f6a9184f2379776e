"""Avatar API CLI.

Commands:
- serve: Run the HTTP API with uvicorn
- teacher-id: Print the store key derived from an API key
- stats: Show stored teacher configurations
- rules: Show the default badge -> slot table
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from avatarapi.canonical.teacher_key import KeyStrategy, log_ref, normalize_secret
from avatarapi.config import get_config
from avatarapi.errors import AvatarAPIError
from avatarapi.slots.resolver import DEFAULT_SLOT_RULES
from avatarapi.store.repository import ConfigStore

app = typer.Typer(
    name="avatarapi",
    help="Avatar reward API - teacher catalogs and badge-unlocked slots",
    no_args_is_help=True,
)

console = Console()


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Host to bind (default: HOST or 0.0.0.0)"),
    port: int | None = typer.Option(None, help="Port to bind (default: PORT or 3000)"),
    reload: bool = typer.Option(False, help="Enable autoreload (dev only)"),
):
    """Run the avatar API server."""
    import uvicorn

    config = get_config()
    host = host or config.server.host
    port = port or config.server.port

    typer.echo(f"Starting avatar API on http://{host}:{port}")
    uvicorn.run(
        "avatarapi.web.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        workers=1,
    )


@app.command(name="teacher-id")
def teacher_id(
    api_key: str = typer.Argument(..., help="Teacher API key"),
    strategy: KeyStrategy | None = typer.Option(
        None, "--strategy", help="Override TEACHER_KEY_STRATEGY"
    ),
):
    """Print the store key an API key maps to."""
    strategy = strategy or get_config().store.key_strategy
    try:
        identifier = normalize_secret(api_key, strategy)
    except AvatarAPIError as e:
        console.print(f"[bold red]✗[/bold red] {e}")
        raise typer.Exit(code=1)
    typer.echo(identifier)


@app.command()
def stats():
    """Show stored teacher configurations."""
    config = get_config()
    store = ConfigStore(config.store.path)
    try:
        store.load()
    except (AvatarAPIError, OSError) as e:
        console.print(f"[bold red]✗[/bold red] Cannot load {config.store.path}: {e}")
        raise typer.Exit(code=1)

    console.print(f"[bold]Configuration store:[/bold] {config.store.path}")

    if len(store) == 0:
        console.print("[yellow]No teacher configurations saved yet[/yellow]")
        return

    table = Table(title="Teachers")
    table.add_column("Ref", style="cyan")
    table.add_column("Items", justify="right", style="green")
    table.add_column("Custom Rules")
    table.add_column("Updated At", style="dim")

    for identifier in store.identifiers():
        record = store.get(identifier)
        table.add_row(
            log_ref(identifier),
            str(len(record.items)) if record.items is not None else "default",
            "yes" if record.slot_rules is not None else "no",
            record.updated_at.isoformat() if record.updated_at else "-",
        )

    console.print(table)


@app.command()
def rules():
    """Show the default badge -> slot table."""
    table = Table(title="Default Slot Rules")
    table.add_column("Badge", style="cyan")
    table.add_column("Slots", style="green")

    for badge_id, slots in DEFAULT_SLOT_RULES.items():
        table.add_row(badge_id, ", ".join(slots))

    console.print(table)


if __name__ == "__main__":
    app()
