"""CLI commands for the nihongo backend.

Commands:
- init-db: Create tables and apply column patches
- serve: Run the Web API with uvicorn
- chapters: List chapters
"""

from pathlib import Path

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from nihongo.config import load_app_config
from nihongo.core.errors import StorageError
from nihongo.db import chapters_repository, init_db

app = typer.Typer(
    name="nihongo",
    help="Backend for the Japanese learning site: chapters, grammar, quizzes, reading, listening.",
    no_args_is_help=True,
)

console = Console()


def _init_db_or_exit(db: Path | None) -> Path:
    """Initialize the database at db (or the configured path), or exit."""
    config = load_app_config()
    db_path = db or config.database.path
    try:
        init_db(db_path, timeout=config.database.timeout_seconds)
    except StorageError as e:
        console.print(f"[red]✗ Database error: {e}[/red]")
        raise typer.Exit(code=1)
    return db_path


@app.command(name="init-db")
def init_db_command(
    db: Path | None = typer.Option(None, "--db", help="Database file (default: from config)"),
) -> None:
    """Create the schema and apply column patches."""
    db_path = _init_db_or_exit(db)
    console.print(f"[green]✓ Database ready:[/green] {db_path}")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(3000, "--port", "-p", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
) -> None:
    """Run the Web API."""
    console.print(f"[cyan]Serving on http://{host}:{port}[/cyan]")
    uvicorn.run("nihongo.web.api:app", host=host, port=port, reload=reload)


@app.command()
def chapters(
    db: Path | None = typer.Option(None, "--db", help="Database file (default: from config)"),
) -> None:
    """List chapters."""
    _init_db_or_exit(db)
    rows = chapters_repository.list_chapters()

    if not rows:
        console.print("[yellow]No chapters yet[/yellow]")
        return

    table = Table(title="Chapters")
    table.add_column("ID", justify="right")
    table.add_column("Title")
    table.add_column("Description")
    for chapter in rows:
        table.add_row(str(chapter.id), chapter.title, chapter.description or "")
    console.print(table)


if __name__ == "__main__":
    app()
