"""Command-line interface for Tally Board."""

import asyncio
from pathlib import Path

import click
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from .config import settings
from .database import init_db
from .exceptions import TallyError
from .services import (
    CivilDayClock,
    HistoryService,
    MidnightWatcher,
    TallyService,
    get_document_store,
)
from .utils.logger import logger


def _clock() -> CivilDayClock:
    return CivilDayClock(settings.timezone)


def _tally_service() -> TallyService:
    service = TallyService(
        get_document_store(),
        _clock(),
        builtin_types=settings.builtin_tally_types,
    )
    service.load()
    return service


def _history_service() -> HistoryService:
    return HistoryService(
        get_document_store(),
        _clock(),
        builtin_types=settings.builtin_tally_types,
    )


def _print_board(service: TallyService) -> None:
    click.echo(f"📅 {service.snapshot.date_key} ({service.snapshot.timezone})")
    entries = service.board()
    width = max((len(e.name) for e in entries), default=0)
    for entry in entries:
        marker = " " if entry.builtin else "*"
        click.echo(f" {marker} {entry.name:<{width}}  {entry.count:>5}")


@click.group()
def cli():
    """Tally Board CLI."""
    pass


@cli.command("init-db")
def init_db_command():
    """Initialize the database."""
    click.echo("Initializing database...")
    try:
        init_db()
        click.echo("✅ Database initialized successfully!")
    except Exception as e:
        click.echo(f"❌ Error: {e}", err=True)


@cli.command()
def show():
    """Show today's tallies in display order."""
    try:
        _print_board(_tally_service())
    except TallyError as e:
        click.echo(f"❌ Error: {e}", err=True)


@cli.command()
@click.argument("name")
def increment(name):
    """Add one to a tally."""
    try:
        service = _tally_service()
        snapshot = service.increment(name)
        click.echo(f"✅ {name.strip().upper()}: {snapshot.counters.count(name)}")
    except TallyError as e:
        click.echo(f"❌ Error: {e}", err=True)


@cli.command()
@click.argument("name")
def decrement(name):
    """Subtract one from a tally (never below zero)."""
    try:
        service = _tally_service()
        snapshot = service.decrement(name)
        click.echo(f"✅ {name.strip().upper()}: {snapshot.counters.count(name)}")
    except TallyError as e:
        click.echo(f"❌ Error: {e}", err=True)


@cli.command()
@click.argument("name")
def add(name):
    """Add a custom tally type."""
    try:
        _tally_service().add_custom(name)
        click.echo(f"✅ Tally type added: {name.strip().upper()}")
    except TallyError as e:
        click.echo(f"❌ Error: {e}", err=True)


@cli.command()
@click.argument("name")
@click.confirmation_option(prompt="Remove this tally type for today and future days?")
def remove(name):
    """Remove a custom tally type."""
    try:
        _tally_service().remove_custom(name)
        click.echo(f"✅ Tally type removed: {name.strip().upper()}")
    except TallyError as e:
        click.echo(f"❌ Error: {e}", err=True)


@cli.command()
@click.option(
    "--confirm",
    "confirmation",
    prompt=f'Type "{settings.clear_confirmation_phrase}" to clear all tallies',
    help="Confirmation phrase",
)
def clear(confirmation):
    """Reset every tally for today to zero."""
    try:
        _tally_service().clear_all(confirmation)
        click.echo("✅ All tallies have been cleared successfully.")
    except TallyError as e:
        click.echo(f"❌ Error: {e}", err=True)


@cli.command()
@click.argument("source")
@click.argument("target")
def move(source, target):
    """Move SOURCE to TARGET's position in the display order."""
    try:
        service = _tally_service()
        service.move(source, target)
        _print_board(service)
    except TallyError as e:
        click.echo(f"❌ Error: {e}", err=True)


@cli.command()
def rollover():
    """Run the midnight check now."""
    try:
        service = _tally_service()
        if service.check_midnight():
            click.echo(f"✅ Rolled over to {service.snapshot.date_key}")
        else:
            click.echo(f"Nothing to do, {service.snapshot.date_key} is current.")
    except TallyError as e:
        click.echo(f"❌ Error: {e}", err=True)


@cli.command()
@click.option("--limit", default=14, help="Number of days to show")
def history(limit):
    """Show archived days, newest first."""
    try:
        history_service = _history_service()
        rows = history_service.to_history_rows(history_service.load_all()[:limit])
        if not rows:
            click.echo("No tally history yet.")
            return
        for row in rows:
            total = sum(row["tallies"].values())
            click.echo(f"{row['formatted_date']:<32} total {total:>5}  (updated {row['display_time']})")
    except TallyError as e:
        click.echo(f"❌ Error: {e}", err=True)


@cli.command()
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the workbook (defaults to EXPORT_PATH)",
)
def export(output_dir):
    """Export the full history to an Excel workbook."""
    output_dir = output_dir or settings.export_path
    try:
        service = _tally_service()
        history_service = _history_service()
        names = service.ordered_types()
        rows = history_service.to_export_rows(history_service.load_all(), names)
        content = history_service.export_to_excel(rows, names)

        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / history_service.export_file_name()
        path.write_bytes(content)
        click.echo(f"✅ Exported {len(rows)} days to {path}")
    except TallyError as e:
        click.echo(f"❌ Error: {e}", err=True)


@cli.command()
@click.option("--interval", type=float, default=None, help="Seconds between checks")
def watch(interval):
    """Keep polling for midnight and roll tallies over."""
    try:
        service = _tally_service()
    except TallyError as e:
        click.echo(f"❌ Error: {e}", err=True)
        return

    async def _watch():
        watcher = MidnightWatcher(service, interval=interval)
        watcher.start()
        try:
            await asyncio.Event().wait()
        finally:
            await watcher.stop()

    click.echo(f"Watching for midnight in {settings.timezone}. Press Ctrl+C to stop.")
    try:
        asyncio.run(_watch())
    except KeyboardInterrupt:
        logger.info("Midnight watcher interrupted")
        click.echo("Stopped.")


@cli.command()
@click.option("--host", default="0.0.0.0", help="Bind address")
@click.option("--port", default=8009, help="Port")
def serve(host, port):
    """Run the API server."""
    import uvicorn

    uvicorn.run("tallyboard.main:app", host=host, port=port, reload=settings.debug)


if __name__ == "__main__":
    cli()
