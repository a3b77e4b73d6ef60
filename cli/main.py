#!/usr/bin/env python3
"""
PlotDesk - Management CLI

Usage:
    plotdesk serve                      # Run the API server
    plotdesk seed-owner                 # Create the Owner account from .env
    plotdesk migrate                    # Copy JSON file data into DATABASE_URL
    plotdesk --help                     # Show help
"""

import argparse
import asyncio
import getpass
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from plotdesk.core.config import settings

console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI"""
    parser = argparse.ArgumentParser(
        prog="plotdesk",
        description="PlotDesk - plot listings backend management",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  plotdesk serve --port 8080                   Serve the API on port 8080
  plotdesk seed-owner --email me@example.com   Create the Owner login (prompts for password)
  plotdesk migrate --data-dir data             Move JSON files into the database

Configuration is read from environment variables and .env
(STORAGE_BACKEND, DATA_DIR, DATABASE_URL, OWNER_EMAIL, OWNER_PASSWORD, ...).
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default=settings.SERVER_HOST, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=settings.SERVER_PORT, help="Bind port")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    seed_parser = subparsers.add_parser("seed-owner", help="Create the Owner account")
    seed_parser.add_argument("--email", default=None, help="Owner email (default: OWNER_EMAIL)")
    seed_parser.add_argument("--password", default=None, help="Owner password (default: OWNER_PASSWORD, else prompt)")

    migrate_parser = subparsers.add_parser("migrate", help="Copy the JSON file store into the database")
    migrate_parser.add_argument("--data-dir", default=settings.DATA_DIR, help="Directory holding the JSON files")
    migrate_parser.add_argument("--database-url", default=settings.DATABASE_URL, help="Target database URL")
    migrate_parser.add_argument("--force", action="store_true",
                                help="Copy collections even when the target already has records")

    return parser


def run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    console.print(f"[bold]{settings.APP_NAME}[/bold] on http://{args.host}:{args.port} "
                  f"([cyan]{settings.STORAGE_BACKEND}[/cyan] storage)")
    uvicorn.run("plotdesk.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


async def _seed_owner(email: str, password: str) -> int:
    from plotdesk.db.seed_data import seed_owner
    from plotdesk.storage import create_store

    store = create_store()
    await store.init()
    try:
        owner = await seed_owner(store, email=email, password=password)
    finally:
        await store.close()

    if owner is None:
        console.print("[red]✗ Owner account was not created[/red]")
        return 1

    console.print(f"[green]✓ Owner account ready:[/green] {owner.email} (id {owner.id})")
    return 0


def run_seed_owner(args: argparse.Namespace) -> int:
    email = args.email or settings.OWNER_EMAIL
    password = args.password if args.password is not None else settings.OWNER_PASSWORD
    if not password:
        password = getpass.getpass(f"Password for {email}: ")

    return asyncio.run(_seed_owner(email, password))


async def _migrate(data_dir: Path, database_url: str, force: bool) -> int:
    from plotdesk.core.exceptions import StorageError
    from plotdesk.db.migrate import migrate_store
    from plotdesk.storage import FileStore, SqlStore

    source = FileStore(data_dir)
    target = SqlStore(database_url)
    await source.init()
    await target.init()
    try:
        copied = await migrate_store(source, target, force=force)
    except StorageError as e:
        console.print(f"[red]✗ Migration failed:[/red] {e.message}")
        return 1
    finally:
        await target.close()

    table = Table(title="Migrated records")
    table.add_column("Collection", style="cyan")
    table.add_column("Records", justify="right")
    for name, count in copied.items():
        table.add_row(name, str(count))
    console.print(table)
    return 0


def run_migrate(args: argparse.Namespace) -> int:
    data_dir = Path(args.data_dir)
    if not data_dir.is_dir():
        console.print(f"[red]✗ Data directory not found:[/red] {data_dir}")
        return 1

    return asyncio.run(_migrate(data_dir, args.database_url, args.force))


COMMANDS = {
    "serve": run_serve,
    "seed-owner": run_seed_owner,
    "migrate": run_migrate,
}


def main(argv=None):
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(COMMANDS[args.command](args))


if __name__ == "__main__":
    main()
