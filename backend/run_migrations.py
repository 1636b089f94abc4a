#!/usr/bin/env python3
"""
Database migration runner for the Supabase user store.

Connects directly to the Supabase PostgreSQL database and applies the SQL
files in migrations/ in name order, recording each one in a tracking table.

Usage:
    uv run python run_migrations.py              # Run pending migrations
    uv run python run_migrations.py --status     # Show migration status
    uv run python run_migrations.py --dry-run    # Show what would run

Configuration:
    Set SUPABASE_DB_URL in your .env file (Supabase Dashboard → Settings →
    Database → Connection string → URI).
"""

import argparse
import hashlib
import sys
from pathlib import Path
from typing import NamedTuple

import psycopg2
from psycopg2 import sql
from rich.console import Console
from rich.table import Table

from shared.config import get_settings

console = Console()

MIGRATIONS_DIR = Path(__file__).parent / "migrations"
MIGRATIONS_TABLE = "_migrations"


class Migration(NamedTuple):
    name: str
    path: Path
    checksum: str


def checksum_of(content: str) -> str:
    return hashlib.sha256(content.encode()).hexdigest()[:16]


def get_db_connection():
    """Get a connection to the Supabase PostgreSQL database, or exit."""
    settings = get_settings()

    if not settings.supabase_db_url:
        console.print("[red]Error:[/red] SUPABASE_DB_URL is not set.")
        sys.exit(1)

    try:
        return psycopg2.connect(settings.supabase_db_url)
    except psycopg2.Error as e:
        console.print(f"[red]Database connection failed:[/red] {e}")
        sys.exit(1)


def ensure_migrations_table(conn) -> None:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL(
                "CREATE TABLE IF NOT EXISTS {} ("
                " name VARCHAR(255) PRIMARY KEY,"
                " checksum VARCHAR(64) NOT NULL,"
                " applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW())"
            ).format(sql.Identifier(MIGRATIONS_TABLE))
        )
    conn.commit()


def get_applied_migrations(conn) -> dict[str, dict]:
    """Map of applied migration name -> {checksum, applied_at}."""
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL("SELECT name, checksum, applied_at FROM {} ORDER BY name").format(
                sql.Identifier(MIGRATIONS_TABLE)
            )
        )
        return {
            row[0]: {"checksum": row[1], "applied_at": row[2]}
            for row in cur.fetchall()
        }


def find_pending(
    applied: dict[str, dict], migrations_dir: Path = MIGRATIONS_DIR
) -> list[Migration]:
    """
    List migration files not yet applied, in name order.

    Applied files whose content has changed are reported but not re-run.
    """
    if not migrations_dir.exists():
        console.print(f"[yellow]Warning:[/yellow] Migrations directory not found: {migrations_dir}")
        return []

    pending = []
    for path in sorted(migrations_dir.glob("*.sql")):
        checksum = checksum_of(path.read_text())
        if path.name not in applied:
            pending.append(Migration(path.name, path, checksum))
        elif applied[path.name]["checksum"] != checksum:
            console.print(f"[yellow]Warning:[/yellow] {path.name} has changed since it was applied")
    return pending


def apply_migration(conn, migration: Migration, dry_run: bool = False) -> None:
    """Run one migration and record it, in a single transaction."""
    if dry_run:
        console.print(f"[cyan]Would run:[/cyan] {migration.name}")
        return

    console.print(f"[blue]Running:[/blue] {migration.name}...")
    try:
        with conn.cursor() as cur:
            cur.execute(migration.path.read_text())
            cur.execute(
                sql.SQL("INSERT INTO {} (name, checksum) VALUES (%s, %s)").format(
                    sql.Identifier(MIGRATIONS_TABLE)
                ),
                (migration.name, migration.checksum),
            )
        conn.commit()
    except psycopg2.Error as e:
        conn.rollback()
        console.print(f"[red]✗[/red] {migration.name} failed: {e}")
        raise
    console.print(f"[green]✓[/green] {migration.name}")


def show_status(applied: dict[str, dict], pending: list[Migration]) -> None:
    if not applied and not pending:
        console.print("[dim]No migrations found.[/dim]")
        return

    table = Table(title="Migration Status")
    table.add_column("Migration", style="cyan")
    table.add_column("Status")
    table.add_column("Applied At")
    table.add_column("Checksum")

    for name, info in applied.items():
        applied_at = info["applied_at"].strftime("%Y-%m-%d %H:%M:%S") if info["applied_at"] else ""
        table.add_row(name, "[green]Applied[/green]", applied_at, info["checksum"])
    for migration in pending:
        table.add_row(migration.name, "[yellow]Pending[/yellow]", "", migration.checksum)

    console.print(table)


def main():
    parser = argparse.ArgumentParser(description="Run database migrations for the user store")
    parser.add_argument("--status", action="store_true", help="Show migration status only")
    parser.add_argument("--dry-run", action="store_true", help="Show what would run")
    args = parser.parse_args()

    conn = get_db_connection()
    try:
        ensure_migrations_table(conn)
        applied = get_applied_migrations(conn)
        pending = find_pending(applied)

        if args.status:
            show_status(applied, pending)
            return
        if not pending:
            console.print("[green]All migrations are up to date![/green]")
            return

        for migration in pending:
            apply_migration(conn, migration, dry_run=args.dry_run)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
