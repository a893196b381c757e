#!/usr/bin/env python3
"""
ApplyTrack Reminders management CLI.

Usage:
    python manage.py migrate     Apply pending schema migrations
    python manage.py status      Show applied and pending migrations
    python manage.py verify      Check schema integrity
    python manage.py serve       Run the API server
"""

import argparse
import asyncio
import sys
from pathlib import Path

from src.config import configure_logging, get_settings
from src.infrastructure.storage.sqlite.migrations import (
    get_migration_status,
    initialize_database,
    verify_schema_integrity,
)


def cmd_migrate(args: argparse.Namespace) -> None:
    results = asyncio.run(
        initialize_database(args.db_path, create_backup_before=not args.no_backup)
    )
    if not results:
        print("Database is up to date.")
        return
    for result in results:
        label = "SUCCESS" if result.success else "FAILED"
        print(f"[{label}] v{result.version}: {result.name} ({result.execution_time_ms}ms)")
        if result.error:
            print(f"         Error: {result.error}")
    if not all(r.success for r in results):
        sys.exit(1)


def cmd_status(args: argparse.Namespace) -> None:
    status = asyncio.run(get_migration_status(args.db_path))
    print(f"Database exists:    {status['exists']}")
    print(f"Current version:    {status.get('current_version') or 'N/A'}")
    print(f"Applied migrations: {status.get('applied_migrations', [])}")
    print(f"Pending migrations: {status.get('pending_migrations', [])}")


def cmd_verify(args: argparse.Namespace) -> None:
    db_path = args.db_path or get_settings().storage.db_path
    if not Path(db_path).exists():
        print(f"Error: database not found at {db_path}. Run 'migrate' first.")
        sys.exit(1)

    checks = asyncio.run(verify_schema_integrity(db_path))
    failed = False
    for check in checks:
        passed = check["status"] == "PASS"
        failed = failed or not passed
        print(f"[{'PASS' if passed else 'FAIL'}] {check['check']}")
        if not passed:
            for key, value in check.items():
                if key not in ("check", "status"):
                    print(f"       {key}: {value}")
    if failed:
        sys.exit(1)


def cmd_serve(args: argparse.Namespace) -> None:
    import uvicorn

    settings = get_settings()
    host = args.host or settings.api.host
    port = args.port or settings.api.port
    print(f"Starting server on {host}:{port}...")
    uvicorn.run(
        "src.api.main:app",
        host=host,
        port=port,
        reload=args.reload,
    )


def main() -> None:
    parser = argparse.ArgumentParser(
        description="ApplyTrack Reminders management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    p_migrate.add_argument("--no-backup", action="store_true", help="Skip backup before migrating")
    p_migrate.set_defaults(func=cmd_migrate)

    # status
    p_status = sub.add_parser("status", help="Show migration status")
    p_status.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    p_status.set_defaults(func=cmd_status)

    # verify
    p_verify = sub.add_parser("verify", help="Verify schema integrity")
    p_verify.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    p_verify.set_defaults(func=cmd_verify)

    # serve
    p_serve = sub.add_parser("serve", help="Run the API server")
    p_serve.add_argument("--host", help="Bind host (default from settings)")
    p_serve.add_argument("--port", type=int, help="Bind port (default from settings)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    args = parser.parse_args()
    configure_logging()
    args.func(args)


if __name__ == "__main__":
    main()
