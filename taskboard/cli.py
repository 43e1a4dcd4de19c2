"""
Taskboard CLI
=============
Entry point for running and inspecting the task API.

Usage:
    # Serve the API (defaults come from TASKBOARD_* environment variables)
    python -m taskboard serve
    python -m taskboard serve --port 3001 --seed ./tasks.json

    # Print the seeded tasks with the same filter/sort rules as GET /tasks
    python -m taskboard tasks --completed false --sort=-createdAt
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import Optional

from taskboard.api import SORT_FIELDS, TaskAPI
from taskboard.config import load_settings
from taskboard.errors import SeedError
from taskboard.logging_setup import setup_logging
from taskboard.seed import load_seed
from taskboard.store import TaskStore


# ─────────────────────────────────────────────────────────────
#  Commands
# ─────────────────────────────────────────────────────────────

def cmd_serve(args) -> int:
    """Launch the HTTP server."""
    from taskboard.server import run_server

    settings = load_settings()
    settings = replace(
        settings,
        host=args.host or settings.host,
        port=args.port if args.port is not None else settings.port,
        seed_path=args.seed or settings.seed_path,
        log_level=(args.log_level or settings.log_level).upper(),
    )
    setup_logging(settings.log_level)

    try:
        return run_server(settings)
    except SeedError as e:
        print(f"✘ {e}", file=sys.stderr)
        return 1


def cmd_tasks(args) -> int:
    """Print the seeded tasks."""
    seed_path = args.seed or load_settings().seed_path
    try:
        store = TaskStore(load_seed(seed_path))
    except SeedError as e:
        print(f"✘ {e}", file=sys.stderr)
        return 1

    tasks = TaskAPI(store).list_tasks(completed=args.completed, sort=args.sort)

    print(f"\n◬ ─── Tasks ({len(tasks)}) ───")
    for task in tasks:
        mark = "x" if task["completed"] is True else " "
        print(f"  [{mark}] #{task['id']:<3} {task['title']}")
        print(f"         {task['description']}")
        print(f"         priority={task['priority']}  created={task['createdAt']}")
    print()
    return 0


# ─────────────────────────────────────────────────────────────
#  Main
# ─────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskboard",
        description="Taskboard — in-memory task management API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  taskboard serve\n"
            "  taskboard serve --port 3001 --seed ./tasks.json\n"
            "  taskboard tasks --completed true --sort=-createdAt\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # serve
    p_serve = subparsers.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default=None, help="Bind address (default: $TASKBOARD_HOST or 127.0.0.1)")
    p_serve.add_argument("--port", "-p", default=None, type=int,
                         help="Port number (default: $TASKBOARD_PORT, $PORT or 3000)")
    p_serve.add_argument("--seed", default=None, help="Seed JSON file (default: packaged tasks.json)")
    p_serve.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ...)")

    # tasks
    p_tasks = subparsers.add_parser("tasks", help="Print the seeded tasks")
    p_tasks.add_argument("--seed", default=None, help="Seed JSON file (default: packaged tasks.json)")
    p_tasks.add_argument("--completed", default=None,
                         help="Filter: 'true' for completed tasks, anything else for open ones")
    p_tasks.add_argument("--sort", default=None, choices=SORT_FIELDS, help="Order by createdAt")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "serve": cmd_serve,
        "tasks": cmd_tasks,
    }

    if args.command in commands:
        return commands[args.command](args)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
