"""
Seed Loader
===========
Reads the startup task file. The expected shape is::

    {"tasks": [{"id": 1, "title": "...", "description": "...", "completed": false}, ...]}

A bare JSON list of records is accepted too. ``createdAt`` and ``priority``
may be omitted; the store fills them in.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Optional

from taskboard.errors import SeedError

logger = logging.getLogger(__name__)

DEFAULT_SEED_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "tasks.json")


def parse_seed(data: Any) -> list[dict[str, Any]]:
    """Pull the task records out of decoded seed JSON.

    Raises:
        SeedError: If the document is not a task list or a record lacks an integer id.
    """
    records = data.get("tasks") if isinstance(data, dict) else data
    if not isinstance(records, list):
        raise SeedError("Seed data must be a list of tasks or an object with a 'tasks' list")

    for i, record in enumerate(records):
        if not isinstance(record, dict):
            raise SeedError(f"Seed task #{i} is not an object")
        task_id = record.get("id")
        if isinstance(task_id, bool) or not isinstance(task_id, int):
            raise SeedError(f"Seed task #{i} has no integer 'id'")
    return records


def load_seed(path: Optional[str] = None) -> list[dict[str, Any]]:
    """Read and parse the seed file at ``path`` (default: the packaged tasks.json)."""
    path = path or DEFAULT_SEED_PATH
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise SeedError(f"Seed file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise SeedError(f"Seed file is not valid JSON: {path}: {e}") from e

    records = parse_seed(data)
    logger.debug("Loaded %d seed task(s) from %s", len(records), path)
    return records
