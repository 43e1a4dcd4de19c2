"""
Taskboard Server — HTTP interface for the task store
=====================================================
FastAPI application exposing TaskAPI under /api/v1.

Launch:
    python -m taskboard serve          # Via CLI
    taskboard serve --port 3001

Endpoints:
    GET    /api/v1/tasks                   → All tasks (?completed=, ?sort=)
    GET    /api/v1/tasks/priority/{level}  → Tasks with one priority
    GET    /api/v1/tasks/{id}              → One task
    POST   /api/v1/tasks                   → Create a task (201)
    PUT    /api/v1/tasks/{id}              → Replace a task's fields
    DELETE /api/v1/tasks/{id}              → Remove a task
"""

from __future__ import annotations

import json
import logging
import socket
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from taskboard import __version__
from taskboard.api import TaskAPI
from taskboard.config import Settings, load_settings
from taskboard.errors import TaskboardError, ValidationError
from taskboard.seed import load_seed
from taskboard.store import TaskStore

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


# ─────────────────────────────────────────────────────────────
#  Helpers
# ─────────────────────────────────────────────────────────────

def get_api(request: Request) -> TaskAPI:
    """The TaskAPI bound to this app's store."""
    return request.app.state.api


async def _read_json(request: Request) -> Any:
    """Decode the request body. An empty body reads as an empty object."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        raise ValidationError("Invalid JSON body") from e


async def _handle_taskboard_error(request: Request, exc: TaskboardError) -> JSONResponse:
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


# ─────────────────────────────────────────────────────────────
#  Routes
# ─────────────────────────────────────────────────────────────

router = APIRouter(prefix=API_PREFIX)


@router.get("/tasks")
async def list_tasks(
    completed: Optional[str] = None,
    sort: Optional[str] = None,
    api: TaskAPI = Depends(get_api),
):
    """Return all tasks, optionally filtered by completion and sorted by createdAt."""
    return JSONResponse(api.list_tasks(completed=completed, sort=sort))


# Registered before /tasks/{task_id} so "priority" is never read as an id
@router.get("/tasks/priority/{level}")
async def list_tasks_by_priority(level: str, api: TaskAPI = Depends(get_api)):
    return JSONResponse(api.list_by_priority(level))


@router.get("/tasks/{task_id}")
async def get_task(task_id: str, api: TaskAPI = Depends(get_api)):
    return JSONResponse(api.get_task(task_id))


@router.post("/tasks")
async def create_task(request: Request, api: TaskAPI = Depends(get_api)):
    body = await _read_json(request)
    return JSONResponse(api.create_task(body), status_code=201)


@router.put("/tasks/{task_id}")
async def update_task(task_id: str, request: Request, api: TaskAPI = Depends(get_api)):
    body = await _read_json(request)
    return JSONResponse(api.update_task(task_id, body))


@router.delete("/tasks/{task_id}")
async def delete_task(task_id: str, api: TaskAPI = Depends(get_api)):
    return JSONResponse(api.delete_task(task_id))


# ─────────────────────────────────────────────────────────────
#  App Factory
# ─────────────────────────────────────────────────────────────

def create_app(store: Optional[TaskStore] = None) -> FastAPI:
    """Build the FastAPI app around ``store`` (an empty store if omitted).

    The store is constructed once by the caller and lives on
    ``app.state`` for the lifetime of the process.
    """
    app = FastAPI(title="Taskboard", version=__version__)
    app.state.store = store if store is not None else TaskStore()
    app.state.api = TaskAPI(app.state.store)
    app.add_exception_handler(TaskboardError, _handle_taskboard_error)
    app.include_router(router)
    return app


def port_available(host: str, port: int) -> bool:
    """True if ``host:port`` can be bound right now."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


_UVICORN_LEVELS = ("critical", "error", "warning", "info", "debug", "trace")


def uvicorn_log_level(level: str) -> str:
    """Map a logging level name onto one uvicorn accepts (unknown names -> info)."""
    name = str(level).lower()
    if name == "warn":
        name = "warning"
    return name if name in _UVICORN_LEVELS else "info"


def run_server(settings: Optional[Settings] = None) -> int:
    """Seed the store, then serve until interrupted. Returns a process exit code."""
    import uvicorn

    settings = settings or load_settings()
    store = TaskStore(load_seed(settings.seed_path))
    app = create_app(store)

    if not port_available(settings.host, settings.port):
        logger.error(
            "Port %d is already in use. Stop the other process or run with: "
            "taskboard serve --port %d", settings.port, settings.port + 1,
        )
        return 1

    logger.info("Server is listening on http://%s:%d%s", settings.host, settings.port, API_PREFIX)
    uvicorn.run(app, host=settings.host, port=settings.port,
                log_level=uvicorn_log_level(settings.log_level))
    return 0
