"""
FastAPI application: local entry point for course-tree searches.

Run as a script:
    python app/app.py

Or as a module:
    uvicorn app.app:app --reload

Endpoints:
    GET /search?query=...
        returns: {"query": str, "items": [{"id", "name", "depth"}, ...], "lines": [str, ...]}
        502 with {"detail": "<user-facing message>"} when the upstream search fails
    GET /health
        returns: {"status": "ok"}

Logs each query and wall-clock response time to stdout and logs/app.log
(rotating, 5 MB max, 3 backups).
"""

import asyncio
import logging
import logging.handlers
import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ValidationError

# Ensure project root is on sys.path when running as a script (python app/app.py)
sys.path.insert(0, str(Path(__file__).parent.parent))

from search import config
from search.client import UNEXPECTED_ERROR_MESSAGE, SearchError, search_tree
from tree.render import render_lines


def _setup_logging() -> None:
    config.LOG_DIR.mkdir(parents=True, exist_ok=True)
    fmt = logging.Formatter("%(asctime)s  %(levelname)s  %(message)s")

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(fmt)

    # Rotate at 5 MB, keep 3 backups
    rotating = logging.handlers.RotatingFileHandler(
        config.LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    rotating.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(config.LOG_LEVEL)
    root.addHandler(stream)
    root.addHandler(rotating)

_setup_logging()
log = logging.getLogger("api")


# ---------------------------------------------------------------------------
# App + lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(_: FastAPI):
    log.info("Course-tree service: %s", config.API_BASE_URL)
    log.info("  Request timeout: %.1fs", config.REQUEST_TIMEOUT)
    yield  # server runs here


app = FastAPI(title="Course Tree Search", lifespan=lifespan)


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

class DisplayItemOut(BaseModel):
    id: int
    name: str
    depth: int


class SearchResponse(BaseModel):
    query: str
    items: list[DisplayItemOut]
    lines: list[str]


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/search", response_model=SearchResponse)
def search_courses(query: str = "") -> SearchResponse:
    q = query.strip()
    if not q:
        return SearchResponse(query="", items=[], lines=[])

    t0 = time.perf_counter()
    log.info("Searching: q=%r", q)

    try:
        items = search_tree(q)
    except SearchError as exc:
        elapsed = time.perf_counter() - t0
        log.warning("query=%r  failed  %.2fs  %s", q, elapsed, exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    elapsed = time.perf_counter() - t0
    log.info("query=%r  hits=%d  %.2fs", q, len(items), elapsed)

    try:
        return SearchResponse(
            query=q,
            items=[DisplayItemOut(**item) for item in items],
            lines=render_lines(items),
        )
    except ValidationError as exc:
        log.error("query=%r  malformed items from service: %s", q, exc)
        raise HTTPException(status_code=502, detail=UNEXPECTED_ERROR_MESSAGE) from exc


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def _launch_server() -> None:
    server_config = uvicorn.Config(app, host=config.API_HOST, port=config.API_PORT, reload=False)
    server = uvicorn.Server(server_config)

    try:
        asyncio.get_running_loop()
    except RuntimeError:
        uvicorn.run(app, host=config.API_HOST, port=config.API_PORT, reload=False)
        return

    log.warning(
        "Detected an existing asyncio event loop; serving with create_task() instead of asyncio.run()."
    )
    asyncio.create_task(server.serve())


if __name__ == "__main__":
    log.info("=== Course Tree Search: starting up ===")
    log.info("=== Launching server on http://%s:%d ===", config.API_HOST, config.API_PORT)
    _launch_server()
