"""
Client for the remote course-tree search service.

The service answers GET /?query=<term> with a JSON array of flat course
items ({"id", "name", "parent_id"}). For some inputs it answers with a
non-array payload instead; that means "no matches", not an error.

Failures are reported as a single SearchError whose message is meant to be
shown to the user as-is:
    "Network error: <detail>. Please try again."        transport / HTTP status / bad body
    "An unexpected error occurred. Please try again."   anything else

Public API:
    build_search_url(query)   → str
    search_course_tree(query) → list[CourseItem]   raw items, service order
    search_tree(query)        → list[DisplayItem]  items run through build_tree
"""

import logging
from urllib.parse import quote

import requests

from search import config
from tree.builder import CourseItem, DisplayItem, build_tree

log = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."

# Characters encodeURIComponent leaves alone on top of quote()'s defaults.
_URI_COMPONENT_SAFE = "!*'()"

SESSION = requests.Session()
SESSION.headers["User-Agent"] = "Course-Tree-Search/1.0"
SESSION.headers["Accept"] = "application/json"


class SearchError(Exception):
    """A search attempt failed; str(exc) is the user-facing message."""


def network_error_message(detail: object) -> str:
    return f"Network error: {detail}. Please try again."


# ---------------------------------------------------------------------------
# Request helpers
# ---------------------------------------------------------------------------

def build_search_url(query: str) -> str:
    """Service URL for `query`, trimmed and percent-encoded (spaces → %20)."""
    encoded = quote(query.strip(), safe=_URI_COMPONENT_SAFE)
    return f"{config.API_BASE_URL}/?query={encoded}"


def _fetch_json(url: str) -> object:
    resp = SESSION.get(url, timeout=config.REQUEST_TIMEOUT)
    if not resp.ok:
        raise requests.HTTPError(
            f"API request failed with status {resp.status_code}", response=resp
        )
    return resp.json()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def search_course_tree(query: str) -> list[CourseItem]:
    """
    Fetch the flat course items matching `query`.

    An empty or whitespace-only query returns [] without contacting the
    service. Items are returned exactly as received: not validated,
    filtered or re-ordered.

    Raises:
        SearchError: the request failed; the message is user-facing.
    """
    if not query.strip():
        return []

    url = build_search_url(query)
    log.debug("GET %s", url)

    try:
        data = _fetch_json(url)
    except (requests.RequestException, ValueError) as exc:
        log.warning("Search failed for %r: %s", query.strip(), exc)
        raise SearchError(network_error_message(exc)) from exc
    except Exception as exc:
        log.exception("Unexpected failure searching for %r", query.strip())
        raise SearchError(UNEXPECTED_ERROR_MESSAGE) from exc

    if not isinstance(data, list):
        log.info("Non-array payload for %r (%s), treating as no results.",
                 query.strip(), type(data).__name__)
        return []

    return data


def search_tree(query: str) -> list[DisplayItem]:
    """
    Search and return the results in indented display order.

    Raises:
        SearchError: the request failed, or the items could not be arranged
                     (e.g. ids of mixed types); the message is user-facing.
    """
    items = search_course_tree(query)
    try:
        return build_tree(items)
    except Exception as exc:
        log.exception("Could not build tree for %r", query.strip())
        raise SearchError(UNEXPECTED_ERROR_MESSAGE) from exc
