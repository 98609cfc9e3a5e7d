"""
Frontend helpers: talk to the local API and shape its answer for display.

Kept free of Streamlit calls so the page script stays thin and this part
can be tested on its own.
"""

import requests

from tree.builder import DisplayItem
from tree.render import format_display_name

APP_TITLE = "Course Tree Search"
APP_SUBTITLE = "Search for course items and view their hierarchical structure"
SEARCH_PLACEHOLDER = "Enter search term (e.g. 'Lab')"


class UIError(Exception):
    """Message to show in the error banner."""


def can_submit(query: str) -> bool:
    return bool(query.strip())


def _json_or_none(resp: requests.Response) -> object:
    try:
        return resp.json()
    except ValueError:
        return None


def fetch_tree(query: str, api_url: str, timeout: float = 30) -> list[DisplayItem]:
    """
    GET {api_url}/search for the trimmed query and return its display items.

    Raises:
        UIError: the API is unreachable, answered with something unreadable,
                 or reported a failed search.
    """
    try:
        resp = requests.get(f"{api_url}/search", params={"query": query.strip()}, timeout=timeout)
    except requests.exceptions.ConnectionError as exc:
        raise UIError("Cannot reach the API. Start it with: python app/app.py") from exc
    except requests.exceptions.Timeout as exc:
        raise UIError(f"API error: request timed out after {timeout:g}s") from exc
    except requests.RequestException as exc:
        raise UIError(f"API error: {exc}") from exc

    body = _json_or_none(resp)

    if not resp.ok:
        detail = body.get("detail") if isinstance(body, dict) else None
        if isinstance(detail, str) and detail:
            raise UIError(detail)
        raise UIError(f"API error: HTTP {resp.status_code}")

    if not isinstance(body, dict) or not isinstance(body.get("items", []), list):
        raise UIError("API error: unexpected response from the search API")
    return body.get("items", [])


def tree_rows(items: list[DisplayItem]) -> list[tuple[int, str]]:
    """(depth, label) per item, in display order."""
    return [(item["depth"], format_display_name(item)) for item in items]
