"""
Plain-text rendering of built course trees.

Every level of depth is shown as a "- " token in front of the name; roots
are shown bare:

    Lab Experiment 1
    - Surface Chemistry
    - - Colloidal Solution (sol) of Starch
"""

from tree.builder import DisplayItem

INDENT_TOKEN = "- "
EMPTY_STATE_MESSAGE = "No results found for your search."


def format_display_name(item: DisplayItem) -> str:
    depth = item["depth"]
    if depth > 0:
        return f"{INDENT_TOKEN * depth}{item['name']}"
    return item["name"]


def render_lines(items: list[DisplayItem]) -> list[str]:
    return [format_display_name(item) for item in items]


def render_text(items: list[DisplayItem]) -> str:
    """Render a whole tree, or the empty-state message when there is nothing to show."""
    if not items:
        return EMPTY_STATE_MESSAGE
    return "\n".join(render_lines(items))
