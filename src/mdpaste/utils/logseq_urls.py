"""Logseq URL utilities.

Provides helpers for creating logseq:// protocol URLs.
"""

from pathlib import Path
from urllib.parse import quote


def create_logseq_url(page_name: str, graph_path: Path) -> str:
    """Create a logseq:// URL that opens a page.

    Args:
        page_name: Name of the Logseq page
        graph_path: Path to the Logseq graph directory

    Returns:
        Formatted logseq:// URL

    Example:
        >>> create_logseq_url("Meeting Notes", Path("/home/user/graph"))
        'logseq://graph/graph?page=Meeting%20Notes'
    """
    encoded_graph = quote(graph_path.name, safe='')
    encoded_page = quote(page_name, safe='')
    return f"logseq://graph/{encoded_graph}?page={encoded_page}"


def create_clickable_link(page_name: str, graph_path: Path) -> str:
    """Wrap a page name in an OSC 8 terminal hyperlink to the page.

    Args:
        page_name: Name of the Logseq page
        graph_path: Path to the Logseq graph directory

    Returns:
        Page name with OSC 8 escape codes around it
    """
    url = create_logseq_url(page_name, graph_path)
    # OSC 8 format: \033]8;;URI\033\\TEXT\033]8;;\033\\
    return f"\033]8;;{url}\033\\{page_name}\033]8;;\033\\"
