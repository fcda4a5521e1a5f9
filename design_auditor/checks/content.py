"""
Content Structure Signals
"""

import re

from .parsing import visible_soup, visible_words


_HEADING_RE = re.compile(r"^h[1-6]$")


def check_content(html: str) -> dict:
    """
    Measure how much readable content a page has and how it is structured.

    Returns:
        Dictionary with:
        - word_count: Words of visible body text
        - paragraph_count: <p> elements with text
        - heading_count: <h1>-<h6> elements
        - heading_depth: Deepest heading level used (0 without headings)
        - heading_skips: Places where the outline jumps a level (h2 -> h4)
        - list_count: <ul> and <ol> elements
    """
    soup = visible_soup(html)

    levels = [int(tag.name[1]) for tag in soup.find_all(_HEADING_RE)]
    skips = sum(1 for previous, current in zip(levels, levels[1:]) if current > previous + 1)

    return {
        "word_count": len(visible_words(soup)),
        "paragraph_count": sum(1 for p in soup.find_all("p") if p.get_text(strip=True)),
        "heading_count": len(levels),
        "heading_depth": max(levels, default=0),
        "heading_skips": skips,
        "list_count": len(soup.find_all(["ul", "ol"])),
    }
