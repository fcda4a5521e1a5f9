"""
HTML Parsing Helpers

Shared BeautifulSoup helpers for the page checks.
"""

import re
from typing import Optional

from bs4 import BeautifulSoup, Comment


NON_VISIBLE_TAGS = ["script", "style", "noscript", "template"]


def soup_of(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def visible_soup(html: str) -> BeautifulSoup:
    """
    Parse HTML and drop everything a visitor never sees.

    Script, style, noscript and template elements are removed along with
    comments, so markup inside them is never counted.
    """
    soup = soup_of(html)
    for node in soup(NON_VISIBLE_TAGS):
        node.extract()
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()
    return soup


def meta_content(soup: BeautifulSoup, name: str) -> Optional[str]:
    """Return the stripped content of <meta name=...>, or None when missing or blank."""
    tag = soup.find("meta", attrs={"name": re.compile(f"^{re.escape(name)}$", re.IGNORECASE)})
    if tag and tag.get("content"):
        return str(tag.get("content")).strip() or None
    return None


def visible_words(soup: BeautifulSoup) -> list[str]:
    region = soup.body or soup
    return region.get_text(" ", strip=True).split()


def has_text(tag) -> bool:
    """True when an element has readable text or an accessible name."""
    if tag.get_text(strip=True):
        return True
    if (tag.get("aria-label") or "").strip() or tag.get("aria-labelledby") or (tag.get("title") or "").strip():
        return True
    return any((img.get("alt") or "").strip() for img in tag.find_all("img"))
