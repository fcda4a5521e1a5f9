"""
On-Page SEO Signals

Facts about the page markup the vision model cannot see in a screenshot:
title, meta description, heading and image alt coverage.
"""

import re

from .parsing import meta_content, visible_soup, visible_words


def check_seo(html: str) -> dict:
    """
    Collect basic on-page SEO signals.

    Args:
        html: Page HTML

    Returns:
        Dictionary with:
        - title: Page title text ("" when missing)
        - title_length: Characters in the title
        - has_meta_description: Non-empty meta description present
        - has_canonical: <link rel="canonical"> present
        - h1_count: Number of <h1> elements
        - images_total: Number of <img> elements
        - images_missing_alt: <img> elements without non-empty alt text
        - word_count: Words of visible body text
    """
    soup = visible_soup(html)

    title = soup.title.get_text(" ", strip=True) if soup.title else ""
    title = re.sub(r"\s+", " ", title)

    images = soup.find_all("img")
    missing_alt = sum(1 for img in images if not (img.get("alt") or "").strip())

    return {
        "title": title,
        "title_length": len(title),
        "has_meta_description": meta_content(soup, "description") is not None,
        "has_canonical": soup.find("link", rel="canonical") is not None,
        "h1_count": len(soup.find_all("h1")),
        "images_total": len(images),
        "images_missing_alt": missing_alt,
        "word_count": len(visible_words(soup)),
    }
