"""
Conversion Signals

Calls to action and lead-capture elements a visitor can act on.
"""

import re

from .parsing import visible_soup


CTA_TEXT_RE = re.compile(
    r"\b(buy|shop|order|add to (?:cart|bag)|sign ?up|register|subscribe|get started|start|try|"
    r"free trial|book|request|contact|demo|download|join|get (?:a )?quote)\b",
    re.IGNORECASE,
)
CTA_CLASS_RE = re.compile(r"\b(btn|button|cta)\b", re.IGNORECASE)

_SUBMIT_INPUT_TYPES = {"submit", "button", "image"}


def check_conversion(html: str) -> dict:
    """
    Count calls to action and lead-capture elements.

    Returns:
        Dictionary with:
        - buttons: <button>, submit inputs and role="button" elements
        - cta_links: Links styled as buttons or worded as a call to action
        - forms: <form> elements
        - email_fields: <input type="email"> elements
        - phone_links: tel: links
    """
    soup = visible_soup(html)

    buttons = (
        len(soup.find_all("button"))
        + sum(1 for field in soup.find_all("input") if (field.get("type") or "").lower() in _SUBMIT_INPUT_TYPES)
        + len(soup.find_all(lambda tag: tag.name not in ("button", "input") and tag.get("role") == "button"))
    )

    links = soup.find_all("a", href=True)
    cta_links = sum(
        1 for link in links
        if CTA_TEXT_RE.search(link.get_text(" ", strip=True))
        or CTA_CLASS_RE.search(" ".join(link.get("class", [])))
    )

    return {
        "buttons": buttons,
        "cta_links": cta_links,
        "forms": len(soup.find_all("form")),
        "email_fields": sum(1 for field in soup.find_all("input") if (field.get("type") or "").lower() == "email"),
        "phone_links": sum(1 for link in links if link["href"].strip().lower().startswith("tel:")),
    }
