"""
Mobile Readiness Signals
"""

import re

from .parsing import meta_content, visible_soup


# Inline widths above this many pixels overflow a phone screen
FIXED_WIDTH_PX = 480

_INLINE_WIDTH_RE = re.compile(r"(?:^|[;\s])(?:min-)?width\s*:\s*(\d+)px", re.IGNORECASE)
_ZOOM_DISABLED_RE = re.compile(r"user-scalable\s*=\s*(?:no|0)|maximum-scale\s*=\s*1(?:\.0)?(?![\d.])", re.IGNORECASE)


def check_mobile(html: str) -> dict:
    """
    Collect mobile readiness signals.

    Returns:
        Dictionary with:
        - has_viewport_meta: <meta name="viewport"> with width=device-width
        - zoom_disabled: The viewport meta blocks pinch zoom
        - images_total: <img> elements
        - responsive_images: <img srcset> and <picture> elements
        - fixed_width_elements: Elements with an inline width wider than a phone
    """
    soup = visible_soup(html)

    viewport = meta_content(soup, "viewport") or ""
    images = soup.find_all("img")
    fixed = 0
    for tag in soup.find_all(style=True):
        match = _INLINE_WIDTH_RE.search(tag["style"])
        if match and int(match.group(1)) > FIXED_WIDTH_PX:
            fixed += 1

    return {
        "has_viewport_meta": "width=device-width" in viewport.replace(" ", "").lower(),
        "zoom_disabled": bool(_ZOOM_DISABLED_RE.search(viewport)),
        "images_total": len(images),
        "responsive_images": sum(1 for img in images if img.get("srcset")) + len(soup.find_all("picture")),
        "fixed_width_elements": fixed,
    }
