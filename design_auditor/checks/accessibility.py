"""
Accessibility Signals

Markup-level accessibility problems: missing document language, images
without alt text, unlabeled form fields and controls without an
accessible name.
"""

from .parsing import has_text, visible_soup


# Input types that are not labeled by a <label>
_UNLABELED_INPUT_TYPES = {"hidden", "submit", "button", "image", "reset"}


def check_accessibility(html: str) -> dict:
    """
    Collect accessibility signals.

    Returns:
        Dictionary with:
        - has_lang: <html lang> is set
        - has_main_landmark: <main> or role="main" present
        - images_missing_alt: <img> elements without non-empty alt text
        - form_fields: Inputs, selects and textareas that need a label
        - form_fields_missing_label: Those fields with no label or aria name
        - controls_missing_name: Buttons and links with no text or aria name
    """
    soup = visible_soup(html)

    html_tag = soup.find("html")
    fields = [
        field for field in soup.find_all(["input", "select", "textarea"])
        if field.name != "input" or (field.get("type") or "text").lower() not in _UNLABELED_INPUT_TYPES
    ]
    label_targets = {label.get("for") for label in soup.find_all("label") if label.get("for")}
    controls = soup.find_all("button") + soup.find_all("a", href=True)

    return {
        "has_lang": bool(html_tag and (html_tag.get("lang") or "").strip()),
        "has_main_landmark": soup.find("main") is not None or soup.find(attrs={"role": "main"}) is not None,
        "images_missing_alt": sum(1 for img in soup.find_all("img") if not (img.get("alt") or "").strip()),
        "form_fields": len(fields),
        "form_fields_missing_label": sum(1 for field in fields if not _is_labeled(field, label_targets)),
        "controls_missing_name": sum(1 for control in controls if not has_text(control)),
    }


def _is_labeled(field, label_targets: set) -> bool:
    if field.get("id") and field["id"] in label_targets:
        return True
    if (field.get("aria-label") or "").strip() or field.get("aria-labelledby") or (field.get("title") or "").strip():
        return True
    return field.find_parent("label") is not None
