"""
Heuristic Page Scores

Turns the raw check results into 0-10 scores per area. Every area starts
at 10 and loses points for each problem found.
"""


SCORE_AREAS = ("performance", "accessibility", "mobile", "seo", "content", "conversion")


def clamp(value: float, low: float = 0.0, high: float = 10.0) -> float:
    return max(low, min(high, value))


def score_performance(metrics: dict) -> float:
    score = 10.0
    if metrics["html_kb"] > 1000:
        score -= 3
    elif metrics["html_kb"] > 500:
        score -= 1.5
    if metrics["dom_elements"] > 3000:
        score -= 2
    elif metrics["dom_elements"] > 1500:
        score -= 1
    if metrics["scripts_external"] > 30:
        score -= 2
    elif metrics["scripts_external"] > 15:
        score -= 1
    score -= min(2, 0.5 * metrics["render_blocking_scripts"])
    if metrics["stylesheets"] > 10:
        score -= 1
    if metrics["images_total"] > 20 and metrics["images_lazy"] == 0:
        score -= 1.5
    # Images without dimensions shift the layout while loading
    if metrics["images_missing_dimensions"] > 0:
        score -= 1
    return score


def score_accessibility(metrics: dict) -> float:
    score = 10.0
    if not metrics["has_lang"]:
        score -= 2
    if not metrics["has_main_landmark"]:
        score -= 1
    score -= min(3, 0.5 * metrics["images_missing_alt"])
    score -= min(3, metrics["form_fields_missing_label"])
    score -= min(2, 0.5 * metrics["controls_missing_name"])
    return score


def score_mobile(metrics: dict) -> float:
    score = 10.0
    if not metrics["has_viewport_meta"]:
        score -= 4
    if metrics["zoom_disabled"]:
        score -= 2
    score -= min(2, 0.5 * metrics["fixed_width_elements"])
    if metrics["images_total"] >= 5 and metrics["responsive_images"] == 0:
        score -= 1
    return score


def score_seo(metrics: dict) -> float:
    score = 10.0
    if not metrics["title"]:
        score -= 3
    elif not 10 <= metrics["title_length"] <= 60:
        score -= 1
    if not metrics["has_meta_description"]:
        score -= 2
    if metrics["h1_count"] != 1:
        score -= 2
    if not metrics["has_canonical"]:
        score -= 1
    score -= min(1, 0.25 * metrics["images_missing_alt"])
    return score


def score_content(metrics: dict) -> float:
    score = 10.0
    if metrics["word_count"] < 100:
        score -= 5
    elif metrics["word_count"] < 300:
        score -= 3
    if metrics["heading_count"] == 0:
        score -= 2
    elif metrics["heading_skips"] > 0:
        score -= 1
    if metrics["paragraph_count"] == 0:
        score -= 1
    return score


def score_conversion(metrics: dict) -> float:
    score = 10.0
    if metrics["cta_links"] == 0 and metrics["buttons"] == 0:
        score -= 4
    elif metrics["cta_links"] == 0:
        score -= 2
    elif metrics["cta_links"] > 15:
        score -= 1
    if metrics["forms"] == 0 and metrics["email_fields"] == 0 and metrics["phone_links"] == 0:
        score -= 2
    return score


_SCORERS = {
    "performance": score_performance,
    "accessibility": score_accessibility,
    "mobile": score_mobile,
    "seo": score_seo,
    "content": score_content,
    "conversion": score_conversion,
}


def score_page(metrics: dict) -> dict:
    """
    Score each area from its check results.

    Args:
        metrics: Mapping of area name to the dict its check returned

    Returns:
        Mapping of area name to a score between 0 and 10, one decimal
    """
    return {area: round(clamp(_SCORERS[area](metrics[area])), 1) for area in SCORE_AREAS}
