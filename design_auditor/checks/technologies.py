"""
Technology Detection

Identifies frameworks, platforms, analytics tags and web fonts from page
HTML. Each signature can match resource URLs (script src, link href, img
and iframe src), the <meta name="generator"> value, CSS selectors, class
names, or raw markup.
"""

import re
from urllib.parse import parse_qs, urlparse

from bs4 import BeautifulSoup

from .parsing import meta_content, soup_of


TECHNOLOGY_CATEGORIES = (
    "cms",
    "ecommerce",
    "frontend_framework",
    "javascript_libraries",
    "css_framework",
    "analytics",
)

# Categories holding a single value in the technology stack; the rest are lists
SINGLE_VALUE_CATEGORIES = ("cms", "ecommerce", "frontend_framework", "css_framework")

TECHNOLOGY_SIGNATURES = {
    "WordPress": {
        "category": "cms",
        "urls": [r"/wp-content/", r"/wp-includes/"],
        "generator": r"^WordPress",
    },
    "Drupal": {
        "category": "cms",
        "urls": [r"/sites/default/files/", r"/core/misc/drupal\.js"],
        "generator": r"^Drupal",
    },
    "Joomla": {
        "category": "cms",
        "generator": r"^Joomla",
    },
    "Wix": {
        "category": "cms",
        "urls": [r"static\.wixstatic\.com", r"static\.parastorage\.com"],
        "generator": r"^Wix",
    },
    "Squarespace": {
        "category": "cms",
        "urls": [r"static1\.squarespace\.com"],
        "html": [r"Static\.SQUARESPACE_CONTEXT"],
    },
    "Webflow": {
        "category": "cms",
        "urls": [r"assets\.website-files\.com", r"webflow\.[\w.]*js"],
        "selectors": ["[data-wf-page]"],
        "generator": r"^Webflow",
    },
    "Shopify": {
        "category": "ecommerce",
        "urls": [r"cdn\.shopify\.com"],
        "html": [r"Shopify\.theme"],
    },
    "WooCommerce": {
        "category": "ecommerce",
        "urls": [r"/wp-content/plugins/woocommerce/"],
        "selectors": ["body.woocommerce", "body.woocommerce-page"],
    },
    "Next.js": {
        "category": "frontend_framework",
        "urls": [r"/_next/static/"],
        "selectors": ["#__next", "script#__NEXT_DATA__"],
    },
    "Nuxt": {
        "category": "frontend_framework",
        "urls": [r"/_nuxt/"],
        "selectors": ["#__nuxt"],
    },
    "React": {
        "category": "frontend_framework",
        "urls": [r"react(?:-dom)?(?:\.production)?(?:\.min)?\.js"],
        "selectors": ["[data-reactroot]", "#__next"],
    },
    "Vue.js": {
        "category": "frontend_framework",
        "urls": [r"vue(?:\.runtime)?(?:\.global)?(?:\.prod)?(?:\.min)?\.js"],
        "html": [r"\sdata-v-[0-9a-f]{6,}"],
    },
    "Angular": {
        "category": "frontend_framework",
        "selectors": ["[ng-version]", "[ng-app]"],
    },
    "jQuery": {
        "category": "javascript_libraries",
        "urls": [r"jquery(?:[.-][\d.]+)?(?:\.min)?\.js"],
    },
    "Bootstrap": {
        "category": "css_framework",
        "urls": [r"bootstrap(?:\.bundle)?(?:\.min)?\.(?:css|js)"],
    },
    "Tailwind CSS": {
        "category": "css_framework",
        "urls": [r"tailwind(?:css)?(?:\.min)?\.css", r"cdn\.tailwindcss\.com"],
        "classes": [r"^(?:bg|text|border)-[a-z]+-(?:50|[1-9]00)$"],
    },
    "Google Analytics": {
        "category": "analytics",
        "urls": [r"google-analytics\.com/(?:analytics|ga)\.js", r"googletagmanager\.com/gtag/js"],
        "html": [r"gtag\(['\"]config['\"],\s*['\"](?:G|UA)-"],
    },
    "Google Tag Manager": {
        "category": "analytics",
        "urls": [r"googletagmanager\.com/gtm\.js"],
        "html": [r"\bGTM-[A-Z0-9]{4,}\b"],
    },
    "Hotjar": {
        "category": "analytics",
        "urls": [r"static\.hotjar\.com"],
    },
    "Meta Pixel": {
        "category": "analytics",
        "urls": [r"connect\.facebook\.net/[\w_]+/fbevents\.js"],
    },
}

_COMPILED = {
    name: {
        "category": signature["category"],
        "urls": [re.compile(pattern, re.IGNORECASE) for pattern in signature.get("urls", [])],
        "generator": re.compile(signature["generator"], re.IGNORECASE) if "generator" in signature else None,
        "selectors": signature.get("selectors", []),
        "classes": [re.compile(pattern) for pattern in signature.get("classes", [])],
        "html": [re.compile(pattern) for pattern in signature.get("html", [])],
    }
    for name, signature in TECHNOLOGY_SIGNATURES.items()
}

_GOOGLE_FONTS_HOST = "fonts.googleapis.com"


def detect_technologies(html: str) -> list[str]:
    """
    Detect technologies used by a page.

    Args:
        html: Page HTML as rendered by the browser

    Returns:
        Names of detected technologies in signature-table order

    Example:
        detect_technologies('<script src="/wp-includes/js/jquery/jquery.min.js"></script>')
        # ["WordPress", "jQuery"]
    """
    if not html:
        return []
    return _detect(soup_of(html), html)


def detect_fonts(html: str) -> list[str]:
    """Font families loaded from Google Fonts, plus "Adobe Fonts" for Typekit kits."""
    if not html:
        return []
    return _fonts(soup_of(html))


def technology_stack(html: str) -> dict:
    """
    Group detected technologies by role.

    Returns:
        Dictionary with cms, ecommerce, frontend_framework and css_framework
        (first match or None) and javascript_libraries, analytics and fonts
        (lists)
    """
    soup = soup_of(html)
    technologies = _detect(soup, html or "")

    stack: dict = {}
    for category in TECHNOLOGY_CATEGORIES:
        names = [name for name in technologies if _COMPILED[name]["category"] == category]
        if category in SINGLE_VALUE_CATEGORIES:
            stack[category] = names[0] if names else None
        else:
            stack[category] = names
    stack["fonts"] = _fonts(soup)
    return stack


def _detect(soup: BeautifulSoup, html: str) -> list[str]:
    urls = _resource_urls(soup)
    generator = meta_content(soup, "generator") or ""
    classes = {cls for tag in soup.find_all(class_=True) for cls in tag.get("class", [])}

    return [
        name
        for name, signature in _COMPILED.items()
        if _matches(signature, soup, html, urls, generator, classes)
    ]


def _matches(signature: dict, soup: BeautifulSoup, html: str, urls: list[str], generator: str, classes: set) -> bool:
    if any(pattern.search(url) for pattern in signature["urls"] for url in urls):
        return True
    if generator and signature["generator"] is not None and signature["generator"].search(generator):
        return True
    if any(soup.select_one(selector) is not None for selector in signature["selectors"]):
        return True
    if any(pattern.match(cls) for pattern in signature["classes"] for cls in classes):
        return True
    return any(pattern.search(html) for pattern in signature["html"])


def _resource_urls(soup: BeautifulSoup) -> list[str]:
    urls = [tag["src"] for tag in soup.find_all(["script", "img", "iframe"], src=True)]
    urls.extend(tag["href"] for tag in soup.find_all("link", href=True))
    return urls


def _fonts(soup: BeautifulSoup) -> list[str]:
    fonts = []
    for link in soup.find_all("link", href=True):
        href = link["href"]
        if _GOOGLE_FONTS_HOST in href:
            for family in _google_font_families(href):
                if family not in fonts:
                    fonts.append(family)
        elif "use.typekit.net" in href and "Adobe Fonts" not in fonts:
            fonts.append("Adobe Fonts")
    return fonts


def _google_font_families(href: str) -> list[str]:
    """
    Parse family names from a Google Fonts stylesheet URL.

    Handles both css2 (repeated ``family=`` parameters) and the legacy css
    API (``family=Roboto|Lato:400``).
    """
    families = []
    for value in parse_qs(urlparse(href).query).get("family", []):
        for part in value.split("|"):
            name = part.split(":")[0].strip()
            if name:
                families.append(name)
    return families
