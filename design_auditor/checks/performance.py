"""
Performance Signals

Static weight and resource counts read from the rendered HTML. No network
timing is measured; these only flag pages that are obviously heavy.
"""

from .parsing import soup_of


def check_performance(html: str) -> dict:
    """
    Count the resources a page pulls in.

    Returns:
        Dictionary with:
        - html_kb: Size of the rendered HTML in kilobytes
        - dom_elements: Number of elements in the document
        - scripts_external: <script src> elements
        - scripts_inline: <script> elements with inline code
        - render_blocking_scripts: External scripts in <head> without async/defer/module
        - stylesheets: <link rel="stylesheet"> elements
        - images_total: <img> elements
        - images_lazy: <img loading="lazy"> elements
        - images_missing_dimensions: <img> elements without width and height
    """
    html = html or ""
    soup = soup_of(html)

    scripts = soup.find_all("script")
    external = [script for script in scripts if script.get("src")]
    head = soup.head
    blocking = [
        script for script in external
        if head is not None
        and script.find_parent("head") is head
        and not script.has_attr("async")
        and not script.has_attr("defer")
        and script.get("type") != "module"
    ]
    images = soup.find_all("img")

    return {
        "html_kb": round(len(html.encode("utf-8")) / 1024, 1),
        "dom_elements": len(soup.find_all(True)),
        "scripts_external": len(external),
        "scripts_inline": sum(1 for script in scripts if not script.get("src") and script.get_text(strip=True)),
        "render_blocking_scripts": len(blocking),
        "stylesheets": len(soup.find_all("link", rel="stylesheet")),
        "images_total": len(images),
        "images_lazy": sum(1 for img in images if (img.get("loading") or "").lower() == "lazy"),
        "images_missing_dimensions": sum(1 for img in images if not (img.get("width") and img.get("height"))),
    }
