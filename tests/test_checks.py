"""
Tests for the heuristic HTML checks.
"""
import unittest

import pytest

from design_auditor.checks import (
    check_accessibility,
    check_content,
    check_conversion,
    check_mobile,
    check_performance,
    check_seo,
    collect_signals,
    detect_technologies,
    score_page,
    technology_stack,
)
from design_auditor.checks.scoring import SCORE_AREAS
from design_auditor.checks.technologies import detect_fonts


pytestmark = pytest.mark.unit

WORDPRESS_PAGE = """<!DOCTYPE html>
<html>
<head>
  <title>  Acme &amp; Co |  Home </title>
  <meta name="description" content="We build rockets.">
  <link rel="stylesheet" href="/wp-content/themes/acme/style.css">
  <script src="/wp-includes/js/jquery/jquery.min.js"></script>
  <script async src="https://www.googletagmanager.com/gtm.js?id=GTM-ABC123"></script>
  <style>.hero { color: red; }</style>
</head>
<body>
  <h1>Rockets for everyone</h1>
  <h1>Second heading</h1>
  <img src="a.png" alt="A rocket">
  <img src="b.png" alt="">
  <img src="c.png">
  <p>Fast reliable rockets</p>
  <script>var hidden = "words";</script>
</body>
</html>"""

GOOD_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <title>Acme Rockets | Reliable launches</title>
  <meta name="description" content="Rockets for everyone.">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <link rel="canonical" href="https://acme.test/">
</head>
<body>
<main>
  <h1>Rockets for everyone</h1>
  <p>%s</p>
  <h2>Why Acme</h2>
  <ul><li>Fast</li></ul>
  <img src="rocket.png" alt="A rocket" width="640" height="480">
  <a href="/signup" class="btn">Get started</a>
  <form>
    <label for="email">Email</label><input id="email" type="email">
    <button>Subscribe</button>
  </form>
</main>
</body>
</html>""" % " ".join(["rocket"] * 320)


class TestDetectTechnologies(unittest.TestCase):
    """Test cases for detect_technologies()."""

    def test_wordpress_page(self):
        technologies = detect_technologies(WORDPRESS_PAGE)
        self.assertEqual(technologies, ["WordPress", "jQuery", "Google Tag Manager"])

    def test_nextjs_implies_react(self):
        html = '<div id="__next"></div><script src="/_next/static/chunks/main.js"></script>'
        technologies = detect_technologies(html)
        self.assertIn("Next.js", technologies)
        self.assertIn("React", technologies)

    def test_generator_meta(self):
        html = '<meta name="generator" content="WordPress 6.4.2">'
        self.assertEqual(detect_technologies(html), ["WordPress"])

    def test_tailwind_utility_classes(self):
        html = '<div class="px-4 bg-blue-500 text-white">Hi</div>'
        self.assertEqual(detect_technologies(html), ["Tailwind CSS"])

    def test_technology_names_in_prose_are_ignored(self):
        html = "<p>We moved our blog off WordPress and dropped jQuery.min.js last year.</p>"
        self.assertEqual(detect_technologies(html), [])

    def test_empty_html(self):
        self.assertEqual(detect_technologies(""), [])
        self.assertEqual(detect_technologies("<html><body>plain</body></html>"), [])


class TestTechnologyStack(unittest.TestCase):
    """Test cases for technology_stack() and detect_fonts()."""

    def test_grouped_by_role(self):
        html = WORDPRESS_PAGE.replace(
            "</head>",
            '<link rel="stylesheet" href="https://fonts.googleapis.com/css2?family=Open+Sans:wght@400;700'
            '&amp;family=Roboto&amp;display=swap"></head>',
        )
        stack = technology_stack(html)
        self.assertEqual(stack, {
            "cms": "WordPress",
            "ecommerce": None,
            "frontend_framework": None,
            "javascript_libraries": ["jQuery"],
            "css_framework": None,
            "analytics": ["Google Tag Manager"],
            "fonts": ["Open Sans", "Roboto"],
        })

    def test_legacy_google_fonts_and_typekit(self):
        html = (
            '<link rel="stylesheet" href="https://fonts.googleapis.com/css?family=Roboto|Lato:400,700">'
            '<link rel="stylesheet" href="https://use.typekit.net/abc1234.css">'
        )
        self.assertEqual(detect_fonts(html), ["Roboto", "Lato", "Adobe Fonts"])

    def test_empty_page(self):
        stack = technology_stack("")
        self.assertIsNone(stack["cms"])
        self.assertEqual(stack["analytics"], [])
        self.assertEqual(stack["fonts"], [])


class TestCheckSeo(unittest.TestCase):
    """Test cases for check_seo()."""

    def test_signals(self):
        seo = check_seo(WORDPRESS_PAGE)
        self.assertEqual(seo["title"], "Acme & Co | Home")
        self.assertEqual(seo["title_length"], len("Acme & Co | Home"))
        self.assertTrue(seo["has_meta_description"])
        self.assertFalse(seo["has_canonical"])
        self.assertEqual(seo["h1_count"], 2)
        self.assertEqual(seo["images_total"], 3)
        self.assertEqual(seo["images_missing_alt"], 2)

    def test_data_alt_is_not_alt_text(self):
        seo = check_seo('<img src="a.png" data-alt="decorative">')
        self.assertEqual(seo["images_missing_alt"], 1)

    def test_headings_in_comments_are_not_counted(self):
        seo = check_seo("<!-- <h1>Old hero</h1> --><h1>Real</h1>")
        self.assertEqual(seo["h1_count"], 1)

    def test_headings_in_scripts_and_templates_are_not_counted(self):
        seo = check_seo('<script>var t = "<h1>tpl</h1>";</script><template><h1>Later</h1></template><h1>Real</h1>')
        self.assertEqual(seo["h1_count"], 1)

    def test_script_and_style_text_is_not_counted(self):
        seo = check_seo("<html><body><p>one two three</p><script>four five</script><style>six</style></body></html>")
        self.assertEqual(seo["word_count"], 3)

    def test_empty_meta_description_does_not_count(self):
        seo = check_seo('<meta name="description" content="  ">')
        self.assertFalse(seo["has_meta_description"])

    def test_missing_everything(self):
        seo = check_seo("")
        self.assertEqual(seo["title"], "")
        self.assertFalse(seo["has_meta_description"])
        self.assertEqual(seo["h1_count"], 0)
        self.assertEqual(seo["word_count"], 0)


class TestCheckPerformance(unittest.TestCase):
    """Test cases for check_performance()."""

    def test_resource_counts(self):
        html = (
            "<html><head>"
            '<script src="/app.js"></script>'
            '<script src="/analytics.js" async></script>'
            '<script type="module" src="/mod.js"></script>'
            '<link rel="stylesheet" href="/a.css">'
            "</head><body>"
            "<script>window.x = 1;</script>"
            '<script src="/footer.js"></script>'
            '<img src="a.png" width="10" height="10" loading="lazy">'
            '<img src="b.png">'
            "</body></html>"
        )
        performance = check_performance(html)
        self.assertEqual(performance["scripts_external"], 4)
        self.assertEqual(performance["scripts_inline"], 1)
        self.assertEqual(performance["render_blocking_scripts"], 1)
        self.assertEqual(performance["stylesheets"], 1)
        self.assertEqual(performance["images_total"], 2)
        self.assertEqual(performance["images_lazy"], 1)
        self.assertEqual(performance["images_missing_dimensions"], 1)
        self.assertEqual(performance["dom_elements"], 11)
        self.assertGreater(performance["html_kb"], 0)


class TestCheckAccessibility(unittest.TestCase):
    """Test cases for check_accessibility()."""

    def test_signals(self):
        html = """<html lang="en"><body><main>
            <img src="a.png">
            <label for="email">Email</label><input id="email" type="email">
            <label>Name <input type="text"></label>
            <input type="text" name="q">
            <input type="hidden" name="token">
            <input type="search" aria-label="Search">
            <button></button>
            <button aria-label="Close"></button>
            <a href="/home"><img src="i.png" alt="Home"></a>
            <a href="/empty"></a>
        </main></body></html>"""
        accessibility = check_accessibility(html)
        self.assertTrue(accessibility["has_lang"])
        self.assertTrue(accessibility["has_main_landmark"])
        self.assertEqual(accessibility["images_missing_alt"], 1)
        self.assertEqual(accessibility["form_fields"], 4)
        self.assertEqual(accessibility["form_fields_missing_label"], 1)
        self.assertEqual(accessibility["controls_missing_name"], 2)

    def test_missing_lang_and_landmark(self):
        accessibility = check_accessibility("<html><body><p>Hi</p></body></html>")
        self.assertFalse(accessibility["has_lang"])
        self.assertFalse(accessibility["has_main_landmark"])


class TestCheckMobile(unittest.TestCase):
    """Test cases for check_mobile()."""

    def test_signals(self):
        html = (
            '<head><meta name="viewport" content="width=device-width, initial-scale=1, maximum-scale=1"></head>'
            '<body><div style="width: 960px">x</div><div style="max-width: 960px">y</div>'
            '<img src="a.png" srcset="a2.png 2x"><picture><img src="b.png"></picture></body>'
        )
        mobile = check_mobile(html)
        self.assertTrue(mobile["has_viewport_meta"])
        self.assertTrue(mobile["zoom_disabled"])
        self.assertEqual(mobile["fixed_width_elements"], 1)
        self.assertEqual(mobile["images_total"], 2)
        self.assertEqual(mobile["responsive_images"], 2)

    def test_no_viewport_meta(self):
        mobile = check_mobile("<body><p>Desktop only</p></body>")
        self.assertFalse(mobile["has_viewport_meta"])
        self.assertFalse(mobile["zoom_disabled"])


class TestCheckContent(unittest.TestCase):
    """Test cases for check_content()."""

    def test_structure(self):
        html = (
            "<body><h1>Title</h1><p>one two</p><h2>Sub</h2><h4>Deep</h4><p></p>"
            "<ul><li>a</li></ul><ol><li>b</li></ol></body>"
        )
        content = check_content(html)
        self.assertEqual(content["word_count"], 7)
        self.assertEqual(content["paragraph_count"], 1)
        self.assertEqual(content["heading_count"], 3)
        self.assertEqual(content["heading_depth"], 4)
        self.assertEqual(content["heading_skips"], 1)
        self.assertEqual(content["list_count"], 2)


class TestCheckConversion(unittest.TestCase):
    """Test cases for check_conversion()."""

    def test_signals(self):
        html = """<body>
            <a href="/signup">Sign up free</a>
            <a href="/pricing" class="btn btn-primary">Pricing</a>
            <a href="/about">About us</a>
            <a href="tel:+15550100">Call</a>
            <form><input type="email" name="e"><input type="submit" value="Go"></form>
            <button>Menu</button>
            <div role="button">Open</div>
        </body>"""
        conversion = check_conversion(html)
        self.assertEqual(conversion["buttons"], 3)
        self.assertEqual(conversion["cta_links"], 2)
        self.assertEqual(conversion["forms"], 1)
        self.assertEqual(conversion["email_fields"], 1)
        self.assertEqual(conversion["phone_links"], 1)


class TestScorePage(unittest.TestCase):
    """Test cases for score_page() and collect_signals()."""

    def test_well_built_page_scores_full_marks(self):
        signals = collect_signals(GOOD_PAGE)
        self.assertEqual(signals.scores, {area: 10.0 for area in SCORE_AREAS})

    def test_empty_page(self):
        signals = collect_signals("")
        self.assertEqual(signals.scores, {
            "performance": 10.0,
            "accessibility": 7.0,
            "mobile": 6.0,
            "seo": 2.0,
            "content": 2.0,
            "conversion": 4.0,
        })

    def test_scores_are_clamped_to_zero(self):
        signals = collect_signals("")
        metrics = {area: getattr(signals, area) for area in SCORE_AREAS}
        metrics["accessibility"] = {
            **metrics["accessibility"],
            "images_missing_alt": 100,
            "form_fields_missing_label": 10,
            "controls_missing_name": 10,
        }
        self.assertEqual(score_page(metrics)["accessibility"], 0.0)

    def test_bundles_every_check(self):
        signals = collect_signals(WORDPRESS_PAGE)
        self.assertIn("WordPress", signals.technologies)
        self.assertEqual(signals.technology_stack["cms"], "WordPress")
        self.assertEqual(signals.seo["h1_count"], 2)
        self.assertEqual(signals.accessibility["images_missing_alt"], 2)
        self.assertEqual(set(signals.scores), set(SCORE_AREAS))
        for score in signals.scores.values():
            self.assertGreaterEqual(score, 0)
            self.assertLessEqual(score, 10)
