"""
Audit Prompts

Persona instructions for each audit category and the JSON output contract
shared by all of them.
"""

from typing import NamedTuple, Optional


ANALYSIS_PROMPTS = {
    "general": """You are a world-class UI/UX Designer. Analyze this website screenshot and evaluate:
- Overall visual aesthetics and design quality
- Layout and visual hierarchy
- Typography and readability
- Color scheme effectiveness
- User experience and usability
- First impression impact

Provide a comprehensive analysis.""",

    "accessibility": """You are a WCAG accessibility expert. Analyze this website screenshot for:
- Color contrast ratios (text vs background)
- Button and touch target sizes
- Visual clarity for screen readers
- Font sizes and readability
- Accessible color combinations
- Inclusive design patterns

Focus on visual accessibility issues.""",

    "conversion": """You are a Conversion Rate Optimization (CRO) expert. Analyze this website for:
- Call-to-action (CTA) visibility and effectiveness
- Trust signals and social proof
- User friction points
- Value proposition clarity
- Visual persuasion elements
- Conversion funnel clarity

Identify barriers to conversion.""",

    "performance": """You are a web performance expert. Analyze this screenshot for visual indicators of:
- Image optimization opportunities
- Perceived load performance
- Layout shift indicators
- Above-the-fold optimization
- Visual weight and bloat
- Mobile performance considerations

Focus on visual performance signals.""",

    "seo": """You are an SEO expert. Analyze this screenshot for visible on-page SEO elements:
- Heading structure and hierarchy (H1-H6)
- Content organization and scannability
- Visual content structure
- Keyword prominence
- Meta content visibility
- User engagement elements

Focus on visually detectable SEO factors.""",

    "mobile-first": """You are a mobile UX specialist. Analyze this screenshot for:
- Mobile-first design principles
- Touch-friendly interface elements
- Responsive design patterns
- Mobile navigation effectiveness
- Thumb-friendly zones
- Screen real estate usage

Evaluate mobile user experience.""",

    "brand-consistency": """You are a brand identity expert. Analyze this screenshot for:
- Color palette consistency and harmony
- Typography hierarchy and selection
- Visual brand elements
- Design system consistency
- Brand personality expression
- Visual coherence

Extract color palette and evaluate brand design.""",
}

OUTPUT_SCHEMA_DESCRIPTION = """Output a strict JSON object with this exact structure:
{
  "score": <number 1-10>,
  "summary": "<brief overall assessment>",
  "color_palette": ["#RRGGBB", "#RRGGBB", "#RRGGBB"],
  "design_flaws": ["flaw 1", "flaw 2", ...],
  "positive_aspects": ["positive 1", "positive 2", ...],
  "recommendations": ["recommendation 1", "recommendation 2", ...]
}

Rules:
- "score" is a number from 1 (poor) to 10 (excellent)
- "design_flaws", "positive_aspects" and "recommendations" are lists of short strings
- "color_palette" entries are hex colors in #RRGGBB form
- Return only the JSON object, no markdown and no extra keys"""


class Prompt(NamedTuple):
    """Instruction for one category plus the shared output contract."""

    instruction: str
    output_schema_description: str

    def system_text(self) -> str:
        """System message for the chat-completion shape."""
        return f"{self.instruction}\n\n{self.output_schema_description}"

    def user_text(self, category: str, url: str) -> str:
        return f"Analyze this {category} audit for: {url}"

    def combined_text(self, category: str, url: str) -> str:
        """Single prompt string for the native-vision shape."""
        return (
            f"{self.instruction}\n\n"
            f"{self.user_text(category, url)}\n\n"
            f"{self.output_schema_description}"
        )


def build_prompt(category: Optional[str]) -> Prompt:
    """
    Build the prompt for an audit category.

    Unknown categories (and None) use the "general" instruction.

    Example:
        prompt = build_prompt("seo")
        messages = [{"role": "system", "content": prompt.system_text()}]
    """
    instruction = ANALYSIS_PROMPTS.get(category or "general", ANALYSIS_PROMPTS["general"])
    return Prompt(instruction=instruction, output_schema_description=OUTPUT_SCHEMA_DESCRIPTION)
