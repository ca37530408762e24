"""
Prompt templates for each style preset.
All prompts are sent alongside the user's photo as the reference image.
"""

from ghibli_art.models.generation import Style

STYLE_PROMPTS: dict[Style, str] = {
    Style.INSPIRED: (
        "A person in Studio Ghibli inspired style. Hand-drawn anime look, vibrant colors, "
        "whimsical atmosphere, detailed background, warm lighting, and expressive character design."
    ),
    Style.SOFT_PASTEL: (
        "A person in Studio Ghibli soft pastel style. Dreamlike atmosphere, gentle pastel colors, "
        "soft shading, warm glow, delicate hand-drawn lines, and tender expressions."
    ),
    Style.FILMIC: (
        "A person in Studio Ghibli cinematic film style. Cinematic composition, deep contrast, "
        "rich lighting, painterly textures, emotional tone, and dramatic atmosphere."
    ),
}

# Used once if the primary prompt fails
FALLBACK_PROMPT = (
    "Redraw the person in this photo as a hand-drawn anime illustration "
    "with soft colors and a simple background."
)


def resolve_prompt(style: Style, override: str | None = None) -> str:
    """Primary prompt for a request: a non-blank override replaces the style template."""
    if override and override.strip():
        return override.strip()
    return STYLE_PROMPTS.get(style, STYLE_PROMPTS[Style.default()])
