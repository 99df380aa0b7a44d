"""
Prompt builder for ASCII-art generation.

Maps a density level to a system instruction and combines it with
the subject text into a provider-agnostic (system, user) prompt pair.
Pure and deterministic.
"""

from typing import Dict, Tuple

from .models.generation import DensityLevel


SYSTEM_PREAMBLE = """You are an ASCII art generator. Output ONLY raw ASCII art: no markdown, no code fences, no backticks, no explanation, no titles.

RULES:
1. The art must be 20-30 lines tall and 40-70 characters wide.
2. Use only printable ASCII characters (codes 32-126).
3. The subject must be clearly recognizable with correct proportions.
4. Include the subject's most distinctive features so it is instantly identifiable.
5. Left-align all lines. Do NOT add leading spaces for centering: the leftmost character of the art starts at column 0 on every line that has content.

SHADING (light to dark): . : ; + = * # @ % &
OUTLINES: / \\ | - _ ( ) < > [ ]
"""

DENSITY_STYLES: Dict[DensityLevel, str] = {
    DensityLevel.SPARSE: """
Style: clean line art with open whitespace.
- Use only structural characters: / \\ | - _ ( ) ' ` . :
- Leave large areas as blank space.
- Focus on crisp outlines and silhouettes.
- Keep interior fill minimal so the shape breathes.""",
    DensityLevel.MEDIUM: """
Style: balanced detail with shading.
- Use structural characters for edges: / \\ | - _ ( ) [ ]
- Use this brightness ramp for shading: .  :  ;  =  +  *  #  @
  (. is the lightest, @ is the darkest)
- Fill interior regions with an appropriate density.
- Create visible depth through lighter and darker zones.""",
    DensityLevel.DENSE: """
Style: maximum detail, photo-like density.
- Use the full ASCII gradient for shading:
  ` . - ' : _ , ; ! ~ + = ^ * ? / \\ | ( ) [ ] { } # % @ & $ W M
- Every character should contribute to shading or texture.
- Create smooth tonal gradients from highlights to shadows.
- Fill the entire bounding area with minimal blank space.
- Use character weight to simulate light, shadow and volume.""",
}

# Denser art spends more tokens per line.
MAX_TOKENS_BY_DENSITY: Dict[DensityLevel, int] = {
    DensityLevel.SPARSE: 2048,
    DensityLevel.MEDIUM: 3072,
    DensityLevel.DENSE: 4096,
}

USER_PROMPT_TEMPLATE = (
    "Create ASCII art of: {subject}\n\n"
    "Make it instantly recognizable. Output ONLY the ASCII art, nothing else."
)


def build_system_prompt(density: DensityLevel) -> str:
    """Return the system instruction for a density level."""
    return SYSTEM_PREAMBLE + DENSITY_STYLES[DensityLevel.parse(density)]


def build_user_prompt(subject_text: str) -> str:
    return USER_PROMPT_TEMPLATE.format(subject=subject_text)


def build_prompts(density: DensityLevel, subject_text: str) -> Tuple[str, str]:
    """
    Build the (system_prompt, user_prompt) pair for a request.

    Args:
        density: Fill density of the art
        subject_text: What to draw, already truncated

    Returns:
        Tuple of system prompt and user prompt
    """
    return build_system_prompt(density), build_user_prompt(subject_text)


def max_tokens_for(density: DensityLevel) -> int:
    """Token budget large enough for the biggest art the density allows."""
    return MAX_TOKENS_BY_DENSITY[DensityLevel.parse(density)]
