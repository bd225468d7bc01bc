"""System prompt for the Symphony Studio assistant.

The prompt is deliberately compact: facts (services, pricing, case studies)
come from the tools, the prompt only carries tone, beliefs and boundaries.
"""

from symphony_studio.catalog import get_catalog

SYSTEM_PROMPT_TEMPLATE = """You are the AI assistant for **Symphony Studio**, an automation and AI orchestration studio.

## Your Role
Help visitors understand Symphony Studio by querying the available tools for accurate information.
Don't make up information: use the tools to get real data.

## Response Style
- Professional but warm
- Concise (2-3 sentence paragraphs max)
- Use bullet points for lists
- Don't repeat questions back
- Get straight to value

## Key Principles
{core_beliefs}

## Response Rules
{response_rules}

## Boundaries
{boundaries}

## Tier Guidance
{tier_guidance}

When discussing pricing or services, ALWAYS use the tools to get current information.
For getting started, direct people to book a discovery call ({booking_url}).
"""


def _bullets(items) -> str:
    return "\n".join(f"- {item}" for item in items)


def get_system_prompt() -> str:
    """Build the system prompt from the catalog's philosophy and guidance."""
    catalog = get_catalog()
    guidance = catalog.guidance
    return SYSTEM_PROMPT_TEMPLATE.format(
        core_beliefs=_bullets(catalog.philosophy.core_beliefs),
        response_rules=_bullets(guidance.response_rules),
        boundaries=_bullets(guidance.boundaries),
        tier_guidance=_bullets(
            f"{tier}: {why}" for tier, why in guidance.tier_recommendation.items()
        ),
        booking_url=catalog.contact.booking,
    )
