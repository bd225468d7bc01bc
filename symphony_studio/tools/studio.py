"""LangChain tools exposing the studio catalog to the model.

Each tool is a thin wrapper around ``registry.execute`` and returns the
result serialised as JSON, which the model reads as the ``tool_result``
content.  The docstrings double as the tool descriptions the model sees.
"""

from __future__ import annotations

import json

from langchain_core.tools import tool

from symphony_studio.tools.registry import execute


def _run(name: str, **params) -> str:
    return json.dumps(execute(name, params), ensure_ascii=False)


@tool
def get_services(service_id: str | None = None) -> str:
    """Get information about Symphony Studio's services: workflow automation,
    AI agents, and enterprise orchestration.

    Args:
        service_id: Optional specific service ID
                    (workflow-automation, ai-agents, enterprise-orchestration).
    """
    return _run("get_services", service_id=service_id)


@tool
def get_pricing(tier_id: str | None = None) -> str:
    """Get pricing information and subscription tiers (Prelude, Concerto,
    Symphony Enterprise).

    Args:
        tier_id: Optional specific tier ID (prelude, concerto, symphony-enterprise).
    """
    return _run("get_pricing", tier_id=tier_id)


@tool
def get_capabilities(category: str | None = None) -> str:
    """Get technical capabilities including system integrations, automation
    features, AI capabilities, and enterprise features.

    Args:
        category: Optional category (systemIntegration, automation, ai, enterprise).
    """
    return _run("get_capabilities", category=category)


@tool
def get_case_studies(case_id: str | None = None) -> str:
    """Get anonymized case studies showing real client results.

    Args:
        case_id: Optional specific case ID (hvac-service, agency-growth, enterprise-ops).
    """
    return _run("get_case_studies", case_id=case_id)


@tool
def get_contact() -> str:
    """Get contact information including email, booking link, and location."""
    return _run("get_contact")


@tool
def get_faq(index: int | None = None) -> str:
    """Get frequently asked questions and answers about Symphony Studio.

    Args:
        index: Optional specific FAQ position (0-9).
    """
    return _run("get_faq", index=index)


@tool
def get_philosophy() -> str:
    """Get Symphony Studio's design philosophy: core beliefs, design
    principles, what makes a good automation candidate, and risk stance."""
    return _run("get_philosophy")


@tool
def recommend_tier(needs: list[str] | None = None, complexity: str | None = None) -> str:
    """Get a tier recommendation based on the client's needs and complexity.

    Args:
        needs: List of client needs or requirements.
        complexity: Complexity level (low, medium, high).
    """
    return _run("recommend_tier", needs=needs, complexity=complexity)


ALL_TOOLS = [
    get_services,
    get_pricing,
    get_capabilities,
    get_case_studies,
    get_contact,
    get_faq,
    get_philosophy,
    recommend_tier,
]

TOOLS_BY_NAME = {t.name: t for t in ALL_TOOLS}
