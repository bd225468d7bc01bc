"""Tool dispatcher: the fixed set of named operations over the studio catalog.

Both the tool-calling loop (through the LangChain wrappers in
``tools/studio.py``) and the discovery endpoint call into this module, so
the two surfaces always see identical data.

Every operation is total.  An unknown id produces a structured
``{"error": "<Entity> not found"}`` value instead of an exception, because
a missing record is a valid answer to a visitor's question.  Results are
plain JSON-ready dicts and lists, freshly dumped from the frozen catalog on
every call.
"""

from __future__ import annotations

import logging
import re
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from symphony_studio.catalog import get_catalog
from symphony_studio.services.metrics import metrics

logger = logging.getLogger(__name__)

UNKNOWN_TOOL = {"error": "Unknown tool"}

# Rationales returned with each recommendation
ENTERPRISE_REASON = "Enterprise environments with security/compliance needs require custom discovery"
GROWTH_REASON = "Multiple workflows and growing complexity fits Concerto"
STARTER_REASON = "Simple workflows and small teams fit Prelude"

_ENTERPRISE_TRIGGERS = ("security", "compliance", "enterprise")

_INTEGER_RE = re.compile(r"-?[0-9]+")


def _not_found(entity: str) -> dict[str, str]:
    return {"error": f"{entity} not found"}


def is_not_found(result: Any) -> bool:
    """True if *result* is a structured not-found / unknown-tool value."""
    return isinstance(result, dict) and set(result) == {"error"}


# ── Operations ───────────────────────────────────────────────────────


def get_services(service_id: str | None = None) -> Any:
    catalog = get_catalog()
    if service_id:
        service = catalog.find_service(service_id)
        return service.model_dump() if service else _not_found("Service")
    return [s.model_dump() for s in catalog.services]


def get_pricing(tier_id: str | None = None) -> Any:
    catalog = get_catalog()
    if tier_id:
        tier = catalog.find_tier(tier_id)
        return tier.model_dump(exclude_none=True) if tier else _not_found("Pricing tier")
    return [t.model_dump(exclude_none=True) for t in catalog.pricing]


def get_capabilities(category: str | None = None) -> Any:
    capabilities = get_catalog().capabilities
    if category:
        if category not in capabilities:
            return _not_found("Capability category")
        return list(capabilities[category])
    return {name: list(items) for name, items in capabilities.items()}


def get_case_studies(case_id: str | None = None) -> Any:
    catalog = get_catalog()
    if case_id:
        study = catalog.find_case_study(case_id)
        return study.model_dump() if study else _not_found("Case study")
    return [c.model_dump() for c in catalog.case_studies]


def get_contact() -> dict[str, Any]:
    return get_catalog().contact.model_dump()


def get_faq(index: int | None = None) -> Any:
    faq = get_catalog().faq
    if index is not None:
        # Negative positions are not-found, not Python's from-the-end indexing
        if 0 <= index < len(faq):
            return faq[index].model_dump()
        return _not_found("FAQ")
    return [entry.model_dump() for entry in faq]


def get_philosophy() -> dict[str, Any]:
    return get_catalog().philosophy.model_dump()


def recommend_tier(needs: list[str] | None = None, complexity: str | None = None) -> dict[str, Any]:
    """Pick a pricing tier.  Rules are checked in strict priority order:

    1. any need mentions security, compliance or enterprise, or
       complexity is "high" → top tier;
    2. complexity is "medium" or more than two needs → middle tier;
    3. otherwise → entry tier.
    """
    catalog = get_catalog()
    needs = needs or []
    rationale = catalog.guidance.tier_recommendation

    if complexity == "high" or any(
        trigger in need.lower() for need in needs for trigger in _ENTERPRISE_TRIGGERS
    ):
        tier, reason, fit = catalog.top_tier, ENTERPRISE_REASON, rationale.get("enterprise", "")
    elif complexity == "medium" or len(needs) > 2:
        tier, reason, fit = catalog.middle_tier, GROWTH_REASON, rationale.get("concerto", "")
    else:
        tier, reason, fit = catalog.entry_tier, STARTER_REASON, rationale.get("prelude", "")

    return {
        "recommended": tier.id,
        "reason": reason,
        "fit": fit,
        "tier": tier.model_dump(exclude_none=True),
    }


# ── Parameter coercion ───────────────────────────────────────────────


def _param(params: Mapping[str, Any], *names: str) -> Any:
    """First non-None value among *names* (snake_case first, then legacy aliases)."""
    for name in names:
        value = params.get(name)
        if value is not None:
            return value
    return None


def _str_param(params: Mapping[str, Any], *names: str) -> str | None:
    value = _param(params, *names)
    return value if isinstance(value, str) else None


def _index_param(params: Mapping[str, Any], *names: str) -> int | None:
    value = _param(params, *names)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _INTEGER_RE.fullmatch(value.strip()):
        return int(value)
    return None


def _needs_param(params: Mapping[str, Any]) -> list[str]:
    value = params.get("needs")
    if isinstance(value, str):
        return [value]
    if isinstance(value, list | tuple):
        return [str(item) for item in value]
    return []


# ── Registry ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    handler: Callable[[Mapping[str, Any]], Any]


REGISTRY: Mapping[str, ToolSpec] = MappingProxyType({
    spec.name: spec
    for spec in (
        ToolSpec(
            "get_services",
            "Get information about Symphony Studio's services",
            lambda p: get_services(_str_param(p, "service_id", "serviceId")),
        ),
        ToolSpec(
            "get_pricing",
            "Get pricing information and subscription tiers",
            lambda p: get_pricing(_str_param(p, "tier_id", "tierId")),
        ),
        ToolSpec(
            "get_capabilities",
            "Get technical capabilities and what Symphony can integrate with",
            lambda p: get_capabilities(_str_param(p, "category")),
        ),
        ToolSpec(
            "get_case_studies",
            "Get anonymized case studies showing real results",
            lambda p: get_case_studies(_str_param(p, "case_id", "caseId")),
        ),
        ToolSpec(
            "get_contact",
            "Get contact information and booking details",
            lambda p: get_contact(),
        ),
        ToolSpec(
            "get_faq",
            "Get frequently asked questions and answers",
            lambda p: get_faq(_index_param(p, "index", "question_index")),
        ),
        ToolSpec(
            "get_philosophy",
            "Get Symphony Studio's design philosophy and principles",
            lambda p: get_philosophy(),
        ),
        ToolSpec(
            "recommend_tier",
            "Get a tier recommendation based on needs and complexity",
            lambda p: recommend_tier(_needs_param(p), _str_param(p, "complexity")),
        ),
    )
})


def execute(name: str, params: Mapping[str, Any] | None = None) -> Any:
    """Run the operation *name* with *params*.  Never raises for bad input."""
    spec = REGISTRY.get(name)
    if spec is None:
        logger.warning("Unknown tool requested: %r", name)
        metrics.record_tool_call(str(name), found=False)
        return dict(UNKNOWN_TOOL)

    t0 = time.perf_counter()
    result = spec.handler(params or {})
    elapsed = (time.perf_counter() - t0) * 1000
    metrics.record_tool_call(name, found=not is_not_found(result), latency_ms=elapsed)
    logger.debug("Tool %s(%s) done in %.2fms", name, dict(params or {}), elapsed)
    return result
