"""Model-free answers for the discovery endpoint.

A free-text query is classified by case-insensitive substring matching
against a fixed keyword table.  Categories are independent: a query can
match several (e.g. "How much does automation cost?" hits both services
and pricing) and every matched section is rendered.  A query that matches
nothing falls back to services + FAQ so the answer is never empty.

Rendering is deterministic and uses the same light markdown the website's
chat widget understands (``**bold**`` headings and ``•`` bullets).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from symphony_studio.tools.registry import execute

logger = logging.getLogger(__name__)

# ── Keyword table ────────────────────────────────────────────────────

INTENT_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("get_services", (
        "service", "what do you do", "what does symphony", "help with",
        "automation", "ai agent", "workflow", "orchestrat",
    )),
    ("get_pricing", (
        "price", "pricing", "cost", "subscription", "tier", "package",
        "how much", "prelude", "concerto", "enterprise",
    )),
    ("get_capabilities", (
        "capabil", "integrat", "connect", "crm", "tool", "platform", "what can you",
    )),
    ("get_case_studies", (
        "case stud", "example", "client", "result", "success", "portfolio",
        "work you've done",
    )),
    ("get_contact", (
        "contact", "email", "book", "call", "reach", "get started", "talk to", "schedule",
    )),
    ("get_faq", (
        "faq", "question", "how long", "different from", "replace", "one-time", "ongoing",
    )),
    ("recommend_tier", (
        "recommend", "which tier", "which plan", "best for", "should i choose", "right for me",
    )),
    ("get_philosophy", (
        "philosophy", "approach", "principle", "how do you think", "methodology",
    )),
)

DEFAULT_INTENTS: tuple[str, ...] = ("get_services", "get_faq")

FALLBACK_RESPONSE = (
    "I'd be happy to help you learn more about Symphony Studio. You can ask "
    "about our services, pricing, capabilities, or case studies. What would "
    "you like to know?"
)

MAX_FAQ_MATCHES = 3

_WORD_RE = re.compile(r"[a-z0-9]+(?:['-][a-z0-9]+)*")

_CAPABILITY_LABELS = (
    ("systemIntegration", "System Integration"),
    ("automation", "Automation"),
    ("ai", "AI"),
    ("enterprise", "Enterprise"),
)


@dataclass(frozen=True)
class QueryAnswer:
    intents: list[str]
    response: str
    raw: dict[str, Any]


def detect_intents(query: str) -> list[str]:
    """Return the operations whose keywords appear in *query*, in table order."""
    query_lower = query.lower()
    intents = [
        name
        for name, keywords in INTENT_KEYWORDS
        if any(keyword in query_lower for keyword in keywords)
    ]
    return intents or list(DEFAULT_INTENTS)


def run_intents(intents: list[str]) -> dict[str, Any]:
    """Invoke each matched operation with no parameters."""
    return {intent: execute(intent) for intent in intents}


# ── Section renderers ────────────────────────────────────────────────


def _words(text: str) -> set[str]:
    return set(_WORD_RE.findall(text.lower()))


def _render_services(data: Any, query: str) -> list[str]:
    parts = ["**Our Services:**"]
    for service in data:
        parts.append(f"\n• **{service['name']}**: {service['description']}")
    return parts


def _render_pricing(data: Any, query: str) -> list[str]:
    parts = ["\n\n**Subscription Tiers:**"]
    for tier in data:
        parts.append(f"\n• **{tier['name']}** ({tier['price']}): Best for {tier['best_for']}")
    return parts


def _render_capabilities(data: Any, query: str) -> list[str]:
    parts = ["\n\n**Our Capabilities:**"]
    for key, label in _CAPABILITY_LABELS:
        if data.get(key):
            parts.append(f"\n• {label}: {', '.join(data[key])}")
    return parts


def _render_case_studies(data: Any, query: str) -> list[str]:
    parts = ["\n\n**Case Studies:**"]
    for study in data:
        parts.append(f"\n• **{study['title']}**: {study['problem']} → {', '.join(study['outcomes'])}")
    return parts


def _render_contact(data: Any, query: str) -> list[str]:
    return [
        "\n\n**Get in Touch:**",
        f"\nEmail: {data['email']}",
        f"\nBook a call: {data['booking']}",
    ]


def _render_faq(data: Any, query: str) -> list[str]:
    query_words = _words(query)
    relevant = [entry for entry in data if _words(entry["question"]) & query_words]
    if not relevant:
        return []
    parts = ["\n\n**Relevant FAQ:**"]
    for entry in relevant[:MAX_FAQ_MATCHES]:
        parts.append(f"\n• **{entry['question']}**\n  {entry['answer']}")
    return parts


def _render_recommendation(data: Any, query: str) -> list[str]:
    name = data.get("tier", {}).get("name", data["recommended"])
    return [
        f"\n\n**Recommendation:** Based on your needs, we'd suggest the "
        f"**{name}** tier. {data['reason']}"
    ]


def _render_philosophy(data: Any, query: str) -> list[str]:
    parts = ["\n\n**Our Philosophy:**"]
    for belief in data.get("core_beliefs", []):
        parts.append(f"\n• {belief}")
    for principle in data.get("design_principles", []):
        parts.append(f"\n• **{principle['name']}**: {principle['description']}")
    return parts


_Renderer = Callable[[Any, str], list[str]]

# (operation, expected result type, renderer) in output order
_SECTIONS: tuple[tuple[str, type, _Renderer], ...] = (
    ("get_services", list, _render_services),
    ("get_pricing", list, _render_pricing),
    ("get_capabilities", dict, _render_capabilities),
    ("get_case_studies", list, _render_case_studies),
    ("get_contact", dict, _render_contact),
    ("get_faq", list, _render_faq),
    ("recommend_tier", dict, _render_recommendation),
    ("get_philosophy", dict, _render_philosophy),
)


def format_response(query: str, results: dict[str, Any]) -> str:
    """Render *results* into one text block, sections in a fixed order."""
    parts: list[str] = []
    for name, expected, render in _SECTIONS:
        data = results.get(name)
        if not data or not isinstance(data, expected) or "error" in data:
            continue
        parts.extend(render(data, query))

    if not parts:
        return FALLBACK_RESPONSE
    return "".join(parts).lstrip("\n")


def answer_query(query: str) -> QueryAnswer:
    """Classify *query*, run the matched operations and render the answer."""
    intents = detect_intents(query)
    raw = run_intents(intents)
    response = format_response(query, raw)
    logger.info("Query %r matched intents %s", query[:120], intents)
    return QueryAnswer(intents=intents, response=response, raw=raw)
