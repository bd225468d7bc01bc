"""Studio catalog: the single source of truth for everything the assistant says.

Loads ``data/studio_data.json`` once at import time and validates it into
frozen Pydantic records.  The dataset is small (a few KB) and never changes
while the process is running, so there is no caching or reload logic.

A malformed dataset (duplicate ids, wrong number of pricing tiers, unknown
capability categories) fails the import with a ``ValidationError`` rather
than surfacing later as a confusing lookup result.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, model_validator

logger = logging.getLogger(__name__)

_DATA_PATH = Path(__file__).resolve().parent / "data" / "studio_data.json"

CAPABILITY_CATEGORIES: tuple[str, ...] = ("systemIntegration", "automation", "ai", "enterprise")
# entry → middle → top; recommend_tier picks by position
TIER_IDS: tuple[str, ...] = ("prelude", "concerto", "symphony-enterprise")


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# ── Records ──────────────────────────────────────────────────────────


class Service(_Record):
    id: str
    name: str
    description: str
    solves: tuple[str, ...] = ()
    examples: tuple[str, ...] = ()


class CostStructure(_Record):
    """Enterprise engagements are quoted in three phases."""

    discovery: str
    build: str
    managed: str


class PricingTier(_Record):
    id: str
    name: str
    price: str
    best_for: str
    includes: tuple[str, ...] = ()
    outcomes: tuple[str, ...] = ()
    structure: CostStructure | None = None


class CaseStudy(_Record):
    id: str
    title: str
    client_type: str
    problem: str
    solution: tuple[str, ...] = ()
    outcomes: tuple[str, ...] = ()


class ContactInfo(_Record):
    email: str
    booking: str
    location: str
    cta: str


class FaqEntry(_Record):
    question: str
    answer: str


class DesignPrinciple(_Record):
    name: str
    description: str


class AutomationCriteria(_Record):
    good_candidates: tuple[str, ...] = ()
    bad_candidates: tuple[str, ...] = ()


class Philosophy(_Record):
    core_beliefs: tuple[str, ...]
    design_principles: tuple[DesignPrinciple, ...]
    automation_criteria: AutomationCriteria
    risk_philosophy: tuple[str, ...]


class Guidance(_Record):
    response_rules: tuple[str, ...]
    boundaries: tuple[str, ...]
    # tier key ("prelude", "concerto", "enterprise") → rationale
    tier_recommendation: dict[str, str]


def _ensure_unique_ids(kind: str, records: tuple[BaseModel, ...]) -> None:
    seen: set[str] = set()
    for record in records:
        if record.id in seen:
            raise ValueError(f"Duplicate {kind} id: {record.id!r}")
        seen.add(record.id)


class StudioCatalog(_Record):
    """The whole dataset.  Tiers are ordered entry → middle → top."""

    services: tuple[Service, ...]
    pricing: tuple[PricingTier, ...]
    capabilities: dict[str, tuple[str, ...]]
    case_studies: tuple[CaseStudy, ...]
    contact: ContactInfo
    faq: tuple[FaqEntry, ...]
    philosophy: Philosophy
    guidance: Guidance

    @model_validator(mode="after")
    def _check_invariants(self) -> StudioCatalog:
        _ensure_unique_ids("service", self.services)
        _ensure_unique_ids("pricing tier", self.pricing)
        _ensure_unique_ids("case study", self.case_studies)
        if len(self.pricing) != len(TIER_IDS):
            raise ValueError(
                f"Expected exactly {len(TIER_IDS)} pricing tiers, got {len(self.pricing)}"
            )
        tier_ids = tuple(t.id for t in self.pricing)
        if tier_ids != TIER_IDS:
            raise ValueError(f"Pricing tiers must be ordered {TIER_IDS}, got {tier_ids}")
        if set(self.capabilities) != set(CAPABILITY_CATEGORIES):
            raise ValueError(
                f"Capability categories must be {CAPABILITY_CATEGORIES}, "
                f"got {tuple(self.capabilities)}"
            )
        return self

    # ── Plain retrieval ──────────────────────────────────────────────

    def find_service(self, service_id: str) -> Service | None:
        return next((s for s in self.services if s.id == service_id), None)

    def find_tier(self, tier_id: str) -> PricingTier | None:
        return next((t for t in self.pricing if t.id == tier_id), None)

    def find_case_study(self, case_id: str) -> CaseStudy | None:
        return next((c for c in self.case_studies if c.id == case_id), None)

    @property
    def entry_tier(self) -> PricingTier:
        return self.pricing[0]

    @property
    def middle_tier(self) -> PricingTier:
        return self.pricing[1]

    @property
    def top_tier(self) -> PricingTier:
        return self.pricing[-1]


def load_catalog(path: Path = _DATA_PATH) -> StudioCatalog:
    """Read and validate the catalog JSON at *path*."""
    catalog = StudioCatalog.model_validate_json(path.read_text(encoding="utf-8"))
    logger.debug(
        "Catalog loaded from %s: %d services, %d tiers, %d case studies, %d FAQ entries",
        path.name, len(catalog.services), len(catalog.pricing),
        len(catalog.case_studies), len(catalog.faq),
    )
    return catalog


# Pre-load at import time
_CATALOG: StudioCatalog = load_catalog()


def get_catalog() -> StudioCatalog:
    """Return the process-wide catalog."""
    return _CATALOG
