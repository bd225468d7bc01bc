"""Tests for the tool dispatcher and the tier recommendation policy."""

from __future__ import annotations

import pytest

from symphony_studio.tools.registry import (
    ENTERPRISE_REASON,
    GROWTH_REASON,
    REGISTRY,
    STARTER_REASON,
    execute,
    get_capabilities,
    get_case_studies,
    get_contact,
    get_faq,
    get_philosophy,
    get_pricing,
    get_services,
    is_not_found,
    recommend_tier,
)


class TestLookups:
    @pytest.mark.parametrize(
        "service_id", ["workflow-automation", "ai-agents", "enterprise-orchestration"],
    )
    def test_known_service_ids_resolve(self, service_id):
        assert get_services(service_id)["id"] == service_id

    @pytest.mark.parametrize("tier_id", ["prelude", "concerto", "symphony-enterprise"])
    def test_known_tier_ids_resolve(self, tier_id):
        assert get_pricing(tier_id)["id"] == tier_id

    @pytest.mark.parametrize("case_id", ["hvac-service", "agency-growth", "enterprise-ops"])
    def test_known_case_ids_resolve(self, case_id):
        assert get_case_studies(case_id)["id"] == case_id

    def test_unknown_ids_return_not_found_values(self):
        assert get_services("nope") == {"error": "Service not found"}
        assert get_pricing("platinum") == {"error": "Pricing tier not found"}
        assert get_case_studies("nope") == {"error": "Case study not found"}
        assert get_capabilities("quantum") == {"error": "Capability category not found"}

    def test_no_id_returns_full_collections(self):
        assert len(get_services()) == 3
        assert len(get_pricing()) == 3
        assert len(get_case_studies()) == 3
        assert len(get_faq()) == 10
        assert set(get_capabilities()) == {"systemIntegration", "automation", "ai", "enterprise"}

    def test_capability_category(self):
        assert "CRMs" in get_capabilities("systemIntegration")

    def test_pricing_omits_missing_structure(self):
        assert "structure" not in get_pricing("prelude")
        assert get_pricing("symphony-enterprise")["structure"]["managed"] == "$6k–$15k/month"

    def test_contact_and_philosophy(self):
        assert get_contact()["email"] == "hello@symphonystudio.io"
        philosophy = get_philosophy()
        assert len(philosophy["design_principles"]) == 5
        assert philosophy["design_principles"][0]["name"] == "Stability Before Intelligence"

    @pytest.mark.parametrize("index", [0, 4, 9])
    def test_faq_index_in_range(self, index):
        assert get_faq(index)["question"].endswith("?")

    @pytest.mark.parametrize("index", [-1, 10, 99])
    def test_faq_index_out_of_range(self, index):
        assert get_faq(index) == {"error": "FAQ not found"}

    def test_results_are_copies(self):
        first = get_services()
        first[0]["name"] = "Mutated"
        assert get_services()[0]["name"] != "Mutated"


class TestRecommendTier:
    def test_trigger_word_wins_regardless_of_complexity(self):
        result = recommend_tier(["enterprise security audit"], "low")
        assert result["recommended"] == "symphony-enterprise"
        assert result["reason"] == ENTERPRISE_REASON
        assert result["tier"]["name"] == "Symphony (Enterprise)"

    def test_trigger_is_case_insensitive(self):
        assert recommend_tier(["SOC2 COMPLIANCE"])["recommended"] == "symphony-enterprise"

    def test_high_complexity_is_top_tier(self):
        assert recommend_tier([], "high")["recommended"] == "symphony-enterprise"

    def test_medium_complexity_alone_is_middle_tier(self):
        result = recommend_tier(["a", "b"], "medium")
        assert result["recommended"] == "concerto"
        assert result["reason"] == GROWTH_REASON

    def test_more_than_two_needs_is_middle_tier(self):
        assert recommend_tier(["a", "b", "c"], "low")["recommended"] == "concerto"

    def test_otherwise_entry_tier(self):
        result = recommend_tier(["a"], "low")
        assert result["recommended"] == "prelude"
        assert result["reason"] == STARTER_REASON

    def test_no_arguments_is_entry_tier(self):
        assert recommend_tier()["recommended"] == "prelude"

    def test_includes_guidance_fit(self):
        assert "compliance" in recommend_tier(["compliance"])["fit"].lower()


class TestExecute:
    def test_registry_order(self):
        assert list(REGISTRY) == [
            "get_services",
            "get_pricing",
            "get_capabilities",
            "get_case_studies",
            "get_contact",
            "get_faq",
            "get_philosophy",
            "recommend_tier",
        ]

    def test_unknown_tool(self):
        assert execute("get_weather") == {"error": "Unknown tool"}

    def test_no_params_returns_collection(self):
        assert len(execute("get_services")) == 3

    def test_snake_case_params(self):
        assert execute("get_pricing", {"tier_id": "concerto"})["name"] == "Concerto"

    def test_legacy_camel_case_params(self):
        assert execute("get_services", {"serviceId": "ai-agents"})["id"] == "ai-agents"
        assert execute("get_case_studies", {"caseId": "agency-growth"})["id"] == "agency-growth"
        assert execute("get_faq", {"question_index": 3})["question"].startswith("Why don't")

    def test_ill_typed_params_are_ignored(self):
        assert len(execute("get_faq", {"index": "abc"})) == 10
        assert len(execute("get_services", {"service_id": 42})) == 3
        assert execute("recommend_tier", {"needs": 5})["recommended"] == "prelude"

    @pytest.mark.parametrize("index", ["--1", "²", "-", "", " ", "1_0", "+-2", "٣"])
    def test_malformed_index_strings_are_ignored(self, index):
        assert execute("get_faq", {"index": index}) == get_faq()

    def test_negative_index_string_is_not_found(self):
        assert execute("get_faq", {"index": "-1"}) == {"error": "FAQ not found"}

    def test_numeric_index_forms(self):
        assert execute("get_faq", {"index": 2.0}) == get_faq(2)
        assert execute("get_faq", {"index": "2"}) == get_faq(2)
        assert execute("get_faq", {"index": True}) == get_faq()

    def test_single_need_string(self):
        assert execute("recommend_tier", {"needs": "compliance"})["recommended"] == "symphony-enterprise"

    def test_unknown_params_ignored(self):
        assert execute("get_contact", {"whatever": 1})["cta"] == "Book a discovery call"

    def test_is_not_found(self):
        assert is_not_found({"error": "Service not found"})
        assert not is_not_found([{"error": "x", "id": 1}])
        assert not is_not_found(get_contact())
