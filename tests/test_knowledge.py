"""Static knowledge base lookups."""

import pytest

from appraiser.knowledge.domain_prompts import ENHANCED_DOMAIN_PROMPTS
from appraiser.knowledge.famous import check_for_famous_item
from appraiser.knowledge.lookup import (
    get_authentication_criteria,
    get_enhanced_domain_prompt,
    get_identification_pattern,
    get_maker_by_name,
    get_value_range,
    has_enhanced_domain_prompt,
    makers_for_category,
    patterns_for_category,
)
from appraiser.knowledge.makers import MAKER_MARKS
from appraiser.knowledge.patterns import IDENTIFICATION_PATTERNS


class TestMakerLookup:

    def test_needle_in_maker(self):
        assert get_maker_by_name("roseville").maker == "Roseville Pottery"

    def test_maker_in_needle(self):
        assert get_maker_by_name("Roseville Pottery Company, Zanesville").maker == "Roseville Pottery"

    def test_first_in_table_wins(self):
        # both Tiffany & Co. and Tiffany Studios match
        assert get_maker_by_name("Tiffany").maker == "Tiffany & Co."

    @pytest.mark.parametrize("name", ["", None])
    def test_empty_name(self, name):
        assert get_maker_by_name(name) is None

    def test_unknown(self):
        assert get_maker_by_name("Acme Widgets") is None


class TestPatternLookup:

    def test_exact_category_required(self):
        assert get_identification_pattern("watches", "Rolex Submariner 5513").item_type == "Rolex Submariner"
        assert get_identification_pattern("jewelry", "Rolex Submariner 5513") is None

    def test_first_word_heuristic_is_loose(self):
        pattern = get_identification_pattern("furniture", "eames-style molded chair")
        assert pattern.item_type == "Eames Lounge Chair"

    def test_no_match(self):
        assert get_identification_pattern("ceramics", "Roseville Pinecone vase") is None


def test_authentication_criteria_checkpoints():
    criteria = get_authentication_criteria("furniture")
    assert criteria is not None
    assert len(criteria.checkpoints) >= 3
    assert all(1 <= c.weight <= 10 for c in criteria.checkpoints)
    assert get_authentication_criteria("vehicles") is None


def test_value_range_uses_first_word():
    value_range = get_value_range("ceramics", "Rookwood Standard Glaze vase")
    assert value_range.item_type == "Rookwood Pottery Vase"
    assert value_range.conditions
    assert get_value_range("furniture", "Rookwood Standard Glaze vase") is None


class TestDomainPrompts:

    def test_known_domain(self):
        assert has_enhanced_domain_prompt("ceramics")
        assert get_enhanced_domain_prompt("ceramics") == ENHANCED_DOMAIN_PROMPTS["ceramics"]

    def test_unknown_domain_falls_back_to_furniture(self):
        assert not has_enhanced_domain_prompt("vehicles")
        assert get_enhanced_domain_prompt("vehicles") == ENHANCED_DOMAIN_PROMPTS["furniture"]


def test_category_index_respects_limit_and_order():
    ceramics = [m for m in MAKER_MARKS if m.category == "ceramics"]
    assert makers_for_category("ceramics", 3) == ceramics[:3]
    assert makers_for_category("vehicles") == []
    furniture = [p for p in IDENTIFICATION_PATTERNS if p.category == "furniture"]
    assert patterns_for_category("furniture", 10) == furniture


class TestFamousItems:

    def test_inscription_match(self):
        piece = check_for_famous_item("A silver bowl", ["SONS OF LIBERTY 1768"])
        assert piece.id == "paul-revere-bowl"

    def test_two_visual_cues(self):
        description = "Leaded glass construction with an irregular drip border over a bronze base"
        piece = check_for_famous_item(description, [])
        assert piece.id == "tiffany-wisteria"

    def test_single_cue_is_not_enough(self):
        assert check_for_famous_item("Leaded glass construction", []) is None
