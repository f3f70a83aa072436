"""Truncated / fenced completion output recovery."""

import json

import pytest

from appraiser.errors import ExternalServiceError
from appraiser.utils.json_repair import repair_truncated_json, safe_json_parse, strip_code_fence


class TestStripCodeFence:

    def test_json_fence(self):
        assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self):
        assert strip_code_fence('```\n[1, 2]\n```') == "[1, 2]"

    def test_no_fence_is_trimmed_only(self):
        assert strip_code_fence('  {"a": 1}  ') == '{"a": 1}'


class TestSafeJsonParse:

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "Roseville Pinecone Vase", "values": [100, 200], "nested": {"ok": True}},
            [{"a": "b"}, None, 3.5],
        ],
    )
    def test_fenced_equals_unfenced(self, payload):
        text = json.dumps(payload)
        assert safe_json_parse(f"```json\n{text}\n```", "analysis") == json.loads(text)

    def test_truncated_mid_array(self):
        parsed = safe_json_parse('{"name": "Vase", "evidence_for": ["mark", "glaze"', "analysis")
        assert parsed == {"name": "Vase", "evidence_for": ["mark", "glaze"]}

    def test_truncated_inside_string(self):
        parsed = safe_json_parse('{"name": "Roseville Pine', "analysis")
        assert parsed == {"name": "Roseville Pine"}

    def test_trailing_comma_dropped(self):
        parsed = safe_json_parse('{"a": 1, "b": [1, 2,', "analysis")
        assert parsed == {"a": 1, "b": [1, 2]}

    def test_brackets_inside_strings_ignored(self):
        parsed = safe_json_parse('{"note": "use { and [ freely", "x": [1', "analysis")
        assert parsed == {"note": "use { and [ freely", "x": [1]}

    def test_escaped_quote_does_not_end_string(self):
        parsed = safe_json_parse('{"a": "say \\"hi\\"", "b": "tru', "triage")
        assert parsed == {"a": 'say "hi"', "b": "tru"}

    def test_repair_never_fabricates_keys(self):
        full = {"name": "Chair", "maker": "Stickley", "knowledge_state": {"confirmed": [], "completeness": 0.5}}
        text = json.dumps(full)
        cut = text[: text.index('"completeness"') - 2]
        parsed = safe_json_parse(cut, "analysis")
        assert set(parsed) <= set(full)

    def test_unrecoverable_raises_with_stage(self):
        with pytest.raises(ExternalServiceError) as exc_info:
            safe_json_parse("I cannot help with that.", "analysis")
        assert exc_info.value.stage == "analysis"
        assert "analysis" in str(exc_info.value)
        assert exc_info.value.status_code == 502


def test_repair_closes_innermost_first():
    assert repair_truncated_json('{"a": [{"b": 1') == '{"a": [{"b": 1}]}'
