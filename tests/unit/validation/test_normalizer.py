"""
Unit tests for result normalization.
"""

import math

import pytest

from phish_relay.validation.normalizer import (
    MAX_REASONS,
    clamp_confidence,
    is_truthy,
    normalize_reasons,
    normalize_response,
    normalize_result,
)


class TestClampConfidence:

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0.42, 0.42),
            (2, 1.0),
            (-3.5, 0.0),
            (1, 1.0),
            (0, 0.0),
            ("0.7", 0.7),
            (" 0.25 ", 0.25),
            (True, 1.0),
            (False, 0.0),
        ],
    )
    def test_finite_values_are_clamped(self, value, expected):
        assert clamp_confidence(value) == pytest.approx(expected)

    @pytest.mark.parametrize(
        "value",
        [None, math.nan, math.inf, -math.inf, "high", "", {"v": 1}, 10 ** 400],
    )
    def test_non_finite_or_non_numeric_becomes_zero(self, value):
        assert clamp_confidence(value) == 0.0

    @pytest.mark.parametrize(
        "value,expected",
        [
            ([0.7], 0.7),
            (["0.3"], 0.3),
            ([[0.6]], 0.6),
            ([], 0.0),
            ([None], 0.0),
            ("0x1A", 1.0),
            ("0b0", 0.0),
            ("0X01", 1.0),
        ],
    )
    def test_list_and_radix_forms_follow_number_coercion(self, value, expected):
        assert clamp_confidence(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", ["1_0", "0x", "0x 1", "0xZZ", [0.5, 0.6], [True], ["high"]])
    def test_forms_that_are_not_numbers_become_zero(self, value):
        assert clamp_confidence(value) == 0.0


class TestIsTruthy:

    @pytest.mark.parametrize("value", [True, 1, -1, 0.5, "yes", "false", "0", [], {}, [0]])
    def test_truthy(self, value):
        assert is_truthy(value) is True

    @pytest.mark.parametrize("value", [None, False, 0, 0.0, math.nan, ""])
    def test_falsy(self, value):
        assert is_truthy(value) is False


class TestNormalizeReasons:

    def test_long_list_truncated_in_order(self):
        reasons = list("abcdefghij")
        assert normalize_reasons(reasons) == list("abcdefgh")
        assert len(normalize_reasons(reasons)) == MAX_REASONS

    def test_short_list_untouched(self):
        assert normalize_reasons(["spoofed domain"]) == ["spoofed domain"]

    @pytest.mark.parametrize("value", [None, "one reason", 3, {"a": 1}])
    def test_non_list_becomes_empty(self, value):
        assert normalize_reasons(value) == []


class TestNormalizeResult:

    def test_well_formed_element(self):
        result = normalize_result(
            {"id": "m-1", "isPhishing": True, "confidence": 0.9, "reasons": ["urgency"]}
        )

        assert result.model_dump(by_alias=True) == {
            "id": "m-1",
            "isPhishing": True,
            "confidence": 0.9,
            "reasons": ["urgency"],
        }

    def test_empty_element_gets_defaults(self):
        result = normalize_result({})

        assert result.id is None
        assert result.is_phishing is False
        assert result.confidence == 0.0
        assert result.reasons == []

    def test_non_object_element_gets_defaults(self):
        result = normalize_result("garbage")

        assert result.model_dump(by_alias=True) == {
            "id": None,
            "isPhishing": False,
            "confidence": 0.0,
            "reasons": [],
        }

    def test_id_is_echoed_untyped(self):
        assert normalize_result({"id": 12}).id == 12


class TestNormalizeResponse:

    def test_reference_example(self):
        parsed = {
            "results": [
                {
                    "id": 1,
                    "isPhishing": True,
                    "confidence": 2,
                    "reasons": ["a", "b", "c", "d", "e", "f", "g", "h", "i"],
                }
            ]
        }

        response = normalize_response(parsed)

        assert response.model_dump(by_alias=True) == {
            "results": [
                {
                    "id": 1,
                    "isPhishing": True,
                    "confidence": 1.0,
                    "reasons": ["a", "b", "c", "d", "e", "f", "g", "h"],
                }
            ]
        }

    def test_one_bad_element_does_not_fail_batch(self):
        response = normalize_response(
            {"results": [{"id": 1, "confidence": "??"}, None, {"id": 3, "isPhishing": 1}]}
        )

        assert [r.id for r in response.results] == [1, None, 3]
        assert response.results[0].confidence == 0.0
        assert response.results[2].is_phishing is True

    def test_extra_top_level_keys_are_kept(self):
        response = normalize_response({"results": [], "summary": "all clean"})

        assert response.model_dump(by_alias=True) == {"results": [], "summary": "all clean"}
