"""Tests for emotion normalisation and the satisfaction score."""

from __future__ import annotations

import math

import pytest

from satisfaction_api.satisfaction import SatisfactionConfig, derive_satisfaction, norm01


# ── norm01 ────────────────────────────────────────────────────


class TestNorm01:
    def test_missing_and_nan_are_zero(self):
        assert norm01(None) == 0.0
        assert norm01(math.nan) == 0.0
        assert norm01(math.inf) == 0.0
        assert norm01(-math.inf) == 0.0

    def test_garbage_is_zero(self):
        assert norm01("abc") == 0.0
        assert norm01(object()) == 0.0
        assert norm01([0.5]) == 0.0

    def test_int_too_large_for_float_is_zero(self):
        assert norm01(10**400) == 0.0
        assert norm01(-(10**400)) == 0.0

    def test_percentage_matches_fraction(self):
        assert norm01(80) == pytest.approx(norm01(0.8))
        assert norm01("80") == pytest.approx(0.8)

    def test_one_is_a_fraction_not_a_percentage(self):
        assert norm01(1) == 1.0

    def test_clamped(self):
        assert norm01(-0.3) == 0.0
        assert norm01(250) == 1.0

    @pytest.mark.parametrize("x", [-5.0, 0.0, 0.25, 1.0, 1.5, 42.0, 100.0, 1e6])
    def test_idempotent(self, x):
        once = norm01(x)
        assert norm01(once) == once


# ── derive_satisfaction ───────────────────────────────────────


class TestDeriveSatisfaction:
    def test_happy_record(self):
        score = derive_satisfaction(
            {"happiness": 0.9, "sadness": 0, "anger": 0, "surprise": 0, "disgust": 0, "fear": 0}
        )
        assert score == pytest.approx(95.0)

    def test_angry_record(self):
        score = derive_satisfaction(
            {"happiness": 0, "anger": 1.0, "sadness": 0, "surprise": 0, "disgust": 0, "fear": 0}
        )
        assert score == pytest.approx(0.0)

    def test_half_happy_record(self):
        assert derive_satisfaction({"happiness": 0.5}) == pytest.approx(75.0)

    def test_empty_record_is_neutral_baseline(self):
        assert derive_satisfaction({}) == pytest.approx(50.0)

    def test_neutral_field_is_ignored(self):
        assert derive_satisfaction({"neutral": 0.99}) == pytest.approx(50.0)

    def test_surprise_is_mildly_positive(self):
        assert derive_satisfaction({"surprise": 0.5}) == pytest.approx(60.0)

    def test_percentages_are_scaled(self):
        assert derive_satisfaction({"happiness": 90}) == pytest.approx(95.0)

    def test_clamped_at_top(self):
        assert derive_satisfaction({"happiness": 1.0, "surprise": 1.0}) == 100.0

    def test_clamped_at_bottom(self):
        score = derive_satisfaction(
            {"sadness": 1, "anger": 1, "disgust": 1, "fear": 1}
        )
        assert score == 0.0

    def test_oversized_int_field_does_not_raise(self):
        score = derive_satisfaction({"happiness": 10**400, "surprise": 0.5})
        assert score == pytest.approx(60.0)

    def test_malformed_fields_degrade_to_zero(self):
        score = derive_satisfaction(
            {"happiness": "n/a", "anger": math.nan, "fear": None, "surprise": 0.5}
        )
        assert score == pytest.approx(60.0)

    def test_accepts_attribute_objects(self, make_record):
        record = make_record("2024-05-01 10:00:00", happiness=0.5)
        assert derive_satisfaction(record) == pytest.approx(75.0)

    @pytest.mark.parametrize(
        "emotions",
        [
            {"happiness": 1, "surprise": 100, "anger": 0},
            {"sadness": 100, "anger": 100, "disgust": 100, "fear": 100},
            {"happiness": 0.3, "sadness": 0.2, "anger": 0.1, "surprise": 0.7, "disgust": 0.05, "fear": 0.4},
            {"happiness": -20, "anger": 1e9},
        ],
    )
    def test_always_in_range(self, emotions):
        assert 0.0 <= derive_satisfaction(emotions) <= 100.0

    def test_custom_weights(self):
        cfg = SatisfactionConfig(
            positive_weights={"happiness": 0.5},
            negative_weights={"anger": 2.0},
        )
        assert derive_satisfaction({"happiness": 1.0}, cfg) == pytest.approx(75.0)
        assert derive_satisfaction({"anger": 0.25}, cfg) == pytest.approx(25.0)

    def test_default_config_matches_explicit_default(self, config):
        record = {"happiness": 0.4, "sadness": 0.1, "surprise": 0.2}
        assert derive_satisfaction(record) == derive_satisfaction(record, config)
