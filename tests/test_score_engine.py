"""Tests for final score derivation and confidence updates."""

import copy
import itertools

import pytest

from jd_readiness.scoring.score_engine import (
    apply_confidence,
    calculate_final_score,
    clamp_score,
    replace_confidence_map,
)


class TestCalculateFinalScore:
    def test_mixed_marks(self):
        marks = {"Java": "know", "React": "practice", "Docker": "practice"}
        assert calculate_final_score(75, marks) == 73

    def test_know_from_zero(self):
        assert calculate_final_score(0, {"A": "know", "B": "know", "C": "know"}) == 6

    def test_practice_from_hundred(self):
        marks = {"A": "practice", "B": "practice", "C": "practice"}
        assert calculate_final_score(100, marks) == 94

    def test_five_practice_marks(self):
        marks = {name: "practice" for name in "ABCDE"}
        assert calculate_final_score(95, marks) == 85

    def test_clamped_high(self):
        assert calculate_final_score(99, {"A": "know", "B": "know"}) == 100

    def test_clamped_low(self):
        assert calculate_final_score(1, {"A": "practice"}) == 0

    def test_empty_or_missing_map(self):
        assert calculate_final_score(42, {}) == 42
        assert calculate_final_score(42, None) == 42

    def test_unset_and_unknown_contribute_nothing(self):
        assert calculate_final_score(50, {"A": "unset", "B": "expert", "C": None}) == 50

    def test_order_independent(self):
        items = [("A", "know"), ("B", "practice"), ("C", "know"), ("D", "unset")]
        results = {
            calculate_final_score(60, dict(order))
            for order in itertools.permutations(items)
        }
        assert results == {62}

    @pytest.mark.parametrize("base", range(0, 101, 5))
    @pytest.mark.parametrize("know,practice", [(0, 0), (60, 0), (0, 60), (7, 3), (3, 7)])
    def test_always_in_bounds(self, base, know, practice):
        marks = {f"k{i}": "know" for i in range(know)}
        marks.update({f"p{i}": "practice" for i in range(practice)})
        assert 0 <= calculate_final_score(base, marks) <= 100


class TestClampScore:
    @pytest.mark.parametrize("value,expected", [(-5, 0), (0, 0), (55, 55), (100, 100), (130, 100)])
    def test_clamp(self, value, expected):
        assert clamp_score(value) == expected


class TestApplyConfidence:
    def test_recomputes_final_score(self, valid_record, now):
        updated = apply_confidence(valid_record, "Java", "know", now=now + 1000)
        assert updated["skillConfidenceMap"] == {"Java": "know"}
        assert updated["finalScore"] == 77
        assert updated["baseScore"] == 75
        assert updated["updatedAt"] == now + 1000

    def test_changing_a_mark_recomputes_from_scratch(self, valid_record, now):
        record = apply_confidence(valid_record, "Java", "know", now=now)
        record = apply_confidence(record, "Java", "practice", now=now)
        assert record["finalScore"] == 73
        record = apply_confidence(record, "Java", "unset", now=now)
        assert record["finalScore"] == 75
        assert record["skillConfidenceMap"] == {"Java": "unset"}

    def test_updated_at_never_moves_back(self, valid_record, now):
        updated = apply_confidence(valid_record, "Java", "know", now=now - 10_000)
        assert updated["updatedAt"] == valid_record["updatedAt"]

    def test_input_not_mutated(self, valid_record, now):
        before = copy.deepcopy(valid_record)
        apply_confidence(valid_record, "React", "practice", now=now)
        assert valid_record == before

    def test_unknown_level(self, valid_record):
        with pytest.raises(ValueError, match="Unknown confidence level"):
            apply_confidence(valid_record, "Java", "expert")

    def test_empty_skill(self, valid_record):
        with pytest.raises(ValueError, match="Skill name"):
            apply_confidence(valid_record, "", "know")

    def test_base_score_fixed_across_updates(self, valid_record, now):
        record = valid_record
        marks = ["know", "practice", "know", "unset", "practice"] * 8
        for i, level in enumerate(marks):
            record = apply_confidence(record, f"skill-{i % 13}", level, now=now + i)
            assert record["baseScore"] == valid_record["baseScore"]
            assert record["finalScore"] == calculate_final_score(
                record["baseScore"], record["skillConfidenceMap"]
            )


class TestReplaceConfidenceMap:
    def test_replaces_whole_map(self, make_record, now):
        record = make_record(skillConfidenceMap={"Java": "know"}, finalScore=77)
        updated = replace_confidence_map(record, {"React": "practice"}, now=now)
        assert updated["skillConfidenceMap"] == {"React": "practice"}
        assert updated["finalScore"] == 73

    def test_rejects_unknown_level(self, valid_record):
        with pytest.raises(ValueError, match="React"):
            replace_confidence_map(valid_record, {"React": "meh"})
