"""Tests for record validation."""

import copy

import pytest

from jd_readiness.validation.validator import is_valid, validate


class TestValidRecords:
    def test_built_record_passes(self, valid_record):
        result = validate(valid_record)
        assert result.is_valid is True
        assert result.errors == []
        assert bool(result) is True

    def test_optional_fields_may_be_absent(self, valid_record):
        for name in ("company", "role", "companyIntel"):
            del valid_record[name]
        assert is_valid(valid_record)

    def test_extra_top_level_key_tolerated(self, make_record):
        assert is_valid(make_record(sharedWith=["mentor"]))

    def test_extra_skill_category_tolerated(self, valid_record):
        valid_record["extractedSkills"]["Mobile"] = ["Kotlin"]
        assert is_valid(valid_record)

    def test_empty_fixed_sequences_accepted(self, make_record):
        assert is_valid(make_record(roundMapping=[], checklist=[], plan7Days=[], questions=[]))

    def test_does_not_mutate_input(self, make_record):
        record = make_record(baseScore=150, extractedSkills={"Web": [1]})
        before = copy.deepcopy(record)
        validate(record)
        assert record == before


class TestNonRecordInput:
    @pytest.mark.parametrize("value", [None, 42, "record", ["a"], 3.5, True])
    def test_single_top_level_error(self, value):
        result = validate(value)
        assert result.is_valid is False
        assert len(result.errors) == 1
        assert result.errors[0].startswith("record: expected an object")


class TestRequiredFields:
    def test_missing_jd_text(self, valid_record):
        del valid_record["jdText"]
        result = validate(valid_record)
        assert result.errors == ["jdText: required field is missing"]

    def test_empty_object_reports_each_required_field(self):
        result = validate({})
        assert len(result.errors) == 12
        assert all(error.endswith("required field is missing") for error in result.errors)

    def test_wrong_type(self, make_record):
        result = validate(make_record(baseScore="75"))
        assert result.errors == ["baseScore: expected integer, got string"]

    def test_bool_is_not_an_integer(self, make_record):
        result = validate(make_record(finalScore=True))
        assert result.errors == ["finalScore: expected integer, got boolean"]

    def test_optional_field_with_wrong_type(self, make_record):
        result = validate(make_record(company=None))
        assert result.errors == ["company: expected string, got null"]

    def test_empty_id(self, make_record):
        assert validate(make_record(id="")).errors == ["id: must not be empty"]

    def test_errors_follow_schema_order(self, valid_record):
        del valid_record["jdText"]
        valid_record["baseScore"] = "high"
        valid_record["createdAt"] = None
        errors = validate(valid_record).errors
        assert [error.split(":")[0] for error in errors] == ["createdAt", "jdText", "baseScore"]


class TestRanges:
    def test_scores_out_of_range(self, make_record):
        result = validate(make_record(baseScore=101, finalScore=-1))
        assert result.errors == [
            "baseScore: expected value in [0, 100], got 101",
            "finalScore: expected value in [0, 100], got -1",
        ]

    @pytest.mark.parametrize("score", [0, 100])
    def test_bounds_inclusive(self, make_record, score):
        assert is_valid(make_record(baseScore=score, finalScore=score))

    def test_negative_timestamp(self, make_record):
        result = validate(make_record(createdAt=-5))
        assert result.errors == ["createdAt: expected value >= 0, got -5"]


class TestText:
    def test_short_jd_text(self, make_record):
        result = validate(make_record(jdText="Java developer"))
        assert result.errors == ["jdText: expected at least 50 characters, got 14"]

    def test_long_company(self, make_record):
        result = validate(make_record(company="x" * 201))
        assert result.errors == ["company: expected at most 200 characters, got 201"]

    def test_configured_jd_minimum(self, make_record):
        record = make_record(jdText="Java developer, Spring Boot")
        assert validate(record, jd_min_length=20).is_valid
        result = validate(record, jd_min_length=100)
        assert result.errors == ["jdText: expected at least 100 characters, got 27"]

    def test_company_at_limit(self, make_record):
        assert is_valid(make_record(company="x" * 200, role="y" * 200))


class TestExtractedSkills:
    def test_missing_category(self, valid_record):
        del valid_record["extractedSkills"]["Web"]
        result = validate(valid_record)
        assert result.errors == ["extractedSkills.Web: required skill category is missing"]

    def test_category_not_a_list(self, valid_record):
        valid_record["extractedSkills"]["Data"] = "SQL"
        result = validate(valid_record)
        assert result.errors == ["extractedSkills.Data: expected array of strings"]

    def test_non_string_skill(self, valid_record):
        valid_record["extractedSkills"]["Languages"] = ["Java", 3]
        assert not is_valid(valid_record)

    def test_flat_list_rejected(self, make_record):
        result = validate(make_record(extractedSkills=["Java", "React"]))
        assert result.errors == ["extractedSkills: expected object of skill categories, got array"]

    def test_every_missing_category_reported(self, make_record):
        result = validate(make_record(extractedSkills={}))
        assert len(result.errors) == 7


class TestConfidenceMap:
    def test_valid_levels(self, make_record):
        marks = {"Java": "know", "React": "practice", "Docker": "unset"}
        assert is_valid(make_record(skillConfidenceMap=marks))

    def test_unknown_level(self, make_record):
        result = validate(make_record(skillConfidenceMap={"Java": "expert"}))
        assert result.errors == [
            "skillConfidenceMap.Java: expected one of know, practice, unset, got 'expert'"
        ]

    def test_not_an_object(self, make_record):
        assert not is_valid(make_record(skillConfidenceMap=["Java"]))


class TestSequences:
    def test_checklist_wrong_length(self, valid_record):
        valid_record["checklist"] = valid_record["checklist"][:3]
        result = validate(valid_record)
        assert result.errors == ["checklist: expected 0 or 4 items, got 3"]

    def test_plan_wrong_length(self, valid_record):
        valid_record["plan7Days"].append({"day": "Day 8", "focus": "Rest", "tasks": []})
        result = validate(valid_record)
        assert result.errors == ["plan7Days: expected 0 or 5 items, got 6"]

    def test_too_many_questions(self, make_record):
        result = validate(make_record(questions=[f"Q{i}" for i in range(11)]))
        assert result.errors == ["questions: expected at most 10 items, got 11"]

    def test_item_kind(self, valid_record):
        valid_record["questions"][2] = {"text": "Why us?"}
        valid_record["roundMapping"][0] = "Round 1"
        result = validate(valid_record)
        assert result.errors == [
            "roundMapping[0]: expected object, got string",
            "questions[2]: expected string, got object",
        ]

    def test_plain_string_plan_and_checklist(self, make_record):
        record = make_record(
            plan7Days=[f"Day {i}: revise" for i in range(1, 6)],
            checklist=["Aptitude", "Coding", "Technical", "HR"],
        )
        assert is_valid(record)

    def test_plan_item_must_be_object_or_string(self, valid_record):
        valid_record["plan7Days"][4] = 5
        result = validate(valid_record)
        assert result.errors == ["plan7Days[4]: expected object or string, got integer"]

    def test_company_intel_must_be_object(self, make_record):
        result = validate(make_record(companyIntel="big company"))
        assert result.errors == ["companyIntel: expected object, got string"]
