import pytest

from app.services.interpreter import (
    AI_THRESHOLD,
    DEFAULT_CONFIDENCE,
    calculate_confidence,
    extract_details,
    find_score,
    interpret,
    is_ai_generated,
)


def test_type_score_scenario():
    result = interpret({"status": "success", "type": {"ai_generated": 0.85}})

    assert result.model_dump(by_alias=True) == {
        "isAIGenerated": True,
        "confidence": 85,
        "details": {"aiGenerated": 0.85},
        "status": "success",
    }


def test_wad_only_scenario():
    result = interpret({"status": "success", "wad": {"artificial": 0.4}})

    assert result.model_dump(by_alias=True) == {
        "isAIGenerated": False,
        "confidence": 40,
        "details": {},
        "status": "success",
    }


@pytest.mark.parametrize("value", [0, 0.1, 0.5, 0.7, 0.7000001, 0.99, 1])
@pytest.mark.parametrize("field", [("type", "ai_generated"), ("genai", "ai_generated"), ("wad", "artificial")])
def test_score_scaling_and_threshold(field, value):
    payload = {field[0]: {field[1]: value}}

    assert calculate_confidence(payload) == pytest.approx(value * 100)
    assert is_ai_generated(payload) is (value > AI_THRESHOLD)


def test_threshold_is_exclusive():
    assert is_ai_generated({"type": {"ai_generated": 0.7}}) is False


def test_type_takes_precedence_over_genai_and_wad():
    payload = {
        "type": {"ai_generated": 0.2},
        "genai": {"ai_generated": 0.9},
        "wad": {"artificial": 0.95},
    }

    assert find_score(payload) == 0.2
    assert is_ai_generated(payload) is False
    assert calculate_confidence(payload) == pytest.approx(20)


def test_genai_used_when_type_absent():
    payload = {"genai": {"ai_generated": 0.9}, "wad": {"artificial": 0.1}}

    assert is_ai_generated(payload) is True
    assert calculate_confidence(payload) == pytest.approx(90)


def test_no_score_fields_gives_unknown_default():
    result = interpret({"status": "success", "nudity": {"safe": 0.99}})

    assert result.is_ai_generated is False
    assert result.confidence == DEFAULT_CONFIDENCE == 50


def test_empty_payload():
    result = interpret({})

    assert result.is_ai_generated is False
    assert result.confidence == 50
    assert result.details == {}


@pytest.mark.parametrize("bad", ["0.9", None, True, [0.9], {"x": 1}])
def test_non_numeric_scores_fall_through(bad):
    payload = {"type": {"ai_generated": bad}, "wad": {"artificial": 0.3}}

    assert find_score(payload) == 0.3
    assert "aiGenerated" not in extract_details(payload)


def test_non_mapping_parent_is_treated_as_absent():
    payload = {"type": "photo", "genai": 0.9}

    assert find_score(payload) is None
    assert calculate_confidence(payload) == 50


def test_out_of_range_values_are_not_clamped():
    assert calculate_confidence({"type": {"ai_generated": 1.5}}) == pytest.approx(150)
    assert calculate_confidence({"wad": {"artificial": -0.2}}) == pytest.approx(-20)
    assert is_ai_generated({"type": {"ai_generated": 1.5}}) is True


def test_nudity_keeps_only_raw_partial_safe():
    details = extract_details({
        "nudity": {"raw": 0.01, "partial": 0.02, "safe": 0.97, "sexual_activity": 0.0},
    })

    assert details == {"nudity": {"raw": 0.01, "partial": 0.02, "safe": 0.97}}


def test_nudity_missing_subfields_are_omitted():
    details = extract_details({"nudity": {"safe": 0.9, "raw": None}})

    assert details["nudity"] == {"raw": None, "safe": 0.9}


def test_category_passthrough():
    payload = {
        "offensive": {"prob": 0.01},
        "weapon": 0.02,
        "alcohol": 0.03,
        "drugs": 0.04,
    }

    assert extract_details(payload) == payload


def test_absent_and_falsy_categories_are_omitted():
    details = extract_details({
        "nudity": None, "offensive": None, "weapon": 0, "alcohol": "", "drugs": False,
    })

    assert details == {}


def test_present_but_empty_categories_are_kept():
    details = extract_details({"nudity": {}, "offensive": {}, "drugs": []})

    assert details == {"nudity": {}, "offensive": {}, "drugs": []}


def test_genai_score_is_not_reported_as_ai_generated_detail():
    details = extract_details({"genai": {"ai_generated": 0.9}})

    assert "aiGenerated" not in details
