import pytest

from domain.models import Difficulty, PatternFormData, PatternRecord
from domain.ocr_structurer import extract
from domain.validator import PatternValidationError, validate_pattern_payload


def _payload(**overrides):
    data = {
        "id": "pattern_1",
        "userId": "user_1",
        "patternName": "Wrap Dress",
        "patternCompany": "Simplicity",
        "patternNumber": "8234",
        "difficulty": "Intermediate",
        "frontOcrConfidence": 0.85,
    }
    data.update(overrides)
    return data


def test_from_dict_parses_difficulty_and_round_trips():
    record = PatternRecord.from_dict(_payload())

    assert record.difficulty is Difficulty.INTERMEDIATE
    assert record.pattern_company == "Simplicity"
    payload = record.to_dict()
    assert payload["difficulty"] == "Intermediate"
    assert payload["backOcrText"] is None
    validate_pattern_payload(payload)


def test_from_dict_rejects_unknown_difficulty():
    with pytest.raises(PatternValidationError):
        PatternRecord.from_dict(_payload(difficulty="Medium"))


def test_from_dict_rejects_out_of_range_confidence():
    with pytest.raises(ValueError):
        PatternRecord.from_dict(_payload(frontOcrConfidence=1.5))


def test_from_dict_requires_identifiers():
    with pytest.raises(ValueError):
        PatternRecord.from_dict({"id": "pattern_1"})


def test_validate_rejects_blank_user():
    record = PatternRecord(id="pattern_1", user_id="  ")
    with pytest.raises(ValueError):
        record.validate()


def test_difficulty_parse_is_lenient():
    assert Difficulty.parse(" expert ") is Difficulty.EXPERT
    assert Difficulty.parse(Difficulty.ADVANCED) is Difficulty.ADVANCED
    assert Difficulty.parse("Medium") is None
    assert Difficulty.parse(3) is None
    assert Difficulty.parse(None) is None


def test_from_form_attaches_ocr_results():
    front = extract("Simplicity Pattern #8234 Misses Wrap Dress Size 6-14 Cotton Intermediate")
    form = PatternFormData(pattern_name="Wrap Dress", pattern_company="Simplicity", notes="")

    record = PatternRecord.from_form(
        form,
        record_id="pattern_2",
        user_id="user_1",
        front=front,
        front_photo_url="https://cdn.example.org/patterns/user_1/front.jpg",
        created_at="2026-10-19T10:00:00Z",
    )

    assert record.front_ocr_text == front.text
    assert record.front_ocr_confidence == pytest.approx(1.0)
    assert record.back_ocr_text is None
    assert record.notes is None
    assert record.has_any_photo
    assert not record.has_both_photos
    assert record.updated_at == "2026-10-19T10:00:00Z"
    validate_pattern_payload(record.to_dict())


def test_from_form_empty_ocr_text_becomes_none():
    back = extract("   ")
    record = PatternRecord.from_form(PatternFormData(), record_id="p", user_id="u", back=back)

    assert record.back_ocr_text is None
    assert record.back_ocr_confidence == pytest.approx(0.3)
