import unittest

from domain.models import Difficulty, PatternFormData
from domain.ocr_models import ExtractedFields, ExtractionResult
from domain.prefill import apply_extraction


def _result(confidence: float = 0.85, **fields) -> ExtractionResult:
    return ExtractionResult(
        text="Simplicity 8234 Wrap Dress",
        confidence=confidence,
        fields=ExtractedFields(**fields),
    )


class ApplyExtractionTestCase(unittest.TestCase):
    def test_fills_only_empty_fields(self) -> None:
        form = PatternFormData(pattern_company="Vogue", pattern_name="  ")
        result = _result(
            company="Simplicity",
            pattern_number="8234",
            pattern_name="Wrap Dress",
            difficulty="Intermediate",
        )

        outcome = apply_extraction(form, result)

        self.assertEqual(outcome.form.pattern_company, "Vogue")
        self.assertEqual(outcome.form.pattern_number, "8234")
        self.assertEqual(outcome.form.pattern_name, "Wrap Dress")
        self.assertEqual(outcome.form.difficulty, Difficulty.INTERMEDIATE)
        self.assertEqual(outcome.filled, ["pattern_number", "pattern_name", "difficulty"])
        self.assertEqual(outcome.skipped, ["pattern_company"])

    def test_input_form_is_not_mutated(self) -> None:
        form = PatternFormData()
        apply_extraction(form, _result(size_range="6-14", fabric_type="Cotton"))

        self.assertEqual(form.size_range, "")
        self.assertEqual(form.fabric_type, "")

    def test_existing_difficulty_is_kept(self) -> None:
        form = PatternFormData(difficulty=Difficulty.BEGINNER)
        outcome = apply_extraction(form, _result(difficulty="Expert"))

        self.assertEqual(outcome.form.difficulty, Difficulty.BEGINNER)
        self.assertEqual(outcome.skipped, ["difficulty"])

    def test_below_threshold_writes_nothing(self) -> None:
        form = PatternFormData()
        outcome = apply_extraction(form, _result(confidence=0.5, company="Vogue"), min_confidence=0.6)

        self.assertEqual(outcome.filled, [])
        self.assertEqual(outcome.form, form)
        self.assertEqual(outcome.review["extractedData"], {"company": "Vogue"})

    def test_confidence_percent_and_review(self) -> None:
        outcome = apply_extraction(PatternFormData(), _result(confidence=0.86, company="Vogue"))

        self.assertEqual(outcome.confidence_percent, 86)
        self.assertEqual(outcome.review["text"], "Simplicity 8234 Wrap Dress")


if __name__ == "__main__":
    unittest.main()
