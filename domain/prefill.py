# domain/prefill.py

"""
Pré-remplissage du formulaire de patron à partir d'une extraction OCR.

Règle unique : un champ déjà saisi par l'utilisateur n'est jamais écrasé.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Tuple

from domain.models import Difficulty, PatternFormData
from domain.ocr_models import ExtractionResult

logger = logging.getLogger(__name__)

# (champ extrait, champ du formulaire)
_FIELD_MAPPING: Tuple[Tuple[str, str], ...] = (
    ("company", "pattern_company"),
    ("pattern_number", "pattern_number"),
    ("pattern_name", "pattern_name"),
    ("size_range", "size_range"),
    ("fabric_type", "fabric_type"),
    ("difficulty", "difficulty"),
)


@dataclass
class PrefillOutcome:
    form: PatternFormData
    confidence: float
    filled: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    review: Dict[str, Any] = field(default_factory=dict)

    @property
    def confidence_percent(self) -> int:
        return int(math.floor(self.confidence * 100 + 0.5))


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def apply_extraction(
    form: PatternFormData,
    result: ExtractionResult,
    *,
    min_confidence: float = 0.0,
) -> PrefillOutcome:
    """
    Fusionne les champs extraits dans une copie du formulaire.

    - n'écrit que dans les champs vides
    - n'écrit rien si la confiance est sous `min_confidence`
    - `review` expose les champs bruts et le texte normalisé pour relecture
    """
    review = {"text": result.text, "extractedData": result.fields.to_dict()}

    if result.confidence < min_confidence:
        logger.info(
            "Pré-remplissage ignoré: confiance %.2f < seuil %.2f.",
            result.confidence,
            min_confidence,
        )
        return PrefillOutcome(form=replace(form), confidence=result.confidence, review=review)

    updates: Dict[str, Any] = {}
    filled: List[str] = []
    skipped: List[str] = []

    for source, target in _FIELD_MAPPING:
        value = getattr(result.fields, source)
        if value is None:
            continue
        if not _is_empty(getattr(form, target)):
            skipped.append(target)
            continue
        if target == "difficulty":
            value = Difficulty.parse(value)
            if value is None:
                continue
        updates[target] = value
        filled.append(target)

    logger.debug("Pré-remplissage: rempli=%s, conservé=%s.", filled, skipped)
    return PrefillOutcome(
        form=replace(form, **updates),
        confidence=result.confidence,
        filled=filled,
        skipped=skipped,
        review=review,
    )
