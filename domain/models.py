# domain/models.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from domain.ocr_models import ExtractionResult
from domain.validator import validate_pattern_payload


logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """
    Niveau de difficulté d'un patron.
    """
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"

    @classmethod
    def parse(cls, raw: Any) -> Optional["Difficulty"]:
        """
        Parse une difficulté brute (str ou enum).
        Ne lève pas d'exception, retourne None si inconnue.
        """
        if raw is None:
            return None

        if isinstance(raw, Difficulty):
            return raw

        if isinstance(raw, str):
            txt = raw.strip().lower()
            if not txt:
                return None
            for member in cls:
                if member.value.lower() == txt:
                    return member
            logger.warning("Difficulté inconnue: %r (None retourné)", raw)
            return None

        logger.warning("Difficulté avec type invalide: %r (None retourné)", raw)
        return None


@dataclass
class PatternFormData:
    """
    Valeurs éditables du formulaire d'ajout de patron.
    Une chaîne vide signifie "non renseigné par l'utilisateur".
    """

    pattern_name: str = ""
    pattern_company: str = ""
    pattern_number: str = ""
    size_range: str = ""
    difficulty: Optional[Difficulty] = None
    fabric_type: str = ""
    notes: str = ""


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = str(value).strip()
    return stripped or None


@dataclass
class PatternRecord:
    """
    Modèle métier d'un patron catalogué.

    Ce modèle ne gère ni le stockage ni l'UI : il représente
    l'enregistrement tel qu'il est persisté (texte OCR inclus).
    """

    id: str
    user_id: str
    pattern_name: Optional[str] = None
    pattern_company: Optional[str] = None
    pattern_number: Optional[str] = None
    size_range: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    fabric_type: Optional[str] = None
    notes: Optional[str] = None
    front_photo_url: Optional[str] = None
    back_photo_url: Optional[str] = None
    front_ocr_text: Optional[str] = None
    back_ocr_text: Optional[str] = None
    front_ocr_confidence: Optional[float] = None
    back_ocr_confidence: Optional[float] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def has_both_photos(self) -> bool:
        return bool(self.front_photo_url and self.back_photo_url)

    @property
    def has_any_photo(self) -> bool:
        return bool(self.front_photo_url or self.back_photo_url)

    # ------------------------------------------------------------------ #
    # Validation métier
    # ------------------------------------------------------------------ #

    def validate(self) -> None:
        """
        Valide le contenu de l'objet.
        Lève ValueError si des champs obligatoires sont manquants ou invalides.
        """
        errors: List[str] = []

        if not isinstance(self.id, str) or not self.id.strip():
            errors.append("L'identifiant est obligatoire et ne doit pas être vide.")

        if not isinstance(self.user_id, str) or not self.user_id.strip():
            errors.append("L'utilisateur est obligatoire et ne doit pas être vide.")

        for label, value in (
            ("front_ocr_confidence", self.front_ocr_confidence),
            ("back_ocr_confidence", self.back_ocr_confidence),
        ):
            if value is not None and not 0.0 <= value <= 1.0:
                errors.append(f"{label} doit être compris entre 0 et 1 (reçu {value!r}).")

        if self.difficulty is not None and not isinstance(self.difficulty, Difficulty):
            errors.append("Difficulty doit être une instance de Difficulty ou None.")

        if errors:
            logger.error(
                "Validation PatternRecord échouée: %s | objet=%r",
                errors,
                self,
            )
            raise ValueError(" / ".join(errors))

        logger.debug("Validation PatternRecord OK pour %s", self.id)

    # ------------------------------------------------------------------ #
    # Fabriques
    # ------------------------------------------------------------------ #

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PatternRecord":
        """
        Construit un PatternRecord à partir du payload stocké (clés camelCase).
        - Valide le payload contre le schéma JSON
        - Valide l'objet final
        - Lève ValueError en cas d'erreur métier
        """
        logger.debug("Construction de PatternRecord depuis dict: %r", data)

        validate_pattern_payload(data)

        record = cls(
            id=data["id"],
            user_id=data["userId"],
            pattern_name=data.get("patternName"),
            pattern_company=data.get("patternCompany"),
            pattern_number=data.get("patternNumber"),
            size_range=data.get("sizeRange"),
            difficulty=Difficulty.parse(data.get("difficulty")),
            fabric_type=data.get("fabricType"),
            notes=data.get("notes"),
            front_photo_url=data.get("frontPhotoUrl"),
            back_photo_url=data.get("backPhotoUrl"),
            front_ocr_text=data.get("frontOcrText"),
            back_ocr_text=data.get("backOcrText"),
            front_ocr_confidence=data.get("frontOcrConfidence"),
            back_ocr_confidence=data.get("backOcrConfidence"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )
        record.validate()
        return record

    @classmethod
    def from_form(
        cls,
        form: PatternFormData,
        *,
        record_id: str,
        user_id: str,
        front: Optional[ExtractionResult] = None,
        back: Optional[ExtractionResult] = None,
        front_photo_url: Optional[str] = None,
        back_photo_url: Optional[str] = None,
        created_at: Optional[str] = None,
    ) -> "PatternRecord":
        """
        Construit l'enregistrement à sauvegarder depuis le formulaire,
        en y rattachant le texte et la confiance OCR de chaque face.
        """
        record = cls(
            id=record_id,
            user_id=user_id,
            pattern_name=_blank_to_none(form.pattern_name),
            pattern_company=_blank_to_none(form.pattern_company),
            pattern_number=_blank_to_none(form.pattern_number),
            size_range=_blank_to_none(form.size_range),
            difficulty=form.difficulty,
            fabric_type=_blank_to_none(form.fabric_type),
            notes=_blank_to_none(form.notes),
            front_photo_url=_blank_to_none(front_photo_url),
            back_photo_url=_blank_to_none(back_photo_url),
            front_ocr_text=_blank_to_none(front.text) if front else None,
            back_ocr_text=_blank_to_none(back.text) if back else None,
            front_ocr_confidence=front.confidence if front else None,
            back_ocr_confidence=back.confidence if back else None,
            created_at=created_at,
            updated_at=created_at,
        )
        record.validate()
        return record

    def to_dict(self) -> Dict[str, Any]:
        """
        Sérialise l'objet au format stocké (clés camelCase).
        """
        return {
            "id": self.id,
            "userId": self.user_id,
            "patternName": _blank_to_none(self.pattern_name),
            "patternCompany": _blank_to_none(self.pattern_company),
            "patternNumber": _blank_to_none(self.pattern_number),
            "sizeRange": _blank_to_none(self.size_range),
            "difficulty": self.difficulty.value if self.difficulty else None,
            "fabricType": _blank_to_none(self.fabric_type),
            "notes": _blank_to_none(self.notes),
            "frontPhotoUrl": _blank_to_none(self.front_photo_url),
            "backPhotoUrl": _blank_to_none(self.back_photo_url),
            "frontOcrText": _blank_to_none(self.front_ocr_text),
            "backOcrText": _blank_to_none(self.back_ocr_text),
            "frontOcrConfidence": self.front_ocr_confidence,
            "backOcrConfidence": self.back_ocr_confidence,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
