# domain/ocr_service.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from config.settings import Settings
from domain.models import PatternFormData
from domain.ocr_models import ExtractionResult
from domain.ocr_provider import OCRProvider, OCRProviderError
from domain.ocr_structurer import PatternFieldExtractor
from domain.prefill import PrefillOutcome, apply_extraction

logger = logging.getLogger(__name__)

PHOTO_SIDES = ("front", "back")


@dataclass
class PhotoNotice:
    """Message non bloquant affiché à l'utilisateur."""

    title: str
    description: str
    is_error: bool = False


@dataclass
class PhotoPrefill:
    side: str
    form: PatternFormData
    notice: PhotoNotice
    outcome: Optional[PrefillOutcome] = None

    @property
    def result_available(self) -> bool:
        return self.outcome is not None


class PatternOCRService:
    """
    Orchestration OCR d'une photo de pochette :
    reconnaissance de texte (service externe) puis extraction des champs.

    Le service externe est appelé une seule fois, sans nouvelle tentative.
    """

    def __init__(
        self,
        provider: OCRProvider,
        extractor: Optional[PatternFieldExtractor] = None,
        *,
        min_confidence: float = 0.0,
        show_details: bool = True,
    ) -> None:
        self._provider = provider
        self._extractor = extractor or PatternFieldExtractor()
        self._min_confidence = min_confidence
        self._show_details = show_details

    @classmethod
    def from_settings(cls, provider: OCRProvider, settings: Settings) -> "PatternOCRService":
        return cls(
            provider,
            min_confidence=settings.prefill_min_confidence,
            show_details=settings.show_ocr_details,
        )

    def process_photo(self, image_path: Path) -> ExtractionResult:
        """
        Lève OCRProviderError si la reconnaissance échoue.
        """
        path = Path(image_path)
        try:
            ocr_result = self._provider.extract_text([path])
        except Exception as exc:
            logger.error("Reconnaissance de texte échouée pour %s: %s", path, exc, exc_info=True)
            raise OCRProviderError("Failed to process image text") from exc

        result = self._extractor.extract(ocr_result.full_text)
        logger.info(
            "OCR %s: %d champ(s) extrait(s), confiance=%.2f.",
            path.name,
            len(result.fields.populated()),
            result.confidence,
        )
        return result

    def prefill_from_photo(
        self,
        form: PatternFormData,
        image_path: Path,
        *,
        side: str,
    ) -> PhotoPrefill:
        """
        Variante non bloquante utilisée par le formulaire : un échec OCR
        laisse le formulaire intact et renvoie une notification d'erreur.
        """
        if side not in PHOTO_SIDES:
            raise ValueError(f"Face de photo invalide: {side!r} (attendu: {PHOTO_SIDES})")

        try:
            result = self.process_photo(image_path)
        except OCRProviderError as exc:
            logger.warning("OCR indisponible (%s), saisie manuelle possible: %s", side, exc)
            return PhotoPrefill(
                side=side,
                form=form,
                notice=PhotoNotice(
                    title="OCR processing failed",
                    description="You can still add pattern details manually",
                    is_error=True,
                ),
            )

        outcome = apply_extraction(form, result, min_confidence=self._min_confidence)
        if not self._show_details:
            outcome.review = {}
        logger.info("Photo %s traitée (%d champ(s) pré-rempli(s)).", side, len(outcome.filled))
        return PhotoPrefill(
            side=side,
            form=outcome.form,
            outcome=outcome,
            notice=PhotoNotice(
                title=f"{side.capitalize()} photo processed",
                description=f"Text extracted with {outcome.confidence_percent}% confidence",
            ),
        )
