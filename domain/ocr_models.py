# domain/ocr_models.py

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

# Clés exposées au consommateur (formulaire / stockage)
_PAYLOAD_KEYS = {
    "company": "company",
    "pattern_number": "patternNumber",
    "pattern_name": "patternName",
    "size_range": "sizeRange",
    "fabric_type": "fabricType",
    "difficulty": "difficulty",
}


@dataclass(frozen=True)
class ExtractedFields:
    company: Optional[str] = None
    pattern_number: Optional[str] = None
    pattern_name: Optional[str] = None
    size_range: Optional[str] = None
    fabric_type: Optional[str] = None
    difficulty: Optional[str] = None

    def populated(self) -> List[str]:
        """Noms des champs renseignés, dans l'ordre de déclaration."""
        return [f.name for f in fields(self) if getattr(self, f.name) is not None]

    def is_empty(self) -> bool:
        return not self.populated()

    def to_dict(self) -> Dict[str, str]:
        return {
            _PAYLOAD_KEYS[name]: getattr(self, name)
            for name in self.populated()
        }


@dataclass(frozen=True)
class ExtractionResult:
    """Résultat d'une extraction : texte normalisé, score et champs candidats."""

    text: str
    confidence: float
    fields: ExtractedFields = field(default_factory=ExtractedFields)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "confidence": self.confidence,
            "extractedData": self.fields.to_dict(),
        }
