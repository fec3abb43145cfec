# domain/ocr_provider.py

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Sequence

logger = logging.getLogger(__name__)


class OCRProviderError(RuntimeError):
    """Erreur fonctionnelle liée au service de reconnaissance de texte."""


@dataclass
class OCRResult:
    """Résultat agrégé d'une reconnaissance de texte."""

    full_text: str
    per_image_text: Dict[Path, str] = field(default_factory=dict)


class OCRProvider(ABC):
    """
    Interface commune pour les services de reconnaissance de texte.
    """

    @abstractmethod
    def extract_text(self, image_paths: Sequence[Path]) -> OCRResult:
        """
        Extrait du texte pour chaque image fournie.
        Doit lever OCRProviderError en cas de problème fonctionnel.
        """
        raise NotImplementedError
