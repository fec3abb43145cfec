# main.py

from __future__ import annotations

import logging
from pathlib import Path

from config.log_config import setup_logging
from config.settings import load_settings
from domain.ocr_provider import OCRProvider
from domain.ocr_service import PatternOCRService


def create_ocr_service(provider: OCRProvider, env_file: str | Path = ".env") -> PatternOCRService:
    """
    Point d'assemblage de l'application.

    - Charge la configuration (Settings)
    - Initialise le logging au niveau configuré
    - Construit le service OCR autour du provider de reconnaissance fourni
    """
    settings = load_settings(env_file)
    setup_logging(settings.log_level)

    logger = logging.getLogger(__name__)
    logger.info("Démarrage du catalogue de patrons (provider OCR=%s).", type(provider).__name__)

    return PatternOCRService.from_settings(provider, settings)
