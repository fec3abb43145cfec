# config/settings.py

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

ENV_PREFIX = "PATTERN_CATALOG_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _load_dotenv_if_present(env_file: str | Path = ".env") -> None:
    """
    Charge un fichier `.env` local si présent et injecte les variables
    manquantes dans l'environnement process.

    - ignore les lignes vides ou commentées
    - ne surcharge jamais une variable déjà définie dans l'environnement
    """
    env_path = Path(env_file)

    if not env_path.exists():
        logger.debug("Aucun fichier .env trouvé à %s, variables système uniquement.", env_path)
        return

    try:
        for line_no, raw_line in enumerate(env_path.read_text(encoding="utf-8").splitlines(), start=1):
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")

            if not key:
                logger.warning("Ligne %d du .env ignorée (clé vide).", line_no)
                continue

            if os.getenv(key) is None:
                os.environ[key] = value
                logger.debug("Variable %s chargée depuis .env.", key)

        logger.info("Chargement du fichier .env terminé (%s).", env_path)
    except Exception as exc:  # pragma: no cover - robustesse
        logger.exception("Echec du chargement du fichier .env: %s", exc)
        raise RuntimeError(f"Erreur lors du chargement du fichier .env: {exc}") from exc


@dataclass
class Settings:
    """
    Configuration applicative centrale.

    - log_level               : niveau de logging racine
    - prefill_min_confidence  : confiance OCR minimale pour pré-remplir le formulaire
    - show_ocr_details        : affiche les champs extraits et le texte brut pour relecture
    """
    log_level: int = logging.INFO
    prefill_min_confidence: float = 0.0
    show_ocr_details: bool = True


def _read_env(name: str) -> str | None:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None:
        return None
    if not raw.strip():
        logger.warning("%s%s est défini mais vide, valeur par défaut utilisée.", ENV_PREFIX, name)
        return None
    return raw.strip()


def _parse_log_level(raw: str) -> int:
    level = logging.getLevelName(raw.upper())
    if not isinstance(level, int):
        raise RuntimeError(f"{ENV_PREFIX}LOG_LEVEL invalide: {raw!r}")
    return level


def _parse_confidence(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{ENV_PREFIX}PREFILL_MIN_CONFIDENCE invalide: {raw!r}") from exc
    if not 0.0 <= value <= 1.0:
        raise RuntimeError(
            f"{ENV_PREFIX}PREFILL_MIN_CONFIDENCE doit être compris entre 0 et 1 (reçu {value})."
        )
    return value


def _parse_bool(raw: str, name: str) -> bool:
    low = raw.lower()
    if low in _TRUE_VALUES:
        return True
    if low in _FALSE_VALUES:
        return False
    raise RuntimeError(f"{ENV_PREFIX}{name} invalide: {raw!r} (attendu: true/false)")


def load_settings(env_file: str | Path = ".env") -> Settings:
    """
    Charge la configuration à partir des variables d'environnement.

    Variables prises en compte (toutes optionnelles) :
    - PATTERN_CATALOG_LOG_LEVEL
    - PATTERN_CATALOG_PREFILL_MIN_CONFIDENCE
    - PATTERN_CATALOG_SHOW_OCR_DETAILS

    Lève RuntimeError en cas de valeur invalide et loggue en détail l'erreur.
    """
    logger.debug("Chargement des Settings depuis les variables d'environnement.")

    _load_dotenv_if_present(env_file)

    try:
        settings = Settings()

        raw_level = _read_env("LOG_LEVEL")
        if raw_level is not None:
            settings.log_level = _parse_log_level(raw_level)

        raw_confidence = _read_env("PREFILL_MIN_CONFIDENCE")
        if raw_confidence is not None:
            settings.prefill_min_confidence = _parse_confidence(raw_confidence)

        raw_details = _read_env("SHOW_OCR_DETAILS")
        if raw_details is not None:
            settings.show_ocr_details = _parse_bool(raw_details, "SHOW_OCR_DETAILS")

        logger.info(
            "Settings chargés (log=%s, seuil pré-remplissage=%.2f, détails OCR=%s).",
            logging.getLevelName(settings.log_level),
            settings.prefill_min_confidence,
            "oui" if settings.show_ocr_details else "non",
        )
        return settings

    except RuntimeError as exc:
        # Erreur fonctionnelle : on loggue et on la propage telle quelle
        logger.error("Configuration invalide: %s", exc)
        raise
    except Exception as exc:
        logger.exception("Erreur inattendue lors du chargement des Settings.")
        raise RuntimeError(
            f"Erreur inattendue lors du chargement de la configuration: {exc}"
        ) from exc
