# domain/ocr_structurer.py

from __future__ import annotations

import logging
import re
from re import Pattern
from typing import List, Optional, Tuple

from domain.ocr_models import ExtractedFields, ExtractionResult
from domain.pattern_catalogs import (
    AUDIENCE_QUALIFIERS,
    FABRIC_TYPES,
    PATTERN_COMPANIES,
    SIZE_LETTER_CODES,
)

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_whitespace(text: Optional[str]) -> str:
    """Réduit chaque suite d'espaces (sauts de ligne, tabulations) à un espace."""
    return _WHITESPACE_RE.sub(" ", text or "").strip()


def _company_regex(company: str) -> Pattern[str]:
    # Espaces internes souples, apostrophe droite, typographique ou absente
    words = [
        "['’]?".join(re.escape(part) for part in word.split("'"))
        for word in company.split()
    ]
    return re.compile(r"\b" + r"\s+".join(words) + r"\b", re.IGNORECASE)


def _word_regex(word: str) -> Pattern[str]:
    return re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE)


class PatternFieldExtractor:
    """
    Extracteur heuristique des champs d'une pochette de patron de couture.

    Transforme un texte OCR brut en champs candidats (marque, numéro, nom,
    tailles, tissus, difficulté) accompagnés d'un score de confiance.
    Aucun état, aucune E/S : le même texte donne toujours le même résultat.

    Chaque champ est cherché par une liste ordonnée de stratégies ;
    la première stratégie qui produit un candidat valide l'emporte.
    """

    BASE_CONFIDENCE = 0.3

    _FIELD_WEIGHTS: Tuple[Tuple[str, float], ...] = (
        ("company", 0.20),
        ("pattern_number", 0.20),
        ("pattern_name", 0.15),
        ("size_range", 0.10),
        ("fabric_type", 0.05),
        ("difficulty", 0.05),
    )

    # (longueur minimale exclusive, bonus)
    _LENGTH_BONUSES: Tuple[Tuple[int, float], ...] = ((50, 0.05), (100, 0.05))

    _COMPANY_REGEXES: Tuple[Tuple[str, Pattern[str]], ...] = tuple(
        (company, _company_regex(company)) for company in PATTERN_COMPANIES
    )

    _PATTERN_NUMBER_REGEXES: Tuple[Pattern[str], ...] = (
        re.compile(r"\b[A-Z]?\d{4,5}\b", re.ASCII),
        re.compile(r"\b\d{3,4}[A-Z]?\b", re.ASCII),
        re.compile(r"Pattern\s*#?\s*:?\s*[A-Z]?\d{3,5}[A-Z]?", re.IGNORECASE | re.ASCII),
        re.compile(r"No\.?\s*:?\s*[A-Z]?\d{3,5}[A-Z]?", re.IGNORECASE | re.ASCII),
    )
    _PATTERN_NUMBER_LABELS: Tuple[Pattern[str], ...] = (
        re.compile(r"Pattern\s*#?\s*:?\s*", re.IGNORECASE),
        re.compile(r"No\.?\s*:?\s*", re.IGNORECASE),
    )

    _PATTERN_NAME_REGEXES: Tuple[Pattern[str], ...] = (
        re.compile(r"(?:Pattern|Design)\s*:?\s*[A-Z][^\n\r]{10,50}", re.IGNORECASE),
        re.compile(r"^[A-Z][^\n\r]{10,50}", re.MULTILINE),
    )
    _PATTERN_NAME_LABEL = re.compile(r"(?:Pattern|Design)\s*:?\s*", re.IGNORECASE)
    _QUALIFIERS_RE = re.compile(
        r"\b(?:" + "|".join(AUDIENCE_QUALIFIERS) + r")\b", re.IGNORECASE
    )

    _SIZE_REGEXES: Tuple[Pattern[str], ...] = (
        re.compile(r"\b(?:" + "|".join(SIZE_LETTER_CODES) + r")\b", re.IGNORECASE),
        re.compile(r"\b\d{1,2}[-–]\d{1,2}\b", re.ASCII),
        re.compile(r"\b\d{1,2}\s*[-–]\s*\d{1,2}\b", re.ASCII),
        re.compile(r"\bSizes?\s*:?\s*[XSML\d\s|-]+", re.IGNORECASE | re.ASCII),
    )
    _SIZE_LABEL = re.compile(r"Sizes?\s*:?\s*", re.IGNORECASE)

    _FABRIC_REGEXES: Tuple[Tuple[str, Pattern[str]], ...] = tuple(
        (fabric, _word_regex(fabric)) for fabric in FABRIC_TYPES
    )
    _FABRIC_LABEL_REGEXES: Tuple[Pattern[str], ...] = (
        re.compile(r"\bFabrics?\s*:?\s*([^\n\r]{5,30})", re.IGNORECASE),
        re.compile(r"\bSuggested\s*Fabrics?\s*:?\s*([^\n\r]{5,30})", re.IGNORECASE),
        re.compile(r"\bRecommended\s*Fabrics?\s*:?\s*([^\n\r]{5,30})", re.IGNORECASE),
    )
    _MAX_FABRICS = 3

    _DIFFICULTY_REGEXES: Tuple[Pattern[str], ...] = (
        re.compile(r"\b(?:Beginner|Easy|Intermediate|Advanced|Expert)\b", re.IGNORECASE),
        re.compile(r"\bLevel\s*[1-4]\b", re.IGNORECASE),
        re.compile(r"\bSkill\s*Level\s*:?\s*\w+", re.IGNORECASE),
    )
    _LABEL_PREFIX = re.compile(r"^.*?:\s*")
    # Ordre significatif : "beginner" avant "intermediate", etc.
    _DIFFICULTY_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
        (("beginner", "easy", "level 1"), "Beginner"),
        (("intermediate", "level 2"), "Intermediate"),
        (("advanced", "level 3"), "Advanced"),
        (("expert", "level 4"), "Expert"),
    )

    def extract(self, raw_text: Optional[str]) -> ExtractionResult:
        text = normalize_whitespace(raw_text)

        company = self._extract_company(text)
        fields = ExtractedFields(
            company=company,
            pattern_number=self._extract_pattern_number(text),
            pattern_name=self._extract_pattern_name(text, company),
            size_range=self._extract_size_range(text),
            fabric_type=self._extract_fabric_type(text),
            difficulty=self._extract_difficulty(text),
        )
        confidence = self._score(fields, text)

        logger.debug(
            "PatternFieldExtractor: %d caractère(s), champs=%s, confiance=%.2f.",
            len(text),
            fields.populated(),
            confidence,
        )
        return ExtractionResult(text=text, confidence=confidence, fields=fields)

    # ------------------------------------------------------------------ #
    # Champs
    # ------------------------------------------------------------------ #

    def _extract_company(self, text: str) -> Optional[str]:
        for company, regex in self._COMPANY_REGEXES:
            if regex.search(text):
                return company

        # Repli : un mot de la marque présent comme token isolé
        tokens = set(text.lower().split())
        for company, _ in self._COMPANY_REGEXES:
            if any(word in tokens for word in company.lower().split()):
                logger.debug("_extract_company: marque '%s' retenue par recouvrement de mots.", company)
                return company
        return None

    def _extract_pattern_number(self, text: str) -> Optional[str]:
        for regex in self._PATTERN_NUMBER_REGEXES:
            match = regex.search(text)
            if not match:
                continue
            candidate = match.group(0)
            for label in self._PATTERN_NUMBER_LABELS:
                candidate = label.sub("", candidate)
            if 3 <= len(candidate) <= 6:
                return candidate.upper()
            logger.debug("_extract_pattern_number: candidat '%s' rejeté (longueur).", candidate)
        return None

    def _extract_pattern_name(self, text: str, company: Optional[str]) -> Optional[str]:
        for regex in self._PATTERN_NAME_REGEXES:
            match = regex.search(text)
            if not match:
                continue
            name = self._PATTERN_NAME_LABEL.sub("", match.group(0))
            name = self._QUALIFIERS_RE.sub("", name)
            if company:
                name = _word_regex(company).sub("", name)
            name = normalize_whitespace(name)
            if 5 <= len(name) <= 50:
                return name
            logger.debug("_extract_pattern_name: candidat '%s' rejeté (longueur).", name)
        return None

    def _extract_size_range(self, text: str) -> Optional[str]:
        for regex in self._SIZE_REGEXES:
            match = regex.search(text)
            if not match:
                continue
            size = self._SIZE_LABEL.sub("", match.group(0)).strip()
            if 1 <= len(size) <= 20:
                return size
            logger.debug("_extract_size_range: candidat '%s' rejeté (longueur).", size)
        return None

    def _extract_fabric_type(self, text: str) -> Optional[str]:
        found: List[str] = [
            fabric for fabric, regex in self._FABRIC_REGEXES if regex.search(text)
        ]

        for regex in self._FABRIC_LABEL_REGEXES:
            match = regex.search(text)
            if match:
                labelled = match.group(1).strip()
                if labelled:
                    found.append(labelled)

        if not found:
            return None
        return ", ".join(found[: self._MAX_FABRICS])

    def _extract_difficulty(self, text: str) -> Optional[str]:
        for regex in self._DIFFICULTY_REGEXES:
            match = regex.search(text)
            if not match:
                continue
            raw = self._LABEL_PREFIX.sub("", match.group(0)).strip()
            normalized = self.normalize_difficulty(raw)
            if normalized:
                return normalized
            # Libellé trouvé mais non reconnu : le champ reste vide
            logger.debug("_extract_difficulty: libellé '%s' non reconnu.", raw)
        return None

    @classmethod
    def normalize_difficulty(cls, raw: str) -> Optional[str]:
        low = (raw or "").lower()
        for markers, label in cls._DIFFICULTY_RULES:
            if any(marker in low for marker in markers):
                return label
        return None

    # ------------------------------------------------------------------ #
    # Score
    # ------------------------------------------------------------------ #

    def _score(self, fields: ExtractedFields, text: str) -> float:
        score = self.BASE_CONFIDENCE
        for name, weight in self._FIELD_WEIGHTS:
            if getattr(fields, name) is not None:
                score += weight
        for threshold, bonus in self._LENGTH_BONUSES:
            if len(text) > threshold:
                score += bonus
        return min(score, 1.0)


_DEFAULT_EXTRACTOR = PatternFieldExtractor()


def extract(raw_text: Optional[str]) -> ExtractionResult:
    """Raccourci fonctionnel sur un extracteur partagé (sans état)."""
    return _DEFAULT_EXTRACTOR.extract(raw_text)
