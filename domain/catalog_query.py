# domain/catalog_query.py

"""
Recherche, filtres et statistiques sur la collection de patrons.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from domain.models import Difficulty, PatternRecord

logger = logging.getLogger(__name__)

UNKNOWN_LABEL = "Unknown"
TOP_N = 5


@dataclass
class PatternFilters:
    company: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    fabric_type: Optional[str] = None

    def is_active(self) -> bool:
        return bool(self.company or self.difficulty or self.fabric_type)


@dataclass
class FilterOptions:
    companies: List[str] = field(default_factory=list)
    difficulties: List[str] = field(default_factory=list)
    fabric_types: List[str] = field(default_factory=list)


@dataclass
class CatalogStats:
    total: int = 0
    companies_count: int = 0
    avg_patterns_per_company: int = 0
    top_companies: List[Tuple[str, int]] = field(default_factory=list)
    difficulty_distribution: Dict[str, int] = field(default_factory=dict)
    top_fabrics: List[Tuple[str, int]] = field(default_factory=list)
    with_both_photos: int = 0
    with_one_photo: int = 0
    photo_completion_rate: int = 0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _contains(value: Optional[str], needle: str) -> bool:
    return bool(value) and needle in value.lower()


def search_patterns(
    patterns: Sequence[PatternRecord],
    term: str = "",
    filters: Optional[PatternFilters] = None,
) -> List[PatternRecord]:
    """
    Recherche plein texte (nom, marque, numéro) puis filtres exacts.
    L'ordre d'origine est conservé.
    """
    needle = (term or "").strip().lower()
    result = list(patterns)

    if needle:
        result = [
            p
            for p in result
            if _contains(p.pattern_name, needle)
            or _contains(p.pattern_company, needle)
            or _contains(p.pattern_number, needle)
        ]

    if filters:
        if filters.company:
            result = [p for p in result if p.pattern_company == filters.company]
        if filters.difficulty:
            result = [p for p in result if p.difficulty == filters.difficulty]
        if filters.fabric_type:
            result = [p for p in result if p.fabric_type == filters.fabric_type]

    logger.debug(
        "search_patterns: %d/%d patron(s) retenus (terme=%r).",
        len(result),
        len(patterns),
        needle,
    )
    return result


def filter_options(patterns: Iterable[PatternRecord]) -> FilterOptions:
    patterns = list(patterns)
    return FilterOptions(
        companies=sorted({p.pattern_company for p in patterns if p.pattern_company}),
        difficulties=sorted({p.difficulty.value for p in patterns if p.difficulty}),
        fabric_types=sorted({p.fabric_type for p in patterns if p.fabric_type}),
    )


def _split_fabrics(fabric_type: Optional[str]) -> List[str]:
    if not fabric_type:
        return []
    return [part.strip() for part in fabric_type.split(",") if part.strip()]


def compute_stats(patterns: Sequence[PatternRecord]) -> CatalogStats:
    total = len(patterns)
    if total == 0:
        return CatalogStats()

    companies_count = len({p.pattern_company for p in patterns if p.pattern_company})
    avg = _round_half_up(total / companies_count) if companies_count else 0

    # Counter.most_common conserve l'ordre d'apparition en cas d'égalité
    company_counts = Counter(p.pattern_company or UNKNOWN_LABEL for p in patterns)
    difficulty_counts = Counter(
        p.difficulty.value if p.difficulty else UNKNOWN_LABEL for p in patterns
    )
    fabric_counts: Counter = Counter()
    for p in patterns:
        fabric_counts.update(_split_fabrics(p.fabric_type))

    both = sum(1 for p in patterns if p.has_both_photos)
    one = sum(1 for p in patterns if p.has_any_photo and not p.has_both_photos)

    stats = CatalogStats(
        total=total,
        companies_count=companies_count,
        avg_patterns_per_company=avg,
        top_companies=company_counts.most_common(TOP_N),
        difficulty_distribution=dict(difficulty_counts),
        top_fabrics=fabric_counts.most_common(TOP_N),
        with_both_photos=both,
        with_one_photo=one,
        photo_completion_rate=_round_half_up(both / total * 100),
    )
    logger.debug("compute_stats: %r", stats)
    return stats
