# domain/pattern_catalogs.py

"""
Référentiels figés utilisés par l'extraction de champs.

L'ordre des tuples est significatif : la première entrée qui matche gagne.
"""

from __future__ import annotations

from typing import Tuple

PATTERN_COMPANIES: Tuple[str, ...] = (
    "Simplicity",
    "McCall's",
    "Butterick",
    "Vogue",
    "Burda",
    "New Look",
    "Kwik Sew",
    "Patterns for Pirates",
    "Closet Core",
    "Cashmerette",
    "True Bias",
    "Grainline Studio",
    "Deer & Doe",
    "Named Clothing",
    "Papercut Patterns",
    "Sew House Seven",
    "Helen's Closet",
    "Mood Fabrics",
)

FABRIC_TYPES: Tuple[str, ...] = (
    "Cotton",
    "Linen",
    "Silk",
    "Wool",
    "Polyester",
    "Rayon",
    "Viscose",
    "Jersey",
    "Knit",
    "Woven",
    "Stretch",
    "Denim",
    "Chiffon",
    "Satin",
    "Velvet",
    "Fleece",
    "Canvas",
    "Twill",
    "Crepe",
    "Georgette",
)

# Mots de public cible retirés du nom de patron
AUDIENCE_QUALIFIERS: Tuple[str, ...] = (
    "Misses",
    "Women",
    "Men",
    "Children",
    "Kids",
    "Girls",
    "Boys",
)

SIZE_LETTER_CODES: Tuple[str, ...] = ("XS", "S", "M", "L", "XL", "XXL")

DIFFICULTY_LABELS: Tuple[str, ...] = ("Beginner", "Intermediate", "Advanced", "Expert")
