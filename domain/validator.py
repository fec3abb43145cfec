import logging
from typing import Any, Dict

from jsonschema import ValidationError, validate

from domain.pattern_catalogs import DIFFICULTY_LABELS


logger = logging.getLogger(__name__)


class PatternValidationError(ValueError):
    pass


_NULLABLE_STRING = {"type": ["string", "null"]}
_NULLABLE_CONFIDENCE = {"type": ["number", "null"], "minimum": 0, "maximum": 1}

EXTRACTION_RESULT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "text": {"type": "string"},
        "confidence": {"type": "number", "minimum": 0, "maximum": 1},
        "extractedData": {
            "type": "object",
            "properties": {
                "company": {"type": "string", "minLength": 1},
                "patternNumber": {"type": "string", "minLength": 3, "maxLength": 6},
                "patternName": {"type": "string", "minLength": 5, "maxLength": 50},
                "sizeRange": {"type": "string", "minLength": 1, "maxLength": 20},
                "fabricType": {"type": "string", "minLength": 1},
                "difficulty": {"enum": list(DIFFICULTY_LABELS)},
            },
            "additionalProperties": False,
        },
    },
    "required": ["text", "confidence", "extractedData"],
    "additionalProperties": False,
}

PATTERN_RECORD_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "string", "minLength": 1},
        "userId": {"type": "string", "minLength": 1},
        "patternName": _NULLABLE_STRING,
        "patternCompany": _NULLABLE_STRING,
        "patternNumber": _NULLABLE_STRING,
        "sizeRange": _NULLABLE_STRING,
        "difficulty": {"enum": list(DIFFICULTY_LABELS) + [None]},
        "fabricType": _NULLABLE_STRING,
        "notes": _NULLABLE_STRING,
        "frontPhotoUrl": _NULLABLE_STRING,
        "backPhotoUrl": _NULLABLE_STRING,
        "frontOcrText": _NULLABLE_STRING,
        "backOcrText": _NULLABLE_STRING,
        "frontOcrConfidence": _NULLABLE_CONFIDENCE,
        "backOcrConfidence": _NULLABLE_CONFIDENCE,
        "createdAt": _NULLABLE_STRING,
        "updatedAt": _NULLABLE_STRING,
    },
    "required": ["id", "userId"],
    "additionalProperties": False,
}


def _validate(payload: Any, schema: Dict[str, Any], name: str) -> None:
    try:
        validate(instance=payload, schema=schema)
    except ValidationError as exc:
        location = "/".join(str(p) for p in exc.absolute_path) or "<root>"
        logger.error("Payload %s non conforme (%s): %s", name, location, exc.message)
        raise PatternValidationError(f"{name}: {location}: {exc.message}") from exc
    logger.debug("Payload %s validé.", name)


def validate_extraction_payload(payload: Any) -> None:
    """Valide le dict issu de ExtractionResult.to_dict()."""
    _validate(payload, EXTRACTION_RESULT_SCHEMA, "extraction")


def validate_pattern_payload(payload: Any) -> None:
    """Valide le dict stocké d'un patron (clés camelCase)."""
    _validate(payload, PATTERN_RECORD_SCHEMA, "pattern")
