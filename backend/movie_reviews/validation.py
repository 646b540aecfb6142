"""Payload and identifier validation.

Turns raw request data (mappings of field name to arbitrary values, path
parameters as strings) into typed values, or raises ``ValidationException``
listing every field that is missing or malformed.
"""
import re
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from movie_reviews.exceptions.validation import ValidationException

T = TypeVar("T", bound=BaseModel)

LANGUAGE_PATTERN = re.compile(r'^[a-zA-Z]{2,3}(-[a-zA-Z]{2,4})?$')

INVALID_FIELDS_MESSAGE = "Missing or invalid required fields"

# ids are stored as signed 64-bit integers
ID_MIN = -2**63
ID_MAX = 2**63 - 1

INT32_MAX = 2**31 - 1


def normalize_email(raw: str) -> str:
    return raw.strip().lower()


def reject_bool(value: Any) -> Any:
    """Stop lax integer parsing from reading JSON ``true``/``false`` as 1/0."""
    if isinstance(value, bool):
        raise ValueError("Must be an integer")
    return value


def _field_name(loc) -> str:
    return ".".join(str(part) for part in loc) or "body"


def _error_entries(exc: ValidationError) -> List[Dict[str, str]]:
    errors = []
    for error in exc.errors(include_url=False, include_input=False):
        message = error["msg"]
        # custom validators surface as "Value error, <message>"
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.append({"field": _field_name(error["loc"]), "message": message})
    return errors


def validate_payload(model: Type[T], payload: Any) -> T:
    if not isinstance(payload, Mapping):
        raise ValidationException(
            "Request body must be a JSON object",
            [{"field": "body", "message": "Expected an object"}]
        )

    try:
        return model.model_validate(dict(payload))
    except ValidationError as e:
        raise ValidationException(INVALID_FIELDS_MESSAGE, _error_entries(e))


def parse_identifier(name: str, raw: Any) -> int:
    """Parse a movie or review identifier taken from the request path."""
    value = None
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    elif isinstance(raw, str) and re.fullmatch(r'\s*-?\d+\s*', raw):
        value = int(raw)

    if value is None:
        raise ValidationException(INVALID_FIELDS_MESSAGE, [{"field": name, "message": "Must be an integer"}])
    if not ID_MIN <= value <= ID_MAX:
        raise ValidationException(INVALID_FIELDS_MESSAGE, [{"field": name, "message": "Out of range"}])
    return value


def validate_all(*steps: Callable[[], Any]) -> tuple:
    """Run every step and report all their field errors together.

    Returns the step results in order when none of them fail.
    """
    results = []
    failures = []
    for step in steps:
        try:
            results.append(step())
        except ValidationException as e:
            failures.append(e)

    if len(failures) == 1:
        raise failures[0]
    if failures:
        raise ValidationException(INVALID_FIELDS_MESSAGE, [error for e in failures for error in e.errors])
    return tuple(results)


def parse_review_key(movie_id: Any, review_id: Any) -> tuple[int, int]:
    """Parse both halves of a review key, reporting every bad part at once."""
    return validate_all(
        lambda: parse_identifier("movieId", movie_id),
        lambda: parse_identifier("reviewId", review_id)
    )


def normalize_language(raw: Optional[str], default: str) -> str:
    if raw is None or raw.strip() == "":
        return default
    language = raw.strip()
    if not LANGUAGE_PATTERN.match(language):
        raise ValidationException(
            INVALID_FIELDS_MESSAGE,
            [{"field": "language", "message": "Must be a language code such as 'fr' or 'pt-PT'"}]
        )
    return language
