"""Shared request validation helpers.

Body parsing is delegated to pydantic; these helpers turn its error lists
into the single-field ValidationError clients expect, and cover the checks
that are not plain type checks (patch allow-lists, path/body id matching).
"""

from typing import Any, Dict, Iterable, List, Optional, Sequence

from developeer.errors import Unauthorized, ValidationError

REQUEST_SECTIONS = ("body", "query", "path", "header")

MISSING_FIELD = "field missing"
EXPECTED_STRING = "Incorrect field type: expected string"
EXPECTED_STRING_ARRAY = "Incorrect field type: expected array of strings"
EXPECTED_INTEGER = "Incorrect field type: expected integer"
EXPECTED_OBJECT = "Incorrect request body: expected object"
FIELD_NOT_ALLOWED = "field not allowed"


def _location(loc: Sequence[Any]) -> List[Any]:
    parts = list(loc)
    if parts and parts[0] in REQUEST_SECTIONS:
        parts = parts[1:]
    return parts


def _message_for(error: Dict[str, Any], parts: List[Any]) -> str:
    error_type = error.get("type", "")
    if error_type == "missing":
        return MISSING_FIELD
    # An integer in the location means a member of a list failed
    if error_type == "list_type" or any(isinstance(p, int) for p in parts):
        return EXPECTED_STRING_ARRAY
    if error_type.startswith("string"):
        return EXPECTED_STRING
    if error_type.startswith("int"):
        return EXPECTED_INTEGER
    if error_type in ("model_attributes_type", "dict_type", "model_type"):
        return EXPECTED_OBJECT
    return error.get("msg") or "Invalid value"


def validation_error_from_errors(errors: Iterable[Dict[str, Any]]) -> ValidationError:
    """Collapse a pydantic error list into one ValidationError.

    Missing fields are reported before type errors.
    """
    errors = list(errors)
    if not errors:
        return ValidationError("Invalid request", location="body")

    chosen = next((e for e in errors if e.get("type") == "missing"), errors[0])
    parts = _location(chosen.get("loc", ()))
    field = next((p for p in parts if isinstance(p, str)), None)
    return ValidationError(_message_for(chosen, parts), location=field or "body")


def reject_disallowed_fields(body: Dict[str, Any], allowed: Iterable[str]) -> None:
    """Raise for the first key of ``body`` outside ``allowed``."""
    allowed = set(allowed)
    for field in body:
        if field not in allowed:
            raise ValidationError(FIELD_NOT_ALLOWED, location=field)


def require_matching_ids(
    path_id: str,
    body: Optional[Dict[str, Any]],
    field: str,
) -> None:
    """The body must repeat the path identifier under ``field``.

    Guards against deleting a resource other than the one addressed.
    """
    if not body or field not in body or body[field] in (None, ""):
        raise ValidationError(MISSING_FIELD, location=field)

    body_id = body[field]
    if not isinstance(body_id, str):
        raise ValidationError(EXPECTED_STRING, location=field)

    if body_id.strip() != path_id.strip():
        raise Unauthorized(
            f"Request path id ({path_id}) and request body id ({body_id}) must match"
        )
