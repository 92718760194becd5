"""Query-string filtering for list endpoints.

Each entity declares the fields a caller may filter on and their kind. The
builder turns raw query parameters into SQLAlchemy predicates, so a value of
the wrong shape is reported as a validation error instead of blowing up
mid-comparison.
"""
from __future__ import annotations

import enum
from typing import Any, Mapping

from sqlalchemy import String, cast, func, or_
from sqlalchemy.sql.elements import ColumnElement

from app.exceptions import ValidationException
from app.models.profile import Profile
from app.models.resource import Resource


class FieldKind(enum.Enum):
    text = "text"
    boolean = "boolean"
    integer = "integer"


_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}

RESOURCE_FILTERS: dict[str, FieldKind] = {
    "resource_id": FieldKind.integer,
    "resource_name": FieldKind.text,
    "category": FieldKind.text,
    "condition": FieldKind.text,
    "monetary_value": FieldKind.text,
    "current_assignee": FieldKind.text,
    "previous_assignee": FieldKind.text,
    "assigned": FieldKind.boolean,
    "deductible_donation": FieldKind.boolean,
}

PROFILE_FILTERS: dict[str, FieldKind] = {
    "email": FieldKind.text,
    "first_name": FieldKind.text,
    "last_name": FieldKind.text,
    "role": FieldKind.text,
    "is_active": FieldKind.boolean,
    "pending": FieldKind.boolean,
}


def parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValidationException(f"{key}: expected a boolean, got '{raw}'")


def parse_int(key: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ValidationException(f"{key}: expected an integer, got '{raw}'")


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def text_matches(column, raw: str) -> ColumnElement:
    """Exact match, or case-insensitive substring match."""
    # Enum columns store their name; compare them as text
    as_text = cast(column, String)
    pattern = f"%{_escape_like(raw.lower())}%"
    return or_(as_text == raw, func.lower(as_text).like(pattern, escape="\\"))


def build_predicates(model, allowed: Mapping[str, FieldKind], params: Mapping[str, Any]) -> list[ColumnElement]:
    """Translate query parameters into predicates combined with AND by the caller.

    Raises ValidationException for keys outside ``allowed`` or values that do
    not parse as the field's kind.
    """
    predicates: list[ColumnElement] = []
    for key, raw in params.items():
        kind = allowed.get(key)
        if kind is None:
            raise ValidationException(
                f"{key}: not a filterable field (allowed: {', '.join(sorted(allowed))})"
            )
        column = getattr(model, key)
        raw = str(raw)
        if kind is FieldKind.boolean:
            predicates.append(column.is_(parse_bool(key, raw)))
        elif kind is FieldKind.integer:
            predicates.append(column == parse_int(key, raw))
        else:
            predicates.append(text_matches(column, raw))
    return predicates


def resource_predicates(params: Mapping[str, Any]) -> list[ColumnElement]:
    return build_predicates(Resource, RESOURCE_FILTERS, params)


def profile_predicates(params: Mapping[str, Any]) -> list[ColumnElement]:
    return build_predicates(Profile, PROFILE_FILTERS, params)
