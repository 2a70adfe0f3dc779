from typing import Any, Iterable, Mapping

from djangorestframework_camel_case.util import camelize
from rest_framework import serializers

from budget.constants import MAX_PROJECT_ID
from budget.exceptions import InvalidInputError


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def missing_fields(data: Mapping[str, Any], required: Iterable[str]) -> list[str]:
    if not isinstance(data, Mapping):
        return list(required)
    return [name for name in required if is_blank(data.get(name))]


def validated_data(serializer_class: type[serializers.Serializer], data: dict) -> dict:
    """Run ``data`` through a serializer and return the typed values.

    Raises:
        InvalidInputError: listing the offending fields by their wire names
    """
    serializer = serializer_class(data=data)
    if not serializer.is_valid():
        errors = dict(serializer.errors)
        raise InvalidInputError(
            f"Invalid fields: {', '.join(sorted(camelize(errors)))}", errors=errors
        )
    return dict(serializer.validated_data)


def parse_project_id(value: Any) -> int | None:
    """Return ``value`` as a storable project id, or None if no row can have it."""
    if isinstance(value, bool):
        return None
    try:
        project_id = int(value)
    except (TypeError, ValueError):
        return None
    if not 0 < project_id <= MAX_PROJECT_ID:
        return None
    return project_id
