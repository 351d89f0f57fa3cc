"""Parsing of the ``transforms`` form field.

Parsing happens in two steps. ``parse_transform_spec`` is strict about the
shape of the whole field: it must be a JSON array. ``operations_from_record``
is lenient about each element: mistyped fields are treated as absent and
records aimed at other images yield nothing, so a single bad entry never
fails the request.
"""

import json
import math
from typing import Any, List, Mapping, Optional, Union

from .exceptions import InvalidTransformsError
from .models import Resize, Rotate, TransformOperation

Number = Union[int, float]


def _reject_constant(name: str) -> None:
    # NaN and Infinity are not JSON.
    raise ValueError(f"Invalid JSON constant: {name}")


def parse_transform_spec(raw: Optional[Any]) -> List[Any]:
    """Deserialize the raw ``transforms`` field into an ordered list of records.

    Args:
        raw: The form value. Anything but a non-empty string is invalid.

    Returns:
        The decoded list, unmodified.

    Raises:
        InvalidTransformsError: If the field is missing, empty, not JSON or
            not a JSON array.
    """
    if not isinstance(raw, str) or not raw:
        raise InvalidTransformsError()

    try:
        parsed = json.loads(raw, parse_constant=_reject_constant)
    except ValueError as exc:
        raise InvalidTransformsError() from exc

    if not isinstance(parsed, list):
        raise InvalidTransformsError()
    return parsed


def _number(value: Any) -> Optional[Number]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    # JSON integers are unbounded; ones past the float range are absent.
    try:
        finite = math.isfinite(value)
    except OverflowError:
        return None
    return value if finite else None


def _dimension(value: Any) -> Optional[int]:
    number = _number(value)
    if number is None or number <= 0 or not float(number).is_integer():
        return None
    return int(number)


def is_applicable(record: Any) -> bool:
    """Return True if ``record`` targets the primary image."""
    if not isinstance(record, Mapping):
        return False
    index = _number(record.get("imageIndex"))
    return index is None or index == 0


def operations_from_record(record: Any) -> List[TransformOperation]:
    """Extract the typed operations one transform record asks for.

    A rotation comes first, then a resize, matching the order the engine
    must apply them in.
    """
    if not is_applicable(record):
        return []

    operations: List[TransformOperation] = []

    rotate = _number(record.get("rotate"))
    if rotate:
        operations.append(Rotate(degrees=rotate))

    width = _dimension(record.get("width"))
    height = _dimension(record.get("height"))
    if width is not None or height is not None:
        operations.append(Resize(width=width, height=height))

    return operations
