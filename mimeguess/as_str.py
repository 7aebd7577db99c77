"""Logic for reading pipeline values as strings."""

from typing import Any

from mimeguess.errors import ElementTypeMismatch
from mimeguess.span import Span, unwrap


def type_name(value: Any) -> str:
    """Name a value's type the way it is shown in pipeline errors."""
    if value is None:
        return "nothing"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, (bytes, bytearray)):
        return "binary"
    if isinstance(value, dict):
        return "record"
    if isinstance(value, (list, tuple)):
        return "list"
    return type(value).__name__


def as_str(data: Any) -> tuple[str, Span]:
    """Return the string payload of ``data`` and its location.

    Raises ElementTypeMismatch when the payload is not a string.
    """
    value, span = unwrap(data)
    if isinstance(value, str):
        return value, span
    msg = f"can't convert {type_name(value)} to string"
    raise ElementTypeMismatch(msg, span)
