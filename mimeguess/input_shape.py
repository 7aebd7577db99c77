"""Classification of dispatch input into scalar, sequence or unsupported."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from mimeguess.span import Span, unwrap


@dataclass(frozen=True)
class ScalarInput:
    value: str
    span: Span


@dataclass(frozen=True)
class SequenceInput:
    # a list is re-iterable, a stream is consumed once
    values: Iterable[Any]
    span: Span


@dataclass(frozen=True)
class UnsupportedInput:
    value: Any
    span: Span


InputShape = ScalarInput | SequenceInput | UnsupportedInput


def classify(data: Any) -> InputShape:
    """Decide once how ``data`` will be processed.

    Strings are scalars; lists, tuples and iterators (streams) are sequences;
    everything else is unsupported.
    """
    value, span = unwrap(data)
    if isinstance(value, str):
        return ScalarInput(value, span)
    if isinstance(value, (list, tuple, Iterator)):
        return SequenceInput(value, span)
    return UnsupportedInput(value, span)
