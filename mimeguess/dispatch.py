"""Shape-aware MIME resolution over scalar and sequence input.

A string yields one spanned MIME string. A list or stream yields a lazy,
single-pass iterator of ``MimeRecord``/``ErrorValue`` items in input order,
which stops early once the cancellation signal is set.
"""

import logging
from collections.abc import Iterable, Iterator
from typing import Any, Protocol

from mimeguess.as_str import as_str
from mimeguess.errors import ElementTypeMismatch, UnsupportedInputShape
from mimeguess.input_shape import (
    ScalarInput,
    SequenceInput,
    UnsupportedInput,
    classify,
)
from mimeguess.lookup_mode import LookupMode
from mimeguess.mime_table import MimeTable, default_table
from mimeguess.resolve import resolve
from mimeguess.result_item import ErrorValue, MimeRecord, ResultItem
from mimeguess.span import Spanned

logger = logging.getLogger(__name__)


class CancellationSignal(Protocol):
    """Anything with an ``is_set`` flag, e.g. ``threading.Event``."""

    def is_set(self) -> bool: ...


def dispatch(
    data: Any,
    mode: LookupMode,
    cancel: CancellationSignal | None = None,
    table: MimeTable | None = None,
) -> Spanned | Iterator[ResultItem]:
    """Resolve ``data`` according to its shape.

    Raises UnsupportedInputShape when ``data`` is neither a string nor a
    list/stream of values.
    """
    if table is None:
        table = default_table()
    shape = classify(data)

    if isinstance(shape, ScalarInput):
        logger.debug("Resolving scalar input (%s)", mode.value)
        return Spanned(resolve(shape.value, mode, table), shape.span)
    if isinstance(shape, SequenceInput):
        logger.debug("Resolving sequence input (%s)", mode.value)
        return _iter_results(shape.values, mode, table, cancel)
    if isinstance(shape, UnsupportedInput):
        msg = "Only string input is supported"
        raise UnsupportedInputShape(msg, shape.span)
    msg = f"Unhandled input shape: {shape!r}"
    raise AssertionError(msg)


def resolve_element(element: Any, mode: LookupMode, table: MimeTable) -> ResultItem:
    """Resolve one sequence element, turning type errors into an ErrorValue."""
    try:
        name, span = as_str(element)
    except ElementTypeMismatch as err:
        logger.debug("Inline error at %s: %s", err.span, err.message)
        return ErrorValue(err, err.span)
    return MimeRecord(name, resolve(name, mode, table), span)


def _iter_results(
    values: Iterable[Any],
    mode: LookupMode,
    table: MimeTable,
    cancel: CancellationSignal | None,
) -> Iterator[ResultItem]:
    upstream = iter(values)
    emitted = 0
    while True:
        # checked before pulling so a cancelled stream is not read further
        if cancel is not None and cancel.is_set():
            logger.debug("Cancelled after %d elements", emitted)
            return
        try:
            element = next(upstream)
        except StopIteration:
            return
        # the upstream may block, so the signal can arrive while pulling
        if cancel is not None and cancel.is_set():
            logger.debug("Cancelled after %d elements", emitted)
            return
        yield resolve_element(element, mode, table)
        emitted += 1
