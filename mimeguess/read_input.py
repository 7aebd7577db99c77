"""Logic for turning stdin into dispatch input."""

import json
from collections.abc import Iterator
from typing import IO, Any

from mimeguess.errors import TypeMismatchError
from mimeguess.span import Span, Spanned

JSON_WHITESPACE = " \t\n\r"


def iter_lines(stream: IO[bytes]) -> Iterator[Spanned]:
    """Lazily yield each line of ``stream`` tagged with its byte range.

    Lines that are not valid UTF-8 are yielded as raw ``bytes`` so they
    surface as inline errors rather than altered names.
    """
    offset = 0
    for raw in stream:
        line = raw.rstrip(b"\r\n")
        span = Span(offset, offset + len(line))
        offset += len(raw)
        value: str | bytes
        try:
            value = line.decode("utf-8")
        except UnicodeDecodeError:
            value = line
        yield Spanned(value, span)


def read_json(stream: IO[bytes]) -> Spanned:
    """Parse the whole of ``stream`` as a single JSON document.

    Elements of a top-level array are wrapped with their own byte ranges.
    """
    raw = stream.read()
    try:
        text = raw.decode("utf-8")
        value: Any = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        msg = f"Input is not valid JSON: {exc}"
        raise TypeMismatchError(msg, Span(0, len(raw))) from exc
    if isinstance(value, list):
        value = [
            Spanned(element, span)
            for element, span in zip(value, _element_spans(text), strict=True)
        ]
    return Spanned(value, Span(0, len(raw)))


def _skip_whitespace(text: str, idx: int) -> int:
    while idx < len(text) and text[idx] in JSON_WHITESPACE:
        idx += 1
    return idx


def _element_spans(text: str) -> list[Span]:
    """Byte ranges of the elements of an already-validated JSON array."""
    decoder = json.JSONDecoder()

    def byte_offset(idx: int) -> int:
        return len(text[:idx].encode("utf-8"))

    spans: list[Span] = []
    idx = _skip_whitespace(text, _skip_whitespace(text, 0) + 1)
    if text[idx] == "]":
        return spans
    while True:
        _, end = decoder.raw_decode(text, idx)
        spans.append(Span(byte_offset(idx), byte_offset(end)))
        idx = _skip_whitespace(text, end)
        if text[idx] != ",":
            return spans
        idx = _skip_whitespace(text, idx + 1)
