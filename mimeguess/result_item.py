"""Items produced when resolving a sequence of keys."""

from dataclasses import dataclass
from typing import Any

from mimeguess.errors import ElementTypeMismatch
from mimeguess.span import Span


@dataclass(frozen=True)
class MimeRecord:
    """A resolved ``{name, type}`` row."""

    name: str
    mime_type: str
    span: Span

    def as_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.mime_type}


@dataclass(frozen=True)
class ErrorValue:
    """An element that could not be resolved, kept in its output slot."""

    error: ElementTypeMismatch
    span: Span

    @property
    def message(self) -> str:
        return self.error.message

    def as_dict(self) -> dict[str, Any]:
        return {"error": self.error.message, "span": self.span.as_list()}


ResultItem = MimeRecord | ErrorValue
