"""Source locations attached to pipeline values."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Span:
    """Byte range a value was read from."""

    start: int
    end: int

    @classmethod
    def unknown(cls) -> "Span":
        """Return the placeholder location for values with no known origin."""
        return cls(0, 0)

    def as_list(self) -> list[int]:
        return [self.start, self.end]

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


@dataclass(frozen=True)
class Spanned:
    """A value tagged with the location it came from."""

    value: Any
    span: Span = Span(0, 0)


def unwrap(data: Any) -> tuple[Any, Span]:
    """Split a possibly-spanned value into its payload and location."""
    if isinstance(data, Spanned):
        return data.value, data.span
    return data, Span.unknown()
