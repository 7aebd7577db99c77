"""Exception types raised by mime-guess."""

from mimeguess.span import Span


class MimeGuessError(Exception):
    """Base class for all mime-guess failures."""


class ConfigError(MimeGuessError):
    """The loaded configuration is invalid."""


class TypeMismatchError(MimeGuessError):
    """A value had a different type than the operation accepts."""

    def __init__(self, message: str, span: Span | None = None) -> None:
        """Store the message together with the offending value's location."""
        super().__init__(message)
        self.message = message
        self.span = span if span is not None else Span.unknown()

    def __str__(self) -> str:
        return f"{self.message} (at {self.span})"


class UnsupportedInputShape(TypeMismatchError):
    """The whole input is neither a string nor a list/stream of values."""


class ElementTypeMismatch(TypeMismatchError):
    """A single sequence element could not be read as a string.

    Never propagated out of a dispatch; it travels inside an ``ErrorValue``.
    """
