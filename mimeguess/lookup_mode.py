"""Selection between extension-based and path-based lookups."""

from enum import Enum


class LookupMode(Enum):
    """How a lookup key is interpreted for the whole invocation."""

    BY_EXTENSION = "extension"
    BY_PATH = "path"

    @classmethod
    def from_flag(cls, *, extension: bool) -> "LookupMode":
        """Map the ``--extension`` switch onto a mode."""
        return cls.BY_EXTENSION if extension else cls.BY_PATH
