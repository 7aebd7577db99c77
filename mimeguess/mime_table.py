"""Extension to MIME type association table.

The table answers lookups purely from memory: the bundled YAML table, any
``extra_types`` from the user config and, optionally, Python's ``mimetypes``
database are all read once when the table is built.
"""

import functools
import logging
import mimetypes
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml

from mimeguess.load_config import DEFAULT_CONFIG
from mimeguess.lookup_mode import LookupMode

logger = logging.getLogger(__name__)

BUNDLED_TABLE = Path(__file__).parent / "data" / "mime_types.yml"
PATH_SEPARATORS = ("/", "\\")


def load_bundled_table(path: Path = BUNDLED_TABLE) -> dict[str, list[str]]:
    """Read the bundled extension table, lowercasing keys."""
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return {str(ext).lower(): [str(c) for c in cands] for ext, cands in raw.items()}


def extension_of(path: str) -> str | None:
    """Return the extension of the last path component, if it has one.

    ``"noext"`` and ``".bashrc"`` have no extension; ``"a.tar.gz"`` has ``gz``.
    """
    name = path.rstrip("/\\")
    for sep in PATH_SEPARATORS:
        name = name.rsplit(sep, 1)[-1]
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return None
    return ext


class MimeTable:
    """Ordered candidate lookup by extension or by path."""

    def __init__(
        self,
        table: Mapping[str, list[str]],
        extra_types: Mapping[Any, list[str]] | None = None,
        system_db: mimetypes.MimeTypes | None = None,
    ) -> None:
        """Merge the sources into one extension -> candidates map."""
        self._table: dict[str, list[str]] = {}
        for ext, cands in (extra_types or {}).items():
            self._add(str(ext).lower(), cands)
        for ext, cands in table.items():
            self._add(ext, cands)
        if system_db is not None:
            # strict map first, then the non-standard types
            for strict in (True, False):
                for dotted, mime in system_db.types_map[strict].items():
                    self._add(dotted.lstrip(".").lower(), [mime])

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "MimeTable":
        """Build a table from a loaded configuration."""
        lookup = config["lookup"]
        system_db = None
        if lookup.get("use_system_types") or lookup.get("type_files"):
            system_db = _system_db(
                lookup.get("type_files", []),
                use_system=bool(lookup.get("use_system_types")),
            )
        table = cls(
            load_bundled_table(),
            extra_types=lookup.get("extra_types"),
            system_db=system_db,
        )
        logger.info(
            "Built MIME table with %d extensions (system types: %s)",
            len(table),
            system_db is not None,
        )
        return table

    def __len__(self) -> int:
        return len(self._table)

    def lookup_by_extension(self, key: str) -> list[str]:
        """Candidates for a bare extension such as ``mkv``."""
        if not key:
            return []
        return list(self._table.get(key.lower(), []))

    def lookup_by_path(self, key: str) -> list[str]:
        """Candidates for a path such as ``videos/clip.mkv``."""
        ext = extension_of(key)
        if ext is None:
            return []
        return self.lookup_by_extension(ext)

    def lookup(self, key: str, mode: LookupMode) -> list[str]:
        if mode is LookupMode.BY_EXTENSION:
            return self.lookup_by_extension(key)
        return self.lookup_by_path(key)

    def _add(self, ext: str, candidates: Iterable[str]) -> None:
        existing = self._table.setdefault(ext, [])
        for mime in candidates:
            if mime not in existing:
                existing.append(mime)


def _system_db(type_files: list[str], *, use_system: bool) -> mimetypes.MimeTypes:
    db = mimetypes.MimeTypes()
    files = list(mimetypes.knownfiles) if use_system else []
    files.extend(type_files)
    for name in files:
        if Path(name).is_file():
            db.read(name)
        elif name in type_files:
            logger.warning("MIME types file %s not found, skipping", name)
    return db


@functools.lru_cache(maxsize=1)
def default_table() -> MimeTable:
    """Return the shared table built from the default configuration."""
    return MimeTable.from_config(DEFAULT_CONFIG)
