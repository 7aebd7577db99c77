"""First-candidate-or-unknown resolution of a single lookup key."""

import logging

from mimeguess.lookup_mode import LookupMode
from mimeguess.mime_table import MimeTable, default_table

logger = logging.getLogger(__name__)

UNKNOWN_TYPE = "unknown"


def resolve(key: str, mode: LookupMode, table: MimeTable | None = None) -> str:
    """Return the highest-priority MIME type for ``key``, or ``"unknown"``."""
    if table is None:
        table = default_table()
    candidates = table.lookup(key, mode)
    if not candidates:
        logger.debug("No MIME type for %r (%s)", key, mode.value)
        return UNKNOWN_TYPE
    return candidates[0]
