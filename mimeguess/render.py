"""Logic for writing dispatch results to text streams."""

import json
from collections.abc import Iterable
from typing import IO

from mimeguess.result_item import ErrorValue, MimeRecord, ResultItem

FORMATS = ("table", "json")


def format_row(record: MimeRecord) -> str:
    return f"{record.name}\t{record.mime_type}"


def write_results(
    items: Iterable[ResultItem],
    out: IO[str],
    err: IO[str],
    fmt: str = "table",
) -> tuple[int, int]:
    """Write items as they arrive; return (records, errors) counts.

    In table format inline errors go to ``err``; in json format they keep
    their slot in ``out``.
    """
    records = errors = 0
    for item in items:
        if isinstance(item, ErrorValue):
            errors += 1
            if fmt == "json":
                out.write(json.dumps(item.as_dict()) + "\n")
            else:
                err.write(f"error: {item.message} (at {item.span})\n")
        else:
            records += 1
            if fmt == "json":
                out.write(json.dumps(item.as_dict()) + "\n")
            else:
                out.write(format_row(item) + "\n")
        out.flush()
    return records, errors
