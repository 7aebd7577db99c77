"""Logic for deep merging configuration dictionaries."""

from typing import Any

ADDITIVE_KEYS = frozenset({"type_files"})


def deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries.

    - Mappings are merged recursively.
    - Lists in 'update' replace 'base' lists, EXCEPT for ADDITIVE_KEYS.
    - 'type_files' is additive, keeping first-seen order.
    """
    result = base.copy()
    for key, value in update.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        elif (
            key in ADDITIVE_KEYS
            and isinstance(value, list)
            and isinstance(result.get(key), list)
        ):
            # Later files extend the mimetypes database, so order matters
            result[key] = list(dict.fromkeys([*result[key], *value]))
        else:
            result[key] = value
    return result
