"""Logic for loading and merging configuration files."""

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from mimeguess.deep_merge import deep_merge
from mimeguess.errors import ConfigError
from mimeguess.lookup_mode import LookupMode

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "lookup": {
        "default_mode": LookupMode.BY_PATH.value,
        "use_system_types": False,
        "type_files": [],
        "extra_types": {},
    },
    "logging": {
        "level": "WARNING",
    },
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            try:
                user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            except yaml.YAMLError as exc:
                msg = f"Could not parse config file {p}: {exc}"
                raise ConfigError(msg) from exc
            if not isinstance(user_config, dict):
                msg = f"Config file {p} must contain a mapping at the top level"
                raise ConfigError(msg)
            config = deep_merge(config, user_config)
        else:
            logger.warning("Config file %s not found, using defaults", p)
    _validate(config)
    return config


def default_mode(config: dict[str, Any]) -> LookupMode:
    """Return the lookup mode used when ``--extension`` is not given."""
    return LookupMode(config["lookup"]["default_mode"])


def _validate(config: dict[str, Any]) -> None:
    lookup = config.get("lookup")
    if not isinstance(lookup, dict):
        msg = "'lookup' must be a mapping"
        raise ConfigError(msg)

    modes = {m.value for m in LookupMode}
    if lookup.get("default_mode") not in modes:
        msg = (
            f"lookup.default_mode must be one of {sorted(modes)}, "
            f"got {lookup.get('default_mode')!r}"
        )
        raise ConfigError(msg)

    extra = lookup.get("extra_types") or {}
    if not isinstance(extra, dict):
        msg = "lookup.extra_types must map extensions to lists of MIME types"
        raise ConfigError(msg)
    for ext, candidates in extra.items():
        if not isinstance(candidates, list) or not all(
            isinstance(c, str) and c for c in candidates
        ):
            msg = f"lookup.extra_types[{ext!r}] must be a list of MIME type strings"
            raise ConfigError(msg)

    if not isinstance(lookup.get("type_files"), list):
        msg = "lookup.type_files must be a list of paths"
        raise ConfigError(msg)
