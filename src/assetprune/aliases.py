"""Import-alias loading from a tsconfig-style ``compilerOptions.paths`` section."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "tsconfig.json"
WILDCARD_SUFFIX = "/*"

AliasMap = Mapping[str, str]

EMPTY_ALIASES: AliasMap = MappingProxyType({})


def resolve_aliases(config_path: Path | str = DEFAULT_CONFIG_NAME) -> AliasMap:
    """Return ``{alias: absolute_path}`` read from ``config_path``.

    A missing file, invalid JSON or a missing/ill-shaped ``paths`` section
    all produce an empty mapping.
    """
    path = Path(config_path)
    if not path.is_file():
        logger.debug("No alias configuration at %s", path)
        return EMPTY_ALIASES
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unparsable alias configuration %s: %s", path, exc)
        return EMPTY_ALIASES

    paths = _paths_section(data)
    if paths is None:
        logger.debug("No compilerOptions.paths section in %s", path)
        return EMPTY_ALIASES

    base_dir = path.resolve().parent
    aliases: dict[str, str] = {}
    for key, value in paths.items():
        if not isinstance(value, list) or not value or not isinstance(value[0], str):
            logger.warning("Skipping alias %r with unsupported target %r", key, value)
            continue
        alias = _strip_wildcard(key)
        target = os.path.normpath(base_dir / _strip_wildcard(value[0]))
        aliases[alias] = target
        logger.debug("Alias %s -> %s", alias, target)
    return MappingProxyType(aliases)


def _paths_section(data: Any) -> dict[str, Any] | None:
    if not isinstance(data, dict):
        return None
    options = data.get("compilerOptions")
    if not isinstance(options, dict):
        return None
    paths = options.get("paths")
    if not isinstance(paths, dict):
        return None
    return paths


def _strip_wildcard(value: str) -> str:
    return value.replace(WILDCARD_SUFFIX, "", 1)
