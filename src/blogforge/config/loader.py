"""Config file discovery, loading and merging.

Candidates are tried in a fixed order at the project root: module-style
files first, then ``blogforge.config.json``, then the extensionless
``blogforge.config`` and finally a ``blogForge`` key in ``package.json``.
The first candidate that exists and parses wins.

A loaded config that fails validation is discarded entirely: the loader
warns and returns the defaults (with ``root`` set). Nothing here raises.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from ruamel.yaml.scalarbool import ScalarBoolean
from ruamel.yaml.scalarstring import ScalarString

from blogforge.config.models import COLLECTIONS, BlogForgeConfig, UserConfig, default_config
from blogforge.infrastructure.jstext import find_block_end, strip_comments

logger = logging.getLogger(__name__)

CONFIG_BASENAME = "blogforge.config"
PACKAGE_JSON_KEY = "blogForge"

# Start of the exported object literal in a module-style config.
_EXPORT_RE = re.compile(r"export\s+default\b|module\.exports\s*=|defineConfig\s*\(")

Loader = Callable[[Path], Any]


# ---------------------------------------------------------------------------
# Candidate loaders
# ---------------------------------------------------------------------------


def load_json_config(path: Path) -> Any:
    """Parse a JSON config file, returning None on any failure."""
    if not path.is_file():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning("Failed to load JSON config at %s: %s", path, exc)
        return None


def load_package_json_config(path: Path) -> Any:
    """Return the ``blogForge`` key of a ``package.json``, if any."""
    data = load_json_config(path)
    if not isinstance(data, dict):
        return None
    return data.get(PACKAGE_JSON_KEY) or None


def load_module_config(path: Path) -> Any:
    """Best-effort read of a JS/TS config module's exported object literal.

    The literal after ``export default``, ``module.exports =`` or
    ``defineConfig(`` is cut out by brace matching and read as a YAML flow
    mapping. Plain data (quoted or bare keys, quoted strings, numbers, booleans,
    arrays, nested objects, trailing commas) loads; anything computed
    fails this candidate and returns None.
    """
    if not path.is_file():
        return None
    try:
        source = strip_comments(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Failed to read module config at %s: %s", path, exc)
        return None

    match = _EXPORT_RE.search(source)
    if match is None:
        logger.debug("No exported object literal in %s", path)
        return None
    start = source.find("{", match.end())
    end = find_block_end(source, start)
    if start < 0 or end < 0:
        logger.debug("Unterminated object literal in %s", path)
        return None

    yaml = YAML(typ="rt", pure=True)
    yaml.preserve_quotes = True
    try:
        loaded = yaml.load(source[start : end + 1])
    except YAMLError as exc:
        logger.debug("Failed to load module config at %s: %s", path, exc)
        return None
    try:
        return _literal_data(loaded)
    except ValueError as exc:
        logger.warning("Ignoring %s: %s", path, exc)
        return None


def _literal_data(node: Any) -> Any:
    """Convert a round-trip YAML node to plain data, rejecting bare words.

    In a JS object literal every string is quoted, so an unquoted scalar
    that YAML reads as a string is an expression such as
    ``path.resolve(__dirname)`` or ``process.env.DIR``.
    """
    if isinstance(node, dict):
        return {str(key): _literal_data(value) for key, value in node.items()}
    if isinstance(node, list):
        return [_literal_data(item) for item in node]
    if isinstance(node, ScalarString):
        return str(node)
    if isinstance(node, str):
        raise ValueError(f"computed value {node!r} is not supported")
    if node is None:
        return None
    if isinstance(node, (bool, ScalarBoolean)):
        return bool(node)
    if isinstance(node, int):
        return int(node)
    if isinstance(node, float):
        return float(node)
    raise ValueError(f"unsupported value {node!r}")


def config_candidates(project_root: Path) -> list[tuple[Path, Loader]]:
    """Ordered ``(path, loader)`` pairs searched by :func:`load_config`."""
    return [
        (project_root / f"{CONFIG_BASENAME}.ts", load_module_config),
        (project_root / f"{CONFIG_BASENAME}.js", load_module_config),
        (project_root / f"{CONFIG_BASENAME}.mjs", load_module_config),
        (project_root / f"{CONFIG_BASENAME}.cjs", load_module_config),
        (project_root / f"{CONFIG_BASENAME}.json", load_json_config),
        (project_root / CONFIG_BASENAME, load_module_config),
        (project_root / "package.json", load_package_json_config),
    ]


def find_config_file(project_root: Path) -> Path | None:
    """Return the first existing candidate config file, without parsing it."""
    for path, loader in config_candidates(project_root):
        if loader is load_package_json_config:
            if load_package_json_config(path) is not None:
                return path
        elif path.is_file():
            return path
    return None


# ---------------------------------------------------------------------------
# Loading and merging
# ---------------------------------------------------------------------------


def _defaults_for(project_root: Path) -> BlogForgeConfig:
    return default_config().model_copy(update={"root": project_root})


def load_config(project_root: Path) -> BlogForgeConfig:
    """Load the project configuration rooted at *project_root*.

    Returns the defaults (with ``root`` set) when no candidate loads or
    when the loaded object fails validation.
    """
    project_root = project_root.resolve()
    for path, loader in config_candidates(project_root):
        raw = loader(path)
        if raw is None:
            continue
        logger.debug("Loaded configuration from %s", path)
        try:
            user = UserConfig.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Invalid configuration in %s. Using defaults.", path)
            logger.debug("%s", exc)
            return _defaults_for(project_root)
        return merge_config(_defaults_for(project_root), user)

    logger.debug("No configuration file found in %s. Using defaults.", project_root)
    return _defaults_for(project_root)


def merge_config(defaults: BlogForgeConfig, user: UserConfig | dict[str, Any]) -> BlogForgeConfig:
    """Merge a user config over *defaults*.

    ``root``, ``multilingual``, ``languages`` and ``defaultLanguage``
    overwrite when present. ``directories``, ``schemaExtensions`` and
    ``defaultValues`` merge two levels deep: each named sub-object's keys
    are merged over the matching default sub-object.
    """
    if isinstance(user, dict):
        user = UserConfig.model_validate(user)

    merged: dict[str, Any] = defaults.model_dump()

    if user.root:
        root = Path(user.root)
        if not root.is_absolute() and defaults.root is not None:
            root = (defaults.root / root).resolve()
        merged["root"] = root

    if user.directories is not None:
        merged["directories"] = {
            **merged["directories"],
            **user.directories.model_dump(exclude_none=True),
        }

    if user.multilingual is not None:
        merged["multilingual"] = user.multilingual
    if user.languages is not None:
        merged["languages"] = list(user.languages)
    if user.default_language:
        merged["default_language"] = user.default_language

    for section in ("schema_extensions", "default_values"):
        user_section = getattr(user, section)
        if user_section is None:
            continue
        merged[section] = {
            name: {**merged[section][name], **(getattr(user_section, name) or {})}
            for name in COLLECTIONS
        }

    if merged["default_language"] not in merged["languages"]:
        logger.warning(
            "defaultLanguage %r is not listed in languages %s; adding it.",
            merged["default_language"],
            merged["languages"],
        )

    return BlogForgeConfig.model_validate(merged)
