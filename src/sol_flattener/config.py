# src/sol_flattener/config.py
"""Configuration: optional JSON(C) file merged with CLI args and env vars.

Precedence, highest first: CLI → environment → config file → defaults.
Paths from the config file are relative to the file's own directory.
"""

import argparse
import json
import os
import re
from pathlib import Path
from typing import Any, TypedDict

from typing_extensions import NotRequired

from .constants import (
    DEFAULT_DEPENDENCY_DIRS,
    DEFAULT_ENV_DEPENDENCY_DIRS,
    DEFAULT_ENV_LOG_LEVEL,
    DEFAULT_ENV_ROOT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_ROOT_MARKERS,
    SOURCE_ENCODING,
)
from .errors import ConfigError
from .logs import getAppLogger
from .meta import PROGRAM_CONFIG, PROGRAM_ENV


class FileConfig(TypedDict, total=False):
    root: str
    output: str
    dependency_dirs: list[str]
    root_markers: list[str]
    search_paths: list[str]
    log_level: str


# Resolved type - all fields are present with final values
class FlattenConfigResolved(TypedDict):
    files: list[str]
    output: Path | None
    root: Path | None
    dependency_dirs: list[str]
    root_markers: list[str]
    search_paths: list[Path]
    log_level: str
    cwd: Path
    config_path: NotRequired[Path]


_STRING_KEYS = ("root", "output", "log_level")
_LIST_KEYS = ("dependency_dirs", "root_markers", "search_paths")

# strings are matched first so comment markers inside them survive
_JSONC_COMMENT_REGEX = re.compile(r'("(?:\\.|[^"\\])*")|//[^\n]*|/\*.*?\*/', re.DOTALL)
_TRAILING_COMMA_REGEX = re.compile(r",(\s*[}\]])")


def find_config(args: argparse.Namespace, cwd: Path) -> Path | None:
    """Locate a configuration file.

    Search order:
      1. Explicit path from CLI (--config)
      2. .{PROGRAM_CONFIG}.jsonc or .{PROGRAM_CONFIG}.json in cwd or a parent

    Returns the first match, or None if there is no config file.
    """
    logger = getAppLogger()

    if getattr(args, "config", None):
        config = (cwd / Path(args.config).expanduser()).resolve()
        logger.trace("[find_config] Checking explicit path: %s", config)
        if not config.exists():
            xmsg = f"Specified config file not found: {config}"
            raise FileNotFoundError(xmsg)
        if config.is_dir():
            xmsg = f"Specified config path is a directory, not a file: {config}"
            raise ValueError(xmsg)
        return config

    candidate_names = [f".{PROGRAM_CONFIG}.jsonc", f".{PROGRAM_CONFIG}.json"]
    current = cwd.resolve()
    while True:
        for name in candidate_names:
            candidate = current / name
            if candidate.is_file():
                logger.trace("[find_config] Found %s", candidate)
                return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    logger.trace("[find_config] No config file found in %s or parents", cwd)
    return None


def load_jsonc(text: str) -> Any:
    """Parse JSON allowing comments and trailing commas.

    Returns None when nothing but whitespace and comments is left.
    """
    without_comments = _JSONC_COMMENT_REGEX.sub(
        lambda m: m.group(1) or "", text
    ).strip()
    if not without_comments:
        return None
    return json.loads(_TRAILING_COMMA_REGEX.sub(r"\1", without_comments))


def load_config(config_path: Path) -> FileConfig:
    """Load and validate a config file.

    Raises:
        ConfigError: on invalid JSON or values of the wrong type
    """
    logger = getAppLogger()
    try:
        raw = load_jsonc(config_path.read_text(encoding=SOURCE_ENCODING))
    except ValueError as e:
        xmsg = f"Error while loading configuration file '{config_path.name}': {e}"
        raise ConfigError(xmsg) from e

    if raw is None:
        return FileConfig()
    if not isinstance(raw, dict):
        xmsg = (
            f"{config_path.name} must contain an object, not {type(raw).__name__}"
        )
        raise ConfigError(xmsg)

    config = FileConfig()
    for key, value in raw.items():
        if key in _STRING_KEYS:
            if not isinstance(value, str):
                xmsg = f"{config_path.name}: '{key}' must be a string"
                raise ConfigError(xmsg)
        elif key in _LIST_KEYS:
            if not isinstance(value, list) or not all(
                isinstance(item, str) for item in value
            ):
                xmsg = f"{config_path.name}: '{key}' must be a list of strings"
                raise ConfigError(xmsg)
        else:
            logger.warning("Unknown key %r in %s (ignored)", key, config_path.name)
            continue
        config[key] = value  # type: ignore[literal-required]

    return config


def _env(name: str) -> str | None:
    return os.getenv(f"{PROGRAM_ENV}_{name}") or None


def resolve_config(
    args: argparse.Namespace,
    cwd: Path,
    file_config: FileConfig | None = None,
    config_path: Path | None = None,
) -> FlattenConfigResolved:
    """Merge CLI args, env vars, config file values and defaults."""
    file_config = file_config or FileConfig()
    config_dir = config_path.parent if config_path else cwd

    # --- root ---
    root: Path | None = None
    if getattr(args, "root", None):
        root = (cwd / args.root).resolve()
    elif env_root := _env(DEFAULT_ENV_ROOT):
        root = (cwd / env_root).resolve()
    elif "root" in file_config:
        root = (config_dir / file_config["root"]).resolve()

    # --- output ---
    output: Path | None = None
    if getattr(args, "output", None):
        output = cwd / args.output
    elif "output" in file_config:
        output = config_dir / file_config["output"]

    # --- dependency dirs ---
    dependency_dirs: list[str]
    if getattr(args, "dependency_dirs", None):
        dependency_dirs = list(args.dependency_dirs)
    elif env_dirs := _env(DEFAULT_ENV_DEPENDENCY_DIRS):
        dependency_dirs = [d.strip() for d in env_dirs.split(",") if d.strip()]
    else:
        dependency_dirs = list(
            file_config.get("dependency_dirs", DEFAULT_DEPENDENCY_DIRS)
        )

    resolved = FlattenConfigResolved(
        files=list(getattr(args, "files", None) or []),
        output=output,
        root=root,
        dependency_dirs=dependency_dirs,
        root_markers=list(file_config.get("root_markers", DEFAULT_ROOT_MARKERS)),
        search_paths=[
            (config_dir / p).resolve() for p in file_config.get("search_paths", [])
        ],
        log_level=file_config.get("log_level", DEFAULT_LOG_LEVEL),
        cwd=cwd,
    )
    if config_path is not None:
        resolved["config_path"] = config_path
    return resolved


def resolve_log_level(
    args: argparse.Namespace | None = None, config_level: str | None = None
) -> str:
    """Pick the log level: CLI → environment → config file → default."""
    args_level = getattr(args, "log_level", None)
    if args_level:
        return str(args_level).lower()

    env_level = os.getenv(f"{PROGRAM_ENV}_{DEFAULT_ENV_LOG_LEVEL}") or os.getenv(
        DEFAULT_ENV_LOG_LEVEL
    )
    if env_level:
        return env_level.lower()

    return (config_level or DEFAULT_LOG_LEVEL).lower()
