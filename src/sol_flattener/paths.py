# src/sol_flattener/paths.py
"""Path normalization and global-name mapping.

Identifiers are plain strings with forward slashes. Nothing here touches the
filesystem except ``relative_to_root``, which only resolves paths to make
them comparable.
"""

import os
import posixpath
from collections.abc import Iterable
from pathlib import Path

from .constants import DEFAULT_DEPENDENCY_DIRS


RELATIVE_PREFIXES = ("./", "../")


def to_posix(path: str | os.PathLike[str]) -> str:
    """Return ``path`` with every separator as a forward slash."""
    return os.fspath(path).replace("\\", "/")


def is_relative_import(raw_import: str) -> bool:
    return to_posix(raw_import).startswith(RELATIVE_PREFIXES)


def import_dir(importing_file_path: str) -> str:
    """Directory part of an identifier, accepting either separator."""
    posix = to_posix(importing_file_path)
    return posix[: posix.rfind("/")] if "/" in posix else ""


def normalize_import(raw_import: str, importing_file_path: str) -> str:
    """Canonicalize ``raw_import`` as seen from ``importing_file_path``.

    ``./x`` and ``../x`` are joined to the importing file's directory and
    collapsed; bare (package-style) imports are returned as-is apart from
    separator canonicalization.

    >>> normalize_import("../lib/Math.sol", "contracts/token/Token.sol")
    'contracts/lib/Math.sol'
    >>> normalize_import("zeppelin/contracts/Ownable.sol", "contracts/A.sol")
    'zeppelin/contracts/Ownable.sol'
    """
    dependency = to_posix(raw_import)
    if not is_relative_import(dependency):
        return dependency

    joined = posixpath.join(import_dir(importing_file_path), dependency)
    return posixpath.normpath(joined)


def relative_to_root(path: str | os.PathLike[str], root: str | os.PathLike[str]) -> str:
    """Express ``path`` relative to ``root`` with forward slashes.

    Relative inputs are taken relative to ``root`` itself. Paths outside the
    root keep their ``..`` segments (a hoisted ``node_modules`` for instance).
    """
    root_path = Path(root).resolve()
    candidate = Path(path)
    if not candidate.is_absolute():
        candidate = root_path / candidate
    return to_posix(os.path.relpath(candidate.resolve(), root_path))


def to_global_name(
    resolved_path: str | os.PathLike[str],
    project_root: str | os.PathLike[str],
    dependency_dirs: Iterable[str] = DEFAULT_DEPENDENCY_DIRS,
) -> str:
    """Map a resolved file to its display name in the flattened output.

    The name is relative to ``project_root``; when it passes through a
    dependency directory everything up to and including that directory is
    dropped, leaving the library-relative remainder.

    >>> to_global_name("/p/node_modules/zeppelin/math/SafeMath.sol", "/p")
    'zeppelin/math/SafeMath.sol'
    """
    global_name = relative_to_root(resolved_path, project_root)
    segments = global_name.split("/")
    dirs = set(dependency_dirs)
    for index, segment in enumerate(segments):
        if segment in dirs:
            return "/".join(segments[index + 1 :])
    return global_name
