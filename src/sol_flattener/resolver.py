# src/sol_flattener/resolver.py
"""Locate import targets on disk."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .constants import DEFAULT_DEPENDENCY_DIRS, SOURCE_ENCODING
from .errors import ResolutionError
from .logs import getAppLogger


@dataclass(frozen=True)
class ResolvedSource:
    """Contents of a resolved import and the file they came from."""

    contents: str
    path: Path


class Resolver(Protocol):
    def resolve(self, identifier: str) -> ResolvedSource: ...


def _dependency_dir_candidates(
    root: Path, dependency_dirs: Sequence[str]
) -> list[Path]:
    """Dependency directories from ``root`` up to the filesystem root."""
    candidates: list[Path] = []
    current = root
    while True:
        candidates.extend(current / name for name in dependency_dirs)
        parent = current.parent
        if parent == current:
            return candidates
        current = parent


class FsResolver:
    """Resolve identifiers against a project root and its dependency dirs.

    Lookup order for a non-absolute identifier:

    1. ``root / identifier``
    2. ``search_path / identifier`` for each extra search path
    3. ``<dir>/<dependency_dir>/identifier`` walking from ``root`` upward,
       the way Node.js finds packages in ``node_modules``
    """

    def __init__(
        self,
        root: Path,
        *,
        dependency_dirs: Iterable[str] = DEFAULT_DEPENDENCY_DIRS,
        search_paths: Iterable[Path] = (),
    ) -> None:
        self.root = Path(root).resolve()
        self.dependency_dirs = tuple(dependency_dirs)
        self.search_paths = [Path(p).resolve() for p in search_paths]

    def candidates(self, identifier: str) -> list[Path]:
        target = Path(identifier)
        if target.is_absolute():
            return [target]
        bases = [self.root, *self.search_paths]
        bases.extend(_dependency_dir_candidates(self.root, self.dependency_dirs))
        return [base / target for base in bases]

    def locate(self, identifier: str) -> Path:
        logger = getAppLogger()
        for candidate in self.candidates(identifier):
            if candidate.is_file():
                logger.trace("[RESOLVE] %s → %s", identifier, candidate)
                return candidate.resolve()
        raise ResolutionError(identifier)

    def resolve(self, identifier: str) -> ResolvedSource:
        path = self.locate(identifier)
        try:
            contents = path.read_text(encoding=SOURCE_ENCODING)
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Could not read {path}: {e}"
            raise ResolutionError(identifier, msg) from e
        return ResolvedSource(contents=contents, path=path)
