# src/sol_flattener/root.py
"""Project root discovery."""

from collections.abc import Sequence
from pathlib import Path

from .constants import DEFAULT_ROOT_MARKERS
from .errors import InvalidRootError, RootNotFoundError
from .logs import getAppLogger


def find_project_root(
    start: Path,
    markers: Sequence[str] = DEFAULT_ROOT_MARKERS,
) -> Path:
    """Walk from ``start`` up to the filesystem root looking for a marker file.

    Returns the closest directory holding any of ``markers``.

    Raises:
        RootNotFoundError: if no directory on the way up has one
    """
    logger = getAppLogger()
    current = Path(start).resolve()
    while True:
        for name in markers:
            if (current / name).is_file():
                logger.trace("[ROOT] found %s in %s", name, current)
                return current
        parent = current.parent
        if parent == current:
            break
        current = parent

    names = " or ".join(markers)
    msg = (
        f"Must be run inside a project: {names} not found in {start} or its"
        " parents. Use --root to point at the project root."
    )
    raise RootNotFoundError(msg)


def resolve_project_root(
    explicit: Path | None,
    cwd: Path,
    markers: Sequence[str] = DEFAULT_ROOT_MARKERS,
) -> Path:
    """Use ``explicit`` when given (it must exist), otherwise search upward."""
    if explicit is not None:
        root = (cwd / explicit).resolve()
        if not root.exists():
            msg = f"The specified root directory does not exist: {root}"
            raise InvalidRootError(msg)
        return root
    return find_project_root(cwd, markers)
