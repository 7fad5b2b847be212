# src/sol_flattener/errors.py
"""Exceptions raised while flattening.

Every error is fatal: flattening is all-or-nothing, the first failure
propagates to the caller and nothing is written to the sink.
"""

from collections.abc import Sequence


class FlattenError(RuntimeError):
    """Base class for controlled failures; ``code`` is the CLI exit status."""

    code: int = 1


class ResolutionError(FlattenError):
    """An import target could not be located."""

    def __init__(self, identifier: str, message: str | None = None) -> None:
        self.identifier = identifier
        super().__init__(message or f"Could not find file {identifier!r}")


class ParseError(FlattenError):
    """A source file could not be scanned for its imports."""

    def __init__(
        self, message: str, *, path: str | None = None, cause: str | None = None
    ) -> None:
        self.path = path
        self.cause = cause
        super().__init__(message)


class CycleError(FlattenError):
    """The dependency graph has no valid topological order."""

    def __init__(self, visited: Sequence[str], cycle: Sequence[str] = ()) -> None:
        self.visited = list(visited)
        self.cycle = list(cycle)
        files = "\n\t".join(self.visited)
        super().__init__(
            "There is a cycle in the dependency graph, can't compute topological"
            f" ordering. Files:\n\t{files}"
        )


class RootNotFoundError(FlattenError):
    """No project marker file was found walking upward."""


class InvalidRootError(FlattenError):
    """An explicit project root does not exist."""


class ConfigError(FlattenError):
    """The config file is malformed."""
