# src/sol_flattener/graph.py
"""Dependency discovery and ordering.

Nodes are keyed by the resolved location of each file, relative to the
project root, so the same file reached through a bare package import and a
relative import is a single node.
"""

import graphlib
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .constants import DEFAULT_DEPENDENCY_DIRS
from .errors import CycleError, ParseError, ResolutionError
from .imports import extract_imports
from .logs import getAppLogger
from .paths import normalize_import, relative_to_root, to_global_name
from .resolver import ResolvedSource, Resolver


ImportExtractor = Callable[[str], list[str]]


@dataclass
class DependencyGraph:
    """Directed edges ``(dependency, dependent)`` plus every visited node.

    Nodes and edges keep insertion order and are never duplicated.
    """

    entry_points: list[str] = field(default_factory=list)
    # node -> its dependencies; dicts as insertion-ordered sets
    _dependencies: dict[str, dict[str, None]] = field(
        default_factory=dict, init=False, repr=False
    )
    _edges: dict[tuple[str, str], None] = field(
        default_factory=dict, init=False, repr=False
    )
    # node -> first identifier the resolver accepted for it
    _identifiers: dict[str, str] = field(default_factory=dict, init=False, repr=False)

    @property
    def nodes(self) -> list[str]:
        return list(self._dependencies)

    @property
    def edges(self) -> list[tuple[str, str]]:
        return list(self._edges)

    def add_node(self, node: str) -> None:
        self._dependencies.setdefault(node, {})

    def add_edge(self, dependency: str, dependent: str) -> None:
        self.add_node(dependency)
        self.add_node(dependent)
        self._dependencies[dependent].setdefault(dependency, None)
        self._edges.setdefault((dependency, dependent), None)

    def dependencies_of(self, node: str) -> list[str]:
        return list(self._dependencies.get(node, {}))

    def record_identifier(self, node: str, identifier: str) -> None:
        self._identifiers.setdefault(node, identifier)

    def identifier_of(self, node: str) -> str:
        """Identifier to resolve ``node`` with; the node itself if none was seen."""
        return self._identifiers.get(node, node)


@dataclass(frozen=True)
class SortedFile:
    """A file in emission order.

    ``identifier`` is what the resolver accepted for the file, ``global_name``
    is its display name.
    """

    identifier: str
    global_name: str


class _GraphBuilder:
    def __init__(
        self, resolver: Resolver, root: Path, extractor: ImportExtractor
    ) -> None:
        self.resolver = resolver
        self.root = root
        self.extractor = extractor
        self.graph = DependencyGraph()
        self.visited: list[str] = []
        self._visited_set: set[str] = set()
        self._keys: dict[str, str] = {}
        self._sources: dict[str, ResolvedSource] = {}

    def canonical(self, identifier: str, chain: tuple[str, ...]) -> str:
        """Resolve ``identifier`` once and return its graph key."""
        key = self._keys.get(identifier)
        if key is not None:
            return key

        try:
            resolved = self.resolver.resolve(identifier)
        except ResolutionError as e:
            if not chain:
                raise
            msg = f"{e} (imported from {' -> '.join(chain)})"
            raise ResolutionError(identifier, msg) from e

        key = relative_to_root(resolved.path, self.root)
        self._keys[identifier] = key
        self.graph.record_identifier(key, identifier)
        self._sources.setdefault(key, resolved)
        return key

    def visit(self, key: str, chain: tuple[str, ...]) -> None:
        logger = getAppLogger()
        self.visited.append(key)
        self._visited_set.add(key)
        self.graph.add_node(key)

        source = self._sources[key]
        try:
            raw_imports = self.extractor(source.contents)
        except ParseError as e:
            msg = f"Could not parse {key} for extracting its imports: {e}"
            raise ParseError(msg, path=key, cause=str(e)) from e

        for raw_import in raw_imports:
            dependency = normalize_import(raw_import, key)
            dep_key = self.canonical(dependency, chain)
            logger.trace("[GRAPH] %s → %s (via %r)", dep_key, key, raw_import)
            self.graph.add_edge(dep_key, key)
            if not self.has_visited(dep_key):
                self.visit(dep_key, (*chain, dep_key))

    def has_visited(self, key: str) -> bool:
        return key in self._visited_set


def build_dependency_graph(
    entry_points: Sequence[str],
    resolver: Resolver,
    root: Path,
    *,
    extractor: ImportExtractor = extract_imports,
) -> tuple[DependencyGraph, list[str]]:
    """Discover the transitive imports of ``entry_points``.

    Depth-first, in source order, sharing one visit list across all entry
    points so shared dependencies are traversed once. Every discovered edge
    is recorded even when its dependency was already visited.

    Args:
        entry_points: Identifiers relative to ``root``, in the order given
        resolver: Source of file contents and concrete paths
        root: Project root all graph keys are relative to
        extractor: Returns the raw import paths of a file's contents

    Returns:
        Tuple of (graph, visited keys in visit order)

    Raises:
        ResolutionError: if an entry point or import cannot be found
        ParseError: if a file cannot be scanned for imports
    """
    logger = getAppLogger()
    builder = _GraphBuilder(resolver, Path(root).resolve(), extractor)

    for entry_point in entry_points:
        key = builder.canonical(entry_point, ())
        builder.graph.entry_points.append(key)
        if not builder.has_visited(key):
            builder.visit(key, (key,))

    logger.debug(
        "Discovered %d file(s), %d import edge(s)",
        len(builder.graph.nodes),
        len(builder.graph.edges),
    )
    return builder.graph, builder.visited


def sort_files(
    graph: DependencyGraph,
    visited: Sequence[str],
    root: Path,
    *,
    dependency_dirs: Iterable[str] = DEFAULT_DEPENDENCY_DIRS,
) -> list[SortedFile]:
    """Order files so every dependency precedes its dependents.

    Entry points missing from the graph are appended, then the list is
    deduplicated by global name keeping the first occurrence.

    Raises:
        CycleError: if the graph has a cycle; carries the visit list
    """
    logger = getAppLogger()
    sorter: graphlib.TopologicalSorter[str] = graphlib.TopologicalSorter()
    for node in graph.nodes:
        sorter.add(node, *graph.dependencies_of(node))

    try:
        order = list(sorter.static_order())
    except graphlib.CycleError as e:
        cycle = e.args[1] if len(e.args) > 1 else []
        raise CycleError(visited, cycle) from e

    dirs = tuple(dependency_dirs)
    sorted_files: list[SortedFile] = []
    seen: set[str] = set()
    for node in [*order, *graph.entry_points]:
        global_name = to_global_name(node, root, dirs)
        if global_name in seen:
            continue
        seen.add(global_name)
        sorted_files.append(SortedFile(graph.identifier_of(node), global_name))

    logger.debug("File order: %s", ", ".join(f.global_name for f in sorted_files))
    return sorted_files
