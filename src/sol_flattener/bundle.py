# src/sol_flattener/bundle.py
"""Flattening pipeline: discover, order, clean and emit."""

from collections.abc import Iterable, Sequence
from pathlib import Path

from .cleaning import clean_source
from .constants import (
    DEFAULT_DEPENDENCY_DIRS,
    DEFAULT_ROOT_MARKERS,
    FILE_HEADER_PREFIX,
)
from .graph import ImportExtractor, SortedFile, build_dependency_graph, sort_files
from .imports import extract_imports
from .logs import getAppLogger
from .paths import relative_to_root
from .resolver import FsResolver, Resolver
from .root import resolve_project_root
from .sinks import Sink, StringSink


def emit(sorted_files: Sequence[SortedFile], resolver: Resolver, sink: Sink) -> None:
    """Write the bundle for ``sorted_files`` to ``sink``.

    Chunks, in order: the first version pragma found across all files (if
    any), each distinct experimental pragma, then every cleaned body under a
    ``// File: <name>`` marker as a single chunk. Every file is read and
    cleaned before the first chunk is written.
    """
    logger = getAppLogger()
    version_pragma: str | None = None
    experimental_pragmas: dict[str, None] = {}
    parts: list[str] = []

    for sorted_file in sorted_files:
        contents = resolver.resolve(sorted_file.identifier).contents
        cleaned = clean_source(contents)

        if cleaned.version_pragma is not None:
            if version_pragma is None:
                version_pragma = cleaned.version_pragma
            elif cleaned.version_pragma != version_pragma:
                logger.debug(
                    "Dropping %r from %s, keeping %r",
                    cleaned.version_pragma,
                    sorted_file.global_name,
                    version_pragma,
                )
        for pragma in cleaned.experimental_pragmas:
            experimental_pragmas.setdefault(pragma, None)

        parts.append(f"\n{FILE_HEADER_PREFIX}{sorted_file.global_name}\n{cleaned.body}")

    if version_pragma is not None:
        sink(version_pragma)
    for pragma in experimental_pragmas:
        sink(pragma)
    sink("".join(parts))


def flatten(  # noqa: PLR0913
    file_paths: Sequence[str | Path],
    sink: Sink,
    *,
    root: Path | None = None,
    cwd: Path | None = None,
    resolver: Resolver | None = None,
    extractor: ImportExtractor = extract_imports,
    dependency_dirs: Iterable[str] = DEFAULT_DEPENDENCY_DIRS,
    root_markers: Sequence[str] = DEFAULT_ROOT_MARKERS,
    search_paths: Iterable[Path] = (),
) -> None:
    """Flatten ``file_paths`` and their imports into ``sink``.

    Args:
        file_paths: Entry points, relative to ``cwd`` or absolute
        sink: Receives the output chunks
        root: Explicit project root; located from ``cwd`` when omitted
        cwd: Base for relative entry points (default: process cwd)
        resolver: Overrides the filesystem resolver
        extractor: Overrides the import extractor
        dependency_dirs: Third-party source directories (``node_modules``)
        root_markers: Files marking the project root
        search_paths: Extra directories to resolve bare imports against

    Raises:
        FlattenError: any resolution, parse, cycle or root failure. Nothing
            is written to ``sink`` in that case.
    """
    logger = getAppLogger()
    base = Path(cwd) if cwd is not None else Path.cwd()
    dirs = tuple(dependency_dirs)

    project_root = resolve_project_root(root, base, root_markers)
    logger.debug("Project root: %s", project_root)

    entry_points = [relative_to_root(base / p, project_root) for p in file_paths]
    if resolver is None:
        resolver = FsResolver(
            project_root, dependency_dirs=dirs, search_paths=search_paths
        )

    graph, visited = build_dependency_graph(
        entry_points, resolver, project_root, extractor=extractor
    )
    sorted_files = sort_files(graph, visited, project_root, dependency_dirs=dirs)
    emit(sorted_files, resolver, sink)
    logger.debug("Flattened %d file(s)", len(sorted_files))


def flatten_to_string(
    file_paths: Sequence[str | Path],
    root: Path | None = None,
    **kwargs: object,
) -> str:
    """Return the flattened text of ``file_paths``; see ``flatten``."""
    sink = StringSink()
    flatten(file_paths, sink, root=root, **kwargs)  # type: ignore[arg-type]
    return sink.getvalue()
