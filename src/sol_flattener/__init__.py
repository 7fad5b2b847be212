# src/sol_flattener/__init__.py

"""Sol Flattener — Combine Solidity files and their imports into one file.

Full developer API
==================
This package re-exports all non-private symbols from its submodules,
making it suitable for programmatic use and custom integrations.
Anything prefixed with "_" is considered internal and may change.

Highlights:
    - main()                   → CLI entrypoint
    - flatten()                → Flatten entry points into a sink
    - flatten_to_string()      → Flatten entry points and return the text
    - build_dependency_graph() → Discover the import graph
    - sort_files()             → Dependency-first file order
"""

from .bundle import emit, flatten, flatten_to_string
from .cleaning import CleanedFile, clean_source, strip_imports
from .cli import main
from .config import (
    FileConfig,
    FlattenConfigResolved,
    find_config,
    load_config,
    resolve_config,
)
from .constants import (
    DEFAULT_DEPENDENCY_DIRS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_ROOT_MARKERS,
)
from .errors import (
    ConfigError,
    CycleError,
    FlattenError,
    InvalidRootError,
    ParseError,
    ResolutionError,
    RootNotFoundError,
)
from .graph import DependencyGraph, SortedFile, build_dependency_graph, sort_files
from .imports import ImportDirective, extract_imports, find_import_directives
from .logs import getAppLogger
from .meta import (
    PROGRAM_DISPLAY,
    PROGRAM_ENV,
    PROGRAM_PACKAGE,
    PROGRAM_SCRIPT,
    Metadata,
    get_metadata,
)
from .paths import normalize_import, relative_to_root, to_global_name
from .resolver import FsResolver, ResolvedSource, Resolver
from .root import find_project_root, resolve_project_root
from .sinks import FileSink, Sink, StringSink, stdout_sink


__all__ = [  # noqa: RUF022
    # cleaning
    "CleanedFile",
    "clean_source",
    "strip_imports",
    # cli
    "main",
    # config
    "FileConfig",
    "FlattenConfigResolved",
    "find_config",
    "load_config",
    "resolve_config",
    # constants
    "DEFAULT_DEPENDENCY_DIRS",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_ROOT_MARKERS",
    # errors
    "ConfigError",
    "CycleError",
    "FlattenError",
    "InvalidRootError",
    "ParseError",
    "ResolutionError",
    "RootNotFoundError",
    # bundle
    "emit",
    "flatten",
    "flatten_to_string",
    # graph
    "DependencyGraph",
    "SortedFile",
    "build_dependency_graph",
    "sort_files",
    # imports
    "ImportDirective",
    "extract_imports",
    "find_import_directives",
    # logs
    "getAppLogger",
    # meta
    "Metadata",
    "PROGRAM_DISPLAY",
    "PROGRAM_ENV",
    "PROGRAM_PACKAGE",
    "PROGRAM_SCRIPT",
    "get_metadata",
    # paths
    "normalize_import",
    "relative_to_root",
    "to_global_name",
    # resolver
    "FsResolver",
    "ResolvedSource",
    "Resolver",
    # root
    "find_project_root",
    "resolve_project_root",
    # sinks
    "FileSink",
    "Sink",
    "StringSink",
    "stdout_sink",
]
