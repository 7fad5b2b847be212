# src/sol_flattener/constants.py
"""Central constants used across the project."""


# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"
DEFAULT_ENV_ROOT: str = "ROOT"
DEFAULT_ENV_DEPENDENCY_DIRS: str = "DEPENDENCY_DIRS"

# --- program defaults ---
DEFAULT_LOG_LEVEL: str = "info"

# --- project layout defaults ---
# files whose presence marks the project root (searched upward from cwd)
DEFAULT_ROOT_MARKERS: tuple[str, ...] = ("truffle.js", "truffle-config.js")
# directories holding third-party sources; stripped from global names
DEFAULT_DEPENDENCY_DIRS: tuple[str, ...] = ("node_modules",)

# --- output ---
FILE_HEADER_PREFIX: str = "// File: "
SOURCE_ENCODING: str = "utf-8"

# --- logging ---
# accepted by --log-level, most verbose first
LOG_LEVEL_NAMES: tuple[str, ...] = (
    "trace",
    "debug",
    "info",
    "warning",
    "error",
    "critical",
    "silent",
)
