# src/sol_flattener/meta.py
"""Program identity and version metadata."""

from dataclasses import dataclass
from importlib import metadata as importlib_metadata


# --- program identity ---
PROGRAM_PACKAGE = "sol_flattener"
PROGRAM_SCRIPT = "sol-flattener"
PROGRAM_DISPLAY = "Sol Flattener"
PROGRAM_ENV = "SOL_FLATTENER"
PROGRAM_CONFIG = "sol-flattener"


@dataclass(frozen=True)
class Metadata:
    """Version information reported by --version."""

    version: str
    distribution: str = PROGRAM_SCRIPT

    def __str__(self) -> str:
        return f"{PROGRAM_DISPLAY} {self.version}"


def get_metadata() -> Metadata:
    """Return the installed version, or "unknown" when running from a checkout."""
    try:
        version = importlib_metadata.version(PROGRAM_SCRIPT)
    except importlib_metadata.PackageNotFoundError:
        version = "unknown"
    return Metadata(version)
