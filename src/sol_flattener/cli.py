# src/sol_flattener/cli.py
"""Command-line entry point."""

import argparse
import logging
import platform
import sys
from difflib import get_close_matches
from pathlib import Path

from apathetic_logging import safeLog

from .bundle import flatten
from .config import (
    FileConfig,
    find_config,
    load_config,
    resolve_config,
    resolve_log_level,
)
from .constants import LOG_LEVEL_NAMES
from .errors import FlattenError
from .logs import AppLogger, getAppLogger
from .meta import PROGRAM_SCRIPT, get_metadata
from .sinks import FileSink, Sink, stdout_sink


# --------------------------------------------------------------------------- #
# CLI setup and helpers
# --------------------------------------------------------------------------- #


class HintingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        known_opts: list[str] = []
        for action in self._actions:
            known_opts.extend([s for s in action.option_strings if s])

        hint_lines: list[str] = []
        # "unrecognized arguments: --ouptut ..."
        if "unrecognized arguments:" in message:
            bad = message.split("unrecognized arguments:", 1)[1].strip()
            bad_args = [tok for tok in bad.split() if tok.startswith("-")]
            for arg in bad_args:
                close = get_close_matches(arg, known_opts, n=1, cutoff=0.6)
                if close:
                    hint_lines.append(f"Hint: did you mean {close[0]}?")

        self.print_usage(sys.stderr)
        full = f"{self.prog}: error: {message}"
        if hint_lines:
            full += "\n" + "\n".join(hint_lines)
        self.exit(2, full + "\n")


def _setup_parser() -> argparse.ArgumentParser:
    """Define and return the CLI argument parser."""
    parser = HintingArgumentParser(
        prog=PROGRAM_SCRIPT,
        description=(
            "Flatten Solidity files and their imports into a single file,"
            " ordered so every dependency comes first."
        ),
    )

    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Entry-point source files (relative to the current directory).",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="PATH",
        help=(
            "Write to PATH instead of stdout. Missing directories are created;"
            " an existing file is replaced."
        ),
    )
    parser.add_argument(
        "--root",
        metavar="DIR",
        help="Project root (default: nearest directory with truffle-config.js).",
    )
    parser.add_argument(
        "--dependency-dir",
        dest="dependency_dirs",
        action="append",
        metavar="NAME",
        help=(
            "Directory name holding third-party sources (default: node_modules)."
            " May be repeated."
        ),
    )
    parser.add_argument("-c", "--config", help="Path to a config file.")

    # --- Color ---
    color = parser.add_mutually_exclusive_group()
    color.add_argument(
        "--no-color",
        dest="use_color",
        action="store_const",
        const=False,
        help="Disable ANSI color output.",
    )
    color.add_argument(
        "--color",
        dest="use_color",
        action="store_const",
        const=True,
        help="Force-enable ANSI color output (overrides auto-detect).",
    )
    color.set_defaults(use_color=None)

    # --- Version and verbosity ---
    parser.add_argument("--version", action="store_true", help="Show version info.")

    log_level = parser.add_mutually_exclusive_group()
    log_level.add_argument(
        "-q",
        "--quiet",
        action="store_const",
        const="warning",
        dest="log_level",
        help="Suppress non-critical output (same as --log-level warning).",
    )
    log_level.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        const="debug",
        dest="log_level",
        help="Verbose output (same as --log-level debug).",
    )
    log_level.add_argument(
        "--log-level",
        choices=LOG_LEVEL_NAMES,
        default=None,
        dest="log_level",
        help="Set log verbosity level.",
    )
    return parser


# --------------------------------------------------------------------------- #
# Main entry helpers
# --------------------------------------------------------------------------- #


def _initialize_logger(args: argparse.Namespace) -> None:
    """Initialize logger with CLI args, env vars, and defaults."""
    logger = getAppLogger()
    logger.setLevel(resolve_log_level(args))
    use_color = getattr(args, "use_color", None)
    if use_color is not None:
        logger.enable_color = use_color
    # force handlers to pick up the color setting
    logger.handlers.clear()
    logger.trace("[BOOT] log-level initialized: %s", logger.levelName)

    logger.debug(
        "Runtime: Python %s (%s)",
        platform.python_version(),
        platform.python_implementation(),
    )


def _load_file_config(
    args: argparse.Namespace, cwd: Path
) -> tuple[Path | None, FileConfig]:
    logger = getAppLogger()
    config_path = find_config(args, cwd)
    if config_path is None:
        return None, FileConfig()

    file_config = load_config(config_path)
    logger.debug("Using config: %s", config_path)

    # the config file only decides the level when CLI and env are silent
    config_level = file_config.get("log_level")
    if config_level:
        logger.setLevel(resolve_log_level(args, config_level))
        logger.trace("[CONFIG] log-level re-resolved from config: %s", logger.levelName)
    return config_path, file_config


def _make_sink(output: Path | None) -> Sink:
    if output is None:
        return stdout_sink
    sink = FileSink(output)
    sink.prepare()
    return sink


def _report(logger: AppLogger, level: int, msg: str, *args: object) -> None:
    """Log a fatal error; the traceback is only shown at debug or below."""
    logger.log(level, msg, *args, exc_info=logger.isEnabledFor(logging.DEBUG))


# --------------------------------------------------------------------------- #
# Main entry
# --------------------------------------------------------------------------- #


def main(argv: list[str] | None = None) -> int:
    logger = getAppLogger()  # init (use env + defaults)

    try:
        parser = _setup_parser()
        args = parser.parse_args(argv)

        _initialize_logger(args)

        if getattr(args, "version", None):
            logger.info("%s", get_metadata())
            return 0

        cwd = Path.cwd().resolve()
        config_path, file_config = _load_file_config(args, cwd)
        resolved = resolve_config(args, cwd, file_config, config_path)

        if not resolved["files"]:
            logger.error(
                "Usage: %s <files> [--output <output file path>]", PROGRAM_SCRIPT
            )
            return 1

        sink = _make_sink(resolved["output"])
        flatten(
            resolved["files"],
            sink,
            root=resolved["root"],
            cwd=cwd,
            dependency_dirs=resolved["dependency_dirs"],
            root_markers=resolved["root_markers"],
            search_paths=resolved["search_paths"],
        )

    except (FlattenError, OSError, ValueError) as e:
        # controlled termination
        try:
            _report(logger, logging.ERROR, "%s", e)
        except Exception:  # noqa: BLE001
            safeLog(f"[FATAL] Logging failed while reporting: {e}")
        return getattr(e, "code", 1)

    except Exception as e:  # noqa: BLE001
        # unexpected internal error
        try:
            _report(logger, logging.CRITICAL, "Unexpected internal error: %s", e)
        except Exception:  # noqa: BLE001
            safeLog(f"[FATAL] Logging failed while reporting: {e}")
        return 1

    else:
        return 0
