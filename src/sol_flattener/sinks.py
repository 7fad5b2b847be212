# src/sol_flattener/sinks.py
"""Destinations for flattened output.

A sink is any callable taking one chunk of text. Each chunk is written
followed by a newline.
"""

from collections.abc import Callable
from pathlib import Path

from .constants import SOURCE_ENCODING
from .logs import getAppLogger


Sink = Callable[[str], None]


def stdout_sink(chunk: str) -> None:
    print(chunk)


class StringSink:
    """Accumulate chunks in memory."""

    def __init__(self) -> None:
        self._chunks: list[str] = []

    def __call__(self, chunk: str) -> None:
        self._chunks.append(f"{chunk}\n")

    def getvalue(self) -> str:
        return "".join(self._chunks)


class FileSink:
    """Append chunks to a file.

    Call ``prepare()`` before the first chunk: it creates missing parent
    directories and removes a file left over from a previous run.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def prepare(self) -> None:
        logger = getAppLogger()
        out_dir = self.path.parent
        if not out_dir.is_dir():
            logger.info(
                'output directory not found, creating directory tree "%s"', out_dir
            )
            out_dir.mkdir(parents=True, exist_ok=True)

        if self.path.is_file():
            logger.info('output file already exists, removing file "%s"', self.path)
            self.path.unlink()

    def __call__(self, chunk: str) -> None:
        with self.path.open("a", encoding=SOURCE_ENCODING) as f:
            f.write(f"{chunk}\n")
