# src/sol_flattener/imports.py
"""Import extraction for Solidity sources.

A small scanner, not a parser: it understands comments and string literals
well enough to find every ``import`` directive, and nothing more. Supported
directive forms::

    import "path";
    import "path" as Name;
    import * as Name from "path";
    import Name from "path";
    import {A, B as C} from "path";

Directives may span several lines. Imports inside comments or strings are
ignored.
"""

from dataclasses import dataclass

from .errors import ParseError
from .logs import getAppLogger


IMPORT_KEYWORD = "import"
QUOTES = ("'", '"')


@dataclass(frozen=True)
class ImportDirective:
    """One import statement found in a source file.

    ``start`` is the offset of the ``import`` keyword and ``end`` the offset
    just past its terminating ``;``.
    """

    path: str
    start: int
    end: int


def _is_ident_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_$"


def _line_of(text: str, offset: int) -> int:
    return text.count("\n", 0, offset) + 1


class _Scanner:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def _fail(self, message: str, offset: int) -> ParseError:
        return ParseError(f"{message} (line {_line_of(self.text, offset)})")

    def skip_comment(self) -> bool:
        """Skip a comment at the cursor; return False if there is none."""
        text, pos = self.text, self.pos
        if text.startswith("//", pos):
            newline = text.find("\n", pos)
            self.pos = len(text) if newline == -1 else newline + 1
            return True
        if text.startswith("/*", pos):
            close = text.find("*/", pos + 2)
            if close == -1:
                raise self._fail("Unterminated block comment", pos)
            self.pos = close + 2
            return True
        return False

    def read_string(self) -> str:
        """Consume a string literal at the cursor and return its value."""
        text = self.text
        quote = text[self.pos]
        start = self.pos
        self.pos += 1
        chars: list[str] = []
        while self.pos < len(text):
            ch = text[self.pos]
            if ch == "\\" and self.pos + 1 < len(text):
                chars.append(text[self.pos + 1])
                self.pos += 2
                continue
            if ch == "\n":
                break
            self.pos += 1
            if ch == quote:
                return "".join(chars)
            chars.append(ch)
        raise self._fail("Unterminated string literal", start)

    def read_word(self) -> str:
        start = self.pos
        while self.pos < len(self.text) and _is_ident_char(self.text[self.pos]):
            self.pos += 1
        return self.text[start : self.pos]

    def read_directive(self, start: int) -> ImportDirective:
        """Parse the rest of an import directive; the keyword is consumed."""
        text = self.text
        path: str | None = None
        while self.pos < len(text):
            ch = text[self.pos]
            if self.skip_comment():
                continue
            if ch in QUOTES:
                value = self.read_string()
                if path is None:
                    path = value
                continue
            self.pos += 1
            if ch == ";":
                if path is None:
                    raise self._fail("Import directive without a path", start)
                return ImportDirective(path=path, start=start, end=self.pos)
        raise self._fail("Import directive is missing its terminating ';'", start)

    def directives(self) -> list[ImportDirective]:
        text = self.text
        found: list[ImportDirective] = []
        while self.pos < len(text):
            ch = text[self.pos]
            if self.skip_comment():
                continue
            if ch in QUOTES:
                self.read_string()
                continue
            if _is_ident_char(ch):
                start = self.pos
                word = self.read_word()
                if word == IMPORT_KEYWORD:
                    found.append(self.read_directive(start))
                continue
            self.pos += 1
        return found


def find_import_directives(contents: str) -> list[ImportDirective]:
    """Return every import directive in ``contents``, in source order.

    Raises:
        ParseError: on unterminated strings or block comments, and on
            import directives without a path or a terminating ``;``.
    """
    return _Scanner(contents).directives()


def extract_imports(contents: str) -> list[str]:
    """Return the raw import paths of ``contents``, in source order."""
    logger = getAppLogger()
    paths = [directive.path for directive in find_import_directives(contents)]
    logger.trace("[IMPORTS] found %d import(s): %s", len(paths), paths)
    return paths
