# src/sol_flattener/cleaning.py
"""Strip imports and pragmas from a single source file."""

import re
from dataclasses import dataclass, field

from .imports import ImportDirective, find_import_directives


# a whole pragma line, optionally followed by a line comment
VERSION_PRAGMA_REGEX = re.compile(
    r"^[ \t]*(pragma[ \t]+solidity\b[^;\n]*;)[ \t]*(?://[^\n]*)?\r?(?:\n|$)",
    re.MULTILINE,
)
EXPERIMENTAL_PRAGMA_REGEX = re.compile(
    r"^[ \t]*(pragma[ \t]+experimental\b[^;\n]*;)[ \t]*(?://[^\n]*)?\r?(?:\n|$)",
    re.MULTILINE,
)


@dataclass(frozen=True)
class CleanedFile:
    """A file body ready for concatenation plus the pragmas taken out of it."""

    body: str
    version_pragma: str | None = None
    experimental_pragmas: list[str] = field(default_factory=list)


def _line_span(text: str, directive: ImportDirective) -> tuple[int, int]:
    """Widen a directive to its whole line when nothing else shares it."""
    start, end = directive.start, directive.end

    line_start = text.rfind("\n", 0, start) + 1
    if not text[line_start:start].strip():
        start = line_start

    newline = text.find("\n", end)
    line_end = len(text) if newline == -1 else newline + 1
    if not text[end:line_end].strip():
        end = line_end

    return start, end


def strip_imports(text: str) -> str:
    """Remove every import directive, multi-line ones included."""
    directives = find_import_directives(text)
    if not directives:
        return text

    parts: list[str] = []
    cursor = 0
    for directive in directives:
        start, end = _line_span(text, directive)
        parts.append(text[cursor:start])
        cursor = end
    parts.append(text[cursor:])
    return "".join(parts)


def clean_source(contents: str) -> CleanedFile:
    """Split ``contents`` into a stripped body and its pragmas.

    Only the first version pragma of the file is kept; every experimental
    pragma is kept in order of appearance. All of them are removed from the
    body, as are the import directives.
    """
    versions = VERSION_PRAGMA_REGEX.findall(contents)
    experimentals = EXPERIMENTAL_PRAGMA_REGEX.findall(contents)

    body = strip_imports(contents)
    body = VERSION_PRAGMA_REGEX.sub("", body)
    body = EXPERIMENTAL_PRAGMA_REGEX.sub("", body)

    return CleanedFile(
        body=body.strip(),
        version_pragma=versions[0] if versions else None,
        experimental_pragmas=experimentals,
    )
