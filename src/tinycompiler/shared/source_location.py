"""
Source Location (Span)

Line/column for humans, byte-ish offsets for slicing the source back out.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    """
    Position of a token or node in the input text.

    - line/column are 1-based
    - start/end are 0-based offsets into the source string (end exclusive)
    - Immutable (frozen) for hashability
    """
    file: str
    line: int
    column: int
    start: int = 0
    end: int = 0

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


def location_at(source: str, offset: int, file: str = "<input>", length: int = 1) -> SourceLocation:
    """Build a SourceLocation for `offset` by counting newlines before it."""
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return SourceLocation(
        file=file,
        line=line,
        column=offset - line_start + 1,
        start=offset,
        end=offset + length,
    )
