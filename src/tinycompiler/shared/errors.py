"""
Error Reporting

Both compiler errors are fatal: the first one aborts the compilation and
propagates unchanged to the caller of `compile`.
"""

import os
import sys
from dataclasses import dataclass
from typing import Dict, List, Optional

from .source_location import SourceLocation
from ..utils.config import (
    COLOR_ENV,
    EOF_KIND,
    LEX_ERROR_CODE,
    NO_COLOR_ENV,
    PARSE_ERROR_CODE,
)


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get(NO_COLOR_ENV):
        return False
    explicit = os.environ.get(COLOR_ENV, "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    return True

_BOLD  = "\033[1m"
_RED   = "\033[31m"
_BLUE  = "\033[34m"
_CYAN  = "\033[36m"
_RESET = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color:
        return text
    prefix = "".join(codes)
    return f"{prefix}{text}{_RESET}" if prefix else text


# ---------------------------------------------------------------------------
# Diagnostic dataclass
# ---------------------------------------------------------------------------

@dataclass
class Diagnostic:
    """A formatted-on-demand compiler error."""
    message: str
    location: Optional[SourceLocation]
    code: Optional[str] = None
    label: Optional[str] = None
    help: Optional[str] = None


def _format_diagnostic(
    diagnostic: Diagnostic,
    source_files: Dict[str, str],
    color: bool = False,
) -> str:
    """
    Render a single diagnostic in rustc style.

    Example output (plain, no color)::

        error[E0001]: unexpected character '#'
         --> main.lisp:1:8
          |
        1 | (add 2 #)
          |        ^ not part of the language
    """
    out: List[str] = []

    code_str = f"[{diagnostic.code}]" if diagnostic.code else ""
    out.append(
        _style(f"error{code_str}", _BOLD, _RED, color=color)
        + _style(f": {diagnostic.message}", _BOLD, color=color)
    )

    loc = diagnostic.location
    if loc is None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + "<unknown location>")
        _append_help(out, diagnostic, 1, color)
        return "\n".join(out)

    source = source_files.get(loc.file)
    if source is None:
        out.append(_style(" --> ", _BOLD, _BLUE, color=color) + str(loc))
        _append_help(out, diagnostic, 1, color)
        return "\n".join(out)

    src_lines = source.split("\n")
    idx = loc.line - 1
    code_line = src_lines[idx] if 0 <= idx < len(src_lines) else ""
    gw = len(str(loc.line))

    out.append(_style(" " * gw + "--> ", _BOLD, _BLUE, color=color) + str(loc))
    out.append(_style(" " * (gw + 1) + "|", _BOLD, _BLUE, color=color))
    out.append(_style(str(loc.line).rjust(gw) + " | ", _BOLD, _BLUE, color=color) + code_line)

    span_len = max(1, loc.end - loc.start)
    # A span may run past the end of its line (e.g. an unterminated string)
    span_len = max(1, min(span_len, len(code_line) - (loc.column - 1)))
    carets = " " * (loc.column - 1) + "^" * span_len
    label_suffix = f" {diagnostic.label}" if diagnostic.label else ""
    out.append(
        _style(" " * (gw + 1) + "| ", _BOLD, _BLUE, color=color)
        + _style(carets + label_suffix, _BOLD, _RED, color=color)
    )

    _append_help(out, diagnostic, gw, color)
    return "\n".join(out)


def _append_help(out: List[str], diagnostic: Diagnostic, gw: int, color: bool) -> None:
    if not diagnostic.help:
        return
    pad = " " * (gw + 1)
    out.append(_style(pad + "|", _BOLD, _BLUE, color=color))
    out.append(
        _style(f"{pad}= ", _BOLD, _CYAN, color=color)
        + _style("help: ", _BOLD, color=color)
        + diagnostic.help
    )


# ---------------------------------------------------------------------------
# ErrorReporter
# ---------------------------------------------------------------------------

class ErrorReporter:
    """Collects diagnostics and renders them against the known sources."""

    def __init__(self, source_files: Optional[Dict[str, str]] = None):
        self.source_files: Dict[str, str] = dict(source_files or {})
        self.errors: List[Diagnostic] = []

    def report(self, error: "CompileError") -> None:
        if error.source_code is not None and error.location is not None:
            self.source_files.setdefault(error.location.file, error.source_code)
        self.errors.append(error.to_diagnostic())

    def format_error(self, diagnostic: Diagnostic, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        return _format_diagnostic(diagnostic, self.source_files, color=use_color)

    def format_all_errors(self, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        parts = [self.format_error(e, color=use_color) for e in self.errors]
        count = len(self.errors)
        summary = f"aborting due to {count} previous error{'s' if count != 1 else ''}"
        parts.append(
            _style("error", _BOLD, _RED, color=use_color)
            + _style(f": {summary}", _BOLD, color=use_color)
        )
        return "\n\n".join(parts)

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def print_errors(self) -> None:
        print(self.format_all_errors(), file=sys.stderr)


# ============================================================================
# Exception Classes
# ============================================================================

class CompileError(Exception):
    """Base exception for everything the pipeline raises on bad input"""
    error_code = "E0000"

    def __init__(self, message: str, location: Optional[SourceLocation] = None,
                 source_code: Optional[str] = None, label: Optional[str] = None,
                 help: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.location = location
        self.source_code = source_code
        self.label = label
        self.help_text = help

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            message=self.message,
            location=self.location,
            code=self.error_code,
            label=self.label,
            help=self.help_text,
        )

    def __str__(self):
        if self.source_code is not None and self.location is not None:
            return _format_diagnostic(
                self.to_diagnostic(),
                {self.location.file: self.source_code},
                color=False,
            )
        if self.location:
            return f"error[{self.error_code}]: {self.message}\n --> {self.location}"
        return self.message


class LexError(CompileError):
    """
    A character the lexer cannot classify, or a literal that runs off the
    end of the input.

    `char` is the offending character and `offset` its 0-based position.
    """
    error_code = LEX_ERROR_CODE

    def __init__(self, message: str, char: str, offset: int,
                 location: Optional[SourceLocation] = None,
                 source_code: Optional[str] = None, label: Optional[str] = None,
                 help: Optional[str] = None):
        super().__init__(message, location, source_code, label, help)
        self.char = char
        self.offset = offset


class ParseError(CompileError):
    """
    A token that cannot start or continue the expression being parsed.

    `token_kind` is the kind name (or EOF when the stream ran out) and
    `token_text` the token's exact text.
    """
    error_code = PARSE_ERROR_CODE

    def __init__(self, message: str, token_kind: str, token_text: str = "",
                 location: Optional[SourceLocation] = None,
                 source_code: Optional[str] = None, label: Optional[str] = None,
                 help: Optional[str] = None):
        super().__init__(message, location, source_code, label, help)
        self.token_kind = token_kind
        self.token_text = token_text

    @property
    def at_end_of_input(self) -> bool:
        return self.token_kind == EOF_KIND
