"""CLI entry point: run `tinycompiler file.lisp` or `python -m tinycompiler file.lisp`."""

import logging
import sys
from pathlib import Path
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    import argparse
    from .compiler.driver import CompilerDriver
    from .ir.serialization import serialize_ast, serialize_ir, serialize_tokens
    from .shared.errors import CompileError, ErrorReporter
    from .utils.config import DEFAULT_SOURCE_NAME
    from .utils.io_utils import read_source_file

    parser = argparse.ArgumentParser(
        prog="tinycompiler",
        description="Compile parenthesized call expressions to C-style call syntax.",
    )
    parser.add_argument("file", nargs="?", type=Path, help="Source file; omit or pass - for stdin")
    parser.add_argument(
        "--emit",
        choices=("code", "tokens", "ast", "ir"),
        default="code",
        help="What to print (default: code, the generated program)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log each stage to stderr")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.file is not None and str(args.file) != "-":
        path = args.file.resolve()
        if not path.is_file():
            sys.stderr.write(f"tinycompiler: error: file not found: {path}\n")
            return 1
        source_file = str(args.file)
    else:
        path = args.file
        source_file = DEFAULT_SOURCE_NAME

    try:
        source = read_source_file(path)
    except (OSError, UnicodeDecodeError) as e:
        sys.stderr.write(f"tinycompiler: error: could not read file: {e}\n")
        return 1

    stop_after = {"tokens": "tokenize", "ast": "parse", "ir": "transform"}.get(args.emit)
    try:
        result = CompilerDriver().run(source, source_file, stop_after=stop_after)
    except CompileError as e:
        reporter = ErrorReporter({source_file: source})
        reporter.report(e)
        reporter.print_errors()
        return 1

    if args.emit == "tokens":
        text = serialize_tokens(result.tokens)
    elif args.emit == "ast":
        text = serialize_ast(result.ast)
    elif args.emit == "ir":
        text = serialize_ir(result.ir)
    else:
        text = result.output
    sys.stdout.write(text + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
