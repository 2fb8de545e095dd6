"""
Configuration constants to replace magic numbers throughout tinycompiler
"""

# Lexer character classes
OPEN_PAREN = "("
CLOSE_PAREN = ")"
STRING_QUOTE_CHAR = '"'

# Generated code punctuation
STATEMENT_TERMINATOR = ";"
ARGUMENT_SEPARATOR = ", "
STATEMENT_SEPARATOR = "\n"

# Default name used in diagnostics when no file is given
DEFAULT_SOURCE_NAME = "<input>"

# File encoding constants
DEFAULT_FILE_ENCODING = "utf-8"

# Environment variables
NO_COLOR_ENV = "NO_COLOR"
COLOR_ENV = "TINYCOMPILER_COLOR"
DUMP_IR_ENV = "TINYCOMPILER_DUMP_IR"

# Error codes
LEX_ERROR_CODE = "E0001"
PARSE_ERROR_CODE = "E0002"

# Marker used in ParseError when the token stream runs out
EOF_KIND = "EOF"
