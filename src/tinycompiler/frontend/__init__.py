"""
Frontend: text -> tokens -> source AST
"""

from .lexer import Lexer, Token, TokenKind, tokenize
from .parser import Parser, parse
from .grammar import parse_with_grammar
