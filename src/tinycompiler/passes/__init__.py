"""
Passes over the source AST
"""

from .traverse import Visitor, VisitorMethods, traverse
from .transform import transform
