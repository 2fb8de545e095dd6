"""
Backends: target tree -> text
"""

from .codegen import CodeGenerator, generate
