"""
Compiler driver
"""

from .driver import CompilationResult, CompilerDriver, compile
