"""
Compiler Driver

Sequences the stages: tokenize -> parse -> transform -> generate.
The first failure propagates unchanged; no partial output is produced.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from ..backends.codegen import generate
from ..frontend.lexer import Token, tokenize
from ..frontend.parser import parse
from ..ir.nodes import ProgramIR
from ..ir.serialization import serialize_ir
from ..passes.transform import transform
from ..shared.nodes import Program
from ..utils.config import DEFAULT_SOURCE_NAME, DUMP_IR_ENV

logger = logging.getLogger(__name__)

STAGES = ("tokenize", "parse", "transform", "generate")


@dataclass
class CompilationResult:
    """Every artefact produced up to the last stage that ran"""
    tokens: List[Token] = field(default_factory=list)
    ast: Optional[Program] = None
    ir: Optional[ProgramIR] = None
    output: Optional[str] = None
    stopped_after: str = "generate"


class CompilerDriver:
    """
    Compiler driver.

    Stateless: every call builds its own lexer/parser, so one instance can
    be shared freely.
    """

    def run(
        self,
        source: str,
        source_file: str = DEFAULT_SOURCE_NAME,
        stop_after: Optional[str] = None,
    ) -> CompilationResult:
        """
        Run the pipeline, keeping intermediate results.

        Args:
            stop_after: Optional stage name to stop after ("tokenize", "parse",
                        "transform"). Useful for inspecting intermediate trees.
        """
        if stop_after is not None and stop_after not in STAGES:
            raise ValueError(f"unknown stage {stop_after!r}; expected one of {', '.join(STAGES)}")

        result = CompilationResult()

        result.tokens = tokenize(source, source_file)
        if stop_after == "tokenize":
            result.stopped_after = stop_after
            return result

        result.ast = parse(result.tokens, source)
        if stop_after == "parse":
            result.stopped_after = stop_after
            return result

        result.ir = transform(result.ast)
        if os.environ.get(DUMP_IR_ENV):
            logger.debug(f"IR for {source_file}:\n{serialize_ir(result.ir)}")
        if stop_after == "transform":
            result.stopped_after = stop_after
            return result

        result.output = generate(result.ir)
        return result

    def compile(self, source: str, source_file: str = DEFAULT_SOURCE_NAME) -> str:
        """Compile source text to target text (raises LexError/ParseError)."""
        output = self.run(source, source_file).output
        logger.debug(f"Compiled {source_file}: {len(source)} chars in, {len(output)} chars out")
        return output


_DRIVER = CompilerDriver()


def compile(source: str, source_file: str = DEFAULT_SOURCE_NAME) -> str:
    """The pipeline's single entry point: source text in, target text out."""
    return _DRIVER.compile(source, source_file)
