"""
YDC Transpiler Main Module
==========================

This module provides the main transpiler interface. It orchestrates the
translation of reversed-dialect source into standard C:

    Source → Lex → Parse/Translate → C text → output.c → gcc

Usage
-----
Command line:
    $ ydcc hello.ydc

Programmatic:
    >>> from ydc.transpiler import transpile_source
    >>> print(transpile_source('() main int { }'), end="")
    int main() {
    }
    <BLANKLINE>

Error Handling
--------------
Lexical problems are collected as diagnostics and never stop the
pipeline. The first syntax error raises a ParserError and no output is
produced.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from ydc.backend import DEFAULT_CC, DEFAULT_EXECUTABLE, CompileResult, compile_c
from ydc.files import read_source, write_output
from ydc.transpiler.errors import DiagnosticCollector
from ydc.transpiler.lexer import YdcLexer, YdcToken
from ydc.transpiler.parser import YdcParser

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = "output.c"


@dataclass
class TranspilerOptions:
    """
    Transpiler configuration options.

    Attributes:
        output_path: Where the translated C is written
        executable: Executable produced by the back-end compiler
        cc: Back-end C compiler command
        compile: If False, stop after writing output_path
        cc_timeout: Seconds to allow the back-end compiler (None = no limit)
    """
    output_path: str = DEFAULT_OUTPUT
    executable: str = DEFAULT_EXECUTABLE
    cc: str = DEFAULT_CC
    compile: bool = True
    cc_timeout: Optional[float] = None


@dataclass
class TranspileResult:
    """
    Result of a translation.

    Attributes:
        filename: Source filename
        success: True if translation succeeded
        c_source: Translated C text
        tokens: Tokens the source was lexed into
        diagnostics: Non-fatal lexer messages
    """
    filename: str = ""
    success: bool = False
    c_source: str = ""
    tokens: List[YdcToken] = field(default_factory=list)
    diagnostics: List[str] = field(default_factory=list)

    @property
    def token_count(self) -> int:
        return len(self.tokens)


class YdcTranspiler:
    """
    Translator from the reversed dialect to C.

    The stages can be run one at a time (tokenize, translate, emit, build)
    so a caller can report progress between them, or all together through
    transpile_source() / transpile_file().

    Example:
        transpiler = YdcTranspiler()
        result = transpiler.transpile_file("hello.ydc")
        transpiler.emit(result.c_source)
        transpiler.build()

    Attributes:
        options: Transpiler configuration options
        diagnostics: Lexer diagnostics from the most recent tokenize()
    """

    def __init__(self, options: Optional[TranspilerOptions] = None):
        self.options = options or TranspilerOptions()
        self.diagnostics = DiagnosticCollector()

    # =========================================================================
    # Pipeline Stages
    # =========================================================================

    def tokenize(self, source: str) -> List[YdcToken]:
        """Lex source text, collecting diagnostics on this transpiler."""
        self.diagnostics.clear()
        return YdcLexer(source, self.diagnostics).tokenize()

    def translate(self, tokens: List[YdcToken]) -> str:
        """
        Translate tokens into C.

        Raises:
            ParserError: On the first syntax error
        """
        return YdcParser(tokens).parse()

    def emit(self, c_source: str) -> Path:
        """
        Write translated C to the configured output path.

        Raises:
            OutputWriteError: If the file cannot be written
        """
        return write_output(c_source, self.options.output_path)

    def build(self) -> CompileResult:
        """Run the back-end compiler on the emitted output."""
        return compile_c(
            self.options.output_path,
            self.options.executable,
            cc=self.options.cc,
            timeout=self.options.cc_timeout,
        )

    # =========================================================================
    # Whole-Source Entry Points
    # =========================================================================

    def transpile_source(self, source: str, filename: str = "<input>") -> TranspileResult:
        """
        Translate source text to C.

        Args:
            source: Reversed-dialect source text
            filename: Source filename, recorded on the result

        Returns:
            TranspileResult with the C text and lexer diagnostics

        Raises:
            ParserError: If translation fails
        """
        result = TranspileResult(filename=filename)
        result.tokens = self.tokenize(source)
        result.diagnostics = list(self.diagnostics.messages)

        result.c_source = self.translate(result.tokens)
        result.success = True

        logger.debug(
            f"Translated {filename}: {result.token_count} tokens, "
            f"{len(result.c_source)} characters of C"
        )
        return result

    def transpile_file(self, filepath: Union[str, Path]) -> TranspileResult:
        """
        Translate a .ydc file to C.

        Raises:
            SourceReadError: If the file cannot be read
            ParserError: If translation fails
        """
        source = read_source(filepath)
        return self.transpile_source(source, str(filepath))


# =============================================================================
# Convenience Functions
# =============================================================================

def transpile_source(source: str, filename: str = "<input>") -> str:
    """
    Translate reversed-dialect source to C text.

    Raises:
        ParserError: If translation fails

    Example:
        >>> transpile_source('() main int { 42 = x int ; }')
        'int main() {\\n    int x = 42;\\n}\\n\\n'
    """
    return YdcTranspiler().transpile_source(source, filename).c_source


def transpile_file(
    filepath: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
) -> str:
    """
    Translate a .ydc file, optionally writing the C text to output_path.

    Raises:
        SourceReadError: If the file cannot be read
        ParserError: If translation fails
        OutputWriteError: If output_path cannot be written
    """
    result = YdcTranspiler().transpile_file(filepath)

    if output_path:
        write_output(result.c_source, output_path)

    return result.c_source
