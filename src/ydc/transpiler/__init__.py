"""
YDC Transpiler
==============

This module translates the reversed C dialect (.ydc) into standard C.

The dialect writes some constructs back to front:

    (x int) f int {          ->   int f(int x) {
        42 = y int ;         ->       int y = 42;
        (y) g ;              ->       g(y);
        (y == 0) if { }      ->       if (y == 0) {
                                      }
        return y ;           ->       return y;
    }                        ->   }

Pipeline
--------
    Source → Lexer → Parser/Translator → C text

Parsing and emission are fused; there is no syntax tree.

Usage
-----
>>> from ydc.transpiler import transpile_source
>>> c_code = transpile_source('() main int { }')
"""

from ydc.transpiler.compiler import (
    YdcTranspiler,
    TranspilerOptions,
    TranspileResult,
    transpile_source,
    transpile_file,
)
from ydc.transpiler.errors import (
    TranspilerError,
    ParserError,
    ExpectedTokenError,
    UnrecognizedStatementError,
    TopLevelError,
    DiagnosticCollector,
)
from ydc.transpiler.lexer import YdcLexer, YdcTokenType, YdcToken
from ydc.transpiler.parser import YdcParser

__all__ = [
    # Main API
    "YdcTranspiler",
    "TranspilerOptions",
    "TranspileResult",
    "transpile_source",
    "transpile_file",
    # Errors
    "TranspilerError",
    "ParserError",
    "ExpectedTokenError",
    "UnrecognizedStatementError",
    "TopLevelError",
    "DiagnosticCollector",
    # Lexer
    "YdcLexer",
    "YdcTokenType",
    "YdcToken",
    # Parser
    "YdcParser",
]
