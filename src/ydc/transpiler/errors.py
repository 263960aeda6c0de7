"""
YDC Transpiler Error Hierarchy
==============================

Exceptions raised while translating reversed-dialect source to C.

Exception Hierarchy
-------------------
TranspilerError (base for all translation errors)
└── ParserError - fatal syntax errors, first one aborts translation
    ├── ExpectedTokenError - a required token kind was not found
    ├── UnrecognizedStatementError - no statement form matches
    └── TopLevelError - only directives and functions at top level

Error Message Format
--------------------
Diagnostics name the expectation and the offending lexeme only; source
locations are not tracked:

    Parser Error: Expected type keyword for variable. Got ';' instead.

Lexical problems are not exceptions. The lexer records them in a
DiagnosticCollector and keeps going; the parser fails later when it meets
the UNKNOWN token somewhere it cannot accept it.
"""

from typing import List

from ydc.errors import YdcError


# =============================================================================
# Base Transpiler Exception
# =============================================================================

class TranspilerError(YdcError):
    """
    Base exception for all translation errors.

    Attributes:
        message: The error description
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        return self.message


# =============================================================================
# Parser Errors
# =============================================================================

class ParserError(TranspilerError):
    """
    Syntax error detected by the parser.

    There is no recovery: the first ParserError unwinds the recursive
    descent and the partially built output is discarded.
    """

    def _format_message(self) -> str:
        return f"Parser Error: {self.message}"


class ExpectedTokenError(ParserError):
    """
    A required token was not found.

    Raised by the parser's expect() helper with the message naming the
    construct it was looking for and the lexeme it found instead.
    """

    def __init__(self, message: str, found: str):
        self.found = found
        super().__init__(message)

    def _format_message(self) -> str:
        return f"Parser Error: {self.message}. Got '{self.found}' instead."


class UnrecognizedStatementError(ParserError):
    """No statement form starts with the current token."""

    def __init__(self, found: str):
        self.found = found
        super().__init__(f"Unrecognized statement starting with '{found}'")


class TopLevelError(ParserError):
    """Something other than a directive or function appeared at top level."""

    def __init__(self, found: str):
        self.found = found
        super().__init__(
            "Only preprocessor directives or function definitions allowed "
            f"at top level. Found '{found}'."
        )


# =============================================================================
# Diagnostic Collection (non-fatal lexer messages)
# =============================================================================

class DiagnosticCollector:
    """
    Collects non-fatal diagnostics for later reporting.

    Example:
        collector = DiagnosticCollector()
        collector.add("Tokenizer Error: Unknown character '@'")
        if collector.has_diagnostics():
            print(collector.report())
    """

    def __init__(self):
        self.messages: List[str] = []

    def add(self, message: str) -> None:
        """Add a diagnostic message."""
        self.messages.append(message)

    def has_diagnostics(self) -> bool:
        """Return True if any diagnostics have been collected."""
        return len(self.messages) > 0

    def count(self) -> int:
        return len(self.messages)

    def report(self) -> str:
        """Format all diagnostics, one per line."""
        return "\n".join(self.messages)

    def clear(self) -> None:
        self.messages.clear()
