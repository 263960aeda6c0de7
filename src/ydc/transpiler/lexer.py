"""
YDC Lexer (Tokenizer)
=====================

This module implements the lexer for the reversed C dialect (.ydc).
It converts source text into a flat list of tokens for the parser.

Token Categories
----------------
- Keywords: int, void, char, for, while, if, else, return
- Identifiers: names, and deliberately also string literals and the
  comparison operators == != >= <= > <
- Numbers: decimal digit runs only
- Delimiters: ( ) { } ; ,
- EQUALS: a lone '='
- Preprocessor: a whole '#' line, newline excluded
- UNKNOWN: any other single character

The parser treats most expression material as an opaque run of lexemes,
so string literals and comparison operators only need to be told apart
from structural tokens. Folding them into IDENTIFIER lets them pass
through uninterpreted.

Comments
--------
- Single-line: // comment

Example Usage
-------------
>>> from ydc.transpiler.lexer import YdcLexer
>>> for token in YdcLexer('() main int { }').tokenize():
...     print(token)
Token(LPAREN, '(')
Token(RPAREN, ')')
Token(IDENTIFIER, 'main')
Token(KEYWORD, 'int')
Token(LBRACE, '{')
Token(RBRACE, '}')
Token(EOF, 'EOF')
"""

import logging
import string
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional

from ydc.transpiler.errors import DiagnosticCollector

logger = logging.getLogger(__name__)


# =============================================================================
# Token Type Enumeration
# =============================================================================

class YdcTokenType(Enum):
    """
    Token kinds for the reversed dialect.

    The set is closed: every character of input ends up in exactly one of
    these, with UNKNOWN catching whatever no other rule claims.
    """

    KEYWORD = auto()        # reserved word
    IDENTIFIER = auto()     # name, string literal or comparison operator
    NUMBER = auto()         # decimal digits
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LBRACE = auto()         # {
    RBRACE = auto()         # }
    EQUALS = auto()         # =
    SEMICOLON = auto()      # ;
    COMMA = auto()          # ,
    PREPROCESSOR = auto()   # #... to end of line
    EOF = auto()            # end of input
    UNKNOWN = auto()        # unmatched character


KEYWORDS = frozenset(
    ["int", "void", "char", "for", "while", "if", "else", "return"]
)

# Words that may follow a parenthesised condition
CONTROL_KEYWORDS = frozenset(["for", "while", "if"])

SINGLE_TOKENS = {
    "(": YdcTokenType.LPAREN,
    ")": YdcTokenType.RPAREN,
    "{": YdcTokenType.LBRACE,
    "}": YdcTokenType.RBRACE,
    ";": YdcTokenType.SEMICOLON,
    ",": YdcTokenType.COMMA,
}

EOF_LEXEME = "EOF"


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class YdcToken:
    """
    A single token: its kind and an owned copy of the matched text.

    Attributes:
        type: The YdcTokenType classification
        lexeme: Source text of the token ("EOF" for the sentinel)
    """
    type: YdcTokenType
    lexeme: str

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r})"

    def is_keyword(self, word: str) -> bool:
        """Return True if this token is the reserved word `word`."""
        return self.type == YdcTokenType.KEYWORD and self.lexeme == word


# =============================================================================
# Lexer Implementation
# =============================================================================

class YdcLexer:
    """
    Tokenizes .ydc source.

    The lexer never aborts. Characters that match no rule become UNKNOWN
    tokens and a diagnostic is recorded in `diagnostics`.

    Usage:
        lexer = YdcLexer(source_text)
        tokens = lexer.tokenize()

    Attributes:
        source: The source text being tokenized
        diagnostics: Non-fatal messages produced while tokenizing
    """

    WHITESPACE = " \t\n\r\f\v"
    IDENT_START = string.ascii_letters + "_"
    IDENT_CHARS = string.ascii_letters + string.digits + "_"
    DIGITS = string.digits

    # Characters that may begin a comparison operator
    OPERATOR_START = "><=!"

    def __init__(self, source: str, diagnostics: Optional[DiagnosticCollector] = None):
        self.source = source
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticCollector()
        self._pos = 0

        # A NUL ends the buffer, as it would in the C runtime
        nul = source.find("\0")
        self._end = nul if nul != -1 else len(source)

    def tokenize(self) -> List[YdcToken]:
        """
        Tokenize the whole source.

        Returns:
            The token list, always terminated by exactly one EOF token
        """
        tokens: List[YdcToken] = []
        while True:
            self._skip_whitespace_and_comments()
            if self._at_end():
                break
            tokens.append(self._scan_token())

        tokens.append(YdcToken(YdcTokenType.EOF, EOF_LEXEME))
        logger.debug(f"Tokenized {len(tokens)} tokens")
        return tokens

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= self._end

    def _peek(self, offset: int = 0) -> str:
        """Character at current position + offset, or '' past the end."""
        pos = self._pos + offset
        if pos >= self._end:
            return ""
        return self.source[pos]

    def _make_token(self, token_type: YdcTokenType, start: int) -> YdcToken:
        """Create a token from source[start:current position]."""
        return YdcToken(token_type, self.source[start:self._pos])

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        while not self._at_end():
            char = self._peek()

            if char in self.WHITESPACE:
                self._pos += 1
                continue

            if char == "/" and self._peek(1) == "/":
                self._skip_to_end_of_line()
                continue

            break

    def _skip_to_end_of_line(self) -> None:
        while not self._at_end() and self._peek() != "\n":
            self._pos += 1

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> YdcToken:
        """Scan one token. Rules are tried in order; the first match wins."""
        start = self._pos
        char = self._peek()

        if char == "#":
            self._skip_to_end_of_line()
            return self._make_token(YdcTokenType.PREPROCESSOR, start)

        if char in self.OPERATOR_START:
            token = self._scan_operator(start)
            if token is not None:
                return token

        if char in SINGLE_TOKENS:
            self._pos += 1
            return self._make_token(SINGLE_TOKENS[char], start)

        if char == "=":
            self._pos += 1
            return self._make_token(YdcTokenType.EQUALS, start)

        if char in self.DIGITS:
            return self._scan_number(start)

        if char in self.IDENT_START:
            return self._scan_word(start)

        if char == '"':
            return self._scan_string(start)

        self._pos += 1
        self.diagnostics.add(f"Tokenizer Error: Unknown character '{char}'")
        logger.debug(f"Unknown character {char!r} at offset {start}")
        return self._make_token(YdcTokenType.UNKNOWN, start)

    def _scan_operator(self, start: int) -> Optional[YdcToken]:
        """
        Scan a comparison operator as an IDENTIFIER.

        Returns None for a lone '=' or '!' so later rules can claim them.
        """
        char = self._peek()
        if self._peek(1) == "=":
            self._pos += 2
            return self._make_token(YdcTokenType.IDENTIFIER, start)
        if char in "><":
            self._pos += 1
            return self._make_token(YdcTokenType.IDENTIFIER, start)
        return None

    def _scan_number(self, start: int) -> YdcToken:
        while self._peek() and self._peek() in self.DIGITS:
            self._pos += 1
        return self._make_token(YdcTokenType.NUMBER, start)

    def _scan_word(self, start: int) -> YdcToken:
        """Scan an identifier, classifying reserved words as KEYWORD."""
        while self._peek() and self._peek() in self.IDENT_CHARS:
            self._pos += 1

        token = self._make_token(YdcTokenType.IDENTIFIER, start)
        if token.lexeme in KEYWORDS:
            return YdcToken(YdcTokenType.KEYWORD, token.lexeme)
        return token

    def _scan_string(self, start: int) -> YdcToken:
        """
        Scan a double-quoted string literal, quotes included.

        A backslash always takes the following character with it. An
        unterminated literal runs to the end of input.
        """
        self._pos += 1  # opening quote
        while not self._at_end() and self._peek() != '"':
            if self._peek() == "\\" and self._peek(1):
                self._pos += 1
            self._pos += 1

        if self._peek() == '"':
            self._pos += 1  # closing quote
        return self._make_token(YdcTokenType.IDENTIFIER, start)


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(source: str) -> List[YdcToken]:
    """Tokenize `source`, discarding diagnostics."""
    return YdcLexer(source).tokenize()
