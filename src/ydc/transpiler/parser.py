"""
YDC Parser / Translator
=======================

This module implements a recursive descent parser for the reversed C
dialect. Parsing and code generation are fused: each construct is
written out as forward-order C the moment it is recognised, and no
syntax tree is built.

Grammar
-------
The dialect writes declarations, calls and control heads back to front:

    program     := ( PREPROCESSOR | function )*
    function    := '(' [ param ( ',' param )* ] ')' IDENT KEYWORD '{' stmt* '}'
    param       := IDENT KEYWORD                       (name, then type)
    stmt        := declaration | call | control | passthrough
    declaration := NUMBER '=' IDENT KEYWORD ';'
    call        := '(' tokens ')' IDENT ';'
    control     := '(' tokens ')' ( 'for' | 'while' | 'if' ) '{' stmt* '}'
                   [ 'else' '{' stmt* '}' ]            ('if' only)
    passthrough := ( KEYWORD | IDENT ) tokens ';'

Statement Dispatch
------------------
A statement beginning with '(' is either a control structure or a call.
The parser looks past the matching ')' without moving the cursor and
decides on the token found there:

    ( x == 0 ) if { ... }     -> control structure
    ( a, b ) f ;              -> reversed call

Emission
--------
Function headers and closing braces are flush left. Body statements are
indented by four spaces regardless of nesting depth.

Example Usage
-------------
>>> from ydc.transpiler.lexer import YdcLexer
>>> from ydc.transpiler.parser import YdcParser
>>> tokens = YdcLexer('() main int { 42 = x int ; }').tokenize()
>>> print(YdcParser(tokens).parse(), end="")
int main() {
    int x = 42;
}
<BLANKLINE>
"""

import logging
from typing import List, Optional

from ydc.transpiler.lexer import (
    CONTROL_KEYWORDS,
    YdcLexer,
    YdcToken,
    YdcTokenType,
)
from ydc.transpiler.errors import (
    ExpectedTokenError,
    TopLevelError,
    UnrecognizedStatementError,
)

logger = logging.getLogger(__name__)

INDENT = "    "

# How each control keyword is named in error messages
CONTROL_LABELS = {
    "for": "for loop",
    "while": "while loop",
    "if": "if",
}


class YdcParser:
    """
    Translates a token list into forward-order C source.

    Usage:
        parser = YdcParser(tokens)
        c_source = parser.parse()

    The cursor only moves forward. Lookahead goes through _peek() and
    never changes the cursor.

    Attributes:
        tokens: Token list, terminated by an EOF token
    """

    def __init__(self, tokens: List[YdcToken]):
        if not tokens or tokens[-1].type != YdcTokenType.EOF:
            raise ValueError("token list must end with an EOF token")
        self.tokens = tokens
        self._pos = 0
        self._output: List[str] = []

    @property
    def position(self) -> int:
        """Index of the current token."""
        return self._pos

    # =========================================================================
    # Public Interface
    # =========================================================================

    def parse(self) -> str:
        """
        Translate the whole token list.

        Returns:
            The emitted C program

        Raises:
            ParserError: On the first syntax error
        """
        self._pos = 0
        self._output = []

        while not self._check(YdcTokenType.EOF):
            if self._check(YdcTokenType.PREPROCESSOR):
                self._emit(self._advance().lexeme + "\n")
            elif self._check(YdcTokenType.LPAREN):
                self._parse_function()
            else:
                raise TopLevelError(self._peek().lexeme)

        return "".join(self._output)

    # =========================================================================
    # Token Stream Helpers
    # =========================================================================

    def _peek(self, offset: int = 0) -> YdcToken:
        """Look at token at current position + offset."""
        pos = self._pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[pos]

    def _advance(self) -> YdcToken:
        """Consume and return the current token. EOF is never consumed."""
        token = self.tokens[self._pos]
        if token.type != YdcTokenType.EOF:
            self._pos += 1
        return token

    def _check(self, *types: YdcTokenType) -> bool:
        """Check if current token is one of the given types."""
        return self._peek().type in types

    def _match(self, *types: YdcTokenType) -> Optional[YdcToken]:
        """Consume the current token if it is one of the types."""
        if self._check(*types):
            return self._advance()
        return None

    def _expect(self, token_type: YdcTokenType, message: str) -> YdcToken:
        """
        Expect and consume a specific token type.

        Raises:
            ExpectedTokenError: If the current token is of another type
        """
        if self._check(token_type):
            return self._advance()
        raise ExpectedTokenError(message, self._peek().lexeme)

    def _emit(self, text: str) -> None:
        self._output.append(text)

    def _slurp_until(self, end_type: YdcTokenType) -> List[YdcToken]:
        """Consume tokens up to (not including) `end_type` or EOF."""
        tokens = []
        while not self._check(end_type, YdcTokenType.EOF):
            tokens.append(self._advance())
        return tokens

    def _collect_group(self) -> List[YdcToken]:
        """
        Consume tokens up to the ')' matching an already consumed '('.

        Nested parentheses are kept in the result. The cursor is left on
        the closing ')' (or on EOF when the group is unbalanced).
        """
        start = self._pos
        depth = 1
        while not self._check(YdcTokenType.EOF):
            if self._check(YdcTokenType.LPAREN):
                depth += 1
            elif self._check(YdcTokenType.RPAREN):
                depth -= 1
                if depth == 0:
                    break
            self._advance()
        return self.tokens[start:self._pos]

    def _offset_after_group(self) -> int:
        """
        Offset of the token just past the ')' matching the current '('.

        Only peeks. For an unbalanced group the offset lands past the end
        and _peek() returns EOF.
        """
        depth = 1
        offset = 1
        while depth > 0 and self._pos + offset < len(self.tokens):
            token = self._peek(offset)
            if token.type == YdcTokenType.LPAREN:
                depth += 1
            elif token.type == YdcTokenType.RPAREN:
                depth -= 1
            offset += 1
        return offset

    # =========================================================================
    # Function Definitions
    # =========================================================================

    def _parse_function(self) -> None:
        """( name type, ... ) fname rtype { body }"""
        self._expect(YdcTokenType.LPAREN, "Expected '(' before function arguments")

        params = []
        while not self._check(YdcTokenType.RPAREN, YdcTokenType.EOF):
            arg_name = self._expect(YdcTokenType.IDENTIFIER, "Expected argument name")
            arg_type = self._expect(YdcTokenType.KEYWORD, "Expected argument type")
            params.append(f"{arg_type.lexeme} {arg_name.lexeme}")

            if self._match(YdcTokenType.COMMA):
                continue
            if not self._check(YdcTokenType.RPAREN):
                raise ExpectedTokenError(
                    "Expected ',' or ')' in argument list", self._peek().lexeme
                )

        self._expect(YdcTokenType.RPAREN, "Expected ')' after function arguments")
        name = self._expect(YdcTokenType.IDENTIFIER, "Expected function name")
        return_type = self._expect(YdcTokenType.KEYWORD, "Expected function return type")
        logger.debug(f"Function '{name.lexeme}' with {len(params)} parameter(s)")

        self._emit(f"{return_type.lexeme} {name.lexeme}({', '.join(params)}) {{\n")
        self._expect(YdcTokenType.LBRACE, "Expected '{' before function body")
        self._parse_body()
        self._expect(YdcTokenType.RBRACE, "Expected '}' after function body")
        self._emit("}\n\n")

    def _parse_body(self) -> None:
        """Translate statements until the closing '}' (not consumed)."""
        while not self._check(YdcTokenType.RBRACE, YdcTokenType.EOF):
            self._parse_statement()

    # =========================================================================
    # Statements
    # =========================================================================

    def _parse_statement(self) -> None:
        """Dispatch on the first token of a statement."""
        if self._check(YdcTokenType.NUMBER):
            self._parse_variable_declaration()
            return

        if self._check(YdcTokenType.LPAREN):
            offset = self._offset_after_group()
            after = self._peek(offset)

            if after.type == YdcTokenType.KEYWORD and after.lexeme in CONTROL_KEYWORDS:
                logger.debug(f"Statement at {self._pos}: '{after.lexeme}'")
                self._parse_control(after.lexeme)
                return

            if (after.type == YdcTokenType.IDENTIFIER
                    and self._peek(offset + 1).type == YdcTokenType.SEMICOLON):
                logger.debug(f"Statement at {self._pos}: call to '{after.lexeme}'")
                self._parse_reversed_call()
                return

        if self._check(YdcTokenType.KEYWORD, YdcTokenType.IDENTIFIER):
            self._parse_passthrough()
            return

        raise UnrecognizedStatementError(self._peek().lexeme)

    def _parse_variable_declaration(self) -> None:
        """42 = x int ;"""
        value = self._expect(YdcTokenType.NUMBER, "Expected number literal in declaration")
        self._expect(YdcTokenType.EQUALS, "Expected '=' after value in declaration")
        name = self._expect(YdcTokenType.IDENTIFIER, "Expected identifier name for variable")
        var_type = self._expect(YdcTokenType.KEYWORD, "Expected type keyword for variable")
        self._expect(YdcTokenType.SEMICOLON, "Expected ';' after variable declaration")

        self._emit(f"{INDENT}{var_type.lexeme} {name.lexeme} = {value.lexeme};\n")

    def _parse_reversed_call(self) -> None:
        """( args ) name ;"""
        self._expect(YdcTokenType.LPAREN, "Expected '(' for function call")
        args = join_arguments(self._collect_group())
        self._expect(YdcTokenType.RPAREN, "Expected ')' to end function call arguments")
        name = self._expect(YdcTokenType.IDENTIFIER, "Expected function name")
        self._expect(YdcTokenType.SEMICOLON, "Expected ';' after function call")

        self._emit(f"{INDENT}{name.lexeme}({args});\n")

    def _parse_passthrough(self) -> None:
        """Copy a simple statement such as `return x ;` through unchanged."""
        line = join_lexemes(self._slurp_until(YdcTokenType.SEMICOLON))
        self._expect(YdcTokenType.SEMICOLON, "Expected ';' after statement")
        self._emit(f"{INDENT}{line};\n")

    # =========================================================================
    # Control Structures
    # =========================================================================

    def _parse_control(self, keyword: str) -> None:
        """
        ( condition ) keyword { body }

        For 'if', a following `else { body }` is accepted. The else branch
        is written in forward order, unlike the reversed head.
        """
        label = CONTROL_LABELS[keyword]

        self._expect(YdcTokenType.LPAREN, f"Expected '(' before {label} condition")
        condition = join_lexemes(self._collect_group())
        self._expect(YdcTokenType.RPAREN, f"Expected ')' after {label} condition")
        self._expect(YdcTokenType.KEYWORD, f"Expected '{keyword}' keyword after condition")

        self._emit(f"{INDENT}{keyword} ({condition}) {{\n")
        self._parse_block(label)

        if keyword == "if" and self._peek().is_keyword("else"):
            self._advance()
            self._emit(f"{INDENT}else {{\n")
            self._parse_block("else")

    def _parse_block(self, label: str) -> None:
        """{ body } followed by an indented closing brace."""
        self._expect(YdcTokenType.LBRACE, f"Expected '{{' before {label} body")
        self._parse_body()
        self._expect(YdcTokenType.RBRACE, f"Expected '}}' after {label} body")
        self._emit(f"{INDENT}}}\n")


# =============================================================================
# Lexeme Joining
# =============================================================================

def join_lexemes(tokens: List[YdcToken]) -> str:
    """Join lexemes with single spaces."""
    return " ".join(token.lexeme for token in tokens)


def join_arguments(tokens: List[YdcToken]) -> str:
    """
    Join call arguments with single spaces, except that no space goes
    before ',' or ')' and none after '('.

        a , ( b + c ) , d   ->   a, (b + c), d
    """
    parts: List[str] = []
    previous: Optional[YdcToken] = None
    for token in tokens:
        if previous is not None and not (
            token.type in (YdcTokenType.COMMA, YdcTokenType.RPAREN)
            or previous.type == YdcTokenType.LPAREN
        ):
            parts.append(" ")
        parts.append(token.lexeme)
        previous = token
    return "".join(parts)


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(source: str) -> str:
    """Tokenize and translate `source` in one step."""
    return YdcParser(YdcLexer(source).tokenize()).parse()
