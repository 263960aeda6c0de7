"""
Parser / Translator Test Suite
==============================

Tests for the fused parser and C emitter.

Test Organization
-----------------
- TestFunctions: reversed function definitions
- TestDeclarations: reversed variable declarations
- TestCalls: reversed function calls and argument spacing
- TestControl: for / while / if / else
- TestPassthrough: statements copied through unchanged
- TestErrors: fatal syntax errors and their messages
- TestOutputProperties: invariants over whole programs
"""

import pytest
from ydc.transpiler.lexer import YdcLexer, YdcToken, YdcTokenType
from ydc.transpiler.parser import YdcParser, join_arguments, join_lexemes, parse_source
from ydc.transpiler.errors import (
    ExpectedTokenError,
    ParserError,
    TopLevelError,
    UnrecognizedStatementError,
)


def translate(source: str) -> str:
    return parse_source(source)


def body(statements: str) -> str:
    """Translate statements inside `() main int { ... }`, return the body lines."""
    output = translate("() main int {\n" + statements + "\n}")
    assert output.startswith("int main() {\n")
    assert output.endswith("}\n\n")
    return output[len("int main() {\n"):-len("}\n\n")]


# =============================================================================
# Function Definitions
# =============================================================================

class TestFunctions:
    """Tests for reversed function definitions."""

    def test_minimal_function(self):
        """An empty function emits header, closing brace and a blank line."""
        assert translate("() main int { }") == "int main() {\n}\n\n"

    def test_single_parameter(self):
        """Parameters are written name-then-type and emitted type-then-name."""
        assert translate("(x int) f int { }") == "int f(int x) {\n}\n\n"

    def test_multiple_parameters(self):
        """Parameters are separated by ', ' in the output."""
        output = translate("(a int, b char, c int) f void { }")
        assert output == "void f(int a, char b, int c) {\n}\n\n"

    def test_trailing_comma_accepted(self):
        """A comma directly before ')' is tolerated."""
        assert translate("(a int,) f void { }") == "void f(int a) {\n}\n\n"

    def test_multiple_functions(self):
        """Functions are emitted in source order."""
        output = translate("() a void { } () b int { }")
        assert output == "void a() {\n}\n\nint b() {\n}\n\n"

    def test_preprocessor_passthrough(self):
        """Directives are copied verbatim with a newline."""
        output = translate("#include <stdio.h>\n() main int { }")
        assert output == "#include <stdio.h>\nint main() {\n}\n\n"

    def test_preprocessor_only(self):
        """A file of directives alone is valid."""
        assert translate("#define A 1\n#define B 2\n") == "#define A 1\n#define B 2\n"

    def test_empty_program(self):
        """No input gives no output."""
        assert translate("") == ""


# =============================================================================
# Variable Declarations
# =============================================================================

class TestDeclarations:
    """Tests for `value = name type ;`."""

    def test_declaration(self):
        """A declaration is emitted in forward order."""
        assert body("42 = x int ;") == "    int x = 42;\n"

    def test_char_declaration(self):
        """Any type keyword is accepted."""
        assert body("65 = c char ;") == "    char c = 65;\n"

    def test_missing_type_keyword(self):
        """Without a type keyword the declaration fails."""
        with pytest.raises(ExpectedTokenError) as exc_info:
            translate("() main int { 42 = x ; }")
        assert str(exc_info.value) == (
            "Parser Error: Expected type keyword for variable. Got ';' instead."
        )

    def test_missing_equals(self):
        """The value must be followed by '='."""
        with pytest.raises(ExpectedTokenError) as exc_info:
            translate("() main int { 42 x int ; }")
        assert exc_info.value.found == "x"
        assert "Expected '=' after value in declaration" in str(exc_info.value)

    def test_expression_value_not_supported(self):
        """Only a single number literal may be assigned."""
        with pytest.raises(ExpectedTokenError):
            translate("() main int { 1 2 = x int ; }")


# =============================================================================
# Function Calls
# =============================================================================

class TestCalls:
    """Tests for `( args ) name ;`."""

    def test_call_with_argument(self):
        """A reversed call is emitted as name(args)."""
        assert body("(x) g ;") == "    g(x);\n"

    def test_call_without_arguments(self):
        """Empty parentheses give an empty argument list."""
        assert body("() g ;") == "    g();\n"

    def test_comma_spacing(self):
        """No space is emitted before a comma."""
        assert body("(a, b , c) f ;") == "    f(a, b, c);\n"

    def test_string_argument(self):
        """String literals pass through intact."""
        assert body('("%d\\n", x) printf ;') == '    printf("%d\\n", x);\n'

    def test_nested_parentheses(self):
        """Inner parentheses are kept, without padding inside them."""
        assert body("(a, (b), c) f ;") == "    f(a, (b), c);\n"

    def test_deeply_nested_parentheses(self):
        """Nesting depth is tracked to find the closing ')'."""
        assert body("(((x))) f ;") == "    f(((x)));\n"

    def test_comparison_argument(self):
        """Operators inside arguments are separated by spaces."""
        assert body("(a == b, c) check ;") == "    check(a == b, c);\n"

    def test_join_arguments_rule(self):
        """Space between tokens except before ',' or ')' and after '('."""
        tokens = YdcLexer("a , ( b ) , c").tokenize()[:-1]
        assert join_arguments(tokens) == "a, (b), c"

    def test_join_arguments_empty(self):
        assert join_arguments([]) == ""


# =============================================================================
# Control Structures
# =============================================================================

class TestControl:
    """Tests for reversed control-structure heads."""

    def test_while_loop(self):
        """(cond) while { body }"""
        output = body("(x > 0) while { (x) g ; }")
        assert output == "    while (x > 0) {\n    g(x);\n    }\n"

    def test_for_loop(self):
        """The whole for header is joined with single spaces."""
        output = body("(i = 0 ; i < 3 ; i = i) for { (i) print ; }")
        assert output == (
            "    for (i = 0 ; i < 3 ; i = i) {\n"
            "    print(i);\n"
            "    }\n"
        )

    def test_if_without_else(self):
        """An if with no else emits no else block."""
        output = body("(x == 0) if { 1 = y int ; }")
        assert output == "    if (x == 0) {\n    int y = 1;\n    }\n"
        assert "else" not in output

    def test_if_else(self):
        """A forward-order else follows the if body."""
        output = body("(x == 0) if { 1 = y int ; } else { 2 = y int ; }")
        assert output == (
            "    if (x == 0) {\n"
            "    int y = 1;\n"
            "    }\n"
            "    else {\n"
            "    int y = 2;\n"
            "    }\n"
        )

    def test_nested_condition_parentheses(self):
        """Inner parentheses of a condition survive the join."""
        output = body("( ( a == b ) ) if { }")
        assert output == "    if (( a == b )) {\n    }\n"

    def test_nested_condition_with_unknown_operators(self):
        """Unknown characters in a condition are joined like any other lexeme."""
        output = body("( ( a == b ) && c ) if { }")
        assert output == "    if (( a == b ) & & c) {\n    }\n"

    def test_nested_control(self):
        """Bodies are translated recursively at the same indentation."""
        output = body("(a) while { (b) if { return ; } }")
        assert output == (
            "    while (a) {\n"
            "    if (b) {\n"
            "    return;\n"
            "    }\n"
            "    }\n"
        )

    def test_empty_bodies(self):
        """Empty loop bodies are allowed."""
        assert body("(x) while { }") == "    while (x) {\n    }\n"


# =============================================================================
# Passthrough Statements
# =============================================================================

class TestPassthrough:
    """Statements starting with a keyword or identifier are copied through."""

    def test_return_value(self):
        assert body("return x ;") == "    return x;\n"

    def test_bare_return(self):
        assert body("return ;") == "    return;\n"

    def test_assignment(self):
        """Assignments to existing variables pass through."""
        assert body("x = y ;") == "    x = y;\n"

    def test_forward_call_passthrough(self):
        """A forward-order call is copied token by token."""
        assert body("g ( x ) ;") == "    g ( x );\n"

    def test_unknown_characters_pass_through(self):
        """Arithmetic lexed as UNKNOWN is still copied."""
        assert body("x = x + 1 ;") == "    x = x + 1;\n"

    def test_join_lexemes(self):
        tokens = [YdcToken(YdcTokenType.KEYWORD, "return"), YdcToken(YdcTokenType.IDENTIFIER, "x")]
        assert join_lexemes(tokens) == "return x"


# =============================================================================
# Error Tests
# =============================================================================

class TestErrors:
    """The first syntax error is fatal and names the offending lexeme."""

    def test_top_level_statement(self):
        """Only directives and functions are allowed at top level."""
        with pytest.raises(TopLevelError) as exc_info:
            translate("int main")
        assert str(exc_info.value) == (
            "Parser Error: Only preprocessor directives or function definitions "
            "allowed at top level. Found 'int'."
        )

    def test_forward_function_rejected(self):
        """A forward-order definition is not the dialect."""
        with pytest.raises(TopLevelError):
            translate("int main() { }")

    def test_missing_comma_between_parameters(self):
        """Parameters must be separated by commas."""
        with pytest.raises(ExpectedTokenError) as exc_info:
            translate("(a int b char) f void { }")
        assert str(exc_info.value) == (
            "Parser Error: Expected ',' or ')' in argument list. Got 'b' instead."
        )

    def test_parameter_type_missing(self):
        with pytest.raises(ExpectedTokenError) as exc_info:
            translate("(a, b) f void { }")
        assert "Expected argument type" in str(exc_info.value)

    def test_missing_return_type(self):
        with pytest.raises(ExpectedTokenError) as exc_info:
            translate("() main { }")
        assert str(exc_info.value) == (
            "Parser Error: Expected function return type. Got '{' instead."
        )

    def test_missing_closing_brace(self):
        """Running out of input inside a body reports EOF."""
        with pytest.raises(ExpectedTokenError) as exc_info:
            translate("() main int {")
        assert str(exc_info.value) == (
            "Parser Error: Expected '}' after function body. Got 'EOF' instead."
        )

    def test_missing_semicolon_at_end(self):
        with pytest.raises(ExpectedTokenError) as exc_info:
            translate("() main int { return x")
        assert "Expected ';' after statement. Got 'EOF' instead." in str(exc_info.value)

    def test_unrecognized_statement(self):
        """A statement cannot start with ';'."""
        with pytest.raises(UnrecognizedStatementError) as exc_info:
            translate("() main int { ; }")
        assert str(exc_info.value) == "Parser Error: Unrecognized statement starting with ';'"

    def test_parenthesised_group_without_binder(self):
        """A group followed by neither keyword nor name is rejected."""
        with pytest.raises(UnrecognizedStatementError) as exc_info:
            translate("() main int { (x) ; }")
        assert exc_info.value.found == "("

    def test_call_needs_semicolon(self):
        """`(x) g` without ';' is not a call."""
        with pytest.raises(UnrecognizedStatementError):
            translate("() main int { (x) g }")

    def test_unbalanced_group(self):
        """An unclosed '(' in a body cannot be classified."""
        with pytest.raises(UnrecognizedStatementError):
            translate("() main int { (x ")

    def test_unknown_character_statement(self):
        """UNKNOWN tokens fail when they start a statement."""
        with pytest.raises(UnrecognizedStatementError) as exc_info:
            translate("() main int { @ }")
        assert exc_info.value.found == "@"

    def test_else_requires_brace(self):
        with pytest.raises(ExpectedTokenError) as exc_info:
            translate("() main int { (x) if { } else 1 = y int ; }")
        assert str(exc_info.value) == (
            "Parser Error: Expected '{' before else body. Got '1' instead."
        )

    def test_loop_body_requires_brace(self):
        with pytest.raises(ExpectedTokenError) as exc_info:
            translate("() main int { (x) while return ; }")
        assert "Expected '{' before while loop body" in str(exc_info.value)

    def test_errors_share_base_class(self):
        """All parser failures can be caught as ParserError."""
        for source in ["x", "() main int { ; }", "() main int { 1 ; }"]:
            with pytest.raises(ParserError):
                translate(source)

    def test_token_list_must_end_with_eof(self):
        with pytest.raises(ValueError):
            YdcParser([])
        with pytest.raises(ValueError):
            YdcParser([YdcToken(YdcTokenType.IDENTIFIER, "x")])


# =============================================================================
# Output Properties
# =============================================================================

PROGRAM = """
#include <stdio.h>

(n int, m int) max int {
    (n > m) if { return n ; } else { return m ; }
}

() main int {
    3 = a int ;
    9 = b int ;
    (a < b) while {
        ("%d\\n", a) printf ;
        a = b ;
    }
    (i = 0 ; i < a ; i = b) for { (i) putchar ; }
    return 0 ;
}
"""


class TestOutputProperties:
    """Invariants that hold for any successful translation."""

    def test_braces_balance(self):
        output = translate(PROGRAM)
        assert output.count("{") == output.count("}")

    def test_body_lines_indented(self):
        """Every body line starts with four spaces and ends in ';' or '{' / '}'."""
        output = translate(PROGRAM)
        for line in output.splitlines():
            if not line or line.startswith("#") or line.startswith("int ") or line == "}":
                continue
            assert line.startswith("    ")
            assert line.endswith((";", "{", "}"))

    def test_every_line_newline_terminated(self):
        assert translate(PROGRAM).endswith("\n")

    def test_deterministic(self):
        """Translating the same input twice gives identical output."""
        assert translate(PROGRAM) == translate(PROGRAM)

    def test_cursor_reaches_eof(self):
        """After a successful parse the cursor rests on EOF."""
        tokens = YdcLexer(PROGRAM).tokenize()
        parser = YdcParser(tokens)
        parser.parse()
        assert parser.position == len(tokens) - 1

    def test_parse_is_repeatable(self):
        """parse() restarts from the first token."""
        parser = YdcParser(YdcLexer("() main int { }").tokenize())
        assert parser.parse() == parser.parse()
