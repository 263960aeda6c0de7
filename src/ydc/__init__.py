"""
YDC - Reversed C Dialect Transpiler
===================================

This package translates .ydc source files, a small dialect of C in which
declarations, calls and control-structure heads are written back to
front, into standard C, and then hands the result to the host C compiler.

Main Components
---------------
- **transpiler**: lexer and fused parser/translator
    Converts .ydc source to forward-order C text

- **files**: source provider and emit sink
    Reads .ydc files and writes output.c

- **backend**: external compile step
    Runs gcc on the emitted C

- **cli**: the ydcc command

Quick Start
-----------
    >>> from ydc.transpiler import transpile_source
    >>> print(transpile_source('() main int { }'), end="")
    int main() {
    }
    <BLANKLINE>

Or use the command-line tool:
    $ ydcc hello.ydc
"""

__version__ = "1.0.0"

from ydc.errors import (
    YdcError,
    SourceReadError,
    SourceOpenError,
    SourceMemoryError,
    SourceShortReadError,
    BackendError,
    OutputWriteError,
)

__all__ = [
    "__version__",
    "YdcError",
    "SourceReadError",
    "SourceOpenError",
    "SourceMemoryError",
    "SourceShortReadError",
    "BackendError",
    "OutputWriteError",
]
