"""
YDC Error Hierarchy
===================

This module defines the exception hierarchy for the YDC toolchain.
All exceptions inherit from YdcError, allowing callers to catch every
toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
YdcError (base)
├── SourceReadError (source provider)
│   ├── SourceOpenError - file could not be opened
│   ├── SourceMemoryError - not enough memory to hold the file
│   └── SourceShortReadError - fewer bytes read than the file holds
├── BackendError (emit sink)
│   └── OutputWriteError - translated C could not be written
└── TranspilerError (see ydc.transpiler.errors)

Resource errors carry the offending path and format themselves with the
exact one-line message printed by the ydcc command.
"""

from pathlib import Path
from typing import Union


# =============================================================================
# Base Exception Class
# =============================================================================

class YdcError(Exception):
    """
    Base exception for all YDC errors.

        try:
            transpile_file("hello.ydc")
        except YdcError as e:
            print(e)
    """
    pass


# =============================================================================
# Source Provider Exceptions
# =============================================================================

class SourceReadError(YdcError):
    """
    Base exception for failures while reading a .ydc source file.

    Attributes:
        path: The source path that could not be read
    """

    template = "Could not read file \"{path}\"."

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        super().__init__(self.template.format(path=self.path))


class SourceOpenError(SourceReadError):
    """The source file does not exist or cannot be opened."""

    template = "Could not open file \"{path}\"."


class SourceMemoryError(SourceReadError):
    """The source file is too large to hold in memory."""

    template = "Not enough memory to read \"{path}\"."


class SourceShortReadError(SourceReadError):
    """Fewer bytes were read than the file reported."""
    pass


# =============================================================================
# Emit Sink Exceptions
# =============================================================================

class BackendError(YdcError):
    """Base exception for failures after translation succeeded."""
    pass


class OutputWriteError(BackendError):
    """
    The translated C text could not be written.

    Attributes:
        path: Destination that could not be created
    """

    def __init__(self, path: Union[str, Path]):
        self.path = str(path)
        super().__init__(f"Error: could not create {self.path}")
