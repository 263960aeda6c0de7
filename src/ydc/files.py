"""
Source Provider and Emit Sink
=============================

File I/O at the two ends of the pipeline:

- read_source() loads a whole .ydc file into memory
- write_output() stores the translated C text

Both work in bytes underneath. Source bytes that are not valid UTF-8 are
kept as surrogate escapes, so whatever goes in comes back out unchanged
in output.c.
"""

import logging
import os
from pathlib import Path
from typing import Union

from ydc.errors import (
    OutputWriteError,
    SourceMemoryError,
    SourceOpenError,
    SourceShortReadError,
)

logger = logging.getLogger(__name__)

SOURCE_ENCODING = "utf-8"
SOURCE_ERRORS = "surrogateescape"


def read_source(path: Union[str, Path]) -> str:
    """
    Read a whole source file.

    Args:
        path: The .ydc file to read

    Returns:
        The file contents as text

    Raises:
        SourceOpenError: If the file cannot be opened
        SourceMemoryError: If the file does not fit in memory
        SourceShortReadError: If fewer bytes arrive than the file holds
    """
    path = Path(path)
    try:
        handle = path.open("rb")
    except OSError as e:
        raise SourceOpenError(path) from e

    with handle:
        size = os.fstat(handle.fileno()).st_size
        try:
            data = handle.read(size)
        except MemoryError as e:
            raise SourceMemoryError(path) from e
        except OSError as e:
            raise SourceShortReadError(path) from e

    if len(data) < size:
        raise SourceShortReadError(path)

    logger.debug(f"Read {len(data)} bytes from {path}")
    return data.decode(SOURCE_ENCODING, errors=SOURCE_ERRORS)


def write_output(text: str, path: Union[str, Path]) -> Path:
    """
    Write translated C text to `path`, replacing any existing file.

    Raises:
        OutputWriteError: If the file cannot be created or written
    """
    path = Path(path)
    try:
        with path.open("w", encoding=SOURCE_ENCODING, errors=SOURCE_ERRORS, newline="") as handle:
            handle.write(text)
    except OSError as e:
        raise OutputWriteError(path) from e

    logger.debug(f"Wrote {len(text)} characters to {path}")
    return path
