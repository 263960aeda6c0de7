"""
Back-End Compiler Invocation
============================

Runs the host C compiler on the translated output:

    gcc -o output output.c

The compiler's exit status is reported, not raised. A failed back-end
build is the C compiler's verdict on the generated program and not an
error of the translator. A compiler that cannot be found or that hangs
past the timeout counts as a failed build in the same way.
"""

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_CC = "gcc"
DEFAULT_EXECUTABLE = "output"


@dataclass
class CompileResult:
    """
    Outcome of one back-end compiler run.

    Attributes:
        command: The argument vector that was run
        return_code: Exit status, or None if the compiler never finished
        stdout: Captured standard output
        stderr: Captured standard error
    """
    command: List[str] = field(default_factory=list)
    return_code: Optional[int] = None
    stdout: str = ""
    stderr: str = ""

    @property
    def success(self) -> bool:
        return self.return_code == 0


def compile_c(
    c_path: Union[str, Path],
    executable: Union[str, Path] = DEFAULT_EXECUTABLE,
    cc: str = DEFAULT_CC,
    timeout: Optional[float] = None,
) -> CompileResult:
    """
    Compile a C file into an executable.

    Args:
        c_path: The C source to compile
        executable: Path of the executable to produce
        cc: Compiler command, looked up on PATH
        timeout: Seconds to wait before giving up (None waits forever)

    Returns:
        CompileResult describing the run
    """
    cmd = [cc, "-o", str(executable), str(c_path)]
    logger.debug(f"Running {' '.join(cmd)}")

    try:
        proc = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        logger.debug(f"Compiler '{cc}' not found")
        return CompileResult(command=cmd, return_code=127, stderr=f"{cc}: command not found\n")
    except subprocess.TimeoutExpired:
        logger.debug(f"Compiler timed out after {timeout}s")
        return CompileResult(command=cmd, stderr=f"{cc}: timed out after {timeout}s\n")

    logger.debug(f"Compiler exited with status {proc.returncode}")
    return CompileResult(
        command=cmd,
        return_code=proc.returncode,
        stdout=proc.stdout,
        stderr=proc.stderr,
    )
