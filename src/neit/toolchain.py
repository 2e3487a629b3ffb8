"""
Native Toolchain Invocation
===========================

Writes generated C source to disk and runs a native C compiler on it:

    <compiler> <c_path> -o <binary_path>

Compiler failures are raised as BuildError with the command line, the
captured stderr and the exit status.
"""

import logging
import subprocess
from pathlib import Path

from neit.errors import BuildError

logger = logging.getLogger(__name__)

# Seconds before a hung compiler is abandoned
DEFAULT_TIMEOUT = 120


def write_c_source(c_source: str, path: str | Path) -> Path:
    """Write generated C source to a file and return its path."""
    path = Path(path)
    path.write_text(c_source, encoding="utf-8")
    logger.debug(f"Wrote {len(c_source)} bytes of C to {path}")
    return path


def build_executable(
    c_path: str | Path,
    binary_path: str | Path = "output",
    compiler: str = "clang",
    timeout: int = DEFAULT_TIMEOUT,
) -> Path:
    """
    Compile a C file into an executable.

    Args:
        c_path: The generated C source file
        binary_path: Output executable path
        compiler: C compiler command (clang, gcc, cc, ...)
        timeout: Seconds to wait for the compiler

    Returns:
        Path of the executable

    Raises:
        BuildError: If the compiler is missing, times out or fails
    """
    cmd = [compiler, str(c_path), "-o", str(binary_path)]
    logger.info(f"Running {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise BuildError(
            f"Error running the compiler '{compiler}': not found",
            command=cmd,
        )
    except subprocess.TimeoutExpired:
        raise BuildError(
            f"Compiler '{compiler}' timed out after {timeout}s",
            command=cmd,
        )

    if result.returncode != 0:
        raise BuildError(
            f"Error during compilation with {compiler}",
            command=cmd,
            stderr=result.stderr,
            return_code=result.returncode,
        )

    return Path(binary_path)
