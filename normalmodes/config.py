"""
Configuration & Path Management
===============================
Central registry for the file names, limits and executable lookup used when
running the Mineos ``minos_bran`` program.

The solver binary is not shipped with this package.  It is located with
:func:`find_minos_bran`, which looks in this order at:

1. an explicit path handed in by the caller,
2. the ``NORMALMODES_MINOS_BRAN`` environment variable,
3. ``minos_bran`` on ``PATH``.

Exports:
    MODEL_IN, MODEL_OUT, EIGENFUNCTIONS_OUT, CONTROL (str): File names used
        inside each run's working directory.
    STDOUT_LINE_COUNT (int): Number of lines a successful run prints.
    MIN_LINE_LENGTH (int): Width of one fixed-column record in the result file.
    RAYLEIGH_QUOTIENT_SCALE (int): Multiple of ``eps`` tolerated by the
        quality check run for every family.
"""
from __future__ import annotations

import os
import shutil
from typing import Optional

from .errors import SolverNotFoundError

MINOS_BRAN: str = "minos_bran"
MINOS_BRAN_ENV: str = "NORMALMODES_MINOS_BRAN"

# Files written into (or expected in) the private working directory
MODEL_IN: str = "model.in"
MODEL_OUT: str = "model.out"
EIGENFUNCTIONS_OUT: str = "eigenfunctions.out"
CONTROL: str = "control"

STDOUT_LINE_COUNT: int = 12
MIN_LINE_LENGTH: int = 108
RAYLEIGH_QUOTIENT_SCALE: int = 10


def find_minos_bran(executable: Optional[str] = None) -> str:
    """
    Return the path of the ``minos_bran`` executable.

    Args:
        executable: Explicit path or command name.  Takes precedence over the
            environment variable and ``PATH``.

    Raises:
        SolverNotFoundError: if nothing usable is found.
    """
    candidate = executable or os.environ.get(MINOS_BRAN_ENV) or MINOS_BRAN
    resolved = shutil.which(candidate)
    if resolved is None:
        raise SolverNotFoundError(
            f"cannot find the minos_bran executable '{candidate}'; "
            f"install Mineos or set ${MINOS_BRAN_ENV}"
        )
    # subprocess resolves a relative path against its cwd, the private run directory
    return os.path.abspath(resolved)
