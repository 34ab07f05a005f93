"""
Normal modes of the Earth computed with Mineos.

This package drives the ``minos_bran`` program of the Mineos suite: it writes
the model and control files, runs the solver once per family of modes
(radial, toroidal, spheroidal and inner-core toroidal), checks and parses
its fixed-column output and gathers everything in one ordered collection
keyed by ``(n, tag, l)``.

The solver itself is not part of the package; see :mod:`normalmodes.config`
for how it is located.
"""

from .aggregate import eigenfrequencies, eigenmodes
from .control import ModeParameters, control_file_text
from .errors import (
    MineosError,
    ResultFileError,
    SolverExecutionError,
    SolverNotFoundError,
    UnexpectedSolverOutput,
    UnknownModeTypeError,
)
from .model import MineosModel, TabularEarthModel
from .modes import MODE_TYPE_MAPPING, Mode, ModeCollection, ModeFamily, ModeKey
from .results import (
    check_rayleigh_quotient,
    check_stdout,
    parse_eigenmodes,
    read_eigenmodes,
)
from .solver import SolverOutput, run_minos_bran

__all__ = [
    "eigenmodes",
    "eigenfrequencies",
    "ModeParameters",
    "control_file_text",
    "Mode",
    "ModeCollection",
    "ModeFamily",
    "ModeKey",
    "MODE_TYPE_MAPPING",
    "MineosModel",
    "TabularEarthModel",
    "read_eigenmodes",
    "parse_eigenmodes",
    "check_stdout",
    "check_rayleigh_quotient",
    "run_minos_bran",
    "SolverOutput",
    "MineosError",
    "SolverExecutionError",
    "SolverNotFoundError",
    "UnexpectedSolverOutput",
    "ResultFileError",
    "UnknownModeTypeError",
]
