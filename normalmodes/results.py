"""
Reading and checking what ``minos_bran`` produces.

The solver prints a short report on standard output and writes a
fixed-column table of modes to its output file.  Each data record looks like::

    <n:5><type:2><l:5><phase_vel:16><frequency:16><period:16><group_vel:16><Q:16><rayleigh_quotient:16>

which is 108 characters in total.  The table starts two lines below the
header line whose first word is ``mode``.
"""

from __future__ import annotations

import logging
import re
from collections import OrderedDict
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Tuple, Union

from . import config
from .errors import ResultFileError, UnexpectedSolverOutput, UnknownModeTypeError
from .modes import MODE_TYPE_MAPPING, Mode, ModeFamily, mode_name

logger = logging.getLogger(__name__)

_HEADER = re.compile(r"^\s*mode")

# (first, last) character columns, 1-based and inclusive
_COLUMNS = {
    "n": (1, 5),
    "type": (6, 7),
    "l": (8, 12),
    "phase_vel": (13, 28),
    "frequency": (29, 44),
    "period": (45, 60),
    "group_vel": (61, 76),
    "Q": (77, 92),
    "rayleigh_quotient": (93, 108),
}

_FLOAT_FIELDS = ("phase_vel", "frequency", "period", "group_vel", "Q", "rayleigh_quotient")


def check_stdout(output: str) -> None:
    """
    Raise :class:`UnexpectedSolverOutput` unless ``output`` is the 12-line
    report of a successful run.
    """
    lines = output.rstrip().split("\n")
    if len(lines) != config.STDOUT_LINE_COUNT:
        raise UnexpectedSolverOutput(output)


def mode_type_family(code: str) -> ModeFamily:
    """Family for the letter ``code`` used in the type column of the result file."""
    try:
        return MODE_TYPE_MAPPING[code]
    except KeyError:
        raise UnknownModeTypeError(f"unknown mode type code {code!r}") from None


def _field(line: str, name: str) -> str:
    first, last = _COLUMNS[name]
    return line[first - 1:last]


def parse_mode_line(
    line: str,
    mode_type: Union[str, ModeFamily, None] = None,
    source: str = "<string>",
    line_number: Optional[int] = None,
) -> Mode:
    """
    Decode one fixed-column record.

    ``mode_type``, if given, is the letter code (or family) every record is
    expected to carry.
    """
    if len(line) < config.MIN_LINE_LENGTH:
        raise ResultFileError(
            f"line {line_number} is too short ({len(line)} < {config.MIN_LINE_LENGTH} characters)",
            source,
            line_number,
        )

    code = _field(line, "type").strip()
    if mode_type is not None:
        expected = mode_type.code if isinstance(mode_type, ModeFamily) else mode_type
        if code != expected:
            raise ResultFileError(
                f"mode type in file is {code!r}, but expecting {expected!r}",
                source,
                line_number,
            )
    try:
        family = mode_type_family(code)
    except UnknownModeTypeError as exc:
        raise UnknownModeTypeError(str(exc), source, line_number) from None

    try:
        n = int(_field(line, "n"))
        l = int(_field(line, "l"))
        values = {name: float(_field(line, name)) for name in _FLOAT_FIELDS}
    except ValueError as exc:
        raise ResultFileError(f"malformed mode record: {exc}", source, line_number) from exc

    return Mode(family=family, n=n, l=l, **values)


def parse_eigenmodes(
    lines: Iterable[str],
    mode_type: Union[str, ModeFamily, None] = None,
    source: str = "<string>",
) -> Dict[Tuple[int, int], Mode]:
    """
    Parse the lines of a ``minos_bran`` output file.

    Returns an ordered dict keyed by ``(n, l)``.  If a key occurs twice the
    later record wins.
    """
    lines = [line.rstrip("\r\n") for line in lines]
    header = next((i for i, line in enumerate(lines) if _HEADER.match(line)), None)
    if header is None:
        raise ResultFileError("cannot find mode header line in output file", source)

    modes: Dict[Tuple[int, int], Mode] = OrderedDict()
    for index in range(header + 2, len(lines)):
        line = lines[index]
        if not line.strip():
            continue
        mode = parse_mode_line(line, mode_type, source=source, line_number=index + 1)
        modes[(mode.n, mode.l)] = mode
    return modes


def read_eigenmodes(
    path: Union[str, Path],
    mode_type: Union[str, ModeFamily, None] = None,
) -> Dict[Tuple[int, int], Mode]:
    """
    Return the modes in one ``minos_bran`` output file.

    For example the fundamental spheroidal mode of degree two is
    ``modes[(0, 2)]`` and its frequency in mHz ``modes[(0, 2)].frequency``.
    """
    with open(path) as f:
        modes = parse_eigenmodes(f, mode_type, source=str(path))
    logger.debug("Read %d modes from %s", len(modes), path)
    return modes


def check_rayleigh_quotient(
    modes: Mapping[Tuple[int, int], Mode],
    eps: float,
    family: ModeFamily,
    scale: float = 5,
) -> List[str]:
    """
    Warn about modes whose Rayleigh quotient exceeds ``scale * eps``.

    The modes are left untouched; the names of the flagged modes are
    returned.
    """
    flagged = []
    for (n, l), mode in modes.items():
        if mode.rayleigh_quotient > scale * eps:
            name = mode_name(n, family.tag, l)
            logger.warning("Rayleigh quotient greater than %s*eps for %s", scale, name)
            flagged.append(name)
    return flagged
