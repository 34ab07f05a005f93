from __future__ import annotations

import dataclasses
import logging
from typing import Any, Optional

from . import config
from .control import ModeParameters
from .model import MineosModel
from .modes import ModeCollection, ModeKey
from .results import check_rayleigh_quotient, check_stdout, read_eigenmodes
from .solver import run_minos_bran

logger = logging.getLogger(__name__)


def _resolve_parameters(params: Optional[ModeParameters], options: dict) -> ModeParameters:
    params = params or ModeParameters()
    if not options:
        return params
    known = {f.name for f in dataclasses.fields(ModeParameters)}
    unknown = sorted(set(options) - known)
    if unknown:
        raise TypeError(f"unknown mode parameter(s): {', '.join(unknown)}")
    return dataclasses.replace(params, **options)


def eigenmodes(
    model: MineosModel,
    freq: float = 1.0,
    params: Optional[ModeParameters] = None,
    *,
    executable: Optional[str] = None,
    **options: Any,
) -> ModeCollection:
    """
    Compute the normal modes of ``model`` with ``minos_bran``.

    Parameters
    ----------
    model:
        Earth model; anything with a ``write_mineos(path, freq)`` method, such
        as :class:`~normalmodes.model.TabularEarthModel`.
    freq:
        Reference frequency of the model in Hz.
    params:
        Mode selection and calculation parameters.  Defaults to
        :class:`~normalmodes.control.ModeParameters` ``()``.
    executable:
        Path of ``minos_bran``; see :func:`~normalmodes.config.find_minos_bran`.
    **options:
        Individual :class:`ModeParameters` fields overriding ``params``,
        e.g. ``eigenmodes(model, lmax=128, ic_toroidal=False)``.

    Returns
    -------
    ModeCollection
        Modes keyed by ``(n, tag, l)`` where ``tag`` is ``"S"`` (spheroidal
        and radial), ``"T"`` (toroidal) or ``"C"`` (inner-core toroidal).
        ``modes[3, "T", 8]`` is the third overtone toroidal mode of degree 8.
        Families appear in the order radial, toroidal, spheroidal, inner-core
        toroidal.

    Any error in any family aborts the whole call.
    """

    params = _resolve_parameters(params, options)
    out = ModeCollection()
    for family in params.families():
        with run_minos_bran(model, family, params, freq, executable) as run:
            check_stdout(run.stdout)
            modes = read_eigenmodes(run.result_path)
        check_rayleigh_quotient(modes, params.eps, family, scale=config.RAYLEIGH_QUOTIENT_SCALE)
        for (n, l), mode in modes.items():
            out[ModeKey(n, family.tag, l)] = mode
        logger.info("Computed %d %s modes", len(modes), family.value)
    return out


def eigenfrequencies(
    model: MineosModel,
    freq: float = 1.0,
    params: Optional[ModeParameters] = None,
    *,
    executable: Optional[str] = None,
    **options: Any,
) -> ModeCollection:
    """
    Like :func:`eigenmodes`, but return only the frequencies in mHz.

    ``freqs[0, "S", 0]`` is the frequency of the radial fundamental mode.
    """

    modes = eigenmodes(model, freq, params, executable=executable, **options)
    return modes.frequencies()
