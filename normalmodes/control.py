from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

from . import config
from .modes import ModeFamily


@dataclass(frozen=True)
class ModeParameters:
    """
    Mode selection and calculation parameters for one call of ``eigenmodes``.

    Parameters
    ----------
    radial, toroidal, spheroidal, ic_toroidal : bool
        Calculate (or not) each family of modes.  For radial modes the
        solver ignores ``nmin`` and ``nmax``.
    eps : float
        Accuracy of the integration scheme.  Eigenfrequencies are accurate
        relatively to about ``2*eps`` to ``3*eps``.  ``1e-7`` is enough below
        100 mHz (periods over 10 s); between 100 and 200 mHz use ``1e-12`` to
        ``1e-10``.
    wgrav : float
        Frequency in mHz above which gravitational terms are neglected.
    lmin, lmax : int
        Minimum and maximum angular order.
    wmin, wmax : float
        Minimum and maximum eigenfrequency in mHz.
    nmin, nmax : int
        Minimum and maximum dispersion branch number.

    Bounds are passed to the solver as given; they are not checked here.
    """

    radial: bool = True
    toroidal: bool = True
    spheroidal: bool = True
    ic_toroidal: bool = True
    eps: float = 1e-10
    wgrav: float = 10
    lmin: int = 1
    lmax: int = 20
    wmin: float = 0.0
    wmax: float = 166.0
    nmin: int = 0
    nmax: int = 10

    def enabled(self, family: ModeFamily) -> bool:
        return bool(getattr(self, family.value))

    def families(self) -> Iterator[ModeFamily]:
        """Enabled families, in the order the solver numbers them."""
        for family in ModeFamily:
            if self.enabled(family):
                yield family


def control_file_text(
    family: Union[ModeFamily, int],
    params: ModeParameters,
    model_in: str = config.MODEL_IN,
    model_out: str = config.MODEL_OUT,
    eigfuncs: str = config.EIGENFUNCTIONS_OUT,
) -> str:
    """
    Build the text ``minos_bran`` reads from standard input.

    ``family`` is either a :class:`ModeFamily` or its selector code (1-4).
    """
    selector = family.selector if isinstance(family, ModeFamily) else int(family)
    p = params
    lines = [
        model_in,
        model_out,
        eigfuncs,
        f"{p.eps} {p.wgrav}",
        f"{selector}",
        f"{p.lmin} {p.lmax} {p.wmin} {p.wmax} {p.nmin} {p.nmax}",
    ]
    return "\n".join(lines) + "\n"
