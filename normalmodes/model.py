from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Sequence, Union

import numpy as np

PathLike = Union[str, Path]

_LEVEL_FORMAT = "%8.0f%9.2f%9.2f%9.2f%9.1f%9.1f%9.2f%9.2f%9.5f"


class MineosModel(Protocol):
    """
    Anything that can write itself as a ``minos_bran`` model file.

    ``freq`` is the reference frequency of the model in Hz.
    """

    def write_mineos(self, path: PathLike, freq: float = 1.0) -> None: ...


def _ensure_array(name: str, values: Sequence[float]) -> np.ndarray:
    array = np.asarray(values, dtype=float)
    if array.ndim != 1:
        raise ValueError(f"{name} must be 1-D")
    return array


@dataclass(frozen=True, eq=False)
class TabularEarthModel:
    """
    Spherically symmetric Earth model sampled at discrete radii.

    This is the tabular "deck" format read by ``minos_bran``.  Levels run from
    the centre to the surface; a discontinuity is two levels at the same
    radius.  Units are SI: radius in m, density in kg/m^3, velocities in m/s.

    Parameters
    ----------
    radius, density, vpv, vsv : sequence of floats
        Radius, density and vertically polarised P and S velocities.
    qkappa, qshear : sequence of floats
        Bulk and shear quality factors.
    n_inner_core, n_outer_core : int
        Number of levels up to the top of the inner core and up to the top of
        the outer core.
    vph, vsh, eta : sequence of floats, optional
        Horizontally polarised velocities and the anisotropy parameter.
        Default to an isotropic model (``vph = vpv``, ``vsh = vsv``,
        ``eta = 1``).
    """

    radius: np.ndarray
    density: np.ndarray
    vpv: np.ndarray
    vsv: np.ndarray
    qkappa: np.ndarray
    qshear: np.ndarray
    n_inner_core: int
    n_outer_core: int
    vph: Optional[np.ndarray] = None
    vsh: Optional[np.ndarray] = None
    eta: Optional[np.ndarray] = None
    title: str = "normalmodes model"

    def __post_init__(self) -> None:
        radius = _ensure_array("radius", self.radius)
        vpv = _ensure_array("vpv", self.vpv)
        vsv = _ensure_array("vsv", self.vsv)
        columns = {
            "radius": radius,
            "density": _ensure_array("density", self.density),
            "vpv": vpv,
            "vsv": vsv,
            "qkappa": _ensure_array("qkappa", self.qkappa),
            "qshear": _ensure_array("qshear", self.qshear),
            "vph": vpv.copy() if self.vph is None else _ensure_array("vph", self.vph),
            "vsh": vsv.copy() if self.vsh is None else _ensure_array("vsh", self.vsh),
            "eta": np.ones_like(radius) if self.eta is None else _ensure_array("eta", self.eta),
        }
        for name, column in columns.items():
            if column.size != radius.size:
                raise ValueError(f"{name} must have the same length as radius.")
        if radius.size < 2:
            raise ValueError("a model needs at least two levels.")
        if np.any(radius < 0.0) or np.any(np.diff(radius) < 0.0):
            raise ValueError("radius must be non-negative and non-decreasing.")
        if not 0 <= self.n_inner_core <= self.n_outer_core <= radius.size:
            raise ValueError(
                "core level counts must satisfy 0 <= n_inner_core <= n_outer_core <= levels."
            )
        for name, column in columns.items():
            object.__setattr__(self, name, column)

    @property
    def n_levels(self) -> int:
        return int(self.radius.size)

    @property
    def is_anisotropic(self) -> bool:
        return bool(
            np.any(self.vpv != self.vph)
            or np.any(self.vsv != self.vsh)
            or np.any(self.eta != 1.0)
        )

    def write_mineos(self, path: PathLike, freq: float = 1.0) -> None:
        """
        Write the model as a tabular ``minos_bran`` deck.

        ``freq`` is the reference frequency in Hz; the deck stores the
        corresponding reference period ``1/freq`` in s.
        """

        if freq <= 0.0:
            raise ValueError("reference frequency must be positive.")
        table = np.column_stack(
            [
                self.radius,
                self.density,
                self.vpv,
                self.vsv,
                self.qkappa,
                self.qshear,
                self.vph,
                self.vsh,
                self.eta,
            ]
        )
        with open(path, "w") as f:
            f.write(f"{self.title}\n")
            f.write(f"{int(self.is_anisotropic)} {1.0 / freq} 1\n")
            f.write(f"{self.n_levels} {self.n_inner_core} {self.n_outer_core}\n")
            np.savetxt(f, table, fmt=_LEVEL_FORMAT)

    @classmethod
    def read_mineos(cls, path: PathLike) -> "TabularEarthModel":
        """
        Load a tabular deck such as the ``prem_noocean.txt`` shipped with Mineos.
        """

        with open(path) as f:
            title = f.readline().strip()
            header = f.readline().split()
            counts = f.readline().split()
            if len(header) < 3 or len(counts) < 3:
                raise ValueError(f"{path}: incomplete model header.")
            if int(header[2]) != 1:
                raise ValueError(f"{path}: only tabular models (ifdeck = 1) are supported.")
            n_levels, n_inner_core, n_outer_core = (int(v) for v in counts[:3])
            table = np.loadtxt(f, max_rows=n_levels, ndmin=2)
        if table.shape != (n_levels, 9):
            raise ValueError(
                f"{path}: expected {n_levels} levels of 9 columns, got {table.shape}."
            )
        radius, density, vpv, vsv, qkappa, qshear, vph, vsh, eta = table.T
        return cls(
            radius=radius,
            density=density,
            vpv=vpv,
            vsv=vsv,
            qkappa=qkappa,
            qshear=qshear,
            n_inner_core=n_inner_core,
            n_outer_core=n_outer_core,
            vph=vph,
            vsh=vsh,
            eta=eta,
            title=title,
        )
