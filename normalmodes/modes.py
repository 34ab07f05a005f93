from __future__ import annotations

import operator
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Iterable, NamedTuple, Tuple, Union

import numpy as np


class ModeFamily(Enum):
    """
    Families of normal modes, in the order ``minos_bran`` numbers them.

    Radial modes are written by the solver with the spheroidal letter code and
    are therefore stored under the spheroidal tag ``"S"``.
    """

    RADIAL = "radial"
    TOROIDAL = "toroidal"
    SPHEROIDAL = "spheroidal"
    IC_TOROIDAL = "ic_toroidal"

    @property
    def selector(self) -> int:
        """Family code given to the solver on the fifth control-file line."""
        return _SELECTORS[self]

    @property
    def tag(self) -> str:
        return _TAGS[self]

    @property
    def code(self) -> str:
        """Letter used in the type column of the result file."""
        return self.tag.lower()


_SELECTORS = {
    ModeFamily.RADIAL: 1,
    ModeFamily.TOROIDAL: 2,
    ModeFamily.SPHEROIDAL: 3,
    ModeFamily.IC_TOROIDAL: 4,
}

_TAGS = {
    ModeFamily.RADIAL: "S",
    ModeFamily.TOROIDAL: "T",
    ModeFamily.SPHEROIDAL: "S",
    ModeFamily.IC_TOROIDAL: "C",
}

MODE_TYPE_MAPPING = {
    "c": ModeFamily.IC_TOROIDAL,
    "s": ModeFamily.SPHEROIDAL,
    "t": ModeFamily.TOROIDAL,
}

FAMILY_TAGS = ("S", "T", "C")


def mode_name(n: int, tag: str, l: int) -> str:
    """Conventional name of a mode, e.g. ``mode_name(0, "S", 2) == "0S2"``."""
    return f"{n}{tag}{l}"


class ModeKey(NamedTuple):
    """
    Key of a mode in a :class:`ModeCollection`: ``(n, tag, l)``.

    Being a tuple, ``ModeKey(0, "S", 2) == (0, "S", 2)`` and both hash alike.
    """

    n: int
    tag: str
    l: int

    @classmethod
    def coerce(cls, key: Any) -> "ModeKey":
        if isinstance(key, ModeKey):
            return key
        if not isinstance(key, tuple) or len(key) != 3:
            raise KeyError(key)
        n, tag, l = key
        if isinstance(tag, ModeFamily):
            tag = tag.tag
        if tag not in FAMILY_TAGS:
            raise KeyError(key)
        try:
            return cls(operator.index(n), tag, operator.index(l))
        except TypeError:
            raise KeyError(key) from None

    @property
    def name(self) -> str:
        return mode_name(self.n, self.tag, self.l)


@dataclass(frozen=True)
class Mode:
    """
    Output parameters of one mode computed by ``minos_bran``.

    Attributes
    ----------
    family : ModeFamily
        Type of oscillation: ``SPHEROIDAL``, ``TOROIDAL`` or ``IC_TOROIDAL``
        (toroidal mode of the inner core).
    n, l : int
        Radial and angular order.
    phase_vel, group_vel : float
        Phase and group velocity in km/s.
    frequency : float
        Frequency in mHz.
    period : float
        Period in s, as written by the solver.
    Q : float
        Quality factor of the mode.
    rayleigh_quotient : float
        Ratio of kinetic to potential energy minus one.  Should be of the
        order of ``eps`` when the eigenfunction is accurate.
    """

    family: ModeFamily
    n: int
    l: int
    phase_vel: float
    group_vel: float
    frequency: float
    period: float
    Q: float
    rayleigh_quotient: float

    @property
    def name(self) -> str:
        return mode_name(self.n, self.family.tag, self.l)


KeyLike = Union[ModeKey, Tuple[int, Union[str, ModeFamily], int]]


class ModeCollection(dict):
    """
    Insertion-ordered mapping from ``(n, tag, l)`` to modes (or frequencies).

    ``tag`` is ``"S"`` for spheroidal and radial modes, ``"T"`` for toroidal
    and ``"C"`` for inner-core toroidal modes, so ``modes[0, "S", 2]`` is
    the fundamental spheroidal mode of degree two.  A :class:`ModeFamily`
    may be used in place of the tag.
    """

    def __init__(self, items: Iterable[Tuple[KeyLike, Any]] = ()) -> None:
        super().__init__()
        for key, value in items:
            self[key] = value

    def __setitem__(self, key: KeyLike, value: Any) -> None:
        super().__setitem__(ModeKey.coerce(key), value)

    def __getitem__(self, key: KeyLike) -> Any:
        return super().__getitem__(ModeKey.coerce(key))

    def __contains__(self, key: object) -> bool:
        try:
            return super().__contains__(ModeKey.coerce(key))
        except (KeyError, TypeError, ValueError):
            return False

    def get(self, key: KeyLike, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default

    def __delitem__(self, key: KeyLike) -> None:
        super().__delitem__(ModeKey.coerce(key))

    def pop(self, key: KeyLike, *default: Any) -> Any:
        try:
            key = ModeKey.coerce(key)
        except KeyError:
            if default:
                return default[0]
            raise
        return super().pop(key, *default)

    def setdefault(self, key: KeyLike, default: Any = None) -> Any:
        key = ModeKey.coerce(key)
        if key not in self:
            self[key] = default
        return self[key]

    def update(self, *args: Any, **kwargs: Any) -> None:
        if kwargs:
            raise TypeError("ModeCollection keys are (n, tag, l) tuples, not names.")
        for other in args:
            items = other.items() if hasattr(other, "items") else other
            for key, value in items:
                self[key] = value

    def __ior__(self, other: Any) -> "ModeCollection":
        self.update(other)
        return self

    def __or__(self, other: Any) -> "ModeCollection":
        merged = self.copy()
        merged.update(other)
        return merged

    def copy(self) -> "ModeCollection":
        return ModeCollection(self.items())

    @classmethod
    def fromkeys(cls, keys: Iterable[KeyLike], value: Any = None) -> "ModeCollection":
        return cls((key, value) for key in keys)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.items())!r})"

    def frequencies(self) -> "ModeCollection":
        """Same keys, with each mode replaced by its frequency in mHz."""
        return ModeCollection((key, mode.frequency) for key, mode in self.items())

    def family(self, tag: Union[str, ModeFamily]) -> "ModeCollection":
        """Sub-collection holding only the modes stored under ``tag``."""
        if isinstance(tag, ModeFamily):
            tag = tag.tag
        return ModeCollection((key, value) for key, value in self.items() if key.tag == tag)

    def column(self, field: str) -> np.ndarray:
        """
        Values of one :class:`Mode` attribute for every mode, in order.

        Handy for dispersion curves, e.g. ``modes.column("group_vel")``.
        """
        if field not in _MODE_FIELDS or field == "family":
            raise ValueError(f"{field!r} is not a numeric Mode field.")
        return np.array([getattr(mode, field) for mode in self.values()])


_MODE_FIELDS = tuple(f.name for f in fields(Mode))
