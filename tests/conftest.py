"""Shared fixtures: fixed-column mode records and a fake minos_bran."""
import os
import stat
import sys
from pathlib import Path

import numpy as np
import pytest

from normalmodes import TabularEarthModel

HEADER = [
    " PREM without ocean",
    " level      radius       rho       vpv       vph       vsv       vsh",
    "",
    " mode        phs vel        w(mhz)        t(secs)     grp vel(km/s)         q            raylquo",
    "",
]

STDOUT = "\n".join(f" minos_bran report line {i}" for i in range(1, 13)) + "\n\n"


def mode_line(n, code, l, phase_vel, frequency, period, group_vel, q, rayleigh_quotient):
    """One 108-character result record as written by minos_bran."""
    values = (phase_vel, frequency, period, group_vel, q, rayleigh_quotient)
    return f"{n:5d} {code}{l:5d}" + "".join(f"{v:16.7g}" for v in values)


def result_text(records):
    return "\n".join(HEADER + list(records)) + "\n"


# Records taken from a PREM run
RADIAL = [
    mode_line(0, "s", 0, 9.999999, 0.814338, 1227.99, 9.999999, 5327.188, 1.2e-11),
    mode_line(1, "s", 0, 9.999999, 1.631964, 612.7586, 9.999999, 1499.0, -3.1e-12),
]
TOROIDAL = [
    mode_line(0, "t", 7, 5.848219, 1.22036, 819.4303, 5.077917, 253.1842, 2.2e-11),
    mode_line(10, "t", 34, 15.26459, 13.15579, 1000 / 13.15579, 5.348, 227.8324, -5.747906e-9),
]
SPHEROIDAL = [
    mode_line(0, "s", 2, 5.0, 0.309278, 3233.3, 3.5, 509.6, 4.0e-12),
    mode_line(0, "s", 3, 5.1, 0.468564, 2134.2, 3.6, 417.0, -7.0e-12),
]
IC_TOROIDAL = [
    mode_line(8, "c", 44, 1.07, 40.28792, 24.82135, 0.98, 136.0, 1.0e-11),
]


class FakeSolver:
    """
    Executable standing in for minos_bran.

    It reads the control file from stdin, copies ``family_<selector>.out``
    into the output file named there, prints ``stdout.txt`` and exits with
    the code in ``exit_code``.  Every call is logged as ``selector cwd``.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = directory
        self.path = directory / "minos_bran"
        self.path.write_text(
            f"#!{sys.executable}\n"
            "import os, shutil, sys\n"
            "from pathlib import Path\n"
            f"here = Path({str(directory)!r})\n"
            "lines = sys.stdin.read().splitlines()\n"
            "selector = lines[4].strip()\n"
            "with open(here / 'calls.log', 'a') as log:\n"
            "    log.write(selector + ' ' + os.getcwd() + '\\n')\n"
            "assert Path(lines[0]).exists()\n"
            "source = here / ('family_' + selector + '.out')\n"
            "if source.exists():\n"
            "    shutil.copy(source, lines[1])\n"
            "sys.stdout.write((here / 'stdout.txt').read_text())\n"
            "sys.exit(int((here / 'exit_code').read_text()))\n"
        )
        self.path.chmod(self.path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        self.set_stdout(STDOUT)
        self.set_exit_code(0)

    def set_output(self, selector: int, records) -> None:
        (self.directory / f"family_{selector}.out").write_text(result_text(records))

    def set_raw_output(self, selector: int, text: str) -> None:
        (self.directory / f"family_{selector}.out").write_text(text)

    def set_stdout(self, text: str) -> None:
        (self.directory / "stdout.txt").write_text(text)

    def set_exit_code(self, code: int) -> None:
        (self.directory / "exit_code").write_text(str(code))

    def calls(self):
        log = self.directory / "calls.log"
        if not log.exists():
            return []
        return [tuple(line.split(" ", 1)) for line in log.read_text().splitlines()]


@pytest.fixture
def fake_solver(tmp_path):
    if os.name == "nt":
        pytest.skip("fake solver is a POSIX script")
    directory = tmp_path / "solver"
    directory.mkdir()
    solver = FakeSolver(directory)
    solver.set_output(1, RADIAL)
    solver.set_output(2, TOROIDAL)
    solver.set_output(3, SPHEROIDAL)
    solver.set_output(4, IC_TOROIDAL)
    return solver


@pytest.fixture
def earth_model():
    radius = np.array([0.0, 1221500.0, 1221500.0, 3480000.0, 3480000.0, 6371000.0])
    return TabularEarthModel(
        radius=radius,
        density=[13088.5, 12763.6, 12166.3, 9903.4, 5566.5, 2600.0],
        vpv=[11266.2, 11028.3, 10355.7, 8064.8, 13716.6, 5800.0],
        vsv=[3667.8, 3504.3, 0.0, 0.0, 7264.7, 3200.0],
        qkappa=[1327.7, 1327.7, 57823.0, 57823.0, 57823.0, 57823.0],
        qshear=[84.6, 84.6, 0.0, 0.0, 312.0, 600.0],
        n_inner_core=2,
        n_outer_core=4,
        title="toy core-mantle model",
    )
