from __future__ import annotations

import logging
import subprocess
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from . import config
from .control import ModeParameters, control_file_text
from .errors import SolverExecutionError, SolverNotFoundError
from .model import MineosModel
from .modes import ModeFamily

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolverOutput:
    """What one ``minos_bran`` run left behind in its working directory."""

    stdout: str
    result_path: Path
    workdir: Path


@contextmanager
def run_minos_bran(
    model: MineosModel,
    family: ModeFamily,
    params: ModeParameters,
    freq: float = 1.0,
    executable: Optional[str] = None,
) -> Iterator[SolverOutput]:
    """
    Run ``minos_bran`` for one family of modes in a private directory.

    The model and control file are written to a fresh temporary directory and
    the solver is started there with the control file on standard input.
    The directory, including the result file, is deleted when the ``with``
    block exits, so the output must be read inside it::

        with run_minos_bran(model, ModeFamily.TOROIDAL, params) as run:
            modes = read_eigenmodes(run.result_path)

    Raises:
        SolverNotFoundError: the executable cannot be found or started.
        SolverExecutionError: the solver exited with a non-zero status.
    """
    command = config.find_minos_bran(executable)

    with tempfile.TemporaryDirectory(prefix="normalmodes_") as tmp:
        workdir = Path(tmp)
        model.write_mineos(workdir / config.MODEL_IN, freq)
        control = control_file_text(family, params)
        (workdir / config.CONTROL).write_text(control)

        logger.info("Running %s for %s modes (selector %d)", command, family.value, family.selector)
        logger.debug("Working directory %s, control file:\n%s", workdir, control)
        try:
            result = subprocess.run(
                [command],
                input=control,
                capture_output=True,
                text=True,
                cwd=workdir,
            )
        except (FileNotFoundError, PermissionError) as exc:
            raise SolverNotFoundError(f"cannot run {command}: {exc}") from exc
        except OSError as exc:
            raise SolverExecutionError(f"cannot start {command}: {exc}") from exc

        if result.returncode != 0:
            raise SolverExecutionError(
                f"{command} failed for {family.value} modes (exit code {result.returncode})\n"
                f"stdout:\n{result.stdout}\nstderr:\n{result.stderr}",
                returncode=result.returncode,
                stdout=result.stdout,
                stderr=result.stderr,
            )

        yield SolverOutput(
            stdout=result.stdout,
            result_path=workdir / config.MODEL_OUT,
            workdir=workdir,
        )
