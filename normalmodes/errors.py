"""
Exceptions raised while driving ``minos_bran`` and reading its output.

All of them derive from :class:`MineosError`, so callers can catch the whole
family at once.  Parse problems are also ``ValueError`` (and an unknown mode
letter is also a ``KeyError``) to keep them catchable the usual way.
"""

from __future__ import annotations


class MineosError(Exception):
    pass


class SolverExecutionError(MineosError):
    """The external solver could not be run or exited with an error."""

    def __init__(
        self,
        message: str,
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class SolverNotFoundError(SolverExecutionError):
    pass


class UnexpectedSolverOutput(SolverExecutionError):
    """Standard output of the solver does not have the expected shape."""

    def __init__(self, output: str) -> None:
        super().__init__(f"unexpected output from `minos_bran`:\n{output}", stdout=output)
        self.output = output


class ResultFileError(MineosError, ValueError):
    """A result file could not be parsed."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        line_number: int | None = None,
    ) -> None:
        location = ""
        if source is not None:
            location = source if line_number is None else f"{source}:{line_number}"
            message = f"{location}: {message}"
        super().__init__(message)
        self.source = source
        self.line_number = line_number


class UnknownModeTypeError(ResultFileError, KeyError):
    def __str__(self) -> str:
        # KeyError would quote the message
        return str(self.args[0])
