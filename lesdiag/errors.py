# -- lesdiag/errors.py

"""Exceptions raised by the diagnostics pipeline. All of them end the run."""


class DiagnosticsError(Exception):
    """Base class for all fatal diagnostics errors."""


class EmptyArchiveError(DiagnosticsError, ValueError):
    """The statistics archive holds no iteration to select."""


class MissingVariableError(DiagnosticsError, KeyError):
    """A required variable is not stored at the selected iteration."""

    def __init__(self, name: str, iteration: int) -> None:
        self.name = name
        self.iteration = iteration
        super().__init__(f'variable "{name}" not found at iteration {iteration}')

    def __str__(self) -> str:
        # KeyError would otherwise print the repr of the message
        return str(self.args[0])


class InvalidGridError(DiagnosticsError, ValueError):
    """Grid invariants violated or a profile does not fit the grid."""
