"""Errors raised by the mowing planner.

Every error carries the process exit code the command line reports for it, so
library code only raises and ``mowplan.main`` decides how to exit.
"""

from typing import Any, Dict, Optional


class MowPlanError(Exception):
    exit_code = 1

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class UsageError(MowPlanError):
    exit_code = 1


class InputOpenError(MowPlanError):
    exit_code = 2


class OutputOpenError(MowPlanError):
    exit_code = 3


class InvalidSpacingError(MowPlanError):
    exit_code = 4


class InvalidDirectionError(MowPlanError):
    exit_code = 5


class PerimeterError(MowPlanError):
    """Perimeter file is readable but cannot be planned."""

    exit_code = 6


class PerimeterFormatError(PerimeterError):
    pass


class PerimeterShapeError(PerimeterError):
    pass


class PerimeterCapacityError(PerimeterError):
    pass


class GeometryEngineError(MowPlanError):
    exit_code = 7


class ConfigurationError(MowPlanError):
    exit_code = 8
