"""
Exception hierarchy for pygllvm.

All exceptions inherit from PyGllvmError to allow catching any
library-specific error. Validation happens once, at the boundary where a
fitted model, residual set, or plotting argument enters the package.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyGllvmError(Exception):
    """Base exception for all pygllvm errors."""
    pass


class ValidationError(PyGllvmError):
    """
    Input validation failed.

    Raised when a fitted model record, residual set or plotting argument
    fails validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions, e.g. when
    a residual matrix does not share the shape of the response matrix.

    Attributes:
        name: Name of the offending array, if known
        actual: Shape that was received
        expected: Shape that was required
    """

    def __init__(
        self,
        message: str,
        name: str | None = None,
        actual: tuple[int, ...] | None = None,
        expected: tuple[int, ...] | None = None,
    ):
        super().__init__(message)
        self.name = name
        self.actual = actual
        self.expected = expected
