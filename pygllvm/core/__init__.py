"""
Core infrastructure for pygllvm.

Shared abstractions used by the model, plotting and summary submodules.

Key components:
    protocols: ResidualProvider, CriteriaProvider collaborator protocols
    exceptions: Exception hierarchy
    validation: Input validators
"""

from pygllvm.core.protocols import ResidualProvider, CriteriaProvider
from pygllvm.core.exceptions import (
    PyGllvmError,
    ValidationError,
    DimensionError,
)

__all__ = [
    # Protocols
    "ResidualProvider",
    "CriteriaProvider",
    # Exceptions
    "PyGllvmError",
    "ValidationError",
    "DimensionError",
]
