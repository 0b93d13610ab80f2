from fincalc.domain.errors import (
    InvalidParameterError,
    NonConvergenceError,
    ProjectionError,
)

__all__ = ["ProjectionError", "InvalidParameterError", "NonConvergenceError"]
