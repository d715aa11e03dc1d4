"""swoop - small derivative-free optimisation routines."""

__version__ = "0.1.0"

from .config import debug_context, is_debug_enabled, set_debug_enabled
from .errors import (
    BracketNotFound,
    DidNotConverge,
    InvalidArgument,
    InvalidBracket,
    InvalidIterationBudget,
    InvalidTolerance,
    SearchCancelled,
    SwoopError,
)
from .logging import get_logger, set_log_level
from .minimise_scalar import (
    OptimisationResult,
    ScalarObjectiveFunction,
    as_objective,
    bounded,
    bounded_sync,
    bracket,
    brent,
    brent_sync,
    golden,
    golden_sync,
    negate,
)

__all__ = [
    "__version__",
    # Errors
    "BracketNotFound",
    "DidNotConverge",
    "InvalidArgument",
    "InvalidBracket",
    "InvalidIterationBudget",
    "InvalidTolerance",
    "SearchCancelled",
    "SwoopError",
    # Scalar minimisation
    "OptimisationResult",
    "ScalarObjectiveFunction",
    "as_objective",
    "bounded",
    "bounded_sync",
    "bracket",
    "brent",
    "brent_sync",
    "golden",
    "golden_sync",
    "negate",
    # Logging and configuration
    "debug_context",
    "get_logger",
    "is_debug_enabled",
    "set_debug_enabled",
    "set_log_level",
]
