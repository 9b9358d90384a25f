"""Core utilities shared across syntax, runtime and localization layers.

Isolating these utilities keeps the dependency graph acyclic:

    core <- syntax <- runtime <- localization

Exports:
    DepthGuard: Context manager for recursion depth limiting
    DepthLimitExceededError: Exception raised when depth limit exceeded
    BabelImportError: Raised when an optional Babel feature is used without Babel
    is_babel_available: Check whether Babel can be imported

Python 3.13+.
"""

from .babel_compat import BabelImportError, is_babel_available
from .depth_guard import DepthGuard, DepthLimitExceededError

__all__ = ["BabelImportError", "DepthGuard", "DepthLimitExceededError", "is_babel_available"]
