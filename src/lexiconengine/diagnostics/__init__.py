"""Diagnostic system for LexiconEngine errors.

Provides structured error diagnostics with codes, hints and positions.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ConfigurationError,
    DuplicateKeyWarning,
    InvalidLocaleNameError,
    LexiconError,
    MissingDefaultLocaleError,
    NotInitializedError,
    RuleCompilationError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "DuplicateKeyWarning",
    "ErrorTemplate",
    "InvalidLocaleNameError",
    "LexiconError",
    "MissingDefaultLocaleError",
    "NotInitializedError",
    "OutputFormat",
    "RuleCompilationError",
]
