"""Rendering of Diagnostic records for logs, terminals and tools.

Three layouts:
    rust    Multi-line, compiler style, with a caret under rule errors
    simple  One line: ``CODE: message``
    json    One JSON object with the populated fields

Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import StrEnum

from .codes import Diagnostic

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]

_ANSI_RESET = "\033[0m"
_SEVERITY_COLORS = {"error": "\033[1;31m", "warning": "\033[1;33m"}

# Optional Diagnostic fields copied into JSON output, in output order.
_JSON_CONTEXT = ("locale", "key", "source", "expression", "position")


class OutputFormat(StrEnum):
    """Layouts supported by DiagnosticFormatter."""

    RUST = "rust"
    SIMPLE = "simple"
    JSON = "json"


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Turns Diagnostic records into text.

    Attributes:
        output_format: Layout to produce (default: rust)
        sanitize: Truncate free text (message, key, hint, expression)
            to max_content_length
        color: Wrap the severity in ANSI colors (rust layout only)
        max_content_length: Truncation length when sanitizing

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(ErrorTemplate.invalid_locale_name("EN_US")))
        INVALID_LOCALE_NAME: Wrong locale name 'EN_US' (^[a-z]{2}(-[a-z]{2})?$)
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    color: bool = False
    max_content_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        """Render one diagnostic in the configured layout."""
        match self.output_format:
            case OutputFormat.RUST:
                return "\n".join(self._rust_lines(diagnostic))
            case OutputFormat.SIMPLE:
                return f"{diagnostic.code.name}: {self._clip(diagnostic.message)}"
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Render several diagnostics, separated by blank lines."""
        return "\n\n".join(map(self.format, diagnostics))

    def _rust_lines(self, diagnostic: Diagnostic) -> Iterator[str]:
        """Yield the lines of the rust layout.

        Example output:
            warning[DUPLICATE_KEY]: Key 'FIRST' in locale 'en' redefined ...
              = locale: en
              = key: FIRST
              = source: component-b
        """
        severity = diagnostic.severity
        if self.color:
            severity = f"{_SEVERITY_COLORS[severity]}{severity}{_ANSI_RESET}"
        yield f"{severity}[{diagnostic.code.name}]: {self._clip(diagnostic.message)}"

        if diagnostic.expression is not None:
            expression = self._clip(diagnostic.expression)
            yield f"  --> {expression}"
            position = diagnostic.position
            if position is not None and position <= len(expression):
                yield " " * (6 + position) + "^"

        if diagnostic.locale:
            yield f"  = locale: {diagnostic.locale}"
        if diagnostic.key:
            yield f"  = key: {self._clip(diagnostic.key)}"
        if diagnostic.source:
            yield f"  = source: {diagnostic.source}"
        if diagnostic.hint:
            yield f"  = help: {self._clip(diagnostic.hint)}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        data: dict[str, str | int] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._clip(diagnostic.message),
            "severity": diagnostic.severity,
        }
        data.update(
            (name, value)
            for name in _JSON_CONTEXT
            if (value := getattr(diagnostic, name)) is not None
        )
        if diagnostic.hint:
            data["hint"] = self._clip(diagnostic.hint)
        return json.dumps(data, ensure_ascii=False)

    def _clip(self, text: str) -> str:
        if self.sanitize and len(text) > self.max_content_length:
            return f"{text[: self.max_content_length]}..."
        return text
