"""Error taxonomy for the stub generation pipeline."""

from __future__ import annotations

from typing import Optional


class StubGenerationError(RuntimeError):
    """Base class for failures that abort a stub generation call."""


class FetchError(StubGenerationError):
    """Raised when the reference source cannot be retrieved."""

    def __init__(self, message: str, *, url: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class ParseError(StubGenerationError):
    """Raised when the reference source is not valid Go."""

    def __init__(
        self,
        message: str,
        *,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


class TemplateError(StubGenerationError):
    """Raised when the module template is malformed or cannot be filled in."""


__all__ = ["FetchError", "ParseError", "StubGenerationError", "TemplateError"]
