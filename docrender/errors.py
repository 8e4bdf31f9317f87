"""Error types raised during output generation."""

from __future__ import annotations

from typing import Optional


class DocRenderError(RuntimeError):
    """Base error carrying the entity that triggered it."""

    def __init__(self, message: str, *, entity: Optional[str] = None, kind: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.entity = entity
        self.kind = kind

    def __str__(self) -> str:
        if self.entity:
            return f"{self.kind or 'entity'} '{self.entity}': {self.message}"
        return self.message


class InvalidInput(DocRenderError):
    """Raised when entity or index data is absent or malformed."""


class GenerationFailure(DocRenderError):
    """Raised when a generator cannot produce output for the given data."""


__all__ = ["DocRenderError", "GenerationFailure", "InvalidInput"]
