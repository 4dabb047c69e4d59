"""Exception hierarchy for the ingestion and query pipeline.

Every collaborator failure (file system, embedding service, vector store,
language model) is wrapped in one of these types so the entry point can
report it and exit.  Nothing in the pipeline retries or recovers.
"""

from __future__ import annotations

from typing import Any


class GutenbergRAGError(Exception):
    """Base exception for all pipeline errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class IngestionIOError(GutenbergRAGError):
    """Raised when the source text cannot be opened or read."""

    def __init__(self, path: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["path"] = path
        super().__init__(f"Cannot read source document: {path}", details)


class EmbeddingServiceError(GutenbergRAGError):
    """Raised when the embedding service fails to produce a vector."""


class VectorStoreError(GutenbergRAGError):
    """Raised when a vector-store write or read fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if operation:
            details["operation"] = operation
        self.operation = operation
        super().__init__(message, details)


class GenerationServiceError(GutenbergRAGError):
    """Raised when the language model call fails."""
