"""Domain models for parsed chunks and retrieval results."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class Chunk(BaseModel):
    """One retrievable unit of document text.

    Attributes
    ----------
    content:
        The chunk text.  For titled sections this starts with the heading,
        followed by a blank line and the section body.
    index:
        Ordinal position of the chunk within the source document.
    heading:
        Section heading without its delimiters, or ``None`` for an
        untitled leading / trailing span.
    """

    content: str
    index: int = 0
    heading: str | None = None

    @field_validator("content")
    @classmethod
    def _content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("chunk content must not be blank")
        return value

    def metadata(self, source: str | None = None) -> dict[str, Any]:
        """Return the metadata dict stored next to the chunk's vector."""
        meta: dict[str, Any] = {"chunk_index": self.index}
        if source is not None:
            meta["source"] = source
        if self.heading is not None:
            meta["heading"] = self.heading
        return meta


class RetrievedResult(BaseModel):
    """A stored chunk returned by a similarity search, with its score."""

    content: str
    score: float
    id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    def __str__(self) -> str:  # noqa: D105
        return f"({self.score:.3f}) {self.content[:120]}"
