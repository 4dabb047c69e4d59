"""Shared pytest configuration, fakes and fixtures.

The fakes subclass / satisfy the real collaborator interfaces so the
pipeline can be exercised without Chroma, a sentence-transformer model,
or a running LLM.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from pathlib import Path

import pytest

from gutenberg_rag.exceptions import GenerationServiceError, VectorStoreError
from gutenberg_rag.retrieval.base import VectorStoreBase
from gutenberg_rag.retrieval.models import Chunk, RetrievedResult

START = "*** START OF THIS PROJECT GUTENBERG EBOOK COMPUTERS ON THE FARM ***"
END = "*** END OF THIS PROJECT GUTENBERG EBOOK COMPUTERS ON THE FARM ***"

BOOK_TEXT = "\n".join(
    [
        "The Project Gutenberg EBook of Computers on the Farm",
        "",
        START,
        "",
        "=ADDRESS=",
        "",
        "AgriData Resources, 123 Main St",
        "",
        "=HISTORY=",
        "",
        "The first farm computer was built in 1979.",
        "It tracked grain bins.",
        "",
        END,
        "",
        "End of the Project Gutenberg EBook of Computers on the Farm",
    ]
)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fakes ───────────────────────────────────────────────────────────────

_STOPWORDS = {"a", "an", "the", "is", "of", "what", "was", "in", "it"}


class FakeEmbedder:
    """Deterministic bag-of-words embedder.

    Each new token gets its own dimension, so there are no collisions and
    cosine similarity equals normalised token overlap.
    """

    def __init__(self, dim: int = 512) -> None:
        self.dim = dim
        self.vocab: dict[str, int] = {}
        self.calls: list[str] = []

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        vector = [0.0] * self.dim
        for token in re.findall(r"[a-z0-9]+", text.lower()):
            if token in _STOPWORDS:
                continue
            index = self.vocab.setdefault(token, len(self.vocab))
            vector[index % self.dim] += 1.0
        return vector


def _cosine(a: Sequence[float], b: Sequence[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / norm if norm else 0.0


class InMemoryVectorStore(VectorStoreBase):
    """Brute-force cosine store kept in a list."""

    def __init__(self) -> None:
        super().__init__("test-collection", "cosine")
        self.records: list[tuple[str, Chunk, list[float], str | None]] = []
        self.add_calls = 0
        self.last_search: dict | None = None

    def add_documents(
        self,
        chunks: Sequence[Chunk],
        embeddings: Sequence[list[float]],
        *,
        source: str | None = None,
    ) -> list[str]:
        self.add_calls += 1
        ids = []
        for chunk, embedding in zip(chunks, embeddings):
            doc_id = f"doc-{len(self.records)}"
            self.records.append((doc_id, chunk, list(embedding), source))
            ids.append(doc_id)
        return ids

    def similarity_search(
        self,
        query_embedding: list[float],
        *,
        k: int = 2,
        min_score: float = 0.0,
    ) -> list[RetrievedResult]:
        self.last_search = {"k": k, "min_score": min_score}
        hits = [
            RetrievedResult(
                id=doc_id,
                content=chunk.content,
                score=_cosine(query_embedding, embedding),
                metadata=chunk.metadata(source),
            )
            for doc_id, chunk, embedding, source in self.records
        ]
        hits = [h for h in hits if h.score >= min_score]
        hits.sort(key=lambda h: h.score, reverse=True)
        return hits[:k]

    def health_check(self) -> bool:
        return True

    def count(self) -> int:
        return len(self.records)


class FailingVectorStore(InMemoryVectorStore):
    """Accepts *fail_after* writes, then raises on every call."""

    def __init__(self, fail_after: int = 0) -> None:
        super().__init__()
        self.fail_after = fail_after

    def add_documents(self, chunks, embeddings, *, source=None):  # noqa: ANN001
        if self.add_calls >= self.fail_after:
            self.add_calls += 1
            raise VectorStoreError("write rejected", operation="add")
        return super().add_documents(chunks, embeddings, source=source)


class FakeGenerator:
    """Records prompts and returns a canned answer."""

    def __init__(self, answer: str = "123 Main St", fail: bool = False) -> None:
        self.answer = answer
        self.fail = fail
        self.prompts: list[str] = []
        self.temperatures: list[float | None] = []

    def complete(self, prompt: str, temperature: float | None = None) -> str:
        self.prompts.append(prompt)
        self.temperatures.append(temperature)
        if self.fail:
            raise GenerationServiceError("model unavailable")
        return self.answer


# ── Fixtures ────────────────────────────────────────────────────────────


@pytest.fixture()
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture()
def store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture()
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture()
def book_path(tmp_path: Path) -> Path:
    path = tmp_path / "computers on the farm.txt"
    path.write_text(BOOK_TEXT, encoding="utf-8")
    return path


@pytest.fixture()
def failing_store() -> type[FailingVectorStore]:
    """The failing store class, so tests can pick *fail_after*."""
    return FailingVectorStore


@pytest.fixture()
def failing_generator() -> FakeGenerator:
    return FakeGenerator(fail=True)
