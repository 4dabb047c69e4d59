"""Embedding client — turns text into a fixed-length vector."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from langchain_huggingface import HuggingFaceEmbeddings

from gutenberg_rag.config import settings
from gutenberg_rag.exceptions import EmbeddingServiceError

logger = logging.getLogger(__name__)


@runtime_checkable
class Embedder(Protocol):
    """Anything that can embed a single piece of text."""

    def embed(self, text: str) -> list[float]: ...


def get_embedding_function(model_name: str = settings.embedding_model) -> HuggingFaceEmbeddings:
    """Return the configured sentence-transformer embedding function."""
    return HuggingFaceEmbeddings(model_name=model_name)


class HuggingFaceEmbedder:
    """:class:`Embedder` backed by ``langchain_huggingface``.

    The model is loaded lazily on the first call so that building the
    pipeline stays cheap.
    """

    def __init__(
        self,
        model_name: str = settings.embedding_model,
        *,
        embeddings: HuggingFaceEmbeddings | None = None,
    ) -> None:
        self.model_name = model_name
        self._embeddings = embeddings

    def _model(self) -> HuggingFaceEmbeddings:
        if self._embeddings is None:
            logger.info("Loading embedding model %s", self.model_name)
            try:
                self._embeddings = get_embedding_function(self.model_name)
            except Exception as exc:
                raise EmbeddingServiceError(
                    f"Cannot load embedding model {self.model_name!r}",
                    details={"error": str(exc)},
                ) from exc
        return self._embeddings

    def embed(self, text: str) -> list[float]:
        model = self._model()
        try:
            vector = model.embed_query(text)
        except Exception as exc:
            raise EmbeddingServiceError(
                "Embedding request failed",
                details={"model": self.model_name, "error": str(exc)},
            ) from exc
        if not vector:
            raise EmbeddingServiceError(
                "Empty embedding returned", details={"model": self.model_name}
            )
        return list(vector)
