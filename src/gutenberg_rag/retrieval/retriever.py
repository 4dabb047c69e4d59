"""Semantic retriever — top-k search with a similarity floor.

Usage::

    from gutenberg_rag.retrieval.retriever import Retriever

    retriever = Retriever(embedder, store, k=2, min_score=0.5)
    for r in retriever.retrieve("What is the address of AgriData Resources?"):
        print(r.score, r.content[:80])
"""

from __future__ import annotations

import logging

from gutenberg_rag.config import settings
from gutenberg_rag.ingestion.embedder import Embedder
from gutenberg_rag.retrieval.base import VectorStoreBase
from gutenberg_rag.retrieval.models import RetrievedResult

logger = logging.getLogger(__name__)


class Retriever:
    """Embed a query and fetch its nearest stored chunks.

    Parameters
    ----------
    embedder:
        Embedding client used for the query text.  Must be the same model
        that embedded the stored chunks.
    store:
        A concrete vector-store backend.
    k:
        Default number of results returned by :meth:`retrieve`.
    min_score:
        Default similarity floor, enforced by the store.
    """

    def __init__(
        self,
        embedder: Embedder,
        store: VectorStoreBase,
        *,
        k: int = settings.retrieval_k,
        min_score: float = settings.min_score,
    ) -> None:
        self._embedder = embedder
        self._store = store
        self.k = k
        self.min_score = min_score

    def retrieve(
        self,
        query: str,
        *,
        k: int | None = None,
        min_score: float | None = None,
    ) -> list[RetrievedResult]:
        """Return up to *k* chunks scoring at least *min_score*, best first.

        An empty list means nothing stored is relevant enough; service
        failures raise ``EmbeddingServiceError`` / ``VectorStoreError``
        instead.
        """
        k = self.k if k is None else k
        min_score = self.min_score if min_score is None else min_score
        if k < 1:
            raise ValueError(f"k must be at least 1, got {k}")

        query_embedding = self._embedder.embed(query)
        results = self._store.similarity_search(query_embedding, k=k, min_score=min_score)
        results = sorted(results, key=lambda r: r.score, reverse=True)

        logger.info(
            "Retrieved %d chunk(s) for query (k=%d, min_score=%.2f)",
            len(results),
            k,
            min_score,
        )
        return results
