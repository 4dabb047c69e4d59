"""Chroma implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any
from uuid import uuid4

import chromadb

from gutenberg_rag.config import settings
from gutenberg_rag.exceptions import VectorStoreError
from gutenberg_rag.retrieval.base import VectorStoreBase
from gutenberg_rag.retrieval.models import Chunk, RetrievedResult

logger = logging.getLogger(__name__)

SUPPORTED_METRICS = ("cosine", "l2", "ip")


def distance_to_score(distance: float, metric: str) -> float:
    """Convert a Chroma distance to a similarity score (higher = closer).

    Chroma reports ``1 - cos`` for cosine and ``1 - dot`` for inner
    product, so both map back by subtraction.  Squared L2 has no upper
    bound and is squashed into ``(0, 1]``.
    """
    if metric in ("cosine", "ip"):
        return 1.0 - distance
    if metric == "l2":
        return 1.0 / (1.0 + distance)
    raise ValueError(f"Unsupported distance metric: {metric!r}")


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store.

    Parameters
    ----------
    collection_name:
        Name of the Chroma collection (the store's namespace).
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    distance_metric:
        ``cosine``, ``l2`` or ``ip``; written into the collection's
        ``hnsw:space`` metadata when the collection is created.
    client:
        Pre-built Chroma client (e.g. ``chromadb.EphemeralClient()``).
        When given, *host* and *port* are ignored.
    """

    def __init__(
        self,
        collection_name: str = settings.chroma_collection,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        distance_metric: str = settings.distance_metric,
        client: Any | None = None,
    ) -> None:
        if distance_metric not in SUPPORTED_METRICS:
            raise ValueError(f"Unsupported distance metric: {distance_metric!r}")
        super().__init__(collection_name, distance_metric)
        try:
            self._client = client if client is not None else chromadb.HttpClient(host=host, port=port)
            self._collection = self._client.get_or_create_collection(
                collection_name,
                metadata={"hnsw:space": distance_metric},
                embedding_function=None,
            )
        except Exception as exc:
            raise VectorStoreError(
                f"Cannot open Chroma collection {collection_name!r}",
                operation="connect",
                details={"host": host, "port": port, "error": str(exc)},
            ) from exc

        # An existing collection keeps the metric it was created with.
        actual_metric = (self._collection.metadata or {}).get("hnsw:space", "l2")
        if actual_metric != distance_metric:
            raise VectorStoreError(
                f"Chroma collection {collection_name!r} uses {actual_metric!r} distance, "
                f"not {distance_metric!r}",
                operation="connect",
                details={"collection": collection_name},
            )
        logger.info(
            "Using Chroma collection %r (distance=%s)", collection_name, distance_metric
        )

    # -- VectorStoreBase overrides --------------------------------------------

    def add_documents(
        self,
        chunks: Sequence[Chunk],
        embeddings: Sequence[list[float]],
        *,
        source: str | None = None,
    ) -> list[str]:
        if len(chunks) != len(embeddings):
            raise ValueError(
                f"Got {len(chunks)} chunks but {len(embeddings)} embeddings"
            )
        if not chunks:
            return []

        ids = [uuid4().hex for _ in chunks]
        try:
            self._collection.add(
                ids=ids,
                documents=[c.content for c in chunks],
                embeddings=[list(e) for e in embeddings],
                metadatas=[c.metadata(source) for c in chunks],
            )
        except Exception as exc:
            raise VectorStoreError(
                "Failed to add documents to Chroma",
                operation="add",
                details={"collection": self.collection_name, "error": str(exc)},
            ) from exc
        return ids

    def similarity_search(
        self,
        query_embedding: list[float],
        *,
        k: int = 2,
        min_score: float = 0.0,
    ) -> list[RetrievedResult]:
        try:
            if self._collection.count() == 0:
                return []
            results = self._collection.query(
                query_embeddings=[query_embedding],
                n_results=k,
                include=["documents", "metadatas", "distances"],
            )
        except Exception as exc:
            raise VectorStoreError(
                "Chroma similarity search failed",
                operation="query",
                details={"collection": self.collection_name, "error": str(exc)},
            ) from exc

        ids = (results.get("ids") or [[]])[0]
        docs = (results.get("documents") or [[]])[0]
        metas = (results.get("metadatas") or [[]])[0]
        distances = (results.get("distances") or [[]])[0]

        hits: list[RetrievedResult] = []
        for doc_id, content, meta, dist in zip(ids, docs, metas, distances):
            score = distance_to_score(dist, self.distance_metric)
            if score < min_score:
                continue
            hits.append(
                RetrievedResult(
                    id=doc_id,
                    content=content or "",
                    score=score,
                    metadata=dict(meta or {}),
                )
            )
        hits.sort(key=lambda hit: hit.score, reverse=True)
        logger.debug("Chroma returned %d hit(s) above %.2f", len(hits), min_score)
        return hits

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False

    def count(self) -> int:
        return self._collection.count()
