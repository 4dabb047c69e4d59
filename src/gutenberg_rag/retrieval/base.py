"""Abstract base class for vector-store backends.

Adding a new backend only requires subclassing :class:`VectorStoreBase`
and implementing the abstract methods.  The retriever and the pipeline
are backend-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from gutenberg_rag.retrieval.models import Chunk, RetrievedResult


class VectorStoreBase(ABC):
    """Backend-agnostic vector-store interface.

    Parameters
    ----------
    collection_name:
        Logical name of the collection / namespace.
    distance_metric:
        Distance function used for nearest-neighbour queries.  Fixed when
        the store is created; it cannot change per query.
    """

    def __init__(self, collection_name: str, distance_metric: str = "cosine") -> None:
        self.collection_name = collection_name
        self.distance_metric = distance_metric

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def add_documents(
        self,
        chunks: Sequence[Chunk],
        embeddings: Sequence[list[float]],
        *,
        source: str | None = None,
    ) -> list[str]:
        """Persist *chunks* with their *embeddings* and return the new IDs.

        Raises
        ------
        VectorStoreError
            When the backend rejects the write.
        """
        ...

    @abstractmethod
    def similarity_search(
        self,
        query_embedding: list[float],
        *,
        k: int = 2,
        min_score: float = 0.0,
    ) -> list[RetrievedResult]:
        """Return up to *k* results for *query_embedding*.

        Results are ordered by descending score and never include a hit
        scoring below *min_score*.  An empty store yields ``[]``.

        Raises
        ------
        VectorStoreError
            When the backend query fails.
        """
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...

    # -- optional overrides ---------------------------------------------------

    def count(self) -> int:
        """Number of stored chunks.  Optional — raises by default."""
        raise NotImplementedError(f"{type(self).__name__} does not support count")
