"""
Retrieval — vector storage, similarity search, and result models.

This module wraps the vector store behind a clean interface so that the
pipeline never needs to know which DB is backing retrieval.

Public surface
--------------
- :class:`Retriever` — embed a query and fetch the top-k chunks.
- :class:`VectorStoreBase` — abstract backend.
- :class:`ChromaVectorStore` — default Chroma backend.
- :class:`Chunk`, :class:`RetrievedResult` — data models.
"""

from gutenberg_rag.retrieval.base import VectorStoreBase
from gutenberg_rag.retrieval.models import Chunk, RetrievedResult
from gutenberg_rag.retrieval.retriever import Retriever

__all__ = [
    "ChromaVectorStore",
    "Chunk",
    "RetrievedResult",
    "Retriever",
    "VectorStoreBase",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaVectorStore to avoid pulling in chromadb at import time."""
    if name == "ChromaVectorStore":
        from gutenberg_rag.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
