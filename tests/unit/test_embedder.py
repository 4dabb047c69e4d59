"""Unit tests for the embedding client, settings and error types."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from pydantic import ValidationError

from gutenberg_rag.config import Settings
from gutenberg_rag.exceptions import (
    EmbeddingServiceError,
    GutenbergRAGError,
    IngestionIOError,
    VectorStoreError,
)
from gutenberg_rag.ingestion.embedder import Embedder, HuggingFaceEmbedder


class TestHuggingFaceEmbedder:
    def test_embed_delegates_to_embed_query(self) -> None:
        model = MagicMock()
        model.embed_query.return_value = [0.1, 0.2]
        embedder = HuggingFaceEmbedder("some/model", embeddings=model)
        assert embedder.embed("hello") == [0.1, 0.2]
        model.embed_query.assert_called_once_with("hello")

    def test_satisfies_protocol(self) -> None:
        assert isinstance(HuggingFaceEmbedder(embeddings=MagicMock()), Embedder)

    def test_model_loaded_lazily_once(self) -> None:
        model = MagicMock()
        model.embed_query.return_value = [1.0]
        with patch(
            "gutenberg_rag.ingestion.embedder.get_embedding_function", return_value=model
        ) as factory:
            embedder = HuggingFaceEmbedder("some/model")
            factory.assert_not_called()
            embedder.embed("a")
            embedder.embed("b")
        factory.assert_called_once_with("some/model")

    def test_load_failure_wrapped(self) -> None:
        with patch(
            "gutenberg_rag.ingestion.embedder.get_embedding_function",
            side_effect=OSError("model not found"),
        ):
            with pytest.raises(EmbeddingServiceError, match="Cannot load embedding model"):
                HuggingFaceEmbedder("missing/model").embed("x")

    def test_service_failure_wrapped(self) -> None:
        model = MagicMock()
        model.embed_query.side_effect = RuntimeError("CUDA out of memory")
        with pytest.raises(EmbeddingServiceError) as excinfo:
            HuggingFaceEmbedder(embeddings=model).embed("x")
        assert isinstance(excinfo.value.__cause__, RuntimeError)

    def test_empty_vector_rejected(self) -> None:
        model = MagicMock()
        model.embed_query.return_value = []
        with pytest.raises(EmbeddingServiceError, match="Empty embedding"):
            HuggingFaceEmbedder(embeddings=model).embed("x")


class TestSettings:
    def test_defaults(self) -> None:
        config = Settings(_env_file=None)
        assert config.retrieval_k == 2
        assert config.min_score == 0.5
        assert config.temperature == 0.8
        assert config.distance_metric == "cosine"
        assert config.heading_delimiter == "="
        assert config.start_markers[0] == "*** START OF THIS PROJECT GUTENBERG EBOOK"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MIN_SCORE", "0.65")
        monkeypatch.setenv("CHROMA_COLLECTION", "books")
        config = Settings(_env_file=None)
        assert config.min_score == 0.65
        assert config.chroma_collection == "books"

    def test_unknown_distance_metric_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, distance_metric="hamming")

    def test_distance_metric_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DISTANCE_METRIC", "l2")
        assert Settings(_env_file=None).distance_metric == "l2"


class TestExceptions:
    def test_all_errors_share_a_base(self) -> None:
        for exc_type in (IngestionIOError, EmbeddingServiceError, VectorStoreError):
            assert issubclass(exc_type, GutenbergRAGError)

    def test_str_includes_details(self) -> None:
        err = VectorStoreError("write rejected", operation="add", details={"collection": "linky"})
        assert str(err) == "write rejected | Details: {'collection': 'linky', 'operation': 'add'}"

    def test_str_without_details(self) -> None:
        assert str(EmbeddingServiceError("boom")) == "boom"
