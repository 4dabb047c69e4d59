"""
Ingestion — reading the book, splitting it into sections, and embedding.

This module turns the raw archive text into :class:`Chunk` objects and
provides the embedding client used to vectorise them.
"""
