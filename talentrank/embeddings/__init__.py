"""Embeddings module with ONNX-based fastembed."""

from talentrank.embeddings.fastembed_client import (
    Embedder,
    FastEmbedEmbedder,
    embed_text,
)

__all__ = [
    "Embedder",
    "FastEmbedEmbedder",
    "embed_text",
]
