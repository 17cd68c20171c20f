"""FastEmbed client for ONNX-based text embeddings.

fastembed runs on ONNX Runtime, so the model is small enough to load inside
the CLI process. Inference is synchronous; the async Embedder runs it in a
worker thread so many candidates can be embedded concurrently.
"""

import asyncio
from typing import Protocol

from fastembed import TextEmbedding

from talentrank.config import EMBEDDING_MODEL

_model: TextEmbedding | None = None


class Embedder(Protocol):
    """Anything that turns text into a fixed-length vector."""

    async def embed(self, text: str) -> list[float]: ...


def _get_model() -> TextEmbedding:
    """Lazy load fastembed model.

    The model is loaded once and cached for subsequent calls.
    fastembed automatically downloads and caches the ONNX model.
    """
    global _model
    if _model is None:
        _model = TextEmbedding(EMBEDDING_MODEL)
    return _model


def embed_text(text: str) -> list[float]:
    """Generate embedding for a single text string.

    Args:
        text: Text to embed.

    Returns:
        Embedding vector as list of floats (dimension 384 for MiniLM).
    """
    model = _get_model()
    embeddings = list(model.embed([text]))
    return embeddings[0].tolist()


class FastEmbedEmbedder:
    """Embedder backed by the shared fastembed model."""

    async def embed(self, text: str) -> list[float]:
        if not text or not text.strip():
            raise ValueError("Cannot embed empty text")
        return await asyncio.to_thread(embed_text, text)
