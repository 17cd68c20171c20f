"""Text generation capability backed by Groq."""

from talentrank.llm.client import (
    GroqTextGenerator,
    TextGenerator,
    default_generator,
    generate_with_retry,
    is_transient_error,
)

__all__ = [
    "TextGenerator",
    "GroqTextGenerator",
    "default_generator",
    "generate_with_retry",
    "is_transient_error",
]
