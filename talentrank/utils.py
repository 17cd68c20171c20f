"""Shared utilities for talentrank."""

import re

from langchain_groq import ChatGroq

from talentrank.config import GROQ_API_KEY, GROQ_MODEL, LLM_TEMPERATURE

_llm_instance: ChatGroq | None = None

_CODE_FENCE_PATTERN = re.compile(r"```(?:json)?\s*\n?", re.IGNORECASE)


class LLMConfigurationError(Exception):
    """Raised when LLM is not properly configured."""

    pass


class LLMUnavailableError(Exception):
    """Raised when the LLM could not produce a response (timeout, outage)."""

    pass


class InvalidSearchError(ValueError):
    """Raised when a search request is missing the text it needs."""

    pass


class JobDescriptionError(Exception):
    """Raised when a job description could not be drafted."""

    pass


def check_llm_configured() -> None:
    """Check if Groq API key is configured.

    Raises:
        LLMConfigurationError: If GROQ_API_KEY is not set.
    """
    if not GROQ_API_KEY:
        raise LLMConfigurationError(
            "GROQ_API_KEY environment variable is not set. "
            "Please create a .env file with your Groq API key. "
            "Get your free API key at https://console.groq.com"
        )


def get_llm() -> ChatGroq:
    """Get singleton Groq LLM instance."""
    global _llm_instance
    if _llm_instance is None:
        _llm_instance = ChatGroq(
            model=GROQ_MODEL,
            temperature=LLM_TEMPERATURE,
            api_key=GROQ_API_KEY,
        )
    return _llm_instance


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences an LLM may wrap around JSON output."""
    return _CODE_FENCE_PATTERN.sub("", text).replace("```", "").strip()


def contains_either(first: str, second: str) -> bool:
    """Check whether either string contains the other.

    Empty strings never match, since every string contains "".
    """
    if not first or not second:
        return False
    return first in second or second in first
