"""Async text generation with a bounded timeout and a single retry."""

import asyncio
import logging
from typing import Protocol

from talentrank.config import GROQ_API_KEY, LLM_MAX_RETRIES, LLM_TIMEOUT_SECONDS
from talentrank.utils import LLMUnavailableError, check_llm_configured, get_llm

logger = logging.getLogger(__name__)

TRANSIENT_MARKERS = ("503", "overloaded", "timeout", "timed out", "unavailable")


class TextGenerator(Protocol):
    """Anything that turns a prompt into completion text."""

    async def generate(self, prompt: str) -> str: ...


class GroqTextGenerator:
    """TextGenerator backed by the shared ChatGroq instance."""

    async def generate(self, prompt: str) -> str:
        check_llm_configured()
        response = await get_llm().ainvoke(prompt)
        content = response.content
        if isinstance(content, list):
            content = "".join(
                part if isinstance(part, str) else part.get("text", "") for part in content
            )
        return content


def default_generator() -> TextGenerator | None:
    """Return the Groq generator, or None when no API key is configured."""
    if not GROQ_API_KEY:
        logger.warning("GROQ_API_KEY is not set; AI features are disabled")
        return None
    return GroqTextGenerator()


def is_transient_error(exc: BaseException) -> bool:
    """Check whether an error looks like a temporary service failure."""
    if isinstance(exc, (asyncio.TimeoutError, TimeoutError)):
        return True
    message = str(exc).lower()
    return any(marker in message for marker in TRANSIENT_MARKERS)


async def generate_with_retry(
    generator: TextGenerator,
    prompt: str,
    timeout: float = LLM_TIMEOUT_SECONDS,
    retries: int = LLM_MAX_RETRIES,
) -> str:
    """Call the generator with a timeout, retrying transient failures.

    Args:
        generator: Text generation capability.
        prompt: Prompt text.
        timeout: Seconds allowed per attempt.
        retries: Extra attempts allowed after a transient failure.

    Returns:
        The completion text.

    Raises:
        LLMUnavailableError: If every attempt failed or the error was permanent.
    """
    attempt = 0
    while True:
        try:
            return await asyncio.wait_for(generator.generate(prompt), timeout=timeout)
        except Exception as e:
            if is_transient_error(e) and attempt < retries:
                attempt += 1
                logger.warning(f"Transient LLM failure ({e!r}); retrying ({attempt}/{retries})")
                continue
            raise LLMUnavailableError(f"LLM call failed: {e!r}") from e
