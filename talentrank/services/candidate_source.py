"""Candidate sources: where the search core gets its read-only snapshot."""

import asyncio
import json
import logging
import time
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from talentrank.config import CANDIDATE_CACHE_SECONDS
from talentrank.schemas.candidate import Candidate

logger = logging.getLogger(__name__)


class CandidateSource(Protocol):
    """Async provider of the full candidate list."""

    async def load(self) -> list[Candidate]: ...


def parse_candidates(rows: list[dict]) -> list[Candidate]:
    """Validate raw rows as candidates, skipping rows that do not validate.

    Args:
        rows: Candidate records as stored (camelCase keys).

    Returns:
        Validated candidates, in input order.
    """
    candidates = []
    for index, row in enumerate(rows):
        try:
            candidates.append(Candidate.model_validate(row))
        except ValidationError as e:
            logger.warning(f"Skipping invalid candidate row {index}: {e.error_count()} errors")
    return candidates


class JsonFileCandidateSource:
    """Candidates read from a JSON array on disk."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> list[dict]:
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("candidates", [])
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array of candidates in {self.path}")
        return data

    async def load(self) -> list[Candidate]:
        rows = await asyncio.to_thread(self._read)
        candidates = parse_candidates(rows)
        logger.info(f"Loaded {len(candidates)} candidates from {self.path}")
        return candidates


class InMemoryCandidateSource:
    """Candidates held in memory, for callers that already have them."""

    def __init__(self, candidates: list[Candidate]):
        self.candidates = list(candidates)

    async def load(self) -> list[Candidate]:
        return list(self.candidates)


class CachedCandidateSource:
    """Wrap a source and reuse its snapshot for a short time."""

    def __init__(
        self,
        source: CandidateSource,
        ttl_seconds: float = CANDIDATE_CACHE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.source = source
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._snapshot: list[Candidate] | None = None
        self._loaded_at = 0.0

    async def load(self) -> list[Candidate]:
        now = self.clock()
        if self._snapshot is not None and now - self._loaded_at < self.ttl_seconds:
            logger.debug("Using cached candidate snapshot")
            return self._snapshot
        self._snapshot = await self.source.load()
        self._loaded_at = now
        return self._snapshot

    def invalidate(self) -> None:
        self._snapshot = None
