"""Find candidates whose roles resemble a job title.

Used when drafting job descriptions: the most similar profiles in the pool
supply realistic skills, employers and experience ranges.
"""

import asyncio
import logging
from collections import Counter

import numpy as np
from rapidfuzz import fuzz
from sklearn.metrics.pairwise import cosine_similarity

from talentrank.config import (
    EMBEDDING_CONCURRENCY,
    FUZZY_MATCH_THRESHOLD,
    JD_REFERENCE_CANDIDATES,
    SIMILAR_TOP_N,
    SIMILARITY_THRESHOLD,
)
from talentrank.embeddings.fastembed_client import Embedder
from talentrank.matching.scorers import parse_experience_years
from talentrank.schemas.candidate import Candidate
from talentrank.schemas.match import CandidateInsights, SimilarCandidate

logger = logging.getLogger(__name__)

CONTAINMENT_SCORE = 0.8
KEYWORD_OVERLAP_WEIGHT = 0.5
TOP_SKILLS = 5
TOP_COMPANIES = 3


def cosine_similarity_safe(a: list[float], b: list[float]) -> float:
    """Cosine similarity clipped to [0, 1]; 0 for empty or mismatched vectors."""
    if not a or not b or len(a) != len(b):
        return 0.0
    first = np.asarray(a, dtype=float)
    second = np.asarray(b, dtype=float)
    if not np.any(first) or not np.any(second):
        return 0.0
    similarity = cosine_similarity(first.reshape(1, -1), second.reshape(1, -1))[0][0]
    return float(np.clip(similarity, 0.0, 1.0))


def candidate_role_text(candidate: Candidate) -> str:
    return f"{candidate.current_role or ''} {candidate.desired_role or ''}".strip()


def _role_contains(job_title: str, candidate: Candidate) -> bool:
    role_text = candidate_role_text(candidate).lower()
    current_role = (candidate.current_role or "").lower().strip()
    return bool(role_text) and (
        job_title in role_text or (bool(current_role) and current_role in job_title)
    )


def text_similarity(job_title: str, candidate: Candidate) -> float:
    """Estimate role similarity without embeddings.

    Containment either way earns 0.8; the share of title words that fuzzily
    match a role word adds up to 0.5.
    """
    title = job_title.lower().strip()
    title_words = title.split()
    if not title_words:
        return 0.0

    similarity = CONTAINMENT_SCORE if _role_contains(title, candidate) else 0.0

    role_words = candidate_role_text(candidate).lower().split()
    common = [
        word
        for word in title_words
        if any(fuzz.partial_ratio(word, role_word) >= FUZZY_MATCH_THRESHOLD for role_word in role_words)
    ]
    similarity += len(common) / len(title_words) * KEYWORD_OVERLAP_WEIGHT
    return min(1.0, similarity)


async def _embedding_similarity(
    title_vector: list[float],
    candidate: Candidate,
    embedder: Embedder,
    semaphore: asyncio.Semaphore,
) -> float:
    role_text = candidate_role_text(candidate)
    if not role_text:
        return 0.0
    async with semaphore:
        vector = await embedder.embed(role_text)
    return cosine_similarity_safe(title_vector, vector)


async def find_similar_candidates(
    job_title: str,
    candidates: list[Candidate],
    embedder: Embedder | None,
    threshold: float = SIMILARITY_THRESHOLD,
    top_n: int = SIMILAR_TOP_N,
) -> list[SimilarCandidate]:
    """Rank candidates by the best of embedding and text similarity to a job title.

    Candidate embeddings are requested concurrently. A candidate whose
    embedding fails keeps its text estimate.

    Args:
        job_title: Title of the position being drafted.
        candidates: Candidate pool.
        embedder: Embedding capability; None means text similarity only.
        threshold: Candidates must score above this to be included.
        top_n: Maximum number of candidates returned.

    Returns:
        SimilarCandidate list sorted by similarity descending.

    Raises:
        Exception: Whatever the embedder raised for the job title itself.
    """
    if not job_title or not job_title.strip() or not candidates:
        return []

    text_scores = [text_similarity(job_title, c) for c in candidates]
    scores = list(text_scores)

    if embedder is not None:
        title_vector = await embedder.embed(job_title)
        semaphore = asyncio.Semaphore(EMBEDDING_CONCURRENCY)
        embedding_scores = await asyncio.gather(
            *(_embedding_similarity(title_vector, c, embedder, semaphore) for c in candidates),
            return_exceptions=True,
        )
        failures = 0
        for i, result in enumerate(embedding_scores):
            if isinstance(result, BaseException):
                failures += 1
                continue
            scores[i] = max(text_scores[i], result)
        if failures:
            logger.warning(f"Embedding failed for {failures} candidates; used text similarity")

    similar = [
        SimilarCandidate(candidate=candidate, similarity=score)
        for candidate, score in zip(candidates, scores)
        if score > threshold
    ]
    similar.sort(key=lambda s: s.similarity, reverse=True)
    similar = similar[:top_n]

    logger.info(f"Found {len(similar)} candidates similar to '{job_title}'")
    return similar


def find_role_matches(
    job_title: str,
    candidates: list[Candidate],
    limit: int = JD_REFERENCE_CANDIDATES,
) -> list[Candidate]:
    """Plain role containment, used when embeddings are unavailable altogether."""
    title = job_title.lower().strip()
    if not title:
        return []
    return [c for c in candidates if _role_contains(title, c)][:limit]


def summarize_candidates(candidates: list[Candidate]) -> CandidateInsights:
    """Collect common skills, employers, experience range and certification count."""
    skill_counts = Counter(skill for c in candidates for skill in c.technical_skills)
    company_counts = Counter(c.current_company for c in candidates if c.current_company)
    years = [
        parsed
        for parsed in (parse_experience_years(c.total_experience) for c in candidates)
        if parsed is not None
    ]

    return CandidateInsights(
        matched_candidates=len(candidates),
        top_skills=[skill for skill, _ in skill_counts.most_common(TOP_SKILLS)],
        top_companies=[company for company, _ in company_counts.most_common(TOP_COMPANIES)],
        min_experience_years=min(years) if years else None,
        max_experience_years=max(years) if years else None,
        certified_candidates=sum(1 for c in candidates if c.certifications),
    )
