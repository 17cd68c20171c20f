"""Deterministic filters for the manual search form."""

import logging
from datetime import datetime

from talentrank.config import MANUAL_MIN_RELEVANCE, MAX_RELEVANCE
from talentrank.matching.scorers import parse_experience_years
from talentrank.schemas.candidate import Candidate
from talentrank.schemas.match import ScoredCandidate
from talentrank.schemas.search import ManualFilters

logger = logging.getLogger(__name__)

KEYWORD_WEIGHT = 0.5
LOCATION_WEIGHT = 0.2
EXPERIENCE_WEIGHT = 0.2
EDUCATION_WEIGHT = 0.1

REVERSE_LOCATION_SCORE = 0.8

NATURAL_LANGUAGE_MARKERS = ("experience", "years", "manager", "driver")


def _keywords(text: str | None) -> list[str]:
    return [k for k in (text or "").lower().split() if len(k) > 2]


def looks_like_natural_language(text: str | None) -> bool:
    """Detect sentence-like queries that deserve requirement parsing.

    Args:
        text: Keywords entered in the manual form.

    Returns:
        True when there are more than two keywords and one of them reads
        like part of a job requirement.
    """
    keywords = _keywords(text)
    if len(keywords) <= 2:
        return False
    return any(
        marker in keyword for keyword in keywords for marker in NATURAL_LANGUAGE_MARKERS
    )


def filter_by_keywords(keywords: list[str], candidate: Candidate) -> tuple[float, list[str]]:
    """Return the fraction of keywords found in the candidate's text blob."""
    if not keywords:
        return 0.0, []

    text_blob = " ".join(
        [
            candidate.current_role or "",
            candidate.summary or "",
            candidate.resume_text or "",
            candidate.current_company or "",
            " ".join(candidate.technical_skills),
            " ".join(candidate.soft_skills),
        ]
    ).lower()

    matched = [k for k in keywords if k in text_blob]
    return len(matched) / len(keywords), matched


def filter_by_location(location: str | None, candidate: Candidate) -> float:
    """Score location: containment scores 1.0, reverse containment 0.8."""
    if not location:
        return 0.0

    location_lower = location.lower().strip()
    candidate_location = (candidate.location or "").lower().strip()
    if not candidate_location:
        return 0.0
    if location_lower in candidate_location:
        return 1.0
    if candidate_location in location_lower:
        return REVERSE_LOCATION_SCORE
    return 0.0


def filter_by_experience(
    min_years: float | None,
    max_years: float | None,
    candidate: Candidate,
) -> float:
    """Score 1.0 when parsed experience lies within the requested bounds.

    With no bounds, any parseable experience passes.
    """
    years = parse_experience_years(candidate.total_experience)
    if years is None:
        return 0.0

    lower = min_years if min_years is not None else 0.0
    upper = max_years if max_years is not None else float("inf")
    return 1.0 if lower <= years <= upper else 0.0


def filter_by_education(education: str | None, candidate: Candidate) -> float:
    """Score 1.0 when the candidate's qualification mentions the requirement."""
    if not education:
        return 0.0

    candidate_education = (
        f"{candidate.highest_qualification or ''} {candidate.degree or ''}".lower()
    )
    return 1.0 if education.lower().strip() in candidate_education else 0.0


def _uploaded_timestamp(candidate: Candidate) -> float:
    if not candidate.uploaded_at:
        return 0.0
    try:
        return datetime.fromisoformat(candidate.uploaded_at.replace("Z", "+00:00")).timestamp()
    except ValueError:
        return 0.0


def manual_filter_search(
    filters: ManualFilters,
    candidates: list[Candidate],
    min_relevance: float = MANUAL_MIN_RELEVANCE,
) -> list[ScoredCandidate]:
    """Apply all manual filters and return matching candidates with scores.

    Args:
        filters: Manual search form values.
        candidates: Candidate snapshot to filter.
        min_relevance: Candidates below this relevance are dropped.

    Returns:
        ScoredCandidate list sorted by relevance, newest upload first on ties.
    """
    keywords = _keywords(filters.keywords)

    scored = []
    for candidate in candidates:
        keyword_score, matched = filter_by_keywords(keywords, candidate)
        location_score = filter_by_location(filters.location, candidate)
        experience_score = filter_by_experience(
            filters.min_experience, filters.max_experience, candidate
        )
        education_score = filter_by_education(filters.education, candidate)

        total = (
            keyword_score * KEYWORD_WEIGHT
            + location_score * LOCATION_WEIGHT
            + experience_score * EXPERIENCE_WEIGHT
            + education_score * EDUCATION_WEIGHT
        )
        relevance = min(MAX_RELEVANCE, total)
        if relevance < min_relevance:
            continue

        criteria = []
        if location_score > 0:
            criteria.append(f"Location: {candidate.location}")
        if experience_score > 0:
            criteria.append(f"Experience: {candidate.total_experience}")
        if education_score > 0:
            criteria.append(f"Education: {candidate.qualification}")

        scored.append(
            (
                ScoredCandidate(
                    candidate=candidate,
                    relevance_score=relevance,
                    match_percentage=round(relevance * 100),
                    matching_criteria=criteria,
                    matching_keywords=matched,
                    search_type="manual-filter",
                ),
                _uploaded_timestamp(candidate),
            )
        )

    scored.sort(key=lambda pair: (pair[0].relevance_score, pair[1]), reverse=True)

    logger.info(f"Manual filter search found {len(scored)} relevant candidates")
    return [result for result, _ in scored]
