"""Requirement-based ranking of candidates."""

import logging
from collections.abc import Callable

from talentrank.config import (
    EDUCATION_DISPLAY_THRESHOLD,
    EDUCATION_WEIGHT,
    EXPERIENCE_DISPLAY_THRESHOLD,
    EXPERIENCE_WEIGHT,
    LOCATION_DISPLAY_THRESHOLD,
    LOCATION_WEIGHT,
    MAX_RELEVANCE,
    MIN_RELEVANCE,
    RESPONSIBILITY_DISPLAY_THRESHOLD,
    RESPONSIBILITY_WEIGHT,
    ROLE_MATCH_THRESHOLD,
    ROLE_MISMATCH_PENALTY,
    ROLE_WEIGHT,
    SKILLS_DISPLAY_THRESHOLD,
    SKILLS_WEIGHT,
)
from talentrank.lookups import LookupTables, get_lookup_tables
from talentrank.matching.responsibilities import score_responsibilities
from talentrank.matching.scorers import (
    EDUCATION_FLOOR,
    EXPERIENCE_FLOOR,
    LOCATION_FLOOR,
    ROLE_FLOOR,
    SKILLS_FLOOR,
    score_education,
    score_experience,
    score_location,
    score_role,
    score_skills,
)
from talentrank.schemas.candidate import Candidate
from talentrank.schemas.match import ScoredCandidate
from talentrank.schemas.requirement import SearchRequirement

logger = logging.getLogger(__name__)


def _percent(score: float) -> int:
    return round(score * 100)


def _safe_score(
    dimension: str,
    candidate: Candidate,
    scorer: Callable[[], float],
    floor: float,
) -> float:
    """Run a scorer, falling back to the dimension's floor if it fails."""
    try:
        return min(1.0, max(0.0, scorer()))
    except Exception as e:
        logger.warning(
            f"{dimension} scoring failed for candidate {candidate.id}: {e}; "
            f"using floor {floor}"
        )
        return floor


def compute_relevance(points: float) -> float:
    """Convert points on a 0-100 scale to a relevance in [0, MAX_RELEVANCE].

    Args:
        points: Weighted points; may be negative after the role penalty.

    Returns:
        Relevance score capped below 1 to avoid false certainty.
    """
    return max(0.0, min(MAX_RELEVANCE, points / 100.0))


def score_candidate(
    requirements: SearchRequirement,
    candidate: Candidate,
    tables: LookupTables | None = None,
) -> ScoredCandidate:
    """Score one candidate against a parsed requirement.

    The role penalty is applied before the responsibility bonus, so a
    wrong-role candidate with relevant duties can partially recover.

    Args:
        requirements: Parsed search requirement.
        candidate: Candidate to score.
        tables: Lookup tables (defaults to the configured tables).

    Returns:
        ScoredCandidate with relevance and human-readable matching criteria.
    """
    tables = tables or get_lookup_tables()
    points = 0.0
    criteria: list[str] = []

    if requirements.role:
        role_score = _safe_score(
            "Role", candidate,
            lambda: score_role(requirements.role, candidate, tables), ROLE_FLOOR,
        )
        if role_score > ROLE_MATCH_THRESHOLD:
            points += role_score * ROLE_WEIGHT
            criteria.append(f"Role: {candidate.role_text} ({_percent(role_score)}%)")
        else:
            points -= ROLE_MISMATCH_PENALTY

    if requirements.implied_responsibilities:
        responsibility_score = _safe_score(
            "Responsibility", candidate,
            lambda: score_responsibilities(
                requirements.implied_responsibilities, candidate, tables
            ),
            0.0,
        )
        points += responsibility_score * RESPONSIBILITY_WEIGHT
        if responsibility_score > RESPONSIBILITY_DISPLAY_THRESHOLD:
            criteria.append(f"Responsibility Match: {_percent(responsibility_score)}%")

    if requirements.experience:
        experience_score = _safe_score(
            "Experience", candidate,
            lambda: score_experience(requirements.experience, candidate), EXPERIENCE_FLOOR,
        )
        points += experience_score * EXPERIENCE_WEIGHT
        if experience_score > EXPERIENCE_DISPLAY_THRESHOLD:
            criteria.append(
                f"Experience: {candidate.total_experience} ({_percent(experience_score)}%)"
            )

    if requirements.location:
        location_score = _safe_score(
            "Location", candidate,
            lambda: score_location(requirements.location, candidate, tables), LOCATION_FLOOR,
        )
        points += location_score * LOCATION_WEIGHT
        if location_score > LOCATION_DISPLAY_THRESHOLD:
            criteria.append(f"Location: {candidate.location} ({_percent(location_score)}%)")

    if requirements.skills:
        skills_score = _safe_score(
            "Skills", candidate,
            lambda: score_skills(requirements.skills, candidate, tables), SKILLS_FLOOR,
        )
        points += skills_score * SKILLS_WEIGHT
        if skills_score > SKILLS_DISPLAY_THRESHOLD:
            criteria.append(f"Skills match: {_percent(skills_score)}%")

    if requirements.education:
        education_score = _safe_score(
            "Education", candidate,
            lambda: score_education(requirements.education, candidate, tables),
            EDUCATION_FLOOR,
        )
        points += education_score * EDUCATION_WEIGHT
        if education_score > EDUCATION_DISPLAY_THRESHOLD:
            criteria.append(
                f"Education: {candidate.qualification} ({_percent(education_score)}%)"
            )

    relevance = compute_relevance(points)
    return ScoredCandidate(
        candidate=candidate,
        relevance_score=relevance,
        match_percentage=_percent(relevance),
        matching_criteria=criteria,
        parsed_requirements=requirements,
    )


def rank_candidates(
    requirements: SearchRequirement,
    candidates: list[Candidate],
    tables: LookupTables | None = None,
    min_relevance: float = MIN_RELEVANCE,
) -> list[ScoredCandidate]:
    """Score every candidate, drop weak matches and sort by relevance.

    A candidate that fails to score is skipped with a warning; the batch
    always completes.

    Args:
        requirements: Parsed search requirement.
        candidates: Candidate snapshot to rank.
        tables: Lookup tables (defaults to the configured tables).
        min_relevance: Candidates below this relevance are dropped.

    Returns:
        ScoredCandidate list sorted by relevance_score descending.
    """
    if not candidates:
        return []

    tables = tables or get_lookup_tables()
    logger.info(f"Ranking {len(candidates)} candidates against parsed requirements")

    results = []
    for candidate in candidates:
        try:
            scored = score_candidate(requirements, candidate, tables)
        except Exception as e:
            logger.warning(f"Skipping candidate {candidate.id}: scoring failed: {e}")
            continue
        if scored.relevance_score >= min_relevance:
            results.append(scored)

    results.sort(key=lambda r: r.relevance_score, reverse=True)

    logger.info(f"Found {len(results)} relevant candidates")
    return results
