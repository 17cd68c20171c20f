"""Weighted lexical search over candidate fields.

This path needs no external service and no structured parse, so it serves as
the safety net whenever AI ranking is unavailable.
"""

import logging
import re

from talentrank.config import (
    KEYWORD_COVERAGE_WEIGHT,
    KEYWORD_FIELD_WEIGHTS,
    KEYWORD_MAX_RESULTS,
    KEYWORD_MIN_SCORE,
    KEYWORD_OCCURRENCE_STEP,
    KEYWORD_PHRASE_BOOST,
    KEYWORD_TERM_BASE,
)
from talentrank.schemas.candidate import Candidate
from talentrank.schemas.match import ScoredCandidate

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"[^\w\s+#.]")
_WHITESPACE = re.compile(r"\s+")


def tokenize_query(query: str) -> tuple[str, list[str]]:
    """Split a query into a cleaned phrase and its distinct terms.

    Args:
        query: Raw query text.

    Returns:
        Tuple of (phrase, terms). Terms are longer than one character and
        keep their first-seen order.
    """
    phrase = _WHITESPACE.sub(" ", _NON_WORD.sub(" ", query.lower())).strip()
    terms = []
    for term in phrase.split(" "):
        term = term.strip(".")
        if len(term) > 1 and term not in terms:
            terms.append(term)
    return phrase, terms


def _field_text(candidate: Candidate, field: str) -> str:
    value = getattr(candidate, field, None)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value).lower()
    return str(value).lower()


def _term_pattern(term: str) -> re.Pattern:
    return re.compile(rf"(?<!\w){re.escape(term)}(?!\w)")


def keyword_score(
    phrase_pattern: re.Pattern,
    term_patterns: dict[str, re.Pattern],
    candidate: Candidate,
) -> tuple[float, list[str]]:
    """Score one candidate against a tokenized query.

    The phrase and every term only match on word boundaries.

    Returns:
        Tuple of (score clamped to [0, 1], matched terms).
    """
    score = 0.0
    matched_terms: list[str] = []

    for field, weight in KEYWORD_FIELD_WEIGHTS.items():
        text = _field_text(candidate, field)
        if not text:
            continue

        if phrase_pattern.search(text):
            score += weight * KEYWORD_PHRASE_BOOST

        for term, pattern in term_patterns.items():
            occurrences = len(pattern.findall(text))
            if occurrences == 0:
                continue
            occurrence_boost = min(1.0, occurrences * KEYWORD_OCCURRENCE_STEP)
            score += weight * (KEYWORD_TERM_BASE + occurrence_boost)
            if term not in matched_terms:
                matched_terms.append(term)

    if term_patterns:
        score += KEYWORD_COVERAGE_WEIGHT * (len(matched_terms) / len(term_patterns))

    return max(0.0, min(1.0, score)), matched_terms


def keyword_search(
    query: str,
    candidates: list[Candidate],
    min_score: float = KEYWORD_MIN_SCORE,
    max_results: int = KEYWORD_MAX_RESULTS,
) -> list[ScoredCandidate]:
    """Rank candidates by weighted phrase, term and coverage matching.

    Args:
        query: Raw query text.
        candidates: Candidate snapshot to search.
        min_score: Candidates scoring below this are dropped.
        max_results: Maximum number of results returned.

    Returns:
        ScoredCandidate list sorted by relevance_score descending.
    """
    if not query or not query.strip():
        return []

    phrase, terms = tokenize_query(query)
    if not phrase:
        return []

    phrase_pattern = _term_pattern(phrase)
    term_patterns = {term: _term_pattern(term) for term in terms}

    results = []
    for candidate in candidates:
        score, matched_terms = keyword_score(phrase_pattern, term_patterns, candidate)
        if score < min_score:
            continue
        results.append(
            ScoredCandidate(
                candidate=candidate,
                relevance_score=score,
                match_percentage=round(score * 100),
                matching_keywords=matched_terms,
                search_type="keyword",
            )
        )

    results.sort(key=lambda r: r.relevance_score, reverse=True)
    results = results[:max_results]

    logger.info(f"Keyword search for '{query}' found {len(results)} candidates")
    return results


def extract_matching_keywords(query: str, candidate: Candidate) -> list[str]:
    """List query terms (longer than two characters) found in the profile's key fields."""
    candidate_text = " ".join(
        [
            candidate.current_role or "",
            candidate.location or "",
            " ".join(candidate.technical_skills),
            candidate.current_company or "",
        ]
    ).lower()
    _, terms = tokenize_query(query)
    return [term for term in terms if len(term) > 2 and term in candidate_text]
