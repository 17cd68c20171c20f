"""Match AI-inferred role responsibilities against a candidate's free text."""

from talentrank.config import (
    RESPONSIBILITY_COVERAGE_TARGET,
    RESPONSIBILITY_KEYWORD_RATIO,
    RESPONSIBILITY_PHRASE_WEIGHT,
)
from talentrank.lookups import LookupTables, get_lookup_tables
from talentrank.schemas.candidate import Candidate

MIN_KEYWORD_LENGTH = 4


def build_candidate_corpus(candidate: Candidate) -> str:
    """Concatenate the candidate's free-text fields into one lowercased string."""
    parts = [
        candidate.resume_text or "",
        candidate.summary or "",
        candidate.current_role or "",
        " ".join(candidate.key_achievements),
    ]
    parts.extend(
        f"{work.role or ''} {work.description or ''}" for work in candidate.work_experience
    )
    parts.extend(project.description or "" for project in candidate.projects)
    return " ".join(parts).lower()


def _responsibility_keywords(phrase: str, stopwords: set[str]) -> list[str]:
    return [
        word
        for word in phrase.split()
        if len(word) >= MIN_KEYWORD_LENGTH and word not in stopwords
    ]


def score_responsibilities(
    responsibilities: list[str],
    candidate: Candidate,
    tables: LookupTables | None = None,
) -> float:
    """Score how many inferred responsibilities the candidate's history mentions.

    An exact phrase in the corpus earns RESPONSIBILITY_PHRASE_WEIGHT. Otherwise
    the phrase is split into keywords, and if at least 60% of them appear the
    matched ratio is earned. The sum is divided by
    `len(responsibilities) * 1.5 * 0.7`, i.e. 70% of the maximum attainable
    weight, rather than by `len(responsibilities) * 0.7` alone. Without the
    phrase weight in the divisor one exact phrase out of two already scores
    1.0; with it that case scores about 0.714 and only near-full coverage
    reaches 1.0.

    Args:
        responsibilities: Responsibility phrases from the requirement parser.
        candidate: Candidate to score.
        tables: Lookup tables providing the keyword stopwords.

    Returns:
        Score in [0, 1]; 0 when either side has no text.
    """
    tables = tables or get_lookup_tables()
    phrases = [r.lower().strip() for r in responsibilities if r and r.strip()]
    corpus = build_candidate_corpus(candidate)

    if not phrases or not corpus.strip():
        return 0.0

    stopwords = set(tables.responsibility_stopwords)
    earned = 0.0

    for phrase in phrases:
        if phrase in corpus:
            earned += RESPONSIBILITY_PHRASE_WEIGHT
            continue

        keywords = _responsibility_keywords(phrase, stopwords)
        if not keywords:
            continue

        matched = sum(1 for keyword in keywords if keyword in corpus)
        ratio = matched / len(keywords)
        if ratio >= RESPONSIBILITY_KEYWORD_RATIO:
            earned += ratio

    attainable = len(phrases) * RESPONSIBILITY_PHRASE_WEIGHT * RESPONSIBILITY_COVERAGE_TARGET
    return min(1.0, earned / attainable)
