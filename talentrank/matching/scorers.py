"""Field scorers comparing one requirement dimension against one candidate.

Every scorer is a pure function returning a value in [0, 1]. Missing candidate
data yields a small floor rather than zero so that a blank field alone never
excludes a candidate from ranking.
"""

import re

from talentrank.lookups import LookupTables, get_lookup_tables
from talentrank.schemas.candidate import Candidate
from talentrank.schemas.requirement import ExperienceRequirement
from talentrank.utils import contains_either

ROLE_EXACT_SCORE = 1.0
ROLE_SYNONYM_SCORE = 0.8
ROLE_SKILL_SCORE = 0.6
ROLE_FLOOR = 0.1

EXPERIENCE_MATCH_SCORE = 1.0
EXPERIENCE_OVERQUALIFIED_SCORE = 0.8
EXPERIENCE_SOME_SCORE = 0.5
EXPERIENCE_EXACT_MISS_SCORE = 0.3
EXPERIENCE_UNKNOWN_SCORE = 0.3
EXPERIENCE_FLOOR = 0.2
EXACT_TOLERANCE_YEARS = 1

LOCATION_ALIAS_SCORE = 0.9
LOCATION_UNKNOWN_SCORE = 0.3
LOCATION_FLOOR = 0.1

SKILLS_FLOOR = 0.2

EDUCATION_HIGHER_SCORE = 0.8
EDUCATION_LOWER_SCORE = 0.4
EDUCATION_UNKNOWN_SCORE = 0.3
EDUCATION_FLOOR = 0.2

# Ordered: the first pattern that matches decides the parse.
_YEARS_AND_MONTHS = re.compile(r"(\d+(?:\.\d+)?)\s*(?:years?|yrs?)\s*(?:and\s*)?(\d+)\s*months?")
_MONTHS_ONLY = re.compile(r"^\D*?(\d+(?:\.\d+)?)\s*months?")
_YEARS_ONLY = re.compile(r"(\d+(?:\.\d+)?)\s*\+?\s*(?:years?|yrs?|yr)\b")

_PLURAL_SUFFIX = re.compile(r"s\b")
_WHITESPACE = re.compile(r"\s+")


def _normalize_role(text: str) -> str:
    """Unify singular and plural forms ("operations" vs "operation")."""
    return _WHITESPACE.sub(" ", _PLURAL_SUFFIX.sub("", text)).strip()


def parse_experience_years(text: str | None) -> float | None:
    """Parse free-text experience like "2 years 6 months" into years.

    Args:
        text: Candidate experience string.

    Returns:
        Years of experience, or None when nothing parses.
    """
    if not text:
        return None
    text = text.lower()

    match = _YEARS_AND_MONTHS.search(text)
    if match:
        return float(match.group(1)) + float(match.group(2)) / 12

    match = _MONTHS_ONLY.search(text)
    if match and "year" not in text and "yr" not in text:
        return float(match.group(1)) / 12

    match = _YEARS_ONLY.search(text)
    if match:
        return float(match.group(1))

    return None


def score_role(
    required_role: str,
    candidate: Candidate,
    tables: LookupTables | None = None,
) -> float:
    """Score how well the candidate's role matches the required role.

    Args:
        required_role: Target job title.
        candidate: Candidate to score.
        tables: Lookup tables (defaults to the configured tables).

    Returns:
        1.0 on containment, 0.8 on a synonym, 0.6 when the candidate's skills
        fit the role, otherwise 0.1.
    """
    tables = tables or get_lookup_tables()
    required = required_role.lower().strip()
    candidate_role = candidate.role_text.lower().strip()
    norm_required = _normalize_role(required)
    norm_candidate = _normalize_role(candidate_role)

    if candidate_role and (
        contains_either(candidate_role, required)
        or contains_either(norm_candidate, norm_required)
    ):
        return ROLE_EXACT_SCORE

    if candidate_role:
        synonyms = tables.role_synonyms.get(required) or tables.role_synonyms.get(
            norm_required, []
        )
        for synonym in synonyms:
            if synonym in candidate_role or (
                norm_candidate and norm_candidate in _normalize_role(synonym)
            ):
                return ROLE_SYNONYM_SCORE

    expected_skills = tables.role_skills.get(required) or tables.role_skills.get(
        norm_required, []
    )
    for skill in candidate.all_skills:
        if any(expected in skill for expected in expected_skills):
            return ROLE_SKILL_SCORE

    return ROLE_FLOOR


def score_experience(required: ExperienceRequirement, candidate: Candidate) -> float:
    """Score the candidate's experience against the required years.

    `exact` wins over the range. Only a met minimum with a met maximum scores
    1.0; a met minimum alone, or an overqualified candidate, scores 0.8. Without
    a minimum the score only reflects whether the candidate has any experience.
    """
    years = parse_experience_years(candidate.total_experience)
    if years is None:
        return EXPERIENCE_UNKNOWN_SCORE

    if required.exact is not None:
        if abs(years - required.exact) <= EXACT_TOLERANCE_YEARS:
            return EXPERIENCE_MATCH_SCORE
        return EXPERIENCE_EXACT_MISS_SCORE

    if required.min and years >= required.min:
        if required.max and years <= required.max:
            return EXPERIENCE_MATCH_SCORE
        return EXPERIENCE_OVERQUALIFIED_SCORE

    return EXPERIENCE_SOME_SCORE if years > 0 else EXPERIENCE_FLOOR


def score_location(
    required_location: str,
    candidate: Candidate,
    tables: LookupTables | None = None,
) -> float:
    """Score location match, using the city alias table for nearby areas."""
    tables = tables or get_lookup_tables()
    required = required_location.lower().strip()
    candidate_location = (candidate.location or "").lower().strip()

    if not candidate_location:
        return LOCATION_UNKNOWN_SCORE
    if contains_either(candidate_location, required):
        return 1.0

    for city, aliases in tables.location_aliases.items():
        if city in required and any(alias in candidate_location for alias in aliases):
            return LOCATION_ALIAS_SCORE
        if city in candidate_location and any(alias in required for alias in aliases):
            return LOCATION_ALIAS_SCORE

    return LOCATION_FLOOR


def _skill_matches(required: str, candidate_skill: str, synonyms: list[str]) -> bool:
    if contains_either(candidate_skill, required):
        return True
    return any(contains_either(candidate_skill, synonym) for synonym in synonyms)


def score_skills(
    required_skills: list[str],
    candidate: Candidate,
    tables: LookupTables | None = None,
) -> float:
    """Return the fraction of required skills the candidate covers."""
    tables = tables or get_lookup_tables()
    candidate_skills = [skill for skill in candidate.all_skills if skill.strip()]
    required_skills = [skill.lower().strip() for skill in required_skills if skill.strip()]

    if not candidate_skills or not required_skills:
        return SKILLS_FLOOR

    matches = 0
    for required in required_skills:
        synonyms = tables.skill_synonyms.get(required, [])
        if any(_skill_matches(required, skill, synonyms) for skill in candidate_skills):
            matches += 1

    return matches / len(required_skills)


def score_education(
    required_education: str,
    candidate: Candidate,
    tables: LookupTables | None = None,
) -> float:
    """Score qualification by containment, then by position on the level ladder."""
    tables = tables or get_lookup_tables()
    required = required_education.lower().strip()
    candidate_education = candidate.qualification.lower().strip()

    if not candidate_education:
        return EDUCATION_UNKNOWN_SCORE
    if contains_either(candidate_education, required):
        return 1.0

    candidate_rank = tables.education_rank(candidate_education)
    required_rank = tables.education_rank(required)
    if candidate_rank is not None and required_rank is not None:
        if candidate_rank >= required_rank:
            return EDUCATION_HIGHER_SCORE
        return EDUCATION_LOWER_SCORE

    return EDUCATION_FLOOR
