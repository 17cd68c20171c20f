"""Rule-based requirement extraction used when no LLM parse is available."""

import re

from talentrank.lookups import LookupTables, get_lookup_tables
from talentrank.schemas.requirement import ExperienceRequirement, SearchRequirement

# (pattern, kind); the first pattern that matches decides the experience.
EXPERIENCE_PATTERNS = [
    (re.compile(r"(\d+)\s*\+\s*(?:years?|yrs?)"), "min"),
    (re.compile(r"(\d+)\s*(?:-|to)\s*(\d+)\s*(?:years?|yrs?)"), "range"),
    (re.compile(r"minimum\s*(?:of\s*)?(\d+)\s*(?:years?|yrs?)"), "min"),
    (re.compile(r"at\s*least\s*(\d+)\s*(?:years?|yrs?)"), "min"),
    (re.compile(r"exactly\s*(\d+)\s*(?:years?|yrs?)"), "exact"),
    (re.compile(r"(\d+)\s*(?:years?|yrs?)"), "min"),
]

SALARY_PATTERN = re.compile(
    r"(?:₹|\brs\.?|\binr|\bsalary\b[^\d₹]{0,20}(?:₹|rs\.?|inr)?)\s*([\d,]+)"
)


def _extract_experience(text: str) -> ExperienceRequirement | None:
    for pattern, kind in EXPERIENCE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        if kind == "range":
            low, high = sorted((int(match.group(1)), int(match.group(2))))
            return ExperienceRequirement(min=low, max=high)
        if kind == "exact":
            return ExperienceRequirement(exact=int(match.group(1)))
        return ExperienceRequirement(min=int(match.group(1)))
    return None


def _first_match(text: str, keywords: list[str]) -> str | None:
    return next((keyword for keyword in keywords if keyword in text), None)


def _all_matches(text: str, keywords: list[str]) -> list[str]:
    return [keyword for keyword in keywords if keyword in text]


def _extract_salaries(text: str) -> list[str]:
    requirements = []
    for match in SALARY_PATTERN.finditer(text):
        amount = match.group(1).replace(",", "")
        if amount:
            requirements.append(f"salary {amount} INR")
    return requirements


def extract_basic_requirements(
    query: str,
    tables: LookupTables | None = None,
) -> SearchRequirement:
    """Extract a requirement from a query with regexes and keyword lists.

    Args:
        query: Free-text recruiter query.
        tables: Lookup tables holding the gazetteers (defaults to the configured tables).

    Returns:
        SearchRequirement; fields with no match are left empty.
    """
    tables = tables or get_lookup_tables()
    text = query.lower()

    return SearchRequirement(
        role=_first_match(text, tables.known_roles),
        experience=_extract_experience(text),
        location=_first_match(text, tables.known_locations),
        skills=_all_matches(text, tables.known_skills),
        education=_first_match(text, tables.known_education),
        certifications=_all_matches(text, tables.known_certifications),
        specific_requirements=_extract_salaries(text),
    )
