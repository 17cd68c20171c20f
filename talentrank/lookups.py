"""Lookup tables used by the scorers and the keyword requirement parser.

The tables are data, not code: they ship as JSON next to the package and can
be replaced by pointing TALENTRANK_LOOKUP_TABLES at another file.
"""

import json
import logging
import re
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from talentrank.config import LOOKUP_TABLES_PATH

logger = logging.getLogger(__name__)

_tables: "LookupTables | None" = None


def _lowercase(value):
    if isinstance(value, dict):
        return {
            str(key).lower(): [str(item).lower() for item in items]
            for key, items in value.items()
        }
    if isinstance(value, list):
        return [str(item).lower() for item in value]
    return value


class EducationLevel(BaseModel):
    """One rung of the qualification ladder and the phrases that denote it."""

    level: str
    aliases: list[str]

    @field_validator("level", mode="before")
    @classmethod
    def _lower_level(cls, value):
        return str(value).lower()

    @field_validator("aliases", mode="before")
    @classmethod
    def _lower_aliases(cls, value):
        return _lowercase(value)


def _alias_pattern(alias: str) -> re.Pattern:
    return re.compile(rf"(?<!\w){re.escape(alias)}(?:'?s)?(?!\w)")


class LookupTables(BaseModel):
    """Synonym tables, gazetteers and keyword lists, all lowercased."""

    role_synonyms: dict[str, list[str]] = Field(default_factory=dict)
    role_skills: dict[str, list[str]] = Field(default_factory=dict)
    location_aliases: dict[str, list[str]] = Field(default_factory=dict)
    skill_synonyms: dict[str, list[str]] = Field(default_factory=dict)
    education_levels: list[EducationLevel] = Field(
        default_factory=list, description="Ordered from lowest to highest"
    )
    known_locations: list[str] = Field(default_factory=list)
    known_roles: list[str] = Field(default_factory=list)
    known_skills: list[str] = Field(default_factory=list)
    known_certifications: list[str] = Field(default_factory=list)
    known_education: list[str] = Field(default_factory=list)
    responsibility_stopwords: list[str] = Field(default_factory=list)

    @field_validator(
        "role_synonyms", "role_skills", "location_aliases", "skill_synonyms",
        "known_locations", "known_roles", "known_skills", "known_certifications",
        "known_education", "responsibility_stopwords",
        mode="before",
    )
    @classmethod
    def _lower(cls, value):
        return _lowercase(value)

    def education_rank(self, text: str) -> int | None:
        """Return the highest level index mentioned in text, or None.

        Aliases match whole words, optionally pluralized ("masters").
        """
        text = text.lower()
        rank = None
        for index, level in enumerate(self.education_levels):
            if any(_alias_pattern(alias).search(text) for alias in level.aliases):
                rank = index
        return rank


def load_lookup_tables(path: Path) -> LookupTables:
    """Load and validate lookup tables from a JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        Validated LookupTables.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    tables = LookupTables.model_validate(data)
    logger.info(
        f"Loaded lookup tables from {path}: {len(tables.role_synonyms)} roles, "
        f"{len(tables.known_locations)} locations, {len(tables.known_skills)} skills"
    )
    return tables


def get_lookup_tables() -> LookupTables:
    """Get lookup tables loaded from the configured path (cached)."""
    global _tables
    if _tables is None:
        _tables = load_lookup_tables(LOOKUP_TABLES_PATH)
    return _tables
