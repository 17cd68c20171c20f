"""Turn free-text recruiter queries into structured search requirements."""

from talentrank.parsing.keyword_extractor import extract_basic_requirements
from talentrank.parsing.requirement_parser import (
    KeywordRequirementStrategy,
    LLMRequirementStrategy,
    RequirementParser,
    RequirementStrategy,
    build_default_parser,
)

__all__ = [
    "extract_basic_requirements",
    "RequirementStrategy",
    "LLMRequirementStrategy",
    "KeywordRequirementStrategy",
    "RequirementParser",
    "build_default_parser",
]
