"""Requirement parsing as an ordered chain of strategies.

The LLM strategy understands paraphrase and infers typical duties for a role;
the keyword strategy needs no network access. The parser tries each strategy
in order and never raises.
"""

import json
import logging
from typing import Protocol

from langchain_core.prompts import PromptTemplate
from pydantic import ValidationError

from talentrank.llm.client import TextGenerator, default_generator, generate_with_retry
from talentrank.lookups import LookupTables
from talentrank.parsing.keyword_extractor import extract_basic_requirements
from talentrank.schemas.requirement import SearchRequirement
from talentrank.utils import LLMUnavailableError, strip_code_fences

logger = logging.getLogger(__name__)

REQUIREMENT_PROMPT = """\
You are an expert HR recruiter with deep knowledge of the logistics and \
transportation industry. Parse this job requirement and extract structured \
information with semantic understanding.

Analyze the job role to understand what this person actually does. Generate a \
list of "impliedResponsibilities" that are standard for this role, even if they \
are not mentioned in the requirement.

REQUIREMENT:
"{query}"

Return ONLY a JSON object with this exact structure:
{{
  "role": "Job title (e.g. 'Fleet Manager', 'Truck Driver', 'Warehouse Manager')",
  "experience": {{"min": number or null, "max": number or null, "exact": number or null}},
  "location": "Required city or region",
  "skills": ["Required technical and soft skills"],
  "education": "Education requirement",
  "certifications": ["Required certifications"],
  "industry": "Industry type (logistics, transportation, warehousing, supply chain)",
  "specificRequirements": ["Other specific requirements including salary"],
  "impliedResponsibilities": ["5-7 specific daily tasks or KPIs for this role"]
}}

Rules:
- "Warehouse Manager" -> impliedResponsibilities: ["inventory audit", "staff supervision", \
"safety compliance", "inward/outward management"]
- "LIFO and FEFO" -> skills: ["inventory management", "LIFO", "FEFO"]
- "Minimum 3 years" -> experience: {{"min": 3}}
- "5+ years" -> experience: {{"min": 5}}
- "2-5 years" -> experience: {{"min": 2, "max": 5}}
- "Up to ₹30,000" -> specificRequirements: ["salary up to 30000 INR"]
- "Lodhwal, Ludhiana" -> location: "Ludhiana"
- "CDL" -> certifications: ["Commercial Driver License"]
- Use null for anything not stated. Do not invent requirements.

Return ONLY the JSON object, no additional text.\
"""


class RequirementStrategy(Protocol):
    """One way of turning a query into a requirement; None means "could not"."""

    name: str

    async def parse(self, query: str) -> SearchRequirement | None: ...


class LLMRequirementStrategy:
    """Ask the LLM for a JSON requirement and validate it."""

    name = "llm"

    def __init__(self, generator: TextGenerator | None):
        self.generator = generator
        self.prompt = PromptTemplate.from_template(REQUIREMENT_PROMPT)

    async def parse(self, query: str) -> SearchRequirement | None:
        if self.generator is None:
            logger.info("No LLM configured; skipping LLM requirement parsing")
            return None

        try:
            text = await generate_with_retry(self.generator, self.prompt.format(query=query))
        except LLMUnavailableError as e:
            logger.warning(f"LLM requirement parsing unavailable: {e}")
            return None

        try:
            data = json.loads(strip_code_fences(text))
            return SearchRequirement.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"LLM returned an unusable requirement: {e}")
            return None


class KeywordRequirementStrategy:
    """Deterministic extraction from the lookup-table gazetteers."""

    name = "keyword"

    def __init__(self, tables: LookupTables | None = None):
        self.tables = tables

    async def parse(self, query: str) -> SearchRequirement | None:
        return extract_basic_requirements(query, self.tables)


class RequirementParser:
    """Try each strategy in order and return the first requirement produced."""

    def __init__(self, strategies: list[RequirementStrategy]):
        self.strategies = strategies

    async def parse(self, query: str) -> SearchRequirement:
        """Parse a free-text query into a SearchRequirement.

        Args:
            query: Recruiter query or job description.

        Returns:
            The first strategy's result; an empty requirement when every
            strategy declines or the query is blank.
        """
        if not query or not query.strip():
            return SearchRequirement()

        for strategy in self.strategies:
            try:
                requirement = await strategy.parse(query)
            except Exception:
                logger.exception(f"Requirement strategy '{strategy.name}' failed")
                continue
            if requirement is not None:
                logger.info(f"Parsed requirement with '{strategy.name}' strategy")
                return requirement
            logger.info(f"Strategy '{strategy.name}' declined; trying next")

        logger.warning("No strategy produced a requirement; using an empty one")
        return SearchRequirement()


def build_default_parser(
    generator: TextGenerator | None = None,
    tables: LookupTables | None = None,
) -> RequirementParser:
    """Build the LLM-then-keyword parser, using Groq when no generator is given."""
    if generator is None:
        generator = default_generator()
    return RequirementParser(
        [LLMRequirementStrategy(generator), KeywordRequirementStrategy(tables)]
    )
