"""Draft job descriptions grounded in similar candidates from the pool."""

import logging

from langchain_core.exceptions import OutputParserException
from langchain_core.output_parsers import PydanticOutputParser
from langchain_core.prompts import PromptTemplate

from talentrank.config import JD_REFERENCE_CANDIDATES
from talentrank.embeddings.fastembed_client import Embedder
from talentrank.llm.client import TextGenerator, generate_with_retry
from talentrank.matching.similarity import (
    find_role_matches,
    find_similar_candidates,
    summarize_candidates,
)
from talentrank.schemas.candidate import Candidate
from talentrank.schemas.job_description import (
    JobDescription,
    JobDescriptionInputs,
    LLMJobDescriptionOutput,
)
from talentrank.schemas.match import CandidateInsights
from talentrank.services.candidate_source import CandidateSource
from talentrank.utils import InvalidSearchError, JobDescriptionError, LLMUnavailableError

logger = logging.getLogger(__name__)

JOB_DESCRIPTION_PROMPT = """\
You are an expert HR professional creating a comprehensive job description. \
Use the provided information to create a realistic, industry-specific job description.

JOB REQUIREMENTS:
- Job Title: {job_title}
- Company: {company}
- Location: {location}
- Experience Required: {experience}
- Salary Range: {salary_range}
- Additional Requirements: {additional_requirements}

DATABASE INSIGHTS ({matched_candidates} similar profiles found):
{insights}

REFERENCE CANDIDATES:
{reference_candidates}

Create a job description with:
1. A 2-3 paragraph overview of the role
2. 6-8 specific responsibilities based on what similar candidates actually do
3. 6-8 requirements covering education, experience and certifications
4. 10-15 technical and soft skills common in similar profiles
5. 6-8 benefits appropriate for the role level and industry

Keep requirements achievable for the candidate pool and use the terminology \
found in similar profiles.

{format_instructions}\
"""


def format_reference_candidate(candidate: Candidate) -> str:
    return "\n".join(
        [
            f"- Name: {candidate.name or 'Unknown'}",
            f"  Role: {candidate.current_role or 'Not specified'}",
            f"  Experience: {candidate.total_experience or 'Not specified'}",
            f"  Skills: {', '.join(candidate.technical_skills[:10])}",
            f"  Company: {candidate.current_company or 'Not specified'}",
            f"  Achievements: {'; '.join(candidate.key_achievements[:3])}",
            f"  Certifications: {', '.join(candidate.certifications[:3])}",
        ]
    )


class JobDescriptionService:
    """Draft job descriptions with an LLM, informed by similar candidates.

    Args:
        candidate_source: Candidate pool to draw references from.
        generator: LLM capability; required to draft anything.
        embedder: Embedding capability; None means text similarity only.
    """

    def __init__(
        self,
        candidate_source: CandidateSource,
        generator: TextGenerator | None,
        embedder: Embedder | None = None,
    ):
        self.candidate_source = candidate_source
        self.generator = generator
        self.embedder = embedder
        self.output_parser = PydanticOutputParser(pydantic_object=LLMJobDescriptionOutput)
        self.prompt = PromptTemplate.from_template(JOB_DESCRIPTION_PROMPT)

    async def find_references(
        self,
        job_title: str,
        use_embeddings: bool = True,
    ) -> tuple[list[Candidate], CandidateInsights]:
        """Pick the reference candidates and insights for a job title."""
        candidates = await self.candidate_source.load()
        embedder = self.embedder if use_embeddings else None

        try:
            similar = await find_similar_candidates(job_title, candidates, embedder)
            references = [s.candidate for s in similar]
        except Exception as e:
            logger.warning(f"Embedding search failed, using role text matching: {e}")
            references = find_role_matches(job_title, candidates)

        return references, summarize_candidates(references)

    async def generate(
        self,
        inputs: JobDescriptionInputs,
        use_embeddings: bool = True,
    ) -> JobDescription:
        """Draft a job description.

        Args:
            inputs: Recruiter-provided title, company, location and extras.
            use_embeddings: Whether to rank reference candidates with embeddings.

        Returns:
            JobDescription with gaps filled from the inputs.

        Raises:
            InvalidSearchError: If the job title is missing.
            JobDescriptionError: If no LLM is configured or its output is unusable.
        """
        if not inputs.job_title or not inputs.job_title.strip():
            raise InvalidSearchError("Job title is required")
        if self.generator is None:
            raise JobDescriptionError("No LLM configured; cannot draft a job description")

        references, insights = await self.find_references(inputs.job_title, use_embeddings)
        logger.info(f"Drafting JD for '{inputs.job_title}' with {len(references)} references")

        prompt = self.prompt.format(
            job_title=inputs.job_title,
            company=inputs.company or "Company Name",
            location=inputs.location or "Location",
            experience=inputs.experience or "As per requirement",
            salary_range=inputs.salary_range or "Competitive",
            additional_requirements=inputs.additional_requirements or "None",
            matched_candidates=insights.matched_candidates,
            insights="\n".join(f"- {line}" for line in insights.as_lines()) or "- None",
            reference_candidates="\n".join(
                format_reference_candidate(c) for c in references[:JD_REFERENCE_CANDIDATES]
            )
            or "None",
            format_instructions=self.output_parser.get_format_instructions(),
        )

        try:
            text = await generate_with_retry(self.generator, prompt)
            draft = self.output_parser.parse(text)
        except (LLMUnavailableError, OutputParserException) as e:
            raise JobDescriptionError(f"Could not draft job description: {e}") from e

        return JobDescription(
            title=draft.title or inputs.job_title,
            company=draft.company or inputs.company or "Company Name",
            location=draft.location or inputs.location or "Location",
            type=draft.type or "Full-time",
            experience=draft.experience or inputs.experience or "As per requirement",
            salary=draft.salary or inputs.salary_range or "",
            description=draft.description or "Job description will be provided.",
            responsibilities=draft.responsibilities,
            requirements=draft.requirements,
            skills=draft.skills,
            benefits=draft.benefits,
            matched_candidates=insights.matched_candidates,
            insights=insights,
        )
