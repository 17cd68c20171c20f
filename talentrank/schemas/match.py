from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from talentrank.schemas.candidate import Candidate
from talentrank.schemas.requirement import SearchRequirement


class ScoredCandidate(BaseModel):
    """A candidate ranked against one search request.

    Created per request and discarded afterwards; the wrapped candidate is
    never modified.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    candidate: Candidate = Field(description="The ranked candidate")
    relevance_score: float = Field(
        ge=0.0, le=1.0, description="Composite relevance used for ordering"
    )
    match_percentage: int = Field(description="round(relevance_score * 100)")
    matching_criteria: list[str] = Field(
        default_factory=list,
        description="Per-dimension explanations above their display threshold",
    )
    matching_keywords: list[str] = Field(
        default_factory=list, description="Query terms found in the candidate profile"
    )
    search_type: str | None = Field(default=None, description="Path that produced this result")
    search_explanation: str | None = Field(
        default=None, description="One-line summary of why the candidate matched"
    )
    parsed_requirements: SearchRequirement | None = Field(
        default=None, description="Requirement the candidate was scored against"
    )


class SimilarCandidate(BaseModel):
    """A candidate whose role resembles a job title."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    candidate: Candidate = Field(description="The similar candidate")
    similarity: float = Field(ge=0.0, le=1.0, description="Best of embedding and text similarity")


class CandidateInsights(BaseModel):
    """Aggregate facts about a pool of similar candidates."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    matched_candidates: int = Field(description="Size of the similar-candidate pool")
    top_skills: list[str] = Field(default_factory=list, description="Most common technical skills")
    top_companies: list[str] = Field(default_factory=list, description="Most common employers")
    min_experience_years: float | None = Field(default=None, description="Lowest parsed experience")
    max_experience_years: float | None = Field(default=None, description="Highest parsed experience")
    certified_candidates: int = Field(default=0, description="Candidates holding any certification")

    def as_lines(self) -> list[str]:
        """Render the insights as bullet lines for prompts and reports."""
        lines = []
        if self.top_skills:
            lines.append(f"Most common skills: {', '.join(self.top_skills)}")
        if self.top_companies:
            lines.append(f"Common previous companies: {', '.join(self.top_companies)}")
        if self.min_experience_years is not None and self.max_experience_years is not None:
            lines.append(
                f"Experience range: {self.min_experience_years:g} - "
                f"{self.max_experience_years:g} years"
            )
        if self.matched_candidates:
            lines.append(
                f"{self.certified_candidates} candidates have relevant certifications"
            )
        return lines


class SearchPage(BaseModel):
    """One page of search results."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: list[ScoredCandidate] = Field(description="Results on this page")
    total: int = Field(description="Total number of results")
    page: int = Field(description="1-based page number actually returned")
    per_page: int = Field(description="Page size")
