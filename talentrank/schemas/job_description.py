from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from talentrank.schemas.match import CandidateInsights


class JobDescriptionInputs(BaseModel):
    """Recruiter-provided inputs for drafting a job description."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    job_title: str = Field(description="Title of the position")
    company: str | None = Field(default=None, description="Hiring company")
    location: str | None = Field(default=None, description="Job location")
    experience: str | None = Field(default=None, description="Experience requirement")
    salary_range: str | None = Field(default=None, description="Salary range")
    additional_requirements: str | None = Field(
        default=None, description="Anything else the JD must mention"
    )


class LLMJobDescriptionOutput(BaseModel):
    """Intermediate schema for LLM job description output.

    Every field is optional so a partial answer can still be completed from
    the recruiter's inputs.
    """

    title: str | None = Field(default=None, description="Job title")
    company: str | None = Field(default=None, description="Company name")
    location: str | None = Field(default=None, description="Location")
    type: str | None = Field(default=None, description="Employment type, e.g. Full-time")
    experience: str | None = Field(default=None, description="Experience requirement")
    salary: str | None = Field(default=None, description="Salary range")
    description: str | None = Field(default=None, description="2-3 paragraph overview")
    responsibilities: list[str] = Field(
        default_factory=list, description="6-8 key responsibilities"
    )
    requirements: list[str] = Field(default_factory=list, description="6-8 requirements")
    skills: list[str] = Field(default_factory=list, description="10-15 required skills")
    benefits: list[str] = Field(default_factory=list, description="6-8 benefits")


class JobDescription(BaseModel):
    """A drafted job description with the candidate insights behind it."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str
    company: str
    location: str
    type: str = "Full-time"
    experience: str
    salary: str = ""
    description: str
    responsibilities: list[str] = Field(default_factory=list)
    requirements: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    matched_candidates: int = 0
    insights: CandidateInsights | None = None
