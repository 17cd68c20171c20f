from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _coerce_string_list(value):
    """Accept null, a comma-separated string, or a list from storage rows."""
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, list):
        return [str(item).strip() for item in value if item is not None and str(item).strip()]
    return value


class WorkExperience(BaseModel):
    """A single position from the candidate's work history."""

    model_config = ConfigDict(frozen=True)

    role: str | None = Field(default=None, description="Job title held")
    company: str | None = Field(default=None, description="Employer name")
    description: str | None = Field(default=None, description="Free-text duties")


class Project(BaseModel):
    """A project listed on the resume."""

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(default=None, description="Project name")
    description: str | None = Field(default=None, description="Free-text summary")


class Candidate(BaseModel):
    """Read-only candidate record as extracted from an uploaded resume.

    Field names are snake_case; the camelCase keys used by the storage layer
    are accepted as aliases. Optional fields are None or empty rather than
    absent, so scorers never need truthy checks on missing attributes.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("id", "_id"),
        description="Unique identifier of the candidate",
    )
    name: str | None = Field(default=None, description="Full name")
    email: str | None = Field(default=None, description="Contact email")
    current_role: str | None = Field(default=None, description="Current job title")
    desired_role: str | None = Field(default=None, description="Job title sought")
    current_company: str | None = Field(default=None, description="Current employer")
    location: str | None = Field(default=None, description="City or region")
    total_experience: str | None = Field(
        default=None, description="Free-text experience, e.g. '2 years 6 months'"
    )
    technical_skills: list[str] = Field(default_factory=list, description="Technical skills")
    soft_skills: list[str] = Field(default_factory=list, description="Soft skills")
    tags: list[str] = Field(default_factory=list, description="Recruiter tags")
    certifications: list[str] = Field(default_factory=list, description="Credentials held")
    highest_qualification: str | None = Field(default=None, description="Highest qualification")
    degree: str | None = Field(default=None, description="Degree name")
    resume_text: str | None = Field(default=None, description="Extracted resume text")
    summary: str | None = Field(default=None, description="Profile summary")
    key_achievements: list[str] = Field(default_factory=list, description="Achievements")
    work_experience: list[WorkExperience] = Field(
        default_factory=list, description="Work history"
    )
    projects: list[Project] = Field(default_factory=list, description="Projects")
    uploaded_at: str | None = Field(default=None, description="Upload timestamp (ISO 8601)")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value):
        return None if value is None else str(value)

    @field_validator("total_experience", mode="before")
    @classmethod
    def _experience_as_string(cls, value):
        if value is None:
            return None
        if isinstance(value, (int, float)):
            return f"{value} years"
        return str(value)

    @field_validator(
        "technical_skills", "soft_skills", "tags", "certifications", "key_achievements",
        mode="before",
    )
    @classmethod
    def _string_lists(cls, value):
        return _coerce_string_list(value)

    @field_validator("work_experience", "projects", mode="before")
    @classmethod
    def _record_lists(cls, value):
        return [] if value is None else value

    @property
    def role_text(self) -> str:
        """Current role, falling back to the desired role."""
        return self.current_role or self.desired_role or ""

    @property
    def all_skills(self) -> list[str]:
        """Technical skills, soft skills and tags, lowercased."""
        return [
            skill.lower()
            for skill in self.technical_skills + self.soft_skills + self.tags
        ]

    @property
    def qualification(self) -> str:
        """Highest qualification, falling back to the degree."""
        return self.highest_qualification or self.degree or ""
