from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ExperienceRequirement(BaseModel):
    """Required years of experience. `exact` takes precedence over the range."""

    model_config = ConfigDict(frozen=True)

    min: float | None = Field(default=None, ge=0, description="Minimum years")
    max: float | None = Field(default=None, ge=0, description="Maximum years")
    exact: float | None = Field(default=None, ge=0, description="Exact years")

    @property
    def is_empty(self) -> bool:
        return self.min is None and self.max is None and self.exact is None


class SearchRequirement(BaseModel):
    """Structured requirement parsed from a natural-language query.

    Every field is optional. An absent field means the dimension is not
    scored; empty lists and an experience object with no bounds count as
    absent.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    role: str | None = Field(default=None, description="Target job title")
    experience: ExperienceRequirement | None = Field(
        default=None, description="Years of experience required"
    )
    location: str | None = Field(default=None, description="City or region")
    skills: list[str] = Field(default_factory=list, description="Required skills")
    education: str | None = Field(default=None, description="Minimum qualification")
    certifications: list[str] = Field(
        default_factory=list, description="Required credentials"
    )
    industry: str | None = Field(default=None, description="Industry, advisory only")
    specific_requirements: list[str] = Field(
        default_factory=list, description="Other constraints (e.g. salary), not scored"
    )
    implied_responsibilities: list[str] = Field(
        default_factory=list, description="Typical duties inferred for the role"
    )

    @field_validator("role", "location", "education", "industry", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if value is None:
            return None
        text = str(value).strip()
        if not text or text.lower() in ("null", "none", "n/a"):
            return None
        return text

    @field_validator("experience", mode="before")
    @classmethod
    def _experience(cls, value):
        if value is None:
            return None
        if isinstance(value, (int, float)):
            return {"min": value}
        return value

    @field_validator("experience")
    @classmethod
    def _drop_empty_experience(cls, value: ExperienceRequirement | None):
        if value is not None and value.is_empty:
            return None
        return value

    @field_validator(
        "skills", "certifications", "specific_requirements", "implied_responsibilities",
        mode="before",
    )
    @classmethod
    def _string_lists(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        return [str(item).strip() for item in value if item and str(item).strip()]

    @property
    def is_empty(self) -> bool:
        """True when no scored dimension is present."""
        return not (
            self.role
            or self.experience
            or self.location
            or self.skills
            or self.education
            or self.implied_responsibilities
        )
