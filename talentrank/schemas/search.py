from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SearchType(str, Enum):
    """Search modes offered to recruiters."""

    SMART = "smart"
    JD = "jd"
    MANUAL = "manual"
    KEYWORD = "keyword"

    @classmethod
    def _missing_(cls, value):
        """Allow case-insensitive lookup from query parameters."""
        if isinstance(value, str):
            value_lower = value.lower()
            for member in cls:
                if member.value == value_lower:
                    return member
        return None


class ManualFilters(BaseModel):
    """Structured filters from the manual search form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    keywords: str | None = Field(default=None, description="Free-text keywords")
    location: str | None = Field(default=None, description="Desired location")
    education: str | None = Field(default=None, description="Required qualification")
    min_experience: float | None = Field(default=None, ge=0, description="Minimum years")
    max_experience: float | None = Field(default=None, ge=0, description="Maximum years")


class SearchRequest(BaseModel):
    """A search request as received from the HTTP layer or the CLI."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type: SearchType = Field(default=SearchType.SMART, description="Search mode")
    query: str = Field(default="", description="Free-text query")
    job_description: str = Field(default="", description="Pasted job description")
    filters: ManualFilters | None = Field(default=None, description="Manual search filters")
    paginate: bool = Field(default=False, description="Return a single page")
    page: int = Field(default=1, ge=1, description="1-based page number")
    per_page: int = Field(default=20, ge=1, description="Page size")
