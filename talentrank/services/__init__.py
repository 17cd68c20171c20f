"""Service layer for talentrank searches and job description drafting."""

from talentrank.services.candidate_source import (
    CachedCandidateSource,
    CandidateSource,
    InMemoryCandidateSource,
    JsonFileCandidateSource,
)
from talentrank.services.jd_service import JobDescriptionService
from talentrank.services.search_service import SearchService, paginate

__all__ = [
    "CandidateSource",
    "JsonFileCandidateSource",
    "InMemoryCandidateSource",
    "CachedCandidateSource",
    "SearchService",
    "JobDescriptionService",
    "paginate",
]
