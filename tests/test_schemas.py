"""Tests for pydantic schemas."""

import pytest
from pydantic import ValidationError

from talentrank.schemas.candidate import Candidate
from talentrank.schemas.match import CandidateInsights, ScoredCandidate
from talentrank.schemas.requirement import ExperienceRequirement, SearchRequirement
from talentrank.schemas.search import SearchRequest, SearchType
from tests.test_utils import make_test_candidate


class TestCandidate:
    def test_accepts_storage_row(self):
        candidate = Candidate.model_validate(
            {
                "_id": 42,
                "currentRole": "Fleet Manager",
                "technicalSkills": "GPS Tracking, SAP",
                "softSkills": None,
                "totalExperience": 5,
                "workExperience": [{"role": "Driver", "description": "Long haul"}],
                "unknownColumn": "ignored",
            }
        )

        assert candidate.id == "42"
        assert candidate.current_role == "Fleet Manager"
        assert candidate.technical_skills == ["GPS Tracking", "SAP"]
        assert candidate.soft_skills == []
        assert candidate.total_experience == "5 years"
        assert candidate.work_experience[0].role == "Driver"

    def test_is_frozen(self):
        candidate = make_test_candidate(current_role="Driver")

        with pytest.raises(ValidationError):
            candidate.current_role = "Manager"

    def test_role_text_falls_back_to_desired_role(self):
        candidate = make_test_candidate(desired_role="Fleet Manager")

        assert candidate.role_text == "Fleet Manager"

    def test_qualification_falls_back_to_degree(self):
        candidate = make_test_candidate(degree="B.Com")

        assert candidate.qualification == "B.Com"

    def test_all_skills_lowercases_and_combines(self):
        candidate = make_test_candidate(
            technical_skills=["SAP"], soft_skills=["Leadership"], tags=["Night Shift"]
        )

        assert candidate.all_skills == ["sap", "leadership", "night shift"]


class TestSearchRequirement:
    def test_all_fields_optional(self):
        requirement = SearchRequirement()

        assert requirement.role is None
        assert requirement.skills == []
        assert requirement.is_empty

    def test_accepts_camel_case_llm_output(self):
        requirement = SearchRequirement.model_validate(
            {
                "role": "Warehouse Manager",
                "specificRequirements": ["salary up to 30000 INR"],
                "impliedResponsibilities": ["inventory audit"],
            }
        )

        assert requirement.specific_requirements == ["salary up to 30000 INR"]
        assert requirement.implied_responsibilities == ["inventory audit"]

    def test_null_like_strings_become_none(self):
        requirement = SearchRequirement.model_validate(
            {"role": "null", "location": "  ", "education": "N/A"}
        )

        assert requirement.role is None
        assert requirement.location is None
        assert requirement.education is None

    def test_experience_without_bounds_is_absent(self):
        requirement = SearchRequirement.model_validate(
            {"experience": {"min": None, "max": None, "exact": None}}
        )

        assert requirement.experience is None

    def test_numeric_experience_is_minimum(self):
        requirement = SearchRequirement.model_validate({"experience": 3})

        assert requirement.experience == ExperienceRequirement(min=3)

    def test_negative_experience_rejected(self):
        with pytest.raises(ValidationError):
            SearchRequirement.model_validate({"experience": {"min": -1}})

    def test_string_and_null_lists_coerced(self):
        requirement = SearchRequirement.model_validate(
            {"skills": "SAP", "certifications": None}
        )

        assert requirement.skills == ["SAP"]
        assert requirement.certifications == []


class TestSearchRequest:
    def test_search_type_is_case_insensitive(self):
        request = SearchRequest.model_validate({"type": "KEYWORD", "query": "sap"})

        assert request.type == SearchType.KEYWORD

    def test_defaults(self):
        request = SearchRequest()

        assert request.type == SearchType.SMART
        assert request.page == 1
        assert request.per_page == 20
        assert request.paginate is False

    def test_rejects_page_zero(self):
        with pytest.raises(ValidationError):
            SearchRequest(page=0)


class TestScoredCandidate:
    def test_serializes_with_camel_case_keys(self):
        scored = ScoredCandidate(
            candidate=make_test_candidate(current_role="Driver"),
            relevance_score=0.5,
            match_percentage=50,
        )

        data = scored.model_dump(by_alias=True)

        assert data["relevanceScore"] == 0.5
        assert data["matchPercentage"] == 50
        assert data["candidate"]["currentRole"] == "Driver"

    def test_relevance_must_be_in_unit_interval(self):
        with pytest.raises(ValidationError):
            ScoredCandidate(
                candidate=make_test_candidate(), relevance_score=1.5, match_percentage=150
            )


class TestCandidateInsights:
    def test_as_lines(self):
        insights = CandidateInsights(
            matched_candidates=3,
            top_skills=["SAP", "GPS"],
            top_companies=["DHL"],
            min_experience_years=1,
            max_experience_years=7.5,
            certified_candidates=1,
        )

        assert insights.as_lines() == [
            "Most common skills: SAP, GPS",
            "Common previous companies: DHL",
            "Experience range: 1 - 7.5 years",
            "1 candidates have relevant certifications",
        ]

    def test_empty_pool_has_no_lines(self):
        assert CandidateInsights(matched_candidates=0).as_lines() == []
