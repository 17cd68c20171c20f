"""Tests for the per-dimension field scorers."""

import math

import pytest

from talentrank.matching.scorers import (
    parse_experience_years,
    score_education,
    score_experience,
    score_location,
    score_role,
    score_skills,
)
from talentrank.schemas.candidate import Candidate
from talentrank.schemas.requirement import ExperienceRequirement
from tests.test_utils import make_test_candidate


class TestParseExperienceYears:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("5 years", 5.0),
            ("5+ years", 5.0),
            ("3.5 yrs", 3.5),
            ("1 year", 1.0),
            ("2 years 6 months", 2.5),
            ("2 years and 3 months", 2.25),
            ("18 months", 1.5),
        ],
    )
    def test_parses(self, text, expected):
        assert parse_experience_years(text) == pytest.approx(expected)

    @pytest.mark.parametrize("text", [None, "", "fresher", "several"])
    def test_unparseable_returns_none(self, text):
        assert parse_experience_years(text) is None


class TestScoreRole:
    def test_exact_match_case_insensitive(self, tables):
        candidate = make_test_candidate(current_role="fleet manager")

        assert score_role("Fleet Manager", candidate, tables) == 1.0

    def test_containment(self, tables):
        candidate = make_test_candidate(current_role="Senior Fleet Manager")

        assert score_role("fleet manager", candidate, tables) == 1.0

    def test_plural_forms_match(self, tables):
        candidate = make_test_candidate(current_role="Operation Executive")

        assert score_role("operations executive", candidate, tables) == 1.0

    def test_desired_role_used_when_current_missing(self, tables):
        candidate = make_test_candidate(desired_role="Truck Driver")

        assert score_role("truck driver", candidate, tables) == 1.0

    def test_synonym(self, tables):
        candidate = make_test_candidate(current_role="Store Manager")

        assert score_role("warehouse manager", candidate, tables) == 0.8

    def test_skill_overlap(self, tables):
        candidate = make_test_candidate(
            current_role="Delivery Associate", technical_skills=["Commercial Driving"]
        )

        assert score_role("truck driver", candidate, tables) == 0.6

    def test_unrelated_role_gets_floor(self, tables):
        candidate = make_test_candidate(
            current_role="Software Engineer", technical_skills=["Python"]
        )

        assert score_role("fleet manager", candidate, tables) == 0.1

    def test_missing_role_gets_floor(self, tables):
        assert score_role("fleet manager", make_test_candidate(), tables) == 0.1


class TestScoreExperience:
    def test_meets_minimum_without_maximum(self):
        candidate = make_test_candidate(total_experience="6 years")

        assert score_experience(ExperienceRequirement(min=5), candidate) == 0.8

    @pytest.mark.parametrize(("text", "expected"), [("2 years", 0.5), ("0 years", 0.2)])
    def test_maximum_only_scores_by_having_experience(self, text, expected):
        candidate = make_test_candidate(total_experience=text)

        assert score_experience(ExperienceRequirement(max=5), candidate) == expected

    def test_within_range(self):
        candidate = make_test_candidate(total_experience="3 years")

        assert score_experience(ExperienceRequirement(min=2, max=5), candidate) == 1.0

    def test_overqualified(self):
        candidate = make_test_candidate(total_experience="8 years")

        assert score_experience(ExperienceRequirement(min=2, max=5), candidate) == 0.8

    def test_some_experience_below_minimum(self):
        candidate = make_test_candidate(total_experience="3 years")

        assert score_experience(ExperienceRequirement(min=5), candidate) == 0.5

    def test_no_experience_below_minimum(self):
        candidate = make_test_candidate(total_experience="0 years")

        assert score_experience(ExperienceRequirement(min=5), candidate) == 0.2

    @pytest.mark.parametrize("text", ["4 years", "5 years 6 months", "6 years"])
    def test_exact_within_one_year(self, text):
        candidate = make_test_candidate(total_experience=text)

        assert score_experience(ExperienceRequirement(exact=5), candidate) == 1.0

    def test_exact_miss(self):
        candidate = make_test_candidate(total_experience="8 years")

        assert score_experience(ExperienceRequirement(exact=5), candidate) == 0.3

    def test_exact_takes_precedence_over_range(self):
        candidate = make_test_candidate(total_experience="10 years")

        requirement = ExperienceRequirement(min=1, max=20, exact=3)

        assert score_experience(requirement, candidate) == 0.3

    @pytest.mark.parametrize("text", [None, "fresher"])
    def test_unknown_experience(self, text):
        candidate = make_test_candidate(total_experience=text)

        assert score_experience(ExperienceRequirement(min=2), candidate) == 0.3


class TestScoreLocation:
    def test_containment(self, tables):
        candidate = make_test_candidate(location="New Delhi")

        assert score_location("Delhi", candidate, tables) == 1.0

    def test_alias_of_required_city(self, tables):
        candidate = make_test_candidate(location="Gurgaon, Haryana")

        assert score_location("Delhi", candidate, tables) == 0.9

    def test_alias_of_candidate_city(self, tables):
        candidate = make_test_candidate(location="Delhi")

        assert score_location("Gurugram", candidate, tables) == 0.9

    def test_different_city(self, tables):
        candidate = make_test_candidate(location="Chennai")

        assert score_location("Mumbai", candidate, tables) == 0.1

    def test_missing_location(self, tables):
        assert score_location("Mumbai", make_test_candidate(), tables) == 0.3


class TestScoreSkills:
    def test_direct_and_synonym_matches(self, tables):
        candidate = make_test_candidate(
            technical_skills=["ERP systems"], soft_skills=["Team Management"]
        )

        assert score_skills(["SAP", "Leadership"], candidate, tables) == 1.0

    def test_partial_coverage(self, tables):
        candidate = make_test_candidate(technical_skills=["SAP"])

        assert score_skills(["SAP", "Forklift"], candidate, tables) == 0.5

    def test_tags_count_as_skills(self, tables):
        candidate = make_test_candidate(tags=["forklift"])

        assert score_skills(["Forklift"], candidate, tables) == 1.0

    def test_candidate_without_skills(self, tables):
        assert score_skills(["SAP"], make_test_candidate(), tables) == 0.2

    def test_no_required_skills(self, tables):
        candidate = make_test_candidate(technical_skills=["SAP"])

        assert score_skills(["", " "], candidate, tables) == 0.2


class TestScoreEducation:
    def test_containment(self, tables):
        candidate = make_test_candidate(highest_qualification="Bachelor of Commerce")

        assert score_education("Bachelor", candidate, tables) == 1.0

    def test_higher_level(self, tables):
        candidate = make_test_candidate(highest_qualification="MBA")

        assert score_education("bachelor", candidate, tables) == 0.8

    def test_lower_level(self, tables):
        candidate = make_test_candidate(degree="Diploma in Logistics")

        assert score_education("master", candidate, tables) == 0.4

    def test_unmapped_requirement(self, tables):
        candidate = make_test_candidate(highest_qualification="B.Com")

        assert score_education("certificate course", candidate, tables) == 0.2

    def test_alias_inside_word_is_ignored(self, tables):
        candidate = make_test_candidate(highest_qualification="Graduate in Political Science")

        assert score_education("bachelor", candidate, tables) == 0.2

    def test_missing_education(self, tables):
        assert score_education("bachelor", make_test_candidate(), tables) == 0.3


class TestScoresAreBounded:
    @pytest.mark.parametrize(
        "candidate",
        [
            Candidate(),
            make_test_candidate(
                current_role="",
                location="",
                total_experience="lots",
                technical_skills=[""],
                highest_qualification="",
            ),
            make_test_candidate(
                current_role="Fleet Manager",
                location="Delhi",
                total_experience="12 years 11 months",
                technical_skills=["Fleet Management", "GPS"],
                highest_qualification="PhD",
            ),
        ],
    )
    def test_every_scorer_in_unit_interval(self, candidate, tables):
        scores = [
            score_role("fleet manager", candidate, tables),
            score_experience(ExperienceRequirement(min=3, max=8), candidate),
            score_experience(ExperienceRequirement(exact=4), candidate),
            score_location("delhi", candidate, tables),
            score_skills(["fleet management", "sap"], candidate, tables),
            score_education("bachelor", candidate, tables),
        ]

        for score in scores:
            assert not math.isnan(score)
            assert 0.0 <= score <= 1.0
