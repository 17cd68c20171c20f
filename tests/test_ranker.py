"""Tests for requirement-based ranking."""

from unittest.mock import patch

import pytest

from talentrank.matching.ranker import compute_relevance, rank_candidates, score_candidate
from talentrank.schemas.requirement import ExperienceRequirement, SearchRequirement
from tests.test_utils import make_test_candidate

WAREHOUSE_REQUIREMENT = SearchRequirement(
    role="warehouse manager",
    experience=ExperienceRequirement(min=3),
    location="pune",
)


def _warehouse_pair():
    exact = make_test_candidate(
        id="a", current_role="Warehouse Manager", total_experience="5 years", location="Pune"
    )
    synonym = make_test_candidate(
        id="b", current_role="Store Manager", total_experience="1 year", location="Mumbai"
    )
    return exact, synonym


class TestComputeRelevance:
    def test_scales_points(self):
        assert compute_relevance(50) == 0.5

    def test_caps_below_one(self):
        assert compute_relevance(130) == 0.95

    def test_floors_at_zero(self):
        assert compute_relevance(-20) == 0.0


class TestScoreCandidate:
    def test_full_match(self, tables):
        exact, _ = _warehouse_pair()

        scored = score_candidate(WAREHOUSE_REQUIREMENT, exact, tables)

        # 45 + 0.8 * 20 + 15
        assert scored.relevance_score == pytest.approx(0.76)
        assert scored.match_percentage == 76
        assert scored.matching_criteria == [
            "Role: Warehouse Manager (100%)",
            "Experience: 5 years (80%)",
            "Location: Pune (100%)",
        ]
        assert scored.parsed_requirements == WAREHOUSE_REQUIREMENT

    def test_synonym_match(self, tables):
        _, synonym = _warehouse_pair()

        scored = score_candidate(WAREHOUSE_REQUIREMENT, synonym, tables)

        # 0.8 * 45 + 0.5 * 20 + 0.1 * 15
        assert scored.relevance_score == pytest.approx(0.475)
        assert "Location: Mumbai (10%)" not in scored.matching_criteria

    def test_role_mismatch_penalty(self, tables):
        candidate = make_test_candidate(
            current_role="Software Engineer", technical_skills=["Python"], location="Delhi"
        )
        requirement = SearchRequirement(role="fleet manager", location="delhi")

        scored = score_candidate(requirement, candidate, tables)

        # -20 + 15 clamps to zero
        assert scored.relevance_score == 0.0
        assert not any(c.startswith("Role:") for c in scored.matching_criteria)

    def test_relevance_capped(self, tables):
        candidate = make_test_candidate(
            current_role="Warehouse Manager",
            total_experience="5 years",
            location="Pune",
            technical_skills=["SAP"],
            highest_qualification="Bachelor of Commerce",
            resume_text="inventory audit",
        )
        requirement = SearchRequirement(
            role="warehouse manager",
            experience=ExperienceRequirement(min=3),
            location="pune",
            skills=["sap"],
            education="bachelor",
            implied_responsibilities=["inventory audit"],
        )

        scored = score_candidate(requirement, candidate, tables)

        assert scored.relevance_score == 0.95
        assert "Responsibility Match: 100%" in scored.matching_criteria
        assert "Skills match: 100%" in scored.matching_criteria
        assert "Education: Bachelor of Commerce (100%)" in scored.matching_criteria

    def test_failing_dimension_uses_floor(self, tables):
        exact, _ = _warehouse_pair()

        with patch(
            "talentrank.matching.ranker.score_location", side_effect=RuntimeError("bad row")
        ):
            scored = score_candidate(WAREHOUSE_REQUIREMENT, exact, tables)

        # 45 + 0.8 * 20 + 0.1 * 15
        assert scored.relevance_score == pytest.approx(0.625)

    def test_empty_requirement_scores_zero(self, tables):
        exact, _ = _warehouse_pair()

        scored = score_candidate(SearchRequirement(), exact, tables)

        assert scored.relevance_score == 0.0
        assert scored.matching_criteria == []


class TestRankCandidates:
    def test_exact_match_ranks_above_synonym(self, tables):
        exact, synonym = _warehouse_pair()

        results = rank_candidates(WAREHOUSE_REQUIREMENT, [synonym, exact], tables)

        assert [r.candidate.id for r in results] == ["a", "b"]
        assert results[0].relevance_score > results[1].relevance_score

    def test_drops_low_relevance(self, tables, pool):
        results = rank_candidates(WAREHOUSE_REQUIREMENT, pool, tables)

        assert "c" not in [r.candidate.id for r in results]
        assert all(r.relevance_score >= 0.15 for r in results)

    def test_sorted_non_increasing(self, tables, pool):
        requirement = SearchRequirement(role="manager", location="pune", skills=["sap"])

        results = rank_candidates(requirement, pool, tables)

        scores = [r.relevance_score for r in results]
        assert scores == sorted(scores, reverse=True)

    def test_idempotent(self, tables, pool):
        first = rank_candidates(WAREHOUSE_REQUIREMENT, pool, tables)
        second = rank_candidates(WAREHOUSE_REQUIREMENT, pool, tables)

        assert first == second

    def test_does_not_mutate_candidates(self, tables, pool):
        before = [c.model_dump() for c in pool]

        rank_candidates(WAREHOUSE_REQUIREMENT, pool, tables)

        assert [c.model_dump() for c in pool] == before

    def test_failing_candidate_skipped(self, tables):
        exact, synonym = _warehouse_pair()
        original = score_candidate

        def flaky(requirements, candidate, tables):
            if candidate.id == "b":
                raise RuntimeError("corrupt row")
            return original(requirements, candidate, tables)

        with patch("talentrank.matching.ranker.score_candidate", side_effect=flaky):
            results = rank_candidates(WAREHOUSE_REQUIREMENT, [exact, synonym], tables)

        assert [r.candidate.id for r in results] == ["a"]

    def test_empty_pool(self, tables):
        assert rank_candidates(WAREHOUSE_REQUIREMENT, [], tables) == []
