"""Tests for LLM ranking of raw-text queries."""

import asyncio

import pytest

from talentrank.matching.ai_ranker import rank_with_llm, summarize_candidate
from tests.test_utils import StubGenerator, make_test_candidate


class TestSummarizeCandidate:
    def test_uses_summary_when_present(self):
        candidate = make_test_candidate(
            id="a", current_role="Driver", technical_skills=["GPS", "SAP"], summary="Short"
        )

        summary = summarize_candidate(candidate)

        assert summary["id"] == "a"
        assert summary["skills"] == "GPS, SAP"
        assert summary["summary"] == "Short"

    def test_falls_back_to_resume_prefix(self):
        candidate = make_test_candidate(resume_text="x" * 800)

        assert summarize_candidate(candidate)["summary"] == "x" * 500


class TestRankWithLLM:
    def test_orders_by_llm_ranking(self, pool):
        generator = StubGenerator('```json\n["b", "a", "ghost"]\n```')

        results = asyncio.run(rank_with_llm("store manager", pool, generator))

        assert [r.candidate.id for r in results] == ["b", "a"]
        assert results[0].relevance_score == 1.0
        assert results[1].relevance_score == pytest.approx(2 / 3)
        assert results[0].search_type == "ai-ranked"
        assert results[0].matching_keywords == ["store", "manager"]
        assert '"id": "c"' in generator.prompts[0]

    def test_relevance_floor(self):
        candidates = [make_test_candidate(id=str(i)) for i in range(20)]
        generator = StubGenerator(str([str(i) for i in range(20)]).replace("'", '"'))

        results = asyncio.run(rank_with_llm("driver", candidates, generator))

        assert results[-1].relevance_score == 0.1

    def test_repeated_ids_ignored(self, pool):
        generator = StubGenerator('["a", "a"]')

        results = asyncio.run(rank_with_llm("warehouse", pool, generator))

        assert [r.candidate.id for r in results] == ["a"]

    def test_non_list_response_falls_back(self, pool):
        generator = StubGenerator('{"ids": ["a"]}')

        results = asyncio.run(rank_with_llm("warehouse", pool, generator))

        assert [r.candidate.id for r in results] == ["a"]
        assert results[0].search_type == "keyword"

    def test_llm_failure_falls_back(self, pool):
        generator = StubGenerator(RuntimeError("503 unavailable"))

        results = asyncio.run(rank_with_llm("warehouse", pool, generator))

        assert results[0].search_type == "keyword"
        assert generator.calls == 2

    def test_no_generator_uses_keyword_search(self, pool):
        results = asyncio.run(rank_with_llm("warehouse", pool, None))

        assert [r.search_type for r in results] == ["keyword"]

    def test_empty_query(self, pool):
        generator = StubGenerator("[]")

        assert asyncio.run(rank_with_llm("  ", pool, generator)) == []
        assert generator.calls == 0
