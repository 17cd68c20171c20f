"""LLM ranking of raw-text queries over candidate summaries."""

import json
import logging

from talentrank.llm.client import TextGenerator, generate_with_retry
from talentrank.matching.keyword_search import extract_matching_keywords, keyword_search
from talentrank.schemas.candidate import Candidate
from talentrank.schemas.match import ScoredCandidate
from talentrank.utils import LLMUnavailableError, strip_code_fences

logger = logging.getLogger(__name__)

SUMMARY_RESUME_CHARS = 500
MIN_AI_RELEVANCE = 0.1

RANKING_PROMPT = """\
Analyze the search query and rank candidates by relevance. Return ONLY a valid \
JSON array of candidate IDs ordered by relevance (most relevant first).

Search Query: "{query}"

Candidates:
{candidates}

Consider:
1. Job role match
2. Skills alignment
3. Experience level
4. Location preference
5. Overall profile fit

Return format: ["candidate_id_1", "candidate_id_2", ...]\
"""


def summarize_candidate(candidate: Candidate) -> dict:
    """Build the compact profile the LLM ranks on."""
    return {
        "id": candidate.id,
        "name": candidate.name,
        "role": candidate.current_role,
        "skills": ", ".join(candidate.technical_skills),
        "experience": candidate.total_experience,
        "location": candidate.location,
        "summary": candidate.summary or (candidate.resume_text or "")[:SUMMARY_RESUME_CHARS],
    }


def _parse_ranked_ids(text: str) -> list[str]:
    ranked = json.loads(strip_code_fences(text))
    if not isinstance(ranked, list):
        raise ValueError(f"Expected a JSON array of IDs, got {type(ranked).__name__}")
    return [str(item) for item in ranked]


async def rank_with_llm(
    query: str,
    candidates: list[Candidate],
    generator: TextGenerator | None,
) -> list[ScoredCandidate]:
    """Rank candidates with the LLM, falling back to keyword search.

    Relevance decays linearly with the LLM's ranking position, floored at 0.1.
    IDs the LLM invents or repeats are ignored.

    Args:
        query: Raw recruiter query.
        candidates: Candidate snapshot.
        generator: Text generation capability; None forces the fallback.

    Returns:
        ScoredCandidate list in LLM order, or keyword search results.
    """
    if not query or not query.strip() or not candidates:
        return []

    if generator is None:
        logger.info("No LLM configured; using keyword search")
        return keyword_search(query, candidates)

    prompt = RANKING_PROMPT.format(
        query=query,
        candidates=json.dumps([summarize_candidate(c) for c in candidates], indent=2),
    )

    try:
        text = await generate_with_retry(generator, prompt)
        ranked_ids = _parse_ranked_ids(text)
    except (LLMUnavailableError, ValueError) as e:
        logger.warning(f"AI ranking failed, falling back to keyword search: {e}")
        return keyword_search(query, candidates)

    by_id = {c.id: c for c in candidates if c.id is not None}
    results = []
    seen = set()
    for index, candidate_id in enumerate(ranked_ids):
        candidate = by_id.get(candidate_id)
        if candidate is None or candidate_id in seen:
            continue
        seen.add(candidate_id)
        relevance = max(MIN_AI_RELEVANCE, 1 - index / len(ranked_ids))
        results.append(
            ScoredCandidate(
                candidate=candidate,
                relevance_score=relevance,
                match_percentage=round(relevance * 100),
                matching_keywords=extract_matching_keywords(query, candidate),
                search_type="ai-ranked",
            )
        )

    logger.info(f"AI ranking returned {len(results)} candidates")
    return results
