"""Search service: validate a request, pick a search path, rank, paginate.

Paths:
- smart: query (or JD) -> requirement parser -> requirement ranking
- jd: job description -> requirement parser -> requirement ranking
- manual: sentence-like text goes through the parser, otherwise manual filters
- keyword: LLM ranking of raw text, falling back to lexical search
"""

import logging
import math

from talentrank.llm.client import TextGenerator
from talentrank.lookups import LookupTables
from talentrank.matching.ai_ranker import rank_with_llm
from talentrank.matching.filter import looks_like_natural_language, manual_filter_search
from talentrank.matching.ranker import rank_candidates
from talentrank.parsing.requirement_parser import RequirementParser
from talentrank.schemas.match import ScoredCandidate, SearchPage
from talentrank.schemas.search import ManualFilters, SearchRequest, SearchType
from talentrank.services.candidate_source import CandidateSource
from talentrank.utils import InvalidSearchError

logger = logging.getLogger(__name__)

EXPLANATION_PREFIXES = {
    "semantic-smart": "AI semantic match based on",
    "semantic-jd": "JD semantic match based on",
    "semantic-manual": "Semantic match based on",
    "manual-filter": "Filter match based on",
}


def explain(result: ScoredCandidate) -> str:
    """Build the one-line explanation shown next to a result."""
    if result.search_type in ("keyword", "ai-ranked"):
        keywords = ", ".join(result.matching_keywords) or "profile text"
        return f"Keyword match on: {keywords}"
    prefix = EXPLANATION_PREFIXES.get(result.search_type, "Match based on")
    return f"{prefix}: {', '.join(result.matching_criteria) or 'profile analysis'}"


def paginate(results: list[ScoredCandidate], page: int, per_page: int) -> SearchPage:
    """Slice one page of results, clamping the page into range.

    Args:
        results: Full ranked result list.
        page: Requested 1-based page.
        per_page: Page size (at least 1).

    Returns:
        SearchPage with the page number actually served.
    """
    total = len(results)
    total_pages = max(1, math.ceil(total / per_page))
    current_page = min(max(1, page), total_pages)
    start = (current_page - 1) * per_page
    return SearchPage(
        items=results[start : start + per_page],
        total=total,
        page=current_page,
        per_page=per_page,
    )


def _has_filters(filters: ManualFilters | None) -> bool:
    if filters is None:
        return False
    return any(
        value not in (None, "")
        for value in (
            filters.keywords,
            filters.location,
            filters.education,
            filters.min_experience,
            filters.max_experience,
        )
    )


class SearchService:
    """Run recruiter searches over a candidate source.

    Args:
        candidate_source: Provides the candidate snapshot per search.
        parser: Requirement parser for the semantic paths.
        generator: LLM used by the keyword path; None means lexical search only.
        tables: Lookup tables for the scorers (defaults to the configured tables).
    """

    def __init__(
        self,
        candidate_source: CandidateSource,
        parser: RequirementParser,
        generator: TextGenerator | None = None,
        tables: LookupTables | None = None,
    ):
        self.candidate_source = candidate_source
        self.parser = parser
        self.generator = generator
        self.tables = tables

    def validate(self, request: SearchRequest) -> None:
        """Reject requests that lack the text their search type needs.

        Raises:
            InvalidSearchError: If the request cannot be served.
        """
        query = request.query.strip()
        job_description = request.job_description.strip()

        if request.type == SearchType.JD:
            if not job_description:
                raise InvalidSearchError("Job description is required")
        elif request.type == SearchType.MANUAL:
            if not query and not job_description and not _has_filters(request.filters):
                raise InvalidSearchError("Provide keywords, a job description or filters")
        elif request.type == SearchType.KEYWORD:
            if not query:
                raise InvalidSearchError("Search keywords are required")
        elif not query and not job_description:
            raise InvalidSearchError("Missing keywords or job description")

    async def search(self, request: SearchRequest) -> list[ScoredCandidate] | SearchPage:
        """Serve a search request.

        Args:
            request: Search type, text, filters and pagination settings.

        Returns:
            Ranked results, or a SearchPage when pagination is requested.

        Raises:
            InvalidSearchError: If the request lacks required input.
        """
        self.validate(request)
        logger.info(
            f"Search request: type={request.type.value} query='{request.query}' "
            f"jd={bool(request.job_description.strip())}"
        )

        candidates = await self.candidate_source.load()

        if request.type == SearchType.SMART:
            text = request.query.strip() or request.job_description.strip()
            results = await self._semantic(text, candidates, "semantic-smart")
        elif request.type == SearchType.JD:
            results = await self._semantic(
                request.job_description.strip(), candidates, "semantic-jd"
            )
        elif request.type == SearchType.MANUAL:
            results = await self._manual(request, candidates)
        else:
            results = await rank_with_llm(request.query.strip(), candidates, self.generator)

        results = [
            result.model_copy(update={"search_explanation": explain(result)})
            for result in results
        ]
        logger.info(f"Search returned {len(results)} results")

        if request.paginate:
            return paginate(results, request.page, request.per_page)
        return results

    async def _semantic(self, text, candidates, search_type: str) -> list[ScoredCandidate]:
        requirements = await self.parser.parse(text)
        if requirements.is_empty:
            logger.warning("Parsed requirement is empty; every candidate scores zero")
        ranked = rank_candidates(requirements, candidates, self.tables)
        return [r.model_copy(update={"search_type": search_type}) for r in ranked]

    async def _manual(self, request: SearchRequest, candidates) -> list[ScoredCandidate]:
        filters = request.filters or ManualFilters()
        job_description = request.job_description.strip()
        keywords = request.query.strip() or (filters.keywords or "").strip()

        if job_description or looks_like_natural_language(keywords):
            logger.info("Manual search text reads like a requirement; using semantic search")
            return await self._semantic(job_description or keywords, candidates, "semantic-manual")

        filters = filters.model_copy(update={"keywords": keywords or None})
        return manual_filter_search(filters, candidates)
