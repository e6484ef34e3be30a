"""Search Agent: rank the user's parsed candidates for a query and log the search."""

from typing import List

from recruit_signal_ai.config import SEARCH_HISTORY_LIMIT
from recruit_signal_ai.pipeline import Pipeline
from recruit_signal_ai.ranking.candidate_ranker import rank_candidates
from recruit_signal_ai.schemas.context import RequestContext
from recruit_signal_ai.schemas.search_result import SearchQueryRecord, SearchResult
from recruit_signal_ai.utils.logger import get_logger

logger = get_logger(__name__)


async def search_candidates(pipeline: Pipeline, ctx: RequestContext, query: str) -> List[SearchResult]:
    """
    Semantic search over the user's parsed_success resumes.
    Appends one SearchQueryRecord per completed search. A blank query returns []
    without touching the store or the endpoint. On UpstreamError no history entry
    is written and the error propagates.
    """
    query = (query or "").strip()
    if not query:
        logger.warning("Empty search query; nothing to search")
        return []

    records = pipeline.resumes.list_parsed(ctx.user_id)
    candidates = [(r.id, r.parsed_data) for r in records if r.parsed_data is not None]
    results = await rank_candidates(pipeline.completion, query, candidates)
    pipeline.searches.append(ctx.user_id, query, len(results))
    logger.info(
        "Search finished: user=%s query='%s' candidates=%s results=%s",
        ctx.user_id,
        query[:50],
        len(candidates),
        len(results),
    )
    return results


def list_search_history(
    pipeline: Pipeline,
    ctx: RequestContext,
    limit: int = SEARCH_HISTORY_LIMIT,
) -> List[SearchQueryRecord]:
    return pipeline.searches.list_recent(ctx.user_id, limit=limit)
