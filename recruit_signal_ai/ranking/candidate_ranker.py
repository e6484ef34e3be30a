"""LLM-scored candidate ranking for a free-text query."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Tuple

from recruit_signal_ai.config import SEARCH_MAX_RESULTS, SEARCH_MIN_RELEVANCE, SEARCH_TEMPERATURE
from recruit_signal_ai.prompts import SEARCH_SYSTEM_PROMPT, build_search_prompt, messages_for
from recruit_signal_ai.schemas.candidate_profile import CandidateProfile
from recruit_signal_ai.schemas.search_result import SearchResult
from recruit_signal_ai.services.response_normalizer import normalize_list
from recruit_signal_ai.utils.logger import get_logger

if TYPE_CHECKING:
    from recruit_signal_ai.services.completion_client import CompletionClient

logger = get_logger(__name__)


def _coerce_score(value: Any) -> Optional[float]:
    """Float in [0, 1], or None when the model gave something non-numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, (int, float)):
        return None
    try:
        value = float(value)
    except (OverflowError, ValueError):
        return None
    if math.isnan(value):
        return None
    return max(0.0, min(1.0, value))


def coerce_results(
    items: List[Any],
    profiles_by_id: Dict[str, CandidateProfile],
) -> List[SearchResult]:
    """
    Keep elements that reference a known resume_id (first occurrence wins) and
    carry a numeric score. candidate_data is the stored profile, not the model's echo.
    """
    results: List[SearchResult] = []
    seen: set[str] = set()
    for item in items:
        if not isinstance(item, dict):
            continue
        resume_id = item.get("resume_id")
        if not isinstance(resume_id, str) or resume_id not in profiles_by_id or resume_id in seen:
            continue
        score = _coerce_score(item.get("relevance_score"))
        if score is None:
            continue
        justification = item.get("justification")
        seen.add(resume_id)
        results.append(
            SearchResult(
                resume_id=resume_id,
                relevance_score=score,
                justification=justification.strip() if isinstance(justification, str) else "",
                candidate_data=profiles_by_id[resume_id],
            )
        )
    return results


def select_top(
    results: List[SearchResult],
    min_relevance: float = SEARCH_MIN_RELEVANCE,
    limit: int = SEARCH_MAX_RESULTS,
) -> List[SearchResult]:
    """Filter score > min_relevance, sort descending (stable: ties keep response order), cap at limit."""
    kept = [r for r in results if r.relevance_score > min_relevance]
    kept.sort(key=lambda r: r.relevance_score, reverse=True)
    return kept[:limit]


async def rank_candidates(
    completion: CompletionClient,
    query: str,
    candidates: Sequence[Tuple[str, CandidateProfile]],
) -> List[SearchResult]:
    """
    Score (resume_id, profile) pairs against query via the completion endpoint.
    No candidates -> [] without calling the endpoint. A malformed response -> [].
    UpstreamError from the client propagates.
    """
    if not candidates:
        logger.info("No eligible candidates; skipping completion call")
        return []

    prompt = build_search_prompt(query, candidates)
    text = await completion.complete(
        messages_for(SEARCH_SYSTEM_PROMPT, prompt),
        temperature=SEARCH_TEMPERATURE,
    )
    profiles_by_id = {rid: profile for rid, profile in candidates}
    results = select_top(coerce_results(normalize_list(text), profiles_by_id))
    logger.info(
        "Ranked query '%s': candidates=%s returned=%s",
        query[:50],
        len(candidates),
        len(results),
    )
    return results
