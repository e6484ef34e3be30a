"""Ranking: LLM relevance scoring of stored candidate profiles."""

from recruit_signal_ai.ranking.candidate_ranker import coerce_results, rank_candidates, select_top

__all__ = ["rank_candidates", "coerce_results", "select_top"]
