"""Standings scoring engine."""

from .engine import (
    ScoredAlternate,
    ScoredPick,
    Standing,
    SwapDecision,
    bonus_points,
    compute_standings,
    evaluate_bonuses,
    index_contestants,
    placement_points,
    rank_standings,
    score_submission,
    select_swap,
    total_points,
)

__all__ = [
    "ScoredAlternate",
    "ScoredPick",
    "Standing",
    "SwapDecision",
    "bonus_points",
    "compute_standings",
    "evaluate_bonuses",
    "index_contestants",
    "placement_points",
    "rank_standings",
    "score_submission",
    "select_swap",
    "total_points",
]
