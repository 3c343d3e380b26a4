"""Defensive heuristic for a single play.

Not a point score: a planning value that rewards claiming premium squares,
penalises opening lanes toward triple-word squares, and prefers short,
central plays. Only tiles placed by the play are considered.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

from .board import CENTER, TRIPLE_WORD_SQUARES, Board, Coord, premium_at


@dataclass(frozen=True)
class DefenseWeights:
    # (premium, reward) pairs
    premium_rewards: Tuple[Tuple[str, float], ...] = (
        ("TW", 60.0), ("DW", 25.0), ("TL", 15.0), ("DL", 8.0),
    )
    lane_penalty: float = 12.0        # per triple-word square in line with a new tile
    lane_distance: int = 5            # max Manhattan distance for the lane penalty
    center_distance_weight: float = 1.5
    word_length_weight: float = 2.0


DEFAULT_WEIGHTS = DefenseWeights()


def defense_score_for(
    word: str,
    positions: Sequence[Coord],
    board: Board,
    weights: DefenseWeights = DEFAULT_WEIGHTS,
) -> float:
    rewards = dict(weights.premium_rewards)
    score = 0.0
    for r, c in positions:
        if board.grid[r][c] is not None:
            continue
        premium = premium_at(r, c)
        if premium is not None:
            score += rewards.get(premium, 0.0)

        for tr, tc in TRIPLE_WORD_SQUARES:
            if (r == tr or c == tc) and abs(r - tr) + abs(c - tc) <= weights.lane_distance:
                score -= weights.lane_penalty

        score -= weights.center_distance_weight * (abs(r - CENTER) + abs(c - CENTER))

    score -= weights.word_length_weight * len(word)
    return score


def defense_score(play, board: Board, weights: DefenseWeights = DEFAULT_WEIGHTS) -> float:
    """Defense heuristic of a `Play` (or anything with `word` and `positions`)."""
    return defense_score_for(play.word, play.positions, board, weights)
