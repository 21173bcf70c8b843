"""Elo arithmetic for scoring puzzles: solving one is treated as a game against an opponent with the puzzle's rating."""

K_FACTOR = 32
DEFAULT_RATING = 1200


def expected_score(player_rating: int, opponent_rating: int) -> float:
    return 1.0 / (1.0 + 10.0 ** ((opponent_rating - player_rating) / 400.0))


def rating_change(
    player_rating: int, puzzle_rating: int, won: bool, k: int = K_FACTOR
) -> int:
    """Points gained (or lost, when negative) for a single puzzle"""
    score = 1.0 if won else 0.0
    return round(k * (score - expected_score(player_rating, puzzle_rating)))
