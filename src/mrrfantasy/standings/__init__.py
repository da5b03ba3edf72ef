"""League standings aggregation."""

from .leaderboard import compute_standings

__all__ = ["compute_standings"]
