"""Points engine."""

from .engine import score, score_performance

__all__ = ["score", "score_performance"]
