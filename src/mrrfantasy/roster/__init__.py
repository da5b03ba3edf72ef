"""Roster validation and display aggregation."""

from .validator import (
    RejectionReason,
    RosterAccepted,
    RosterRejected,
    ValidationOutcome,
    validate_roster,
)
from .view import materialize, points_breakdown

__all__ = [
    "RejectionReason",
    "RosterAccepted",
    "RosterRejected",
    "ValidationOutcome",
    "materialize",
    "points_breakdown",
    "validate_roster",
]
