"""Score domain services: weekly quota accounting and leaderboard views.

This package contains pure(ish) domain logic that should be imported by
HTTP routes, keeping transport concerns separated from the quota rules.
"""

from .errors import (
    LedgerError,
    InvalidScore,
    PlayerNotFound,
    WeeklyGameLimitReached,
    WeeklyPointCapExceeded,
    TransientConflict,
)
from .policy import QuotaPolicy
from .week import ScoreEntry, start_of_week, in_window, local_naive
from .ledger import QuotaLedger

__all__ = [
    'LedgerError',
    'InvalidScore',
    'PlayerNotFound',
    'WeeklyGameLimitReached',
    'WeeklyPointCapExceeded',
    'TransientConflict',
    'QuotaPolicy',
    'ScoreEntry',
    'start_of_week',
    'in_window',
    'local_naive',
    'QuotaLedger',
]
