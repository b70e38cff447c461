from datetime import datetime, time, timedelta
from typing import Iterable, List, NamedTuple


def local_naive(instant: datetime) -> datetime:
    """Express ``instant`` as a naive local wall-clock time.

    Stored entries and week boundaries are all naive local times; aware
    instants are converted so the two kinds can be compared.
    """
    if instant.tzinfo is None or instant.utcoffset() is None:
        return instant.replace(tzinfo=None)
    return instant.astimezone().replace(tzinfo=None)


class ScoreEntry(NamedTuple):
    score: int
    date: datetime

    def to_dict(self) -> dict:
        return {'score': self.score, 'date': self.date.isoformat()}

    @classmethod
    def from_dict(cls, data: dict) -> 'ScoreEntry':
        return cls(int(data['score']), local_naive(datetime.fromisoformat(data['date'])))


def start_of_week(instant: datetime) -> datetime:
    """Return midnight of the most recent Sunday at or before ``instant``.

    Weeks run Sunday 00:00:00 through Saturday 23:59:59 in the clock of
    ``instant``; tzinfo (or its absence) is preserved.
    """
    midnight = datetime.combine(instant.date(), time.min, tzinfo=instant.tzinfo)
    # date.weekday() is Monday=0 .. Sunday=6
    days_since_sunday = (instant.weekday() + 1) % 7
    return midnight - timedelta(days=days_since_sunday)


def in_window(entries: Iterable[ScoreEntry], week_start: datetime) -> List[ScoreEntry]:
    """Entries dated at or after ``week_start``, original order kept."""
    return [e for e in entries if e.date >= week_start]
