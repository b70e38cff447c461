import logging
import re
from datetime import datetime
from numbers import Integral
from typing import Callable, List, Optional

from .errors import (
    InvalidScore,
    PlayerNotFound,
    TransientConflict,
    WeeklyGameLimitReached,
    WeeklyPointCapExceeded,
)
from .policy import QuotaPolicy
from .week import ScoreEntry, in_window, local_naive, start_of_week

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r'-?[0-9]+')


def _coerce_score(raw, max_score: int) -> int:
    # bool is an int subclass; a JSON true is not a score
    if isinstance(raw, bool):
        raise InvalidScore(raw, max_score)
    if isinstance(raw, Integral):
        score = int(raw)
    elif isinstance(raw, float) and raw.is_integer():
        score = int(raw)
    elif isinstance(raw, str) and _INT_RE.fullmatch(raw.strip()):
        score = int(raw.strip())
    else:
        raise InvalidScore(raw, max_score)
    if score <= 0 or score > max_score:
        raise InvalidScore(raw, max_score)
    return score


class QuotaLedger:
    """Accepts game scores under the weekly quota and derives the score views.

    ``store`` supplies ``fetch``, ``compare_and_swap`` and ``ranked`` (see
    PlayerStore). ``clock`` returns the evaluation instant when a call does
    not pass ``now`` explicitly.
    """

    def __init__(self, store, policy: Optional[QuotaPolicy] = None, clock: Callable[[], datetime] = datetime.now, log=None):
        self.store = store
        self.policy = policy or QuotaPolicy()
        self.clock = clock
        self.log = log or logger

    def submit_score(self, player_id, proposed_score, now: Optional[datetime] = None) -> dict:
        policy = self.policy
        score = _coerce_score(proposed_score, policy.max_score)
        now = local_naive(now or self.clock())
        week_start = start_of_week(now)

        for attempt in range(1, policy.max_retries + 1):
            player = self.store.fetch(player_id)
            if player is None:
                raise PlayerNotFound(player_id)

            this_week = in_window(player.weekly_scores, week_start)
            rejection = None
            if len(this_week) >= policy.weekly_game_limit:
                rejection = WeeklyGameLimitReached(policy.weekly_game_limit)
            elif policy.weekly_point_cap is not None:
                week_total = sum(e.score for e in this_week)
                if week_total + score > policy.weekly_point_cap:
                    rejection = WeeklyPointCapExceeded(
                        policy.weekly_point_cap, week_total, policy.games_left(len(this_week))
                    )

            if rejection is not None:
                # Pruning sticks even when the score is refused
                if len(this_week) == len(player.weekly_scores):
                    self.log.info(f"[score-reject] player={player_id} score={score} reason={rejection.error_code}")
                    raise rejection
                if self.store.compare_and_swap(player_id, player.version, player.total_score, this_week):
                    self.log.info(f"[score-reject] player={player_id} score={score} reason={rejection.error_code} pruned={len(player.weekly_scores) - len(this_week)}")
                    raise rejection
            else:
                entries = this_week + [ScoreEntry(score, now)]
                total = player.total_score + score
                if self.store.compare_and_swap(player_id, player.version, total, entries, accepted=entries[-1]):
                    self.log.info(f"[score-accept] player={player_id} score={score} total={total} games_this_week={len(entries)}")
                    return {
                        'totalScore': total,
                        'gamesThisWeek': len(entries),
                        'gamesLeft': policy.games_left(len(entries)),
                    }

            self.log.info(f"[score-conflict] player={player_id} attempt={attempt}/{policy.max_retries}")

        self.log.warning(f"[score-conflict] player={player_id} giving up after {policy.max_retries} attempts")
        raise TransientConflict(player_id, policy.max_retries)

    def player_summary(self, player_id, now: Optional[datetime] = None) -> dict:
        player = self.store.fetch(player_id)
        if player is None:
            raise PlayerNotFound(player_id)
        games = len(in_window(player.weekly_scores, start_of_week(local_naive(now or self.clock()))))
        return {
            '_id': player.id,
            'displayName': player.display_name,
            'email': player.email,
            'photo': player.photo,
            'totalScore': player.total_score,
            'gamesThisWeek': games,
            'gamesLeft': self.policy.games_left(games),
        }

    def leaderboard(self, limit: Optional[int] = 20, now: Optional[datetime] = None) -> List[dict]:
        """Players by total score, highest first; ``limit=None`` returns everyone."""
        week_start = start_of_week(local_naive(now or self.clock()))
        rows = []
        for player in self.store.ranked(limit):
            games = len(in_window(player.weekly_scores, week_start))
            rows.append({
                '_id': player.id,
                'displayName': player.display_name,
                'photo': player.photo,
                'totalScore': player.total_score,
                'gamesLeft': self.policy.games_left(games),
            })
        return rows
