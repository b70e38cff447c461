from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class QuotaPolicy:
    max_score: int = 30000
    weekly_game_limit: int = 7
    # None disables the point cap (count-only quota)
    weekly_point_cap: Optional[int] = 210000
    max_retries: int = 3

    @classmethod
    def from_config(cls, cfg: Mapping) -> 'QuotaPolicy':
        defaults = cls()
        cap = cfg.get('WEEKLY_POINT_CAP', defaults.weekly_point_cap)
        return cls(
            max_score=int(cfg.get('MAX_GAME_SCORE', defaults.max_score)),
            weekly_game_limit=int(cfg.get('WEEKLY_GAME_LIMIT', defaults.weekly_game_limit)),
            weekly_point_cap=int(cap) if cap else None,
            max_retries=max(1, int(cfg.get('SCORE_UPDATE_MAX_RETRIES', defaults.max_retries))),
        )

    def games_left(self, games_this_week: int) -> int:
        return max(0, self.weekly_game_limit - games_this_week)
