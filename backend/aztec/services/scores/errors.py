"""
Exceptions raised by the weekly quota ledger.

Each carries the HTTP status the API layer answers with, a stable error code
for the frontend, and (for quota rejections) the games left this week.
"""


class LedgerError(Exception):
    """Base exception for score submission and lookup errors."""
    status_code = 400
    error_code = 'ledger_error'

    def __init__(self, message: str, games_left: int = None):
        super().__init__(message)
        self.message = message
        self.games_left = games_left

    def to_dict(self):
        payload = {'error': self.message, 'code': self.error_code}
        if self.games_left is not None:
            payload['gamesLeft'] = self.games_left
        return payload


class InvalidScore(LedgerError):
    """Raised when the submitted score is not an integer within range."""
    error_code = 'invalid_score'

    def __init__(self, score, max_score: int):
        super().__init__(f"Invalid score {score!r}: must be an integer between 1 and {max_score}")
        self.score = score


class PlayerNotFound(LedgerError):
    status_code = 404
    error_code = 'player_not_found'

    def __init__(self, player_id):
        super().__init__('User not found')
        self.player_id = player_id


class WeeklyGameLimitReached(LedgerError):
    status_code = 403
    error_code = 'weekly_game_limit'

    def __init__(self, limit: int):
        super().__init__(f"Weekly limit of {limit} games reached", games_left=0)


class WeeklyPointCapExceeded(LedgerError):
    status_code = 403
    error_code = 'weekly_point_cap'

    def __init__(self, cap: int, week_total: int, games_left: int):
        super().__init__(f"Weekly point cap of {cap} would be exceeded (this week: {week_total})", games_left=games_left)
        self.week_total = week_total


class TransientConflict(LedgerError):
    """Raised when concurrent updates kept winning the compare-and-swap."""
    status_code = 409
    error_code = 'transient_conflict'

    def __init__(self, player_id, attempts: int):
        super().__init__(f"Score update conflicted {attempts} times, please retry")
        self.player_id = player_id
        self.attempts = attempts
