from typing import List, NamedTuple, Optional

from sqlalchemy import update

from aztec import db
from aztec.models import Game, Player, decode_entries, encode_entries
from .week import ScoreEntry


class PlayerSnapshot(NamedTuple):
    id: int
    display_name: str
    email: Optional[str]
    photo: Optional[str]
    total_score: int
    weekly_scores: List[ScoreEntry]
    version: int


def _snapshot(player: Player) -> PlayerSnapshot:
    return PlayerSnapshot(
        id=player.id,
        display_name=player.display_name,
        email=player.email,
        photo=player.photo,
        total_score=player.total_score or 0,
        weekly_scores=decode_entries(player.weekly_scores),
        version=player.version or 0,
    )


class PlayerStore:
    """Player records as seen by the quota ledger."""

    def __init__(self, session=None):
        self.session = session or db.session

    def fetch(self, player_id) -> Optional[PlayerSnapshot]:
        # Always read the committed row, never a stale identity-map copy
        player = self.session.get(Player, player_id, populate_existing=True)
        if player is None:
            return None
        return _snapshot(player)

    def compare_and_swap(self, player_id, expected_version: int, total_score: int, weekly_scores: List[ScoreEntry], accepted: Optional[ScoreEntry] = None) -> bool:
        """Write score fields only if the row still carries ``expected_version``.

        ``accepted``, when given, is recorded as a Game row in the same
        transaction. Commits and returns True on success; rolls back and
        returns False when another writer got there first.
        """
        stmt = (
            update(Player)
            .where(Player.id == player_id, Player.version == expected_version)
            .values(
                total_score=total_score,
                weekly_scores=encode_entries(weekly_scores),
                version=expected_version + 1,
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.session.execute(stmt)
            if result.rowcount != 1:
                self.session.rollback()
                return False
            if accepted is not None:
                self.session.add(Game(player_id=player_id, score=accepted.score, played_at=accepted.date))
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return True

    def ranked(self, limit: Optional[int] = None) -> List[PlayerSnapshot]:
        query = self.session.query(Player).order_by(Player.total_score.desc(), Player.id.asc())
        if limit is not None:
            query = query.limit(limit)
        return [_snapshot(p) for p in query.all()]
