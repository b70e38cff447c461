from aztec import db, bcrypt
from flask_login import UserMixin
from datetime import datetime
from urllib.parse import quote
import json

from aztec.services.scores.week import ScoreEntry


def default_avatar(seed):
    """Generated avatar URL for accounts that did not bring a photo."""
    return f'https://avatars.dicebear.com/v2/bottts/{quote(seed or "", safe="")}.svg'


class Player(UserMixin, db.Model):
    __tablename__ = 'player'
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=True, index=True)
    twitter_id = db.Column(db.String(64), unique=True, nullable=True, index=True)
    display_name = db.Column(db.String(128), nullable=False, default='')
    photo = db.Column(db.String(512), nullable=True)
    password_hash = db.Column(db.String(256), nullable=True)
    total_score = db.Column(db.Integer, nullable=False, default=0, index=True)
    weekly_scores = db.Column(db.Text, nullable=False, default='[]')  # JSON-encoded list of {score, date}
    # Bumped by every ledger write; see PlayerStore.compare_and_swap
    version = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now)

    def __init__(self, **kwargs):
        super(Player, self).__init__(**kwargs)
        if self.total_score is None:
            self.total_score = 0
        if self.weekly_scores is None:
            self.weekly_scores = '[]'
        if self.version is None:
            self.version = 0
        if not self.photo:
            self.photo = default_avatar(self.email or self.twitter_id)

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        if not self.password_hash or not password:
            return False
        return bcrypt.check_password_hash(self.password_hash, password)

    def score_entries(self):
        return decode_entries(self.weekly_scores)

    def to_dict(self):
        return {
            '_id': self.id,
            'displayName': self.display_name,
            'email': self.email,
            'photo': self.photo,
            'totalScore': self.total_score or 0,
        }


class Game(db.Model):
    """One accepted game score; kept after the weekly window prunes it."""
    __tablename__ = 'game'
    id = db.Column(db.Integer, primary_key=True)
    player_id = db.Column(db.Integer, db.ForeignKey('player.id'), nullable=False, index=True)
    score = db.Column(db.Integer, nullable=False)
    played_at = db.Column(db.DateTime, nullable=False, default=datetime.now)
    player = db.relationship('Player', backref=db.backref('games', lazy='dynamic'))

    def to_dict(self):
        return {
            'id': self.id,
            'player_id': self.player_id,
            'score': self.score,
            'date': self.played_at.isoformat() if self.played_at else None,
        }


def decode_entries(raw):
    """Decode the weekly_scores column into ScoreEntry tuples, oldest first."""
    if not raw:
        return []
    return [ScoreEntry.from_dict(item) for item in json.loads(raw)]


def encode_entries(entries):
    return json.dumps([e.to_dict() for e in entries])
