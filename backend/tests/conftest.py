import os
import sys
import pytest

# Ensure the backend root (containing the `aztec` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from aztec import create_app, db


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    JWT_SECRET = 'test-jwt-secret'
    JWT_EXPIRES_SEC = 3600
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    FRONTEND_URL = 'http://localhost:3000'
    BCRYPT_LOG_ROUNDS = 4
    MAX_GAME_SCORE = 30000
    WEEKLY_GAME_LIMIT = 7
    WEEKLY_POINT_CAP = 210000
    SCORE_UPDATE_MAX_RETRIES = 3
    LEADERBOARD_DEFAULT_LIMIT = 20


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import aztec.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_player(flask_app):
    """Insert a player directly, optionally with existing weekly entries."""
    from aztec.models import Player, encode_entries

    def _make(name='player', total_score=0, entries=()):
        player = Player(
            email=f'{name}@example.com',
            display_name=name,
            total_score=total_score,
            weekly_scores=encode_entries(entries),
        )
        db.session.add(player)
        db.session.commit()
        return player.id

    return _make
