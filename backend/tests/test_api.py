from datetime import datetime, timedelta, timezone

from aztec import db
from config import Config
from aztec.models import Player, encode_entries
from aztec.services.scores import ScoreEntry


def register(client, email='alice@example.com', password='secret', display_name='Alice'):
    return client.post('/auth/register', json={'email': email, 'password': password, 'displayName': display_name})


def bearer(token):
    return {'Authorization': f'Bearer {token}'}


def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_register_returns_user_and_token(client):
    res = register(client)
    assert res.status_code == 201
    data = res.get_json()
    assert data['user']['displayName'] == 'Alice'
    assert data['user']['totalScore'] == 0
    assert data['user']['photo'].startswith('https://avatars.dicebear.com/')
    assert data['token']


def test_register_requires_fields_and_unique_email(client):
    assert client.post('/auth/register', json={'email': 'x@example.com'}).status_code == 400
    assert register(client).status_code == 201
    res = register(client, email='ALICE@example.com')
    assert res.status_code == 400
    assert res.get_json()['error'] == 'Email already in use'


def test_login(client):
    register(client)
    fresh = client.application.test_client()
    res = fresh.post('/auth/login', json={'email': 'alice@example.com', 'password': 'secret'})
    assert res.status_code == 200
    assert res.get_json()['token']
    bad = fresh.post('/auth/login', json={'email': 'alice@example.com', 'password': 'nope'})
    assert bad.status_code == 400


def test_me_requires_auth(client):
    res = client.get('/api/me')
    assert res.status_code == 401
    assert res.get_json()['error'] == 'Unauthorized'


def test_me_with_bearer_token(client):
    token = register(client).get_json()['token']
    fresh = client.application.test_client()
    res = fresh.get('/api/me', headers=bearer(token))
    assert res.status_code == 200
    data = res.get_json()
    assert data['gamesThisWeek'] == 0
    assert data['gamesLeft'] == 7
    assert data['email'] == 'alice@example.com'


def test_bad_token_is_rejected(client):
    fresh = client.application.test_client()
    assert fresh.get('/api/me', headers=bearer('not-a-token')).status_code == 401


def test_update_score_flow(client):
    data = register(client).get_json()
    pid, token = data['user']['_id'], data['token']
    res = client.post(f'/api/update-score/{pid}', json={'score': 500}, headers=bearer(token))
    assert res.status_code == 200
    assert res.get_json() == {'totalScore': 500, 'gamesThisWeek': 1, 'gamesLeft': 6}
    me = client.get('/api/me', headers=bearer(token)).get_json()
    assert me['totalScore'] == 500
    assert me['gamesLeft'] == 6


def test_update_score_for_someone_else_is_forbidden(client):
    other = register(client, email='bob@example.com').get_json()['user']['_id']
    token = register(client).get_json()['token']
    res = client.post(f'/api/update-score/{other}', json={'score': 100}, headers=bearer(token))
    assert res.status_code == 403


def test_invalid_score_is_400(client):
    data = register(client).get_json()
    res = client.post('/api/score', json={'score': 40000}, headers=bearer(data['token']))
    assert res.status_code == 400
    assert res.get_json()['code'] == 'invalid_score'
    res = client.post('/api/score', json={'score': '--5'}, headers=bearer(data['token']))
    assert res.status_code == 400
    assert res.get_json()['code'] == 'invalid_score'
    res = client.post('/api/score', data='not json', headers=bearer(data['token']))
    assert res.status_code == 400


def test_weekly_limit_is_403_with_games_left(client):
    data = register(client).get_json()
    pid = data['user']['_id']
    player = db.session.get(Player, pid)
    recent = datetime.now() - timedelta(seconds=5)
    player.weekly_scores = encode_entries([ScoreEntry(10, recent)] * 7)
    db.session.commit()
    res = client.post('/api/score', json={'score': 100}, headers=bearer(data['token']))
    assert res.status_code == 403
    body = res.get_json()
    assert body['code'] == 'weekly_game_limit'
    assert body['gamesLeft'] == 0


def test_score_route_uses_session_login(client):
    register(client)
    res = client.post('/api/score', json={'score': 250})
    assert res.status_code == 200
    body = res.get_json()
    assert body['message'] == 'Score submitted'
    assert body['totalScore'] == 250


def test_leaderboard_order_and_limit(client):
    for i, total in enumerate([300, 100, 200]):
        db.session.add(Player(email=f'p{i}@example.com', display_name=f'p{i}', total_score=total))
    db.session.commit()
    rows = client.get('/api/leaderboard').get_json()
    assert [r['totalScore'] for r in rows] == [300, 200, 100]
    assert all(r['gamesLeft'] == 7 for r in rows)
    assert len(client.get('/api/leaderboard?limit=2').get_json()) == 2
    assert len(client.get('/api/leaderboard?limit=all').get_json()) == 3
    assert client.get('/api/leaderboard?limit=zero').status_code == 400
    assert client.get('/api/leaderboard?limit=-1').status_code == 400


def test_logout(client):
    register(client)
    assert client.post('/auth/logout').status_code == 200
    assert client.get('/api/me').status_code == 401


def test_score_clock_defaults_to_wall_clock():
    assert Config.SCORE_CLOCK is None


def test_configured_clock_drives_the_weekly_window(flask_app, client):
    flask_app.config['SCORE_CLOCK'] = lambda: datetime(2025, 9, 17, 15, 30, tzinfo=timezone.utc)
    data = register(client).get_json()
    player = db.session.get(Player, data['user']['_id'])
    player.weekly_scores = encode_entries([
        ScoreEntry(10, datetime(2025, 9, 10, 12, 0)),
        ScoreEntry(10, datetime(2025, 9, 15, 12, 0)),
    ])
    db.session.commit()
    res = client.post('/api/score', json={'score': 100}, headers=bearer(data['token']))
    assert res.status_code == 200
    assert res.get_json()['gamesThisWeek'] == 2
    me = client.get('/api/me', headers=bearer(data['token'])).get_json()
    assert me['gamesLeft'] == 5
