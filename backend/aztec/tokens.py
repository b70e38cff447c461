import time
from typing import Optional

import jwt
from flask import current_app

JWT_ALGO = 'HS256'


def issue_token(player) -> str:
    cfg = current_app.config
    now = int(time.time())
    payload = {
        'sub': str(player.id),
        'email': player.email,
        'iat': now,
        'exp': now + int(cfg.get('JWT_EXPIRES_SEC', 86400)),
    }
    return jwt.encode(payload, cfg['JWT_SECRET'], algorithm=JWT_ALGO)


def decode_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, current_app.config['JWT_SECRET'], algorithms=[JWT_ALGO])
    except jwt.InvalidTokenError:
        return None


def player_id_from_request(request) -> Optional[int]:
    """Player id carried by an ``Authorization: Bearer`` header, if valid."""
    auth_header = request.headers.get('Authorization', '')
    if not auth_header.startswith('Bearer '):
        return None
    data = decode_token(auth_header.split(' ', 1)[1].strip())
    if not data:
        return None
    try:
        return int(data['sub'])
    except (KeyError, TypeError, ValueError):
        return None
