from flask import Blueprint, request, jsonify, current_app
from flask_login import login_user, logout_user, login_required
from aztec import db
from aztec.models import Player
from aztec.tokens import issue_token

auth = Blueprint('auth', __name__)

@auth.route('/register', methods=['POST', 'OPTIONS'])
def register():
    if request.method == 'OPTIONS':
        return jsonify({'status': 'ok'}), 200
    data = request.get_json(silent=True) or {}
    email = (data.get('email') or '').strip().lower()
    password = data.get('password')
    if not email or not password:
        return jsonify({'error': 'Email and password required'}), 400

    if Player.query.filter_by(email=email).first():
        return jsonify({'error': 'Email already in use'}), 400

    new_player = Player(email=email, display_name=(data.get('displayName') or '').strip())
    new_player.set_password(password)
    db.session.add(new_player)
    db.session.commit()
    login_user(new_player)
    current_app.logger.info(f"[register] player={new_player.id}")
    return jsonify({
        'message': 'User registered',
        'user': new_player.to_dict(),
        'token': issue_token(new_player),
    }), 201

@auth.route('/login', methods=['POST', 'OPTIONS'])
def login():
    if request.method == 'OPTIONS':
        return jsonify({'status': 'ok'}), 200
    data = request.get_json(silent=True) or {}
    email = (data.get('email') or '').strip().lower()
    password = data.get('password')
    if not email or not password:
        return jsonify({'error': 'Email and password required'}), 400

    player = Player.query.filter_by(email=email).first()
    if not player or not player.check_password(password):
        return jsonify({'error': 'Invalid credentials'}), 400

    login_user(player, remember=True)
    current_app.logger.info(f"[login] player={player.id}")
    return jsonify({
        'message': 'Login successful',
        'user': player.to_dict(),
        'token': issue_token(player),
    })

@auth.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'success': True})
