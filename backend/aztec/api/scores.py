from datetime import datetime
from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required, current_user
from aztec.services.scores import QuotaLedger, QuotaPolicy, LedgerError
from aztec.services.scores.store import PlayerStore


scores = Blueprint('scores', __name__)


def _ledger() -> QuotaLedger:
    cfg = current_app.config
    return QuotaLedger(
        PlayerStore(),
        QuotaPolicy.from_config(cfg),
        clock=cfg.get('SCORE_CLOCK') or datetime.now,
        log=current_app.logger,
    )


@scores.errorhandler(LedgerError)
def handle_ledger_error(err: LedgerError):
    return jsonify(err.to_dict()), err.status_code


@scores.route('/me', methods=['GET'])
@login_required
def me():
    return jsonify(_ledger().player_summary(current_user.id))


@scores.route('/update-score/<int:player_id>', methods=['POST'])
@login_required
def update_score(player_id):
    if current_user.id != player_id:
        return jsonify({'error': 'Forbidden'}), 403
    data = request.get_json(silent=True) or {}
    return jsonify(_ledger().submit_score(player_id, data.get('score')))


@scores.route('/score', methods=['POST'])
@login_required
def submit_score():
    data = request.get_json(silent=True) or {}
    result = _ledger().submit_score(current_user.id, data.get('score'))
    result['message'] = 'Score submitted'
    return jsonify(result)


@scores.route('/leaderboard', methods=['GET'])
def leaderboard():
    raw = (request.args.get('limit') or '').strip().lower()
    if raw == 'all':
        limit = None
    elif raw == '':
        limit = int(current_app.config.get('LEADERBOARD_DEFAULT_LIMIT', 20))
    else:
        try:
            limit = int(raw)
        except ValueError:
            limit = 0
        if limit <= 0:
            return jsonify({'error': 'limit must be a positive integer or "all"'}), 400
    return jsonify(_ledger().leaderboard(limit))
