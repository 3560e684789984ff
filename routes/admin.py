# routes/admin.py

from flask import Blueprint, current_app, g, jsonify

from routes.auth import admin_required
from routes.main import payload
from voting import (
    Operation,
    Phase,
    current_phase,
    ensure_allowed,
    list_cheaters,
    phase_history,
    recheck,
    set_phase,
)

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')


def change_phase(target):
    ensure_allowed(current_phase(), Operation.ADVANCE_PHASE, g.is_admin)
    entry = set_phase(target)
    current_app.logger.info('%s moved the hackathon to %s', g.email, entry.phase)
    return jsonify(phase=entry.phase)


@admin_bp.route('/phase', methods=['POST'])
@admin_required
def set_phase_view():
    name = payload().get('phase')
    target = Phase.parse(name) if name else None
    if target is None:
        return jsonify(
            error='BadRequest',
            message=f'Unknown phase {name!r}, expected one of: {", ".join(p.value for p in Phase)}.',
        ), 400
    return change_phase(target)


@admin_bp.route('/prev', methods=['POST'])
@admin_required
def prev_phase():
    return change_phase(current_phase().prev)


@admin_bp.route('/next', methods=['POST'])
@admin_required
def next_phase():
    return change_phase(current_phase().next)


@admin_bp.route('/phases')
@admin_required
def phases():
    history = [
        {'phase': entry.phase, 'created_at': entry.created_at.isoformat() if entry.created_at else None}
        for entry in phase_history()
    ]
    return jsonify(current=current_phase().value, history=history)


@admin_bp.route('/cheaters')
@admin_required
def cheaters():
    return jsonify(cheaters=[
        {
            'email': c.email,
            'reason': c.reason,
            'excluded': c.excluded,
            'flagged_at': c.flagged_at.isoformat() if c.flagged_at else None,
        }
        for c in list_cheaters()
    ])


@admin_bp.route('/recheck', methods=['POST'])
@admin_required
def run_recheck():
    flagged = recheck(current_app.config['COINS_TO_SPEND'])
    return jsonify(flagged=flagged)
