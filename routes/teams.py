# routes/teams.py
# Team management: only during registration, enforced in voting.teams.

from flask import Blueprint, current_app, g, jsonify

from routes.auth import login_required
from routes.main import payload
from voting import InvalidTeam, members_of
from voting.teams import create_team, delete_team, edit_team, join_team, leave_team

teams_bp = Blueprint('teams', __name__)


def team_id_from(data):
    value = data.get('team_id')
    if isinstance(value, (bool, float)):
        raise InvalidTeam('A numeric team_id is required.')
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidTeam('A numeric team_id is required.')


def team_json(team):
    return {
        'id': team.id,
        'name': team.name,
        'description': team.description,
        'creator_email': team.creator_email,
        'members': members_of(team.id),
    }


@teams_bp.route('/create-team', methods=['POST'])
@login_required
def create():
    data = payload()
    team = create_team(
        g.email,
        data.get('name'),
        data.get('description'),
        current_app.config['MAX_TEAMS_PER_CREATOR'],
    )
    return jsonify(status='created', team=team_json(team)), 201


@teams_bp.route('/edit-team', methods=['POST'])
@login_required
def edit():
    data = payload()
    team = edit_team(team_id_from(data), g.email, data.get('name'), data.get('description'), g.is_admin)
    return jsonify(status='updated', team=team_json(team))


@teams_bp.route('/delete-team', methods=['POST'])
@login_required
def delete():
    team_id = team_id_from(payload())
    delete_team(team_id, g.email, g.is_admin)
    return jsonify(status='deleted', team_id=team_id)


@teams_bp.route('/join-team', methods=['POST'])
@login_required
def join():
    team_id = team_id_from(payload())
    joined = join_team(team_id, g.email)
    return jsonify(status='joined' if joined else 'already a member', team_id=team_id)


@teams_bp.route('/leave-team', methods=['POST'])
@login_required
def leave():
    team_id = team_id_from(payload())
    left = leave_team(team_id, g.email)
    return jsonify(status='left' if left else 'not a member', team_id=team_id)
