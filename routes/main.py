# routes/main.py

from flask import Blueprint, current_app, g, jsonify, request
from werkzeug.exceptions import BadRequest

from routes.auth import display_email, login_required
from voting import (
    InvalidRequest,
    Operation,
    Phase,
    allocation_of,
    can_perform,
    cost_of,
    current_phase,
    ensure_allowed,
    members_of,
    submit_vote,
    tally,
)
from voting.teams import list_teams

main_bp = Blueprint('main', __name__)


def payload():
    """JSON object if the request declares a JSON body, form fields otherwise.

    A JSON body that does not parse, or that is not an object, is rejected.
    """
    if not request.is_json:
        return request.form
    try:
        data = request.get_json()
    except BadRequest as e:
        raise InvalidRequest('The request body is not valid JSON.') from e
    if not isinstance(data, dict):
        raise InvalidRequest('The request body must be a JSON object.')
    return data


def results_operation():
    return Operation.VIEW_RESULTS_ADMIN if g.is_admin else Operation.VIEW_RESULTS_PUBLIC


def parse_points(value):
    """Turn form or JSON input into an int where that is unambiguous.

    Anything else is passed through unchanged so the validator rejects it
    with a precise reason instead of the request failing here.
    """
    if isinstance(value, str):
        text = value.strip()
        if text == '':
            return 0
        try:
            return int(text)
        except ValueError:
            return value
    return value


def parse_allocation(data):
    """Read ``{"votes": {"<team id>": points}}`` or form fields ``team-<id>``.

    The whole allocation replaces the stored one, so a request that names no
    teams at all is refused; ``{"votes": {}}`` withdraws every vote.
    """
    if 'votes' in data:
        votes = data['votes']
        if not isinstance(votes, dict):
            raise InvalidRequest('"votes" must be an object keyed by team id.')
        items = list(votes.items())
    else:
        pairs = data.items(multi=True) if hasattr(data, 'getlist') else data.items()
        items = [(key[len('team-'):], value) for key, value in pairs if key.startswith('team-')]
        if not items:
            raise InvalidRequest('No votes given. Send "votes": {} to withdraw all votes.')

    allocation = {}
    for key, value in items:
        try:
            team_id = int(key)
        except (TypeError, ValueError):
            raise InvalidRequest(f'{key!r} is not a team id.')
        if team_id in allocation:
            raise InvalidRequest(f'Team {team_id} is listed more than once.')
        allocation[team_id] = parse_points(value)
    return allocation


def serialize_scores(scores):
    return [{'team_id': s.team_id, 'name': s.name, 'points': s.points} for s in scores]


@main_bp.route('/')
@login_required
def index():
    phase = current_phase()
    budget = current_app.config['COINS_TO_SPEND']
    my_votes = allocation_of(g.email)

    teams = []
    for team in list_teams():
        members = members_of(team.id)
        teams.append({
            'id': team.id,
            'name': team.name,
            'description': team.description,
            'creator': display_email(team.creator_email),
            'members': [display_email(m) for m in members],
            'is_member': g.email in members,
            'my_points': my_votes.get(team.id, 0),
        })

    overview = {
        'phase': phase.value,
        'user': {'email': g.email, 'name': display_email(g.email), 'is_admin': g.is_admin},
        'coins_to_spend': budget,
        'coins_spent': cost_of(my_votes),
        'can': {
            op.name.lower(): bool(can_perform(phase, op, g.is_admin))
            for op in (Operation.CREATE_TEAM, Operation.CAST_VOTE, Operation.ADVANCE_PHASE)
        },
        'teams': teams,
    }
    if can_perform(phase, results_operation(), g.is_admin):
        overview['results'] = serialize_scores(tally(phase, budget))
    return jsonify(overview)


@main_bp.route('/vote', methods=['POST'])
@login_required
def vote():
    allocation = parse_allocation(payload())
    verdict = submit_vote(g.email, allocation, current_app.config['COINS_TO_SPEND'])
    if not verdict.accepted:
        return jsonify(verdict.as_dict()), 422
    return jsonify(
        status='accepted',
        cost=verdict.cost,
        votes={str(k): v for k, v in allocation_of(g.email).items()},
        message='Your vote has been recorded. You can still change it while voting is open.',
    )


@main_bp.route('/results')
@login_required
def results():
    phase = current_phase()
    # Raises PhaseViolation when the caller may not see results yet.
    ensure_allowed(phase, results_operation(), g.is_admin)
    scores = tally(phase, current_app.config['COINS_TO_SPEND'])
    return jsonify(phase=phase.value, order='ascending' if phase == Phase.REVELATION else 'descending',
                   results=serialize_scores(scores))
