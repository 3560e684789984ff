"""Team management. Every operation is only possible during registration."""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from extensions import db
from models import Team, TeamMembership
from voting.errors import DuplicateTeamName, InvalidTeam, PermissionDenied, TeamLimitReached, TeamNotFound
from voting.gate import Operation, ensure_allowed
from voting.membership import is_member
from voting.phases import current_phase
from voting.store import atomic

logger = logging.getLogger(__name__)


def get_team(team_id):
    team = db.session.get(Team, team_id)
    if team is None:
        raise TeamNotFound(team_id)
    return team


def list_teams():
    return Team.query.order_by(func.lower(Team.name).asc(), Team.id.asc()).all()


def count_teams_by_creator(creator_email):
    return Team.query.filter_by(creator_email=creator_email).count()


def _clean_name(name):
    if name is not None and not isinstance(name, str):
        raise InvalidTeam('The team name must be text.')
    name = (name or '').strip()
    if not name:
        raise InvalidTeam('The team name cannot be empty.')
    return name


def _clean_description(description):
    if description is not None and not isinstance(description, str):
        raise InvalidTeam('The team description must be text.')
    return (description or '').strip()


def _ensure_can_manage(team, email, is_admin):
    if not is_admin and team.creator_email != email:
        raise PermissionDenied('Only the creator of a team can change it.')


def create_team(creator_email, name, description, max_teams_per_creator):
    """Create a team; its creator becomes the first member."""
    ensure_allowed(current_phase(), Operation.CREATE_TEAM)
    name = _clean_name(name)
    description = _clean_description(description)
    if count_teams_by_creator(creator_email) >= max_teams_per_creator:
        raise TeamLimitReached(max_teams_per_creator)

    team = Team(name=name, creator_email=creator_email, description=description)
    try:
        with atomic():
            db.session.add(team)
            db.session.flush()
            db.session.add(TeamMembership(team_id=team.id, member_email=creator_email))
    except IntegrityError as e:
        raise DuplicateTeamName(name) from e

    logger.info('%s created team %d "%s"', creator_email, team.id, name)
    return team


def edit_team(team_id, email, name, description, is_admin=False):
    ensure_allowed(current_phase(), Operation.EDIT_TEAM)
    team = get_team(team_id)
    _ensure_can_manage(team, email, is_admin)
    name = _clean_name(name)
    description = _clean_description(description)
    try:
        with atomic():
            team.name = name
            team.description = description
    except IntegrityError as e:
        raise DuplicateTeamName(name) from e
    return team


def delete_team(team_id, email, is_admin=False):
    """Delete a team together with its memberships and any votes cast for it."""
    ensure_allowed(current_phase(), Operation.DELETE_TEAM)
    team = get_team(team_id)
    _ensure_can_manage(team, email, is_admin)
    name = team.name
    with atomic():
        db.session.delete(team)
    logger.info('%s deleted team %d "%s"', email, team_id, name)


def join_team(team_id, email):
    """Add ``email`` to the team. Returns False if it already was a member."""
    ensure_allowed(current_phase(), Operation.JOIN_TEAM)
    get_team(team_id)
    if is_member(email, team_id):
        return False
    try:
        with atomic():
            db.session.add(TeamMembership(team_id=team_id, member_email=email))
    except IntegrityError:
        # Joined concurrently by another request; the membership exists.
        return False
    logger.info('%s joined team %d', email, team_id)
    return True


def leave_team(team_id, email):
    """Remove ``email`` from the team. Returns False if it was not a member."""
    ensure_allowed(current_phase(), Operation.LEAVE_TEAM)
    get_team(team_id)
    with atomic():
        removed = TeamMembership.query.filter_by(team_id=team_id, member_email=email).delete()
    if removed:
        logger.info('%s left team %d', email, team_id)
    return bool(removed)
