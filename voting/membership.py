"""Membership oracle. Always reads the store: membership may change between votes."""

from models import TeamMembership


def is_member(email, team_id):
    return TeamMembership.query.filter_by(member_email=email, team_id=team_id).first() is not None


def teams_of(email):
    rows = TeamMembership.query.filter_by(member_email=email).with_entities(TeamMembership.team_id)
    return {team_id for (team_id,) in rows}


def members_of(team_id):
    rows = (
        TeamMembership.query.filter_by(team_id=team_id)
        .order_by(TeamMembership.id.asc())
        .with_entities(TeamMembership.member_email)
    )
    return [email for (email,) in rows]
