# models/team_membership.py

from extensions import db
from sqlalchemy import UniqueConstraint


class TeamMembership(db.Model):
    __tablename__ = 'team_memberships'
    id = db.Column(db.Integer, primary_key=True)
    team_id = db.Column(db.Integer, db.ForeignKey('teams.id', ondelete='CASCADE'), nullable=False)
    member_email = db.Column(db.String, nullable=False, index=True)
    joined_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    __table_args__ = (
        # A person can be in several teams, but in a given team at most once.
        UniqueConstraint('team_id', 'member_email', name='unique_team_member'),
    )
