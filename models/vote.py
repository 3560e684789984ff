# models/vote.py

from extensions import db
from sqlalchemy import CheckConstraint


class Vote(db.Model):
    __tablename__ = 'votes'
    id = db.Column(db.Integer, primary_key=True)
    voter_email = db.Column(db.String, nullable=False, index=True)
    team_id = db.Column(db.Integer, db.ForeignKey('teams.id', ondelete='CASCADE'), nullable=False)
    points = db.Column(db.Integer, nullable=False)
    updated_at = db.Column(
        db.DateTime,
        server_default=db.func.current_timestamp(),
        onupdate=db.func.current_timestamp(),
    )

    __table_args__ = (
        # One row per voter and team, otherwise the quadratic cost could be
        # sidestepped by splitting points over several rows.
        db.UniqueConstraint('voter_email', 'team_id', name='unique_vote'),
        CheckConstraint("points >= 0", name="check_vote_points"),
    )
