# models/team.py

from extensions import db


class Team(db.Model):
    __tablename__ = 'teams'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String, unique=True, nullable=False)
    creator_email = db.Column(db.String, nullable=False, index=True)
    description = db.Column(db.Text, nullable=False, default='')
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    # Deleting a team removes its votes and memberships before the team row.
    memberships = db.relationship(
        'TeamMembership', backref='team', lazy=True,
        order_by='TeamMembership.id', cascade="all, delete-orphan",
    )
    votes = db.relationship('Vote', backref='team', lazy=True, cascade="all, delete-orphan")
