# models/cheater.py

from extensions import db


class Cheater(db.Model):
    __tablename__ = 'cheaters'
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String, unique=True, nullable=False)
    # Rendered rejection that caused the (latest) flag, e.g. "SelfVote(3)".
    reason = db.Column(db.String, nullable=False)
    flagged_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())
    # True while the stored allocation is excluded from tallies. A valid
    # resubmission clears it, the row itself is never deleted.
    excluded = db.Column(db.Boolean, nullable=False, default=True)
