# models/phase_entry.py

from extensions import db
from sqlalchemy import CheckConstraint


class PhaseEntry(db.Model):
    """One row of the append-only phase log. The latest row is the current phase."""
    __tablename__ = 'progress'
    id = db.Column(db.Integer, primary_key=True)
    phase = db.Column(db.String(20), nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    __table_args__ = (
        CheckConstraint(
            "phase IN ('registration', 'presentation', 'evaluation', 'revelation', 'celebration')",
            name="check_phase",
        ),
    )
