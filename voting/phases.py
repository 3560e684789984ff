"""Phase store: the append-only phase log and the current phase derived from it."""

import enum
import logging

from extensions import db
from models import PhaseEntry
from voting.store import atomic

logger = logging.getLogger(__name__)


class Phase(str, enum.Enum):
    REGISTRATION = 'registration'
    PRESENTATION = 'presentation'
    EVALUATION = 'evaluation'
    REVELATION = 'revelation'
    CELEBRATION = 'celebration'

    @classmethod
    def parse(cls, name):
        """Return the phase called ``name`` (case-insensitive), or None."""
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            return None

    @property
    def prev(self):
        members = list(Phase)
        return members[max(members.index(self) - 1, 0)]

    @property
    def next(self):
        members = list(Phase)
        return members[min(members.index(self) + 1, len(members) - 1)]


def current_phase():
    """The phase of the latest log entry; Registration if the log is empty."""
    entry = PhaseEntry.query.order_by(PhaseEntry.id.desc()).first()
    if entry is None:
        return Phase.REGISTRATION
    phase = Phase.parse(entry.phase)
    if phase is None:
        logger.warning('Unknown phase %r in the log, assuming registration.', entry.phase)
        return Phase.REGISTRATION
    return phase


def set_phase(phase):
    """Append ``phase`` to the log. Earlier entries are never edited."""
    previous = current_phase()
    entry = PhaseEntry(phase=Phase(phase).value)
    with atomic():
        db.session.add(entry)
    logger.info('Phase changed: %s -> %s', previous.value, entry.phase)
    return entry


def phase_history():
    return PhaseEntry.query.order_by(PhaseEntry.id.asc()).all()
