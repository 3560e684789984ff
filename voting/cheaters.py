"""Cheater registry.

A voter is flagged when an allocation that was accepted earlier no longer
passes validation, typically because the voter joined a team they voted for.
Flagged voters stay listed for the rest of the event; their votes are left
out of tallies until they submit a valid allocation again.
"""

import logging

from extensions import db
from models import Cheater
from voting.ledger import stored_allocations
from voting.store import atomic
from voting.validator import validate_for

logger = logging.getLogger(__name__)


def flag(email, rejection):
    """Mark ``email`` as excluded. Returns False if it already was.

    Does not commit; call inside ``atomic()``.
    """
    cheater = Cheater.query.filter_by(email=email).first()
    if cheater is None:
        db.session.add(Cheater(email=email, reason=str(rejection), excluded=True))
        return True
    if cheater.excluded:
        return False
    cheater.excluded = True
    cheater.reason = str(rejection)
    cheater.flagged_at = db.func.current_timestamp()
    return True


def recheck(budget):
    """Re-validate every stored allocation against current membership.

    Returns the emails that were newly flagged.
    """
    flagged = []
    with atomic():
        for email, allocation in stored_allocations().items():
            verdict = validate_for(email, allocation, budget)
            if verdict.accepted:
                continue
            if flag(email, verdict):
                flagged.append(email)
                logger.warning('Flagged %s as cheater: %s', email, verdict)
    return flagged


def excluded_emails():
    return {email for (email,) in Cheater.query.filter_by(excluded=True).with_entities(Cheater.email)}


def list_cheaters():
    return Cheater.query.order_by(Cheater.id.asc()).all()
