"""Vote ledger: stores each voter's current allocation, one row per (voter, team)."""

import logging
from collections import defaultdict

from extensions import db
from models import Cheater, Vote
from voting.gate import Operation, ensure_allowed
from voting.phases import current_phase
from voting.store import atomic
from voting.validator import normalize, validate_for

logger = logging.getLogger(__name__)


def allocation_of(voter_email):
    return {v.team_id: v.points for v in Vote.query.filter_by(voter_email=voter_email)}


def stored_allocations():
    """All stored allocations as ``{voter_email: {team_id: points}}``."""
    result = defaultdict(dict)
    for vote in Vote.query.order_by(Vote.voter_email, Vote.team_id):
        result[vote.voter_email][vote.team_id] = vote.points
    return dict(result)


def submit(voter_email, allocation, budget):
    """Replace the voter's allocation, all or nothing.

    The allocation is validated as a unit before any row is written. On
    success, rows are updated or inserted for every non-zero team and deleted
    for every other team, in one transaction, and a cheater exclusion for the
    voter is lifted. Returns the validator's verdict either way.
    """
    verdict = validate_for(voter_email, allocation, budget)
    if not verdict.accepted:
        logger.info('Rejected vote from %s: %s', voter_email, verdict)
        return verdict

    points_by_team = normalize(allocation)
    with atomic():
        existing = {v.team_id: v for v in Vote.query.filter_by(voter_email=voter_email)}
        for team_id, vote in existing.items():
            if team_id not in points_by_team:
                db.session.delete(vote)
        for team_id, points in points_by_team.items():
            vote = existing.get(team_id)
            if vote:
                vote.points = points
            else:
                db.session.add(Vote(voter_email=voter_email, team_id=team_id, points=points))

        cheater = Cheater.query.filter_by(email=voter_email, excluded=True).first()
        if cheater:
            cheater.excluded = False

    logger.info('Accepted vote from %s costing %d coins: %s', voter_email, verdict.cost, points_by_team)
    return verdict


def submit_vote(voter_email, allocation, budget):
    """``submit``, allowed only while the current phase accepts votes."""
    ensure_allowed(current_phase(), Operation.CAST_VOTE)
    return submit(voter_email, allocation, budget)
