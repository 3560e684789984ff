"""Tests for the vote ledger: upsert semantics, atomicity and phase gating."""

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from models import Cheater, Vote
from extensions import db
from voting import (
    Accepted,
    BudgetExceeded,
    Phase,
    PhaseViolation,
    SelfVote,
    StoreUnavailable,
    UnknownTeam,
    allocation_of,
    set_phase,
    submit,
    submit_vote,
)

VOTER = 'voter@example.com'


@pytest.fixture
def teams(make_team):
    return {
        'A': make_team('Alpha', members=[VOTER]),
        'B': make_team('Bravo'),
        'C': make_team('Charlie'),
    }


def test_accepted_allocation_is_stored(teams):
    verdict = submit(VOTER, {teams['B']: 3, teams['C']: 0}, 100)
    assert verdict == Accepted(9)
    assert allocation_of(VOTER) == {teams['B']: 3}


def test_resubmission_replaces_instead_of_accumulating(teams):
    submit(VOTER, {teams['B']: 3}, 100)
    submit(VOTER, {teams['B']: 0, teams['C']: 2}, 100)
    assert allocation_of(VOTER) == {teams['C']: 2}


def test_resubmission_updates_points_in_place(teams):
    submit(VOTER, {teams['B']: 3}, 100)
    first_id = Vote.query.filter_by(voter_email=VOTER).one().id
    submit(VOTER, {teams['B']: 5}, 100)
    vote = Vote.query.filter_by(voter_email=VOTER).one()
    assert vote.id == first_id
    assert vote.points == 5


def test_same_allocation_twice_is_idempotent(teams):
    allocation = {teams['B']: 4, teams['C']: 2}
    submit(VOTER, allocation, 100)
    once = sorted((v.team_id, v.points) for v in Vote.query)
    submit(VOTER, allocation, 100)
    twice = sorted((v.team_id, v.points) for v in Vote.query)
    assert once == twice
    assert Vote.query.count() == 2


def test_omitted_teams_are_reset(teams):
    submit(VOTER, {teams['B']: 3, teams['C']: 3}, 100)
    submit(VOTER, {}, 100)
    assert allocation_of(VOTER) == {}


def test_rejection_writes_nothing(teams):
    submit(VOTER, {teams['B']: 3}, 100)
    verdict = submit(VOTER, {teams['B']: 1, teams['C']: 10}, 100)
    assert verdict == BudgetExceeded(101, 100)
    assert allocation_of(VOTER) == {teams['B']: 3}


def test_self_vote_is_rejected_as_a_whole(teams):
    verdict = submit(VOTER, {teams['A']: 5, teams['B']: 3, teams['C']: 0}, 100)
    assert verdict == SelfVote(teams['A'])
    assert Vote.query.count() == 0


def test_vote_for_missing_team(teams):
    assert submit(VOTER, {12345: 1}, 100) == UnknownTeam(12345)


def test_votes_of_other_voters_are_untouched(teams):
    submit('other@example.com', {teams['A']: 2}, 100)
    submit(VOTER, {teams['B']: 2}, 100)
    submit(VOTER, {}, 100)
    assert allocation_of('other@example.com') == {teams['A']: 2}


def test_valid_resubmission_lifts_cheater_exclusion(teams):
    db.session.add(Cheater(email=VOTER, reason='SelfVote(1)', excluded=True))
    db.session.commit()
    submit(VOTER, {teams['C']: 4}, 100)
    cheater = Cheater.query.filter_by(email=VOTER).one()
    assert cheater.excluded is False


def test_failed_commit_keeps_previous_allocation(teams, monkeypatch):
    """A store failure mid-submit rolls back every row of the new allocation."""
    submit(VOTER, {teams['B']: 3}, 100)
    db.session.add(Cheater(email=VOTER, reason='SelfVote(1)', excluded=True))
    db.session.commit()

    def locked(self):
        raise OperationalError('COMMIT', {}, Exception('database is locked'))

    with monkeypatch.context() as m:
        m.setattr(Session, 'commit', locked)
        with pytest.raises(StoreUnavailable):
            submit(VOTER, {teams['B']: 0, teams['C']: 4}, 100)

    assert allocation_of(VOTER) == {teams['B']: 3}
    assert Vote.query.count() == 1
    assert Cheater.query.filter_by(email=VOTER).one().excluded is True


class TestPhaseGating:
    def test_vote_during_presentation_is_a_phase_violation(self, teams):
        set_phase(Phase.PRESENTATION)
        with pytest.raises(PhaseViolation):
            submit_vote(VOTER, {teams['B']: 1}, 100)
        assert Vote.query.count() == 0

    def test_invalid_vote_outside_evaluation_still_reports_phase(self, teams):
        set_phase(Phase.PRESENTATION)
        with pytest.raises(PhaseViolation):
            submit_vote(VOTER, {teams['A']: 50}, 100)

    def test_vote_during_evaluation(self, teams):
        set_phase(Phase.EVALUATION)
        assert submit_vote(VOTER, {teams['B']: 1}, 100) == Accepted(1)
