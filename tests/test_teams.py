"""Tests for team management and its phase gating."""

import pytest

from extensions import db
from models import Team, TeamMembership, Vote
from voting import (
    DuplicateTeamName,
    InvalidTeam,
    Phase,
    PermissionDenied,
    PhaseViolation,
    TeamLimitReached,
    TeamNotFound,
    is_member,
    members_of,
    set_phase,
    submit,
    teams_of,
)
from voting.teams import create_team, delete_team, edit_team, join_team, leave_team, list_teams

ALICE = 'alice@example.com'
BOB = 'bob@example.com'


def test_creator_becomes_member(app):
    team = create_team(ALICE, '  Robots  ', 'Beep.', 2)
    assert team.name == 'Robots'
    assert members_of(team.id) == [ALICE]
    assert teams_of(ALICE) == {team.id}


def test_empty_name_is_rejected(app):
    with pytest.raises(InvalidTeam):
        create_team(ALICE, '   ', '', 2)


@pytest.mark.parametrize('name, description', [(5, ''), (['Robots'], ''), ('Robots', 7), ('Robots', {'x': 1})])
def test_name_and_description_must_be_text(make_team, name, description):
    team_id = make_team('Existing', creator=ALICE)
    with pytest.raises(InvalidTeam):
        create_team(ALICE, name, description, 2)
    with pytest.raises(InvalidTeam):
        edit_team(team_id, ALICE, name, description)
    assert [t.name for t in list_teams()] == ['Existing']


def test_duplicate_name(app):
    create_team(ALICE, 'Robots', '', 2)
    with pytest.raises(DuplicateTeamName):
        create_team(BOB, 'Robots', '', 2)
    assert Team.query.count() == 1


def test_team_limit_per_creator(app):
    create_team(ALICE, 'One', '', 2)
    create_team(ALICE, 'Two', '', 2)
    with pytest.raises(TeamLimitReached):
        create_team(ALICE, 'Three', '', 2)


def test_join_is_idempotent(make_team):
    team_id = make_team('Robots')
    assert join_team(team_id, BOB) is True
    assert join_team(team_id, BOB) is False
    assert TeamMembership.query.filter_by(member_email=BOB).count() == 1


def test_person_can_be_in_several_teams(make_team):
    first = make_team('First')
    second = make_team('Second')
    join_team(first, BOB)
    join_team(second, BOB)
    assert teams_of(BOB) == {first, second}


def test_leave(make_team):
    team_id = make_team('Robots', members=[BOB])
    assert leave_team(team_id, BOB) is True
    assert not is_member(BOB, team_id)
    assert leave_team(team_id, BOB) is False


def test_join_missing_team(app):
    with pytest.raises(TeamNotFound):
        join_team(42, BOB)


def test_only_creator_or_admin_edits(make_team):
    team_id = make_team('Robots', creator=ALICE)
    with pytest.raises(PermissionDenied):
        edit_team(team_id, BOB, 'Hijacked', '')
    edit_team(team_id, ALICE, 'Robots 2', 'Now with wheels.')
    edit_team(team_id, 'admin@example.com', 'Robots 3', '', is_admin=True)
    assert db.session.get(Team, team_id).name == 'Robots 3'


def test_delete_cascades_votes_and_memberships(make_team):
    team_id = make_team('Robots', creator=ALICE, members=[ALICE])
    other = make_team('Other')
    submit(BOB, {team_id: 3, other: 2}, 100)

    delete_team(team_id, ALICE)

    assert db.session.get(Team, team_id) is None
    assert TeamMembership.query.filter_by(team_id=team_id).count() == 0
    assert [(v.team_id, v.points) for v in Vote.query] == [(other, 2)]


def test_only_creator_deletes(make_team):
    team_id = make_team('Robots', creator=ALICE)
    with pytest.raises(PermissionDenied):
        delete_team(team_id, BOB)


def test_list_is_case_insensitive_by_name(make_team):
    make_team('bravo')
    make_team('Charlie')
    make_team('alpha')
    assert [t.name for t in list_teams()] == ['alpha', 'bravo', 'Charlie']


@pytest.mark.parametrize('phase', [Phase.PRESENTATION, Phase.EVALUATION, Phase.REVELATION, Phase.CELEBRATION])
def test_team_changes_need_registration(make_team, phase):
    team_id = make_team('Robots', creator=ALICE)
    set_phase(phase)
    with pytest.raises(PhaseViolation):
        create_team(ALICE, 'New', '', 2)
    with pytest.raises(PhaseViolation):
        join_team(team_id, BOB)
    with pytest.raises(PhaseViolation):
        leave_team(team_id, ALICE)
    with pytest.raises(PhaseViolation):
        edit_team(team_id, ALICE, 'Renamed', '')
    with pytest.raises(PhaseViolation):
        delete_team(team_id, ALICE)
