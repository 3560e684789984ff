"""Tally engine: per-team point totals, computed fresh on every call."""

from collections import defaultdict
from dataclasses import dataclass

from models import Team, Vote
from voting.cheaters import excluded_emails, recheck
from voting.phases import Phase

RESULT_PHASES = (Phase.REVELATION, Phase.CELEBRATION)


@dataclass(frozen=True)
class TeamScore:
    team_id: int
    name: str
    points: int


def rank(scores, mode):
    """Order scores for display.

    Revelation: ascending points, the winner comes last so results can be
    revealed by scrolling. Celebration: descending points, winner first.
    Ties are broken by case-insensitive name, then id, in both orders.
    """
    if mode == Phase.REVELATION:
        return sorted(scores, key=lambda s: (s.points, s.name.lower(), s.team_id))
    if mode == Phase.CELEBRATION:
        return sorted(scores, key=lambda s: (-s.points, s.name.lower(), s.team_id))
    raise ValueError(f'Cannot tally for phase {mode!r}, expected revelation or celebration.')


def team_scores():
    """Sum of points per team over votes of voters who are not excluded."""
    excluded = excluded_emails()
    totals = defaultdict(int)
    for vote in Vote.query:
        if vote.voter_email not in excluded:
            totals[vote.team_id] += vote.points
    return [TeamScore(team.id, team.name, totals[team.id]) for team in Team.query]


def tally(mode, budget):
    """Re-check stored votes for cheating, then rank all teams for ``mode``."""
    if mode not in RESULT_PHASES:
        raise ValueError(f'Cannot tally for phase {mode!r}, expected revelation or celebration.')
    recheck(budget)
    return rank(team_scores(), mode)
