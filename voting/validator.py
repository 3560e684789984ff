"""Quadratic vote validation.

An allocation maps team ids to points. Buying ``n`` points for one team costs
``n * n`` coins and the total cost must stay within the voter's budget. The
server-side check here is the only authority; whatever cost a client shows is
advisory.

``validate`` is pure. ``validate_for`` looks up the voter's memberships and
the existing teams, then delegates to it.
"""

from dataclasses import asdict, dataclass
from typing import ClassVar, Iterable, Mapping, Optional

from models import Team
from voting.membership import teams_of

# Largest integer a double represents exactly (Number.MAX_SAFE_INTEGER).
MAX_SAFE_INTEGER = 2 ** 53 - 1


@dataclass(frozen=True)
class Accepted:
    cost: int
    accepted: ClassVar[bool] = True


class Rejection:
    accepted: ClassVar[bool] = False

    @property
    def kind(self):
        return type(self).__name__

    @property
    def message(self):
        raise NotImplementedError

    def as_dict(self):
        return {'error': self.kind, 'message': self.message, **asdict(self)}

    def __str__(self):
        fields = ', '.join(str(v) for v in asdict(self).values())
        return f'{self.kind}({fields})'


@dataclass(frozen=True)
class NotAnInteger(Rejection):
    team_id: int

    @property
    def message(self):
        return f'Points for team {self.team_id} must be an integer.'


@dataclass(frozen=True)
class NegativePoints(Rejection):
    team_id: int
    points: int

    @property
    def message(self):
        return f'Points cannot be negative (got {self.points} for team {self.team_id}).'


@dataclass(frozen=True)
class SelfVote(Rejection):
    team_id: int

    @property
    def message(self):
        return f'You cannot vote for team {self.team_id} because you are a member of it.'


@dataclass(frozen=True)
class UnknownTeam(Rejection):
    team_id: int

    @property
    def message(self):
        return f'There is no team with id {self.team_id}.'


@dataclass(frozen=True)
class Overflow(Rejection):
    team_id: int

    @property
    def message(self):
        return f'The number of points for team {self.team_id} is too large.'


@dataclass(frozen=True)
class BudgetExceeded(Rejection):
    cost: int
    budget: int

    @property
    def message(self):
        return f'This vote costs {self.cost} coins, but you only have {self.budget}.'


def is_integer(value):
    return isinstance(value, int) and not isinstance(value, bool)


def normalize(allocation: Mapping[int, int]) -> dict:
    """Drop zero entries; a team that is absent and a team with 0 points are the same."""
    return {team_id: points for team_id, points in allocation.items() if points != 0}


def cost_of(allocation: Mapping[int, int]) -> int:
    return sum(points * points for points in allocation.values())


def validate(
    allocation: Mapping[int, int],
    budget: int,
    own_teams: Iterable[int] = (),
    known_teams: Optional[Iterable[int]] = None,
):
    """Accept or reject a whole allocation.

    Returns ``Accepted(cost)`` or the first ``Rejection`` found. Rules are
    checked in this order: integer and non-negative points, no votes for own
    teams, no votes for unknown teams (skipped when ``known_teams`` is None),
    each points² within the safe-integer range, total cost within budget.
    When several teams break the same rule the lowest team id is reported.

    The safe-integer check deliberately comes before the budget comparison,
    unlike the usual listing of the rules where the budget comes first. Any
    square past the safe range is also far over budget, so the listed order
    would never report ``Overflow``; a huge input gets ``Overflow(team)``.
    """
    team_ids = sorted(allocation)

    for team_id in team_ids:
        points = allocation[team_id]
        if not is_integer(points):
            return NotAnInteger(team_id)
        if points < 0:
            return NegativePoints(team_id, points)

    nonzero = [team_id for team_id in team_ids if allocation[team_id] != 0]

    own_teams = set(own_teams)
    for team_id in nonzero:
        if team_id in own_teams:
            return SelfVote(team_id)

    if known_teams is not None:
        known_teams = set(known_teams)
        for team_id in nonzero:
            if team_id not in known_teams:
                return UnknownTeam(team_id)

    cost = 0
    for team_id in nonzero:
        square = allocation[team_id] * allocation[team_id]
        if square > MAX_SAFE_INTEGER:
            return Overflow(team_id)
        cost += square

    if cost > budget:
        return BudgetExceeded(cost, budget)

    return Accepted(cost)


def validate_for(voter_email, allocation, budget):
    """Validate against the voter's current memberships and the existing teams."""
    known_teams = {team_id for (team_id,) in Team.query.with_entities(Team.id)}
    return validate(allocation, budget, own_teams=teams_of(voter_email), known_teams=known_teams)
