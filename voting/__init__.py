"""Phase-gated quadratic voting engine.

All functions need an active Flask application context with the database
extension initialised.
"""

from voting.cheaters import list_cheaters, recheck
from voting.errors import (
    DuplicateTeamName,
    HackathonError,
    InvalidRequest,
    InvalidTeam,
    PermissionDenied,
    PhaseViolation,
    StoreUnavailable,
    TeamLimitReached,
    TeamNotFound,
)
from voting.gate import Decision, Operation, can_perform, ensure_allowed
from voting.ledger import allocation_of, submit, submit_vote
from voting.membership import is_member, members_of, teams_of
from voting.phases import Phase, current_phase, phase_history, set_phase
from voting.tally import TeamScore, rank, tally
from voting.validator import (
    Accepted,
    BudgetExceeded,
    NegativePoints,
    NotAnInteger,
    Overflow,
    Rejection,
    SelfVote,
    UnknownTeam,
    cost_of,
    validate,
)
