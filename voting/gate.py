"""Phase gate: which operation is allowed in which phase."""

import enum
from dataclasses import dataclass
from typing import Optional

from voting.errors import PermissionDenied, PhaseViolation
from voting.phases import Phase


class Operation(enum.Enum):
    CREATE_TEAM = 'create a team'
    JOIN_TEAM = 'join a team'
    LEAVE_TEAM = 'leave a team'
    EDIT_TEAM = 'edit a team'
    DELETE_TEAM = 'delete a team'
    CAST_VOTE = 'vote'
    VIEW_RESULTS_ADMIN = 'view the results as admin'
    VIEW_RESULTS_PUBLIC = 'view the results'
    ADVANCE_PHASE = 'change the phase'

    @property
    def label(self):
        text = self.value
        return text[0].upper() + text[1:]


TEAM_OPERATIONS = frozenset({
    Operation.CREATE_TEAM,
    Operation.JOIN_TEAM,
    Operation.LEAVE_TEAM,
    Operation.EDIT_TEAM,
    Operation.DELETE_TEAM,
})

# Phases in which each phase-bound operation is allowed.
_POLICY = {
    **{op: frozenset({Phase.REGISTRATION}) for op in TEAM_OPERATIONS},
    Operation.CAST_VOTE: frozenset({Phase.EVALUATION}),
    Operation.VIEW_RESULTS_ADMIN: frozenset({Phase.REVELATION, Phase.CELEBRATION}),
    Operation.VIEW_RESULTS_PUBLIC: frozenset({Phase.CELEBRATION}),
}

# Allowed in any phase, but only for the admin.
ADMIN_OPERATIONS = frozenset({Operation.ADVANCE_PHASE})


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[str] = None

    def __bool__(self):
        return self.allowed


def can_perform(phase: Phase, operation: Operation, is_admin: bool = False) -> Decision:
    if operation in ADMIN_OPERATIONS:
        if is_admin:
            return Decision(True)
        return Decision(False, f'Only the admin can {operation.value}.')

    if phase in _POLICY[operation]:
        return Decision(True)
    return Decision(False, f'{operation.label} is not possible during {phase.value}.')


def ensure_allowed(phase: Phase, operation: Operation, is_admin: bool = False) -> None:
    """Raise if ``operation`` is denied, otherwise do nothing."""
    decision = can_perform(phase, operation, is_admin)
    if decision:
        return
    if operation in ADMIN_OPERATIONS:
        raise PermissionDenied(decision.reason)
    raise PhaseViolation(operation, phase, decision.reason)
