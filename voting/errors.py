"""Error taxonomy of the voting engine.

Every error carries an HTTP status so the web layer can answer without a
lookup table. Vote rejections are not exceptions; see ``voting.validator``.
"""


class HackathonError(Exception):
    http_status = 400

    @property
    def kind(self):
        return type(self).__name__

    def as_dict(self):
        return {'error': self.kind, 'message': str(self)}


class PhaseViolation(HackathonError):
    """The operation is not permitted in the current phase."""
    http_status = 409

    def __init__(self, operation, phase, reason=None):
        self.operation = operation
        self.phase = phase
        super().__init__(reason or f'{operation.label} is not possible during {phase.value}.')

    def as_dict(self):
        result = super().as_dict()
        result.update(operation=self.operation.name, phase=self.phase.value)
        return result


class PermissionDenied(HackathonError):
    http_status = 403


class TeamNotFound(HackathonError):
    http_status = 404

    def __init__(self, team_id):
        self.team_id = team_id
        super().__init__(f'There is no team with id {team_id}.')


class DuplicateTeamName(HackathonError):
    http_status = 409

    def __init__(self, name):
        self.name = name
        super().__init__(f'A team named "{name}" already exists.')


class TeamLimitReached(HackathonError):
    def __init__(self, limit):
        self.limit = limit
        super().__init__(f'You can create at most {limit} teams.')


class InvalidTeam(HackathonError):
    pass


class InvalidRequest(HackathonError):
    """The request body is malformed or has the wrong shape."""


class StoreUnavailable(HackathonError):
    """The store failed mid-request. The transaction was rolled back, nothing is retried."""
    http_status = 503

    def __init__(self, message='The database is busy, wait a few seconds and try again.'):
        super().__init__(message)
