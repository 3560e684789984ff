# models/__init__.py

from .team import Team
from .team_membership import TeamMembership
from .vote import Vote
from .phase_entry import PhaseEntry
from .cheater import Cheater
