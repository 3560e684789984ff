import pytest

from app import create_app
from config import Config
from extensions import db
from models import Team, TeamMembership

ADMIN = 'admin@example.com'


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    ADMIN_EMAIL = ADMIN
    EMAIL_SUFFIX = '@example.com'
    MAX_TEAMS_PER_CREATOR = 2
    COINS_TO_SPEND = 100
    UNSAFE_DEFAULT_EMAIL = None
    LOG_LEVEL = 'DEBUG'


@pytest.fixture
def app(monkeypatch):
    monkeypatch.delenv('HACKATHON_CONFIG', raising=False)
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_team(app):
    """Insert a team directly, bypassing the phase gate."""
    def _make_team(name, creator='creator@example.com', members=()):
        team = Team(name=name, creator_email=creator, description='')
        db.session.add(team)
        db.session.flush()
        for email in members:
            db.session.add(TeamMembership(team_id=team.id, member_email=email))
        db.session.commit()
        return team.id
    return _make_team
