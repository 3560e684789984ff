# seed_data.py
# Resets the store and loads a small demo hackathon: `flask seed-demo`

import click
from flask.cli import with_appcontext

from extensions import db
from models import Team, TeamMembership, Vote, PhaseEntry, Cheater

DEMO_TEAMS = [
    ('Alpha', 'alice@example.com', 'A robot that waters plants.', ['alice@example.com', 'bob@example.com']),
    ('Bravo', 'carol@example.com', 'Faster CI through caching.', ['carol@example.com']),
    ('Charlie', 'dave@example.com', 'Quadratic lunch voting.', ['dave@example.com', 'erin@example.com']),
]


def seed_demo_data():
    # Reverse dependency order.
    db.session.query(Vote).delete()
    db.session.query(TeamMembership).delete()
    db.session.query(Cheater).delete()
    db.session.query(PhaseEntry).delete()
    db.session.query(Team).delete()
    db.session.commit()

    try:
        for name, creator, description, members in DEMO_TEAMS:
            team = Team(name=name, creator_email=creator, description=description)
            db.session.add(team)
            db.session.flush()
            db.session.add_all(TeamMembership(team_id=team.id, member_email=m) for m in members)
        db.session.add(PhaseEntry(phase='registration'))
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return len(DEMO_TEAMS)


@click.command('seed-demo')
@with_appcontext
def seed_demo_command():
    """Delete all data and add demo teams."""
    db.create_all()
    count = seed_demo_data()
    click.echo(f'Added {count} demo teams.')
