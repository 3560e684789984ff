# config.py
# Flask application configuration

import os
import tomllib


class Config:
    BASE_DIR = os.path.abspath(os.path.dirname(__file__))
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        'DATABASE_URL',
        f'sqlite:///{os.path.join(BASE_DIR, "instance", "hackathon.db")}',
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.environ.get('SECRET_KEY', 'your-secret-key-change-me')

    # The one user who may change phases and see results during Revelation.
    ADMIN_EMAIL = os.environ.get('HACKATHON_ADMIN_EMAIL', 'admin@example.com')
    # Stripped from emails when listing team members.
    EMAIL_SUFFIX = os.environ.get('HACKATHON_EMAIL_SUFFIX', '')
    MAX_TEAMS_PER_CREATOR = int(os.environ.get('HACKATHON_MAX_TEAMS_PER_CREATOR', '2'))
    COINS_TO_SPEND = int(os.environ.get('HACKATHON_COINS_TO_SPEND', '100'))

    # Used when the X-Email header is missing. Never set this in production,
    # the header must come from the authenticating proxy.
    UNSAFE_DEFAULT_EMAIL = os.environ.get('HACKATHON_UNSAFE_DEFAULT_EMAIL')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


# (section, key) in the TOML file -> Flask config name
TOML_KEYS = {
    ('app', 'admin_email'): 'ADMIN_EMAIL',
    ('app', 'email_suffix'): 'EMAIL_SUFFIX',
    ('app', 'max_teams_per_creator'): 'MAX_TEAMS_PER_CREATOR',
    ('app', 'coins_to_spend'): 'COINS_TO_SPEND',
    ('debug', 'unsafe_default_email'): 'UNSAFE_DEFAULT_EMAIL',
}


def load_toml_config(config, path):
    """Copy the settings of a hackathon TOML file onto a Flask config.

    Only keys present in the file are applied; everything else keeps the
    value from the config class. ``[database] path`` becomes a SQLite URI.
    """
    with open(path, 'rb') as f:
        data = tomllib.load(f)

    for (section, key), name in TOML_KEYS.items():
        if key in data.get(section, {}):
            config[name] = data[section][key]

    db_path = data.get('database', {}).get('path')
    if db_path:
        config['SQLALCHEMY_DATABASE_URI'] = f'sqlite:///{os.path.abspath(db_path)}'


def validate_config(config):
    budget = config.get('COINS_TO_SPEND')
    if isinstance(budget, bool) or not isinstance(budget, int) or budget <= 0:
        raise ValueError(f'COINS_TO_SPEND must be a positive integer, got {budget!r}.')
    if not config.get('ADMIN_EMAIL'):
        raise ValueError('ADMIN_EMAIL must be set.')
    limit = config.get('MAX_TEAMS_PER_CREATOR')
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
        raise ValueError(f'MAX_TEAMS_PER_CREATOR must be a non-negative integer, got {limit!r}.')
