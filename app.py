# app.py
# Flask application built with the application factory pattern

import logging
import os
import time

import click
from flask import Flask, g, jsonify, request
from sqlalchemy.exc import OperationalError

from config import Config, load_toml_config, validate_config
from extensions import db, migrate

# Imported here so that Flask-Migrate sees every table.
from models import Team, TeamMembership, Vote, PhaseEntry, Cheater
from voting import HackathonError, StoreUnavailable


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    config_file = os.environ.get('HACKATHON_CONFIG')
    if config_file:
        load_toml_config(app.config, config_file)
    validate_config(app.config)

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    app.logger.setLevel(app.config['LOG_LEVEL'])

    os.makedirs(app.instance_path, exist_ok=True)

    db.init_app(app)
    migrate.init_app(app, db)

    from routes.auth import auth_bp
    from routes.main import main_bp
    from routes.teams import teams_bp
    from routes.admin import admin_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(main_bp)
    app.register_blueprint(teams_bp)
    app.register_blueprint(admin_bp)

    @app.errorhandler(HackathonError)
    def handle_hackathon_error(error):
        db.session.rollback()
        return jsonify(error.as_dict()), error.http_status

    @app.errorhandler(OperationalError)
    def handle_store_error(error):
        # Reads run outside atomic(), their failures land here.
        db.session.rollback()
        app.logger.error('Store operation failed: %s', error)
        unavailable = StoreUnavailable()
        return jsonify(unavailable.as_dict()), unavailable.http_status

    @app.before_request
    def start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def log_request(response):
        elapsed_ms = (time.perf_counter() - g.get('request_started', time.perf_counter())) * 1e3
        app.logger.info(
            '%-4s %s %s -> %s [%.3f ms]',
            request.method, request.path, g.get('email', '-'), response.status_code, elapsed_ms,
        )
        return response

    @app.cli.command('init-db')
    def init_db_command():
        """Create all tables that do not exist yet."""
        db.create_all()
        click.echo('Database schema is up to date.')

    from seed_data import seed_demo_command
    app.cli.add_command(seed_demo_command)

    return app
