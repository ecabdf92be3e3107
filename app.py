"""
Ashoka Resort Manager - Resort Management System
Flask application factory and initialization
"""

import os
import click
import logging
from flask import Flask, g
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import configuration
from config import config, ProductionConfig

# Import extensions
from extensions import login_manager, csrf

# Import database functions
from database import close_db, init_db

from utils.api_response import api_error
from utils.messages import MESSAGES


def create_app(config_name=None):
    """
    Application factory for Flask app.

    Args:
        config_name: Configuration name ('development', 'production', 'test')

    Returns:
        Flask application instance
    """
    # Determine config
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    if config_name == 'production':
        ProductionConfig.validate()

    # Create Flask app
    app = Flask(__name__)

    # Load configuration
    app.config.from_object(config.get(config_name, config['default']))

    # Initialize extensions
    initialize_extensions(app)

    # Register blueprints
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Register CLI commands
    register_cli_commands(app)

    # Register teardown handlers
    register_teardown_handlers(app)

    # Configure logging
    configure_logging(app)

    return app


def initialize_extensions(app):
    """Initialize Flask extensions."""
    # Initialize Flask-Login
    login_manager.init_app(app)
    # Initialize CSRF Protection
    csrf.init_app(app)


def register_blueprints(app):
    """Register Flask blueprints."""
    # Import blueprints
    from blueprints.auth.routes import auth_bp
    from blueprints.api.routes import api_bp
    from blueprints.resort import resort_bp

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(api_bp, url_prefix='/api')
    app.register_blueprint(resort_bp, url_prefix='/api/resort')


def register_error_handlers(app):
    """Register JSON error handlers."""

    @app.errorhandler(400)
    def bad_request_error(error):
        """Handle 400 errors (including CSRF failures)."""
        return api_error(getattr(error, 'description', None) or MESSAGES['bad_request'], status=400)

    @app.errorhandler(403)
    def forbidden_error(error):
        """Handle 403 errors."""
        return api_error(MESSAGES['permission_denied'], status=403)

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors."""
        return api_error(MESSAGES['not_found'], status=404)

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        return api_error(str(error.description), status=405)

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        # Rollback database on error
        db = g.get('db')
        if db:
            db.rollback()
        app.logger.error('Unhandled error: %s', error)
        return api_error(MESSAGES['internal_error'], status=500)


def register_cli_commands(app):
    """Register Flask CLI commands."""

    @app.cli.command('init-db')
    def init_db_command():
        """Initialize database with schema and seed data."""
        click.echo('Initializing database...')
        with app.app_context():
            init_db()
        click.echo('Database initialized successfully!')

    @app.cli.command('create-user')
    @click.argument('username')
    @click.argument('full_name')
    @click.option('--email', default=None, help='Email address')
    @click.option('--role', default='staff', show_default=True,
                  type=click.Choice(['admin', 'manager', 'staff', 'viewer']))
    @click.password_option()
    def create_user_command(username, full_name, email, role, password):
        """Create a new user."""
        import sqlite3
        from models.user import create_user, get_role_by_name
        from utils.validators import validate_password

        is_valid, error = validate_password(password)
        if not is_valid:
            click.echo(error, err=True)
            return

        with app.app_context():
            role_row = get_role_by_name(role)
            if not role_row:
                click.echo(f'Role not found: {role}', err=True)
                return

            try:
                user_id = create_user(
                    username=username,
                    password=password,
                    full_name=full_name,
                    role_id=role_row['id'],
                    email=email
                )
                click.echo(f'User created successfully! ID: {user_id}')
            except sqlite3.IntegrityError as e:
                click.echo(f'Error creating user: {str(e)}', err=True)


def register_teardown_handlers(app):
    """Register teardown handlers."""

    @app.teardown_appcontext
    def teardown_db(error):
        """Close database connection at end of request."""
        close_db(error)


def configure_logging(app):
    """Configure application logging."""
    if not app.debug and not app.testing:
        # Production logging
        if not os.path.exists('logs'):
            os.mkdir('logs')

        file_handler = logging.FileHandler('logs/resort.log')
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        # Module loggers (models.*, blueprints.*) go to the same file
        logging.getLogger().addHandler(file_handler)
        logging.getLogger().setLevel(logging.INFO)

        app.logger.setLevel(logging.INFO)
        app.logger.info('%s startup', app.config.get('APP_NAME'))
    else:
        # Development logging
        app.logger.setLevel(logging.DEBUG)


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    # host='0.0.0.0' allows access from other devices on the network
    app.run(host='0.0.0.0', debug=True)
