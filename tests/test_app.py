"""
Test application factory, configuration and CLI commands.
"""

import pytest
from app import create_app


class TestAppFactory:
    """Test Flask application factory."""

    def test_create_app_development(self):
        app = create_app('development')
        assert app.config['DEBUG'] is True
        assert app.config['TESTING'] is False

    def test_create_app_test(self):
        app = create_app('test')
        assert app.config['TESTING'] is True
        assert app.config['WTF_CSRF_ENABLED'] is False

    def test_app_has_blueprints(self):
        app = create_app('test')
        assert {'auth', 'api', 'resort'} <= set(app.blueprints)

    def test_resort_routes_are_prefixed(self):
        app = create_app('test')
        rules = {rule.rule for rule in app.url_map.iter_rules()}
        assert '/api/resort/calendar' in rules
        assert '/api/resort/rooms/<int:room_id>/overrides/<date_str>' in rules


class TestAppConfiguration:

    def test_settings(self):
        app = create_app('test')
        assert app.config['APP_NAME'] == 'Ashoka Resort Manager'
        assert app.config['CURRENCY'] == 'INR'
        assert app.config['CALENDAR_MAX_DAYS'] > 0
        assert app.config['REPORT_MAX_DAYS'] >= app.config['CALENDAR_MAX_DAYS']
        assert app.config['PERMANENT_SESSION_LIFETIME'].total_seconds() > 0

    def test_production_requires_secret_key(self, monkeypatch):
        monkeypatch.delenv('SECRET_KEY', raising=False)
        with pytest.raises(ValueError, match='SECRET_KEY'):
            create_app('production')

    def test_production_rejects_short_secret_key(self, monkeypatch):
        monkeypatch.setenv('SECRET_KEY', 'short')
        with pytest.raises(ValueError, match='32 characters'):
            create_app('production')


class TestCLICommands:

    def test_cli_commands_registered(self):
        app = create_app('test')
        commands = list(app.cli.commands.keys())
        assert 'init-db' in commands
        assert 'create-user' in commands

    def test_create_user_command(self, app):
        from models.user import get_user_by_username

        runner = app.test_cli_runner()
        result = runner.invoke(args=[
            'create-user', 'priya', 'Priya Shah', '--role', 'manager',
            '--password', 'secret123'
        ])
        assert 'User created successfully' in result.output

        user = get_user_by_username('priya')
        assert user['role_name'] == 'manager'

    def test_create_user_duplicate(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=['create-user', 'admin', 'Admin Again', '--password', 'secret123'])
        assert 'Error creating user' in result.output

    def test_create_user_short_password(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=['create-user', 'ravi', 'Ravi', '--password', 'abc'])
        assert 'Password must be at least 6 characters' in result.output
