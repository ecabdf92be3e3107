"""
Authentication routes: login, logout, current session.
Sessions are permanent and expire after PERMANENT_SESSION_LIFETIME.
"""

from flask import Blueprint, session
from flask_login import login_user, logout_user, login_required, current_user
from flask_wtf.csrf import generate_csrf

from blueprints.auth.forms import LoginForm
from models.user import User, get_user_by_username, update_last_login, check_password
from utils.api_response import api_success, api_error
from utils.messages import MESSAGES

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/csrf-token', methods=['GET'])
def csrf_token():
    """Issue a CSRF token for the X-CSRFToken header of API clients."""
    return api_success(data={'csrf_token': generate_csrf()})


@auth_bp.route('/login', methods=['POST'])
def login():
    """
    Log a user in.

    Request body (form or JSON):
        username: Username
        password: Password
        remember_me: Optional boolean

    Returns:
        JSON with the user profile and permissions
    """
    form = LoginForm()

    if not form.validate_on_submit():
        errors = {field: messages[0] for field, messages in form.errors.items()}
        return api_error(MESSAGES['bad_request'], status=400, errors=errors)

    user_dict = get_user_by_username(form.username.data)

    if user_dict is None or not check_password(user_dict, form.password.data):
        return api_error(MESSAGES['invalid_credentials'], status=401)

    if not user_dict.get('active'):
        return api_error(MESSAGES['account_inactive'], status=403)

    user = User(user_dict)

    session.permanent = True
    login_user(user, remember=form.remember_me.data)
    update_last_login(user.id)

    return api_success(
        data=user.to_dict(),
        message=MESSAGES['login_success'].format(name=user.full_name or user.username)
    )


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """Logout current user."""
    logout_user()
    session.clear()
    return api_success(message=MESSAGES['logout_success'])


@auth_bp.route('/me', methods=['GET'])
@login_required
def me():
    """Current user profile."""
    return api_success(data=current_user.to_dict())
