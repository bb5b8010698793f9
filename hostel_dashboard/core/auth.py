"""
Per-role token storage and access control

Tokens live in the Flask session under the role's configured key
(`token`, `adminToken`, `wardenToken`). Pages declare the role they need
with @role_required; any backend 401 clears that role's token and sends
the browser back to the role's login page.
"""
import logging
from functools import wraps

from flask import current_app, flash, g, redirect, session, url_for

from .api_client import HostelApiClient

logger = logging.getLogger(__name__)


def _role_config(role):
    roles = current_app.config['ROLES']
    if role not in roles:
        raise ValueError(f"Unknown role: {role}")
    return roles[role]


def token_key(role):
    return _role_config(role)['token_key']


def get_token(role):
    return session.get(token_key(role))


def store_token(role, token, user=None):
    session[token_key(role)] = token
    if user is not None:
        session[f'{role}_user'] = user
    session.permanent = True


def clear_token(role):
    session.pop(token_key(role), None)
    session.pop(f'{role}_user', None)


def current_user(role):
    """User record saved at login, or an empty dict"""
    return session.get(f'{role}_user') or {}


def api_client(role=None):
    """Build a backend client for the current request

    With a role, the role's stored token is attached as a bearer token.
    """
    token = get_token(role) if role else None
    return HostelApiClient(
        current_app.config['API_BASE_URL'],
        token=token,
        timeout=current_app.config['API_TIMEOUT'],
        session=current_app.extensions.get('hostel_api_session'),
    )


def role_required(role=None):
    """Redirect to the role's login page unless a token is stored

    Without an explicit role the view's `role` URL argument is used, so one
    view can serve several staff roles.
    """
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            active_role = role or kwargs.get('role')
            g.role = active_role
            if not get_token(active_role):
                flash('Please login to continue', 'error')
                return redirect(url_for('auth.login', role=active_role))
            return view(*args, **kwargs)
        return wrapped
    return decorator


def handle_unauthorized(error):
    """App-level handler for UnauthorizedError raised by any backend call"""
    role = g.get('role', 'student')
    logger.warning(f"Backend rejected {role} token, clearing session")
    clear_token(role)
    flash(str(error), 'error')
    return redirect(url_for('auth.login', role=role))
