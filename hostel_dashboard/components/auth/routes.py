"""
Auth Routes
Per-role login and logout, admin signup and the profile page
"""
import logging

from flask import Blueprint, current_app, flash, redirect, render_template, request, session, url_for

from ...core import attendance_drafts
from ...core.auth import api_client, clear_token, get_token, role_required, store_token
from ...core.exceptions import ApiError, UnauthorizedError, ValidationError
from ...core.extensions import limiter
from .service import AuthService

logger = logging.getLogger(__name__)

ROLE_ARG = '<any(student, admin, warden):role>'

auth_bp = Blueprint('auth', __name__, template_folder='templates')

# Service instance
service = AuthService()


def login_rate_limit():
    return current_app.config['LOGIN_RATE_LIMIT']


def role_home(role):
    return redirect(url_for(current_app.config['ROLES'][role]['home']))


@auth_bp.route(f'/login/{ROLE_ARG}', methods=['GET', 'POST'])
@limiter.limit(login_rate_limit, methods=['POST'])
def login(role):
    """Login form for one role; a stored token skips straight to the dashboard"""
    if request.method == 'GET' and get_token(role):
        return role_home(role)

    email = request.form.get('email', '')
    if request.method == 'POST':
        try:
            token, user = service.login(api_client(), role, email, request.form.get('password'))
        except (ApiError, ValidationError) as e:
            logger.warning(f"{role} login failed: {e}")
            flash(str(e), 'error')
        except UnauthorizedError:
            logger.warning(f"{role} login rejected: invalid credentials")
            flash('Invalid email or password', 'error')
        else:
            store_token(role, token, user)
            return role_home(role)

    return render_template(
        'auth/login.html',
        role=role,
        role_title=current_app.config['ROLES'][role]['title'],
        email=email,
    )


@auth_bp.route('/signup/admin', methods=['GET', 'POST'])
def admin_signup():
    """Admin registration; success sends the user to the admin login"""
    form = request.form.to_dict()
    if request.method == 'POST':
        try:
            service.register_admin(api_client(), form)
        except (ApiError, ValidationError) as e:
            flash(str(e), 'error')
        else:
            flash('Registration successful! Please login.', 'success')
            return redirect(url_for('auth.login', role='admin'))

    form.pop('password', None)
    form.pop('confirmPassword', None)
    return render_template('auth/signup.html', form=form)


@auth_bp.route(f'/logout/{ROLE_ARG}', methods=['POST'])
def logout(role):
    """Drop the role's token and any unsaved drafts"""
    clear_token(role)
    if 'draft_id' in session:
        attendance_drafts.discard(session['draft_id'])
    flash('You have been logged out', 'info')
    return redirect(url_for('auth.login', role=role))


@auth_bp.route(f'/dashboard/{ROLE_ARG}/profile')
@role_required()
def profile(role):
    """Profile of the logged-in user"""
    user = {}
    try:
        user = service.fetch_profile(api_client(role), role)
    except ApiError as e:
        flash(str(e), 'error')
    return render_template('auth/profile.html', role=role, user=user)


def init_auth(app):
    """Initialize Auth component with Flask app"""
    app.register_blueprint(auth_bp)
    return auth_bp
