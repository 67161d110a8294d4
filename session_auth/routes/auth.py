from flask import Blueprint, current_app, redirect, render_template, request, url_for
from flask_login import login_user, logout_user

from ..auth_flow import current_auth_flow
from ..guards import gated, require_anonymous
from ..sessions import SessionStoreError, clear_session_cookie, destroy_session

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/login', methods=['GET'])
@gated(require_anonymous)
def login_form(ctx):
    return render_template('auth/login.html')


@auth_bp.route('/login', methods=['POST'])
@gated(require_anonymous)
def login(ctx):
    email = request.form.get('email')
    password = request.form.get('password')

    user = current_auth_flow().login(email, password)
    if user is None:
        current_app.logger.debug("Login refused")
        return redirect(url_for('auth.login_form'))

    login_user(user)
    current_app.logger.info(f"User {user.id} logged in")
    return redirect(url_for('main.home'))


@auth_bp.route('/register', methods=['GET'])
@gated(require_anonymous)
def register_form(ctx):
    return render_template('auth/register.html')


@auth_bp.route('/register', methods=['POST'])
@gated(require_anonymous)
def register(ctx):
    name = request.form.get('name')
    email = request.form.get('email')
    password = request.form.get('password')

    user = current_auth_flow().register(name, email, password)
    if user is None:
        current_app.logger.debug("Registration refused")
        return redirect(url_for('auth.register_form'))

    # Registering also signs the new user in
    login_user(user)
    current_app.logger.info(f"User {user.id} registered")
    return redirect(url_for('main.home'))


@auth_bp.route('/logout', methods=['POST'])
@gated()
def logout(ctx):
    try:
        destroy_session()
    except SessionStoreError as e:
        # The stored session is left as the store left it
        current_app.logger.warning(f"Failed to destroy session: {e}")
        return redirect(url_for('main.home'))

    logout_user()
    if ctx.is_authenticated:
        current_app.logger.info(f"User {ctx.user_id} logged out")
    return clear_session_cookie(redirect(url_for('auth.login_form')))
