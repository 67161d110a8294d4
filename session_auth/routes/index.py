from flask import current_app, render_template

from ..auth_flow import current_users
from ..guards import gated, require_authenticated
from . import main


@main.route('/')
@gated()
def index(ctx):
    return render_template('index.html', authenticated=ctx.is_authenticated)


@main.route('/home')
@gated(require_authenticated)
def home(ctx):
    # Profile fields stay empty unless HOME_SHOWS_PROFILE is switched on
    profile = None
    if current_app.config["HOME_SHOWS_PROFILE"]:
        profile = current_users().get(ctx.user_id)
    return render_template('home.html', profile=profile)
