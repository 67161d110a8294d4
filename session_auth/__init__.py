import os
from flask import Flask, current_app
from flask_login import LoginManager
from flask_sqlalchemy import SQLAlchemy
from config import DevelopmentConfig, config_map
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
import atexit

# Initialize extensions without app
login_manager = LoginManager()

db = SQLAlchemy()


@login_manager.user_loader
def load_user(user_id):
    try:
        return current_app.extensions["user_repository"].get(int(user_id))
    except (TypeError, ValueError):
        return None


def create_app(config_object=None, user_repository=None, session_store=None):
    app = Flask(__name__)

    # Pick config based on FLASK_ENV
    if config_object is None:
        config_type = os.getenv("FLASK_ENV", "development").lower()
        config_object = config_map.get(config_type, DevelopmentConfig)
    app.config.from_object(config_object)

    # Initialize extensions
    login_manager.init_app(app)
    db.init_app(app)

    from .sessions import MemorySessionStore, StoreSessionInterface
    if session_store is None:
        session_store = MemorySessionStore()
    app.session_interface = StoreSessionInterface(session_store)

    from .auth_flow import AuthFlow
    from .directory import build_user_repository, seed_demo_users
    with app.app_context():
        if app.config["USER_STORE"] == "sql":
            from . import models  # noqa: F401  (registers the user table)
            db.create_all()
        if user_repository is None:
            user_repository = build_user_repository(app.config["USER_STORE"])
            if app.config["SEED_DEMO_USERS"]:
                seeded = seed_demo_users(user_repository)
                if seeded:
                    app.logger.info(f"Seeded {seeded} demo users")
    app.extensions["user_repository"] = user_repository
    app.extensions["auth_flow"] = AuthFlow(user_repository)

    # Import and register blueprints
    from .routes import main
    from .routes.auth import auth_bp
    app.register_blueprint(main)
    app.register_blueprint(auth_bp)

    from .utils.response import register_error_handlers
    from .cli import register_commands
    register_error_handlers(app)
    register_commands(app)

    if app.config["SCHEDULER_ENABLED"]:
        start_prune_scheduler(app, session_store)

    app.logger.info(f"User store: {app.config['USER_STORE']}")
    return app


def start_prune_scheduler(app, session_store):
    scheduler = BackgroundScheduler()

    # Wrap job inside app.app_context()
    def job_wrapper():
        with app.app_context():
            removed = session_store.prune()
            if removed:
                app.logger.info(f"[Scheduler] Pruned {removed} expired sessions")

    scheduler.add_job(
        func=job_wrapper,
        trigger=IntervalTrigger(minutes=app.config["SESSION_PRUNE_INTERVAL_MINUTES"]),
        id="prune_sessions_job",
        name="Drop expired sessions from the session store",
        max_instances=1,
        coalesce=True
    )

    scheduler.start()
    app.logger.info("[Scheduler] Started prune_sessions job")

    # Shut down scheduler on exit
    def shutdown():
        if scheduler.running:
            scheduler.shutdown()

    atexit.register(shutdown)
    return scheduler
