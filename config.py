import os
from datetime import timedelta

from dotenv import load_dotenv

# Load environment variables from .env before the classes read them
load_dotenv()

TWO_HOURS = timedelta(hours=2)


class Config:
    # Placeholder key; set SECRET_KEY in the environment for any real deployment
    SECRET_KEY = os.environ.get("SECRET_KEY", "symmetric-key")
    PORT = int(os.environ.get("PORT", 3000))
    DEBUG = False
    TESTING = False

    # Session cookie contract
    SESSION_COOKIE_NAME = "sid"
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Strict"
    SESSION_COOKIE_PATH = "/"
    SESSION_COOKIE_SECURE = False
    SESSION_REFRESH_EACH_REQUEST = False
    PERMANENT_SESSION_LIFETIME = TWO_HOURS

    # "memory" keeps users in a process-wide list, "sql" uses SQLALCHEMY_DATABASE_URI
    USER_STORE = os.getenv("USER_STORE", "memory").lower()
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI", "sqlite:///session_auth.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SEED_DEMO_USERS = True

    # Off by default: the profile view renders empty name/email fields
    HOME_SHOWS_PROFILE = os.getenv("HOME_SHOWS_PROFILE", "false").lower() == "true"

    SCHEDULER_ENABLED = True
    SESSION_PRUNE_INTERVAL_MINUTES = 15


class DevelopmentConfig(Config):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///dev.db")


class ProductionConfig(Config):
    # HTTPS is required for secure cookies
    SESSION_COOKIE_SECURE = True


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SEED_DEMO_USERS = False
    SCHEDULER_ENABLED = False


config_map = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": Config,
}
