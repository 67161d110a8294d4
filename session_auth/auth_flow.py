from threading import Lock

from flask import current_app

# Serializes the duplicate-email check with the insert that follows it
_registration_lock = Lock()


class AuthFlow:
    """Credential checks behind the login and register routes.

    Both return the user to authenticate, or None when the attempt is refused.
    Refusals carry no reason: a wrong password, an unknown email, a missing
    field and a taken email all look the same to the caller.
    """

    def __init__(self, users):
        self.users = users

    def login(self, email, password):
        if not (email and password):
            return None
        return self.users.find_by_credentials(email, password)

    def register(self, name, email, password):
        if not (name and email and password):
            return None
        with _registration_lock:
            if self.users.exists_by_email(email):
                return None
            return self.users.create(name, email, password)


def current_auth_flow() -> AuthFlow:
    return current_app.extensions["auth_flow"]


def current_users():
    return current_app.extensions["user_repository"]
