"""
Server-side sessions keyed by a signed ``sid`` cookie.

The cookie only carries the session id signed with ``SECRET_KEY``; the data
lives in a ``SessionStore``. A session is written to the store and sent to
the client only once something has been put in it, and it is not re-saved
when a request leaves it unmodified. Each record expires a fixed
``PERMANENT_SESSION_LIFETIME`` after it was first saved.
"""
import hashlib
import secrets
from abc import ABC, abstractmethod
from collections import namedtuple
from datetime import datetime, timezone
from threading import Lock

from flask import current_app, session
from flask.sessions import SessionInterface, SessionMixin
from itsdangerous import BadSignature, Signer
from werkzeug.datastructures import CallbackDict

SessionRecord = namedtuple("SessionRecord", ["data", "expires_at"])


class SessionStoreError(Exception):
    """The session store could not complete an operation."""


def _utcnow():
    return datetime.now(timezone.utc)


class SessionStore(ABC):
    @abstractmethod
    def get(self, sid, now=None):
        """Return the live ``SessionRecord`` for ``sid`` or None."""

    @abstractmethod
    def save(self, sid, data, expires_at):
        ...

    @abstractmethod
    def destroy(self, sid):
        ...

    @abstractmethod
    def prune(self, now=None):
        """Drop expired records and return how many were removed."""


class MemorySessionStore(SessionStore):
    def __init__(self):
        self._records = {}
        self._lock = Lock()

    def __len__(self):
        with self._lock:
            return len(self._records)

    def get(self, sid, now=None):
        now = now or _utcnow()
        with self._lock:
            record = self._records.get(sid)
            if record is None:
                return None
            if record.expires_at <= now:
                del self._records[sid]
                return None
            return SessionRecord(dict(record.data), record.expires_at)

    def save(self, sid, data, expires_at):
        with self._lock:
            self._records[sid] = SessionRecord(dict(data), expires_at)

    def destroy(self, sid):
        with self._lock:
            self._records.pop(sid, None)

    def prune(self, now=None):
        now = now or _utcnow()
        with self._lock:
            expired = [sid for sid, r in self._records.items() if r.expires_at <= now]
            for sid in expired:
                del self._records[sid]
        return len(expired)


class StoredSession(CallbackDict, SessionMixin):
    def __init__(self, initial=None, sid=None, new=False, expires_at=None):
        def on_update(self):
            self.modified = True

        CallbackDict.__init__(self, initial, on_update)
        self.sid = sid
        self.new = new
        self.expires_at = expires_at
        self.modified = False
        self.destroyed = False


class StoreSessionInterface(SessionInterface):
    salt = "session-auth-sid"

    def __init__(self, store):
        self.store = store

    def get_signer(self, app):
        if not app.secret_key:
            return None
        return Signer(
            app.secret_key,
            salt=self.salt,
            key_derivation="hmac",
            digest_method=hashlib.sha256,
        )

    def generate_sid(self):
        return secrets.token_urlsafe(32)

    def open_session(self, app, request):
        signer = self.get_signer(app)
        if signer is None:
            return None

        signed_sid = request.cookies.get(self.get_cookie_name(app))
        if signed_sid:
            try:
                sid = signer.unsign(signed_sid).decode("utf-8")
            except BadSignature:
                app.logger.debug("Ignoring session cookie with a bad signature")
            else:
                record = self.store.get(sid)
                if record is not None:
                    return StoredSession(record.data, sid=sid, expires_at=record.expires_at)

        return StoredSession(sid=self.generate_sid(), new=True)

    def save_session(self, app, session, response):
        # A destroyed session is never written back; the caller owns the cookie
        if session.destroyed:
            return
        if not self.should_set_cookie(app, session):
            return

        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        if not session:
            if not session.new:
                self.store.destroy(session.sid)
                response.delete_cookie(name, domain=domain, path=path)
            return

        if session.expires_at is None:
            session.expires_at = _utcnow() + app.config["PERMANENT_SESSION_LIFETIME"]
        self.store.save(session.sid, dict(session), session.expires_at)

        signed_sid = self.get_signer(app).sign(session.sid).decode("utf-8")
        response.set_cookie(
            name,
            signed_sid,
            expires=session.expires_at,
            httponly=self.get_cookie_httponly(app),
            domain=domain,
            path=path,
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
        )
        response.vary.add("Cookie")

    def destroy(self, session):
        if not session.new:
            self.store.destroy(session.sid)
        session.clear()
        session.destroyed = True


def destroy_session():
    """Remove the current session from its store. Raises ``SessionStoreError``."""
    current_app.session_interface.destroy(session._get_current_object())


def clear_session_cookie(response):
    app = current_app
    iface = app.session_interface
    response.delete_cookie(
        iface.get_cookie_name(app),
        domain=iface.get_cookie_domain(app),
        path=iface.get_cookie_path(app),
    )
    return response
