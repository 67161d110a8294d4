"""
Access gates evaluated before a view runs.

A gate is a pure function of the ``SessionContext`` and returns either
``PROCEED`` or a ``Redirect``. ``gated`` runs them in order and the first
redirect stops the request before the view body executes.
"""
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Optional, Union

from flask import redirect, session

# Key Flask-Login writes the authenticated user id under
USER_ID_KEY = "_user_id"


@dataclass(frozen=True)
class SessionContext:
    user_id: Optional[int] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @classmethod
    def from_session(cls, sess) -> "SessionContext":
        raw = sess.get(USER_ID_KEY)
        if raw is None:
            return cls()
        try:
            return cls(user_id=int(raw))
        except (TypeError, ValueError):
            return cls()


@dataclass(frozen=True)
class Proceed:
    pass


@dataclass(frozen=True)
class Redirect:
    target: str


PROCEED = Proceed()

Decision = Union[Proceed, Redirect]
Guard = Callable[[SessionContext], Decision]


def require_authenticated(ctx: SessionContext) -> Decision:
    if not ctx.is_authenticated:
        return Redirect("/login")
    return PROCEED


def require_anonymous(ctx: SessionContext) -> Decision:
    if ctx.is_authenticated:
        return Redirect("/home")
    return PROCEED


def evaluate(ctx: SessionContext, *guards: Guard) -> Decision:
    for guard in guards:
        decision = guard(ctx)
        if isinstance(decision, Redirect):
            return decision
    return PROCEED


def gated(*guards: Guard):
    """Run ``guards`` against the session and pass the context to the view as ``ctx``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            ctx = SessionContext.from_session(session)
            decision = evaluate(ctx, *guards)
            if isinstance(decision, Redirect):
                return redirect(decision.target)
            return view(*args, ctx=ctx, **kwargs)

        return wrapper

    return decorator
