from collections import namedtuple

from flask import session
from flask_jwt_extended import verify_jwt_in_request, get_jwt, get_jwt_identity

Identity = namedtuple("Identity", ["user_id", "role", "username"])


def login_session(user):
    session.clear()
    session.permanent = True
    session["user_id"] = int(user.id)
    session["username"] = user.username
    session["email"] = user.email
    session["role"] = user.role


def logout_session():
    session.clear()


def current_identity():
    """Who is calling: the browser session first, then an ``Authorization: Bearer`` JWT.

    Returns ``None`` for anonymous requests. A malformed or expired token is
    rejected by flask-jwt-extended's own error handlers.
    """
    if session.get("user_id"):
        return Identity(int(session["user_id"]), session.get("role"), session.get("username"))

    if verify_jwt_in_request(optional=True):
        claims = get_jwt()
        return Identity(int(get_jwt_identity()), claims.get("role"), claims.get("username"))

    return None
