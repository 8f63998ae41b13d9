# viberoute/routes/__init__.py
import secrets

from flask import session

NAMESPACE = "/ws"


def get_client_id():
    """Return the id keying this browser's view state, creating it if needed."""
    if "_id" not in session:
        session["_id"] = f"client_{secrets.token_urlsafe(12)}"
        session.modified = True
    return session["_id"]
