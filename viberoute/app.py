"""
VibeRoute – Flask application factory

* Flask app + Socket.IO in threading mode, so model calls can run as
  background tasks without eventlet/gevent.
* The Socket.IO namespace is `/ws`; the page script connects to it for
  asynchronous category loading. Plain form posts work without it.
"""

import logging
import os

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO

from viberoute.api.config import get_cors_origins
from viberoute.api.services.guide_service import GuideService
from viberoute.api.services.view_state import ViewStateStore
from viberoute.routes import NAMESPACE
from viberoute.routes.travel import create_travel_blueprint
from viberoute.routes.websocket import register_websocket_handlers

logger = logging.getLogger(__name__)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def create_app(guide_service=None, state_store=None):
    """Build the Flask app and its SocketIO server.

    Args:
        guide_service: GuideService to use; a default one is created if omitted
        state_store: ViewStateStore to use; a default one is created if omitted

    Returns:
        Tuple of (app, socketio)
    """
    # Templates and static files are served by the travel blueprint.
    app = Flask(__name__, static_folder=None)

    flask_secret_key = os.getenv("FLASK_SECRET_KEY") or os.urandom(32).hex()
    if "FLASK_SECRET_KEY" not in os.environ:
        logger.warning("No FLASK_SECRET_KEY found. Generated a temporary key.")
    app.secret_key = flask_secret_key

    app.config.update(
        SESSION_COOKIE_SECURE=False,
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Lax",
        PERMANENT_SESSION_LIFETIME=86400,
    )

    origins = get_cors_origins()
    CORS(app, origins=origins, supports_credentials=True)

    socketio = SocketIO(
        app,
        cors_allowed_origins=origins,
        async_mode="threading",
        logger=False,
        engineio_logger=False,
    )
    logger.info("Socket.IO initialised (async_mode=threading)")

    guide_service = guide_service or GuideService()
    state_store = state_store or ViewStateStore()

    app.register_blueprint(create_travel_blueprint(BASE_DIR, guide_service, state_store))
    register_websocket_handlers(socketio, guide_service, state_store)

    @app.route("/debug")
    def debug():
        """Simple JSON diagnostics endpoint."""
        return {
            "status": "ok",
            "socketio_initialized": True,
            "websocket_namespace": NAMESPACE,
            "active_states": len(state_store.states),
        }

    return app, socketio


__all__ = ["create_app"]
