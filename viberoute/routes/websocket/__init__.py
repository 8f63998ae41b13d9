# viberoute/routes/websocket/__init__.py
"""WebSocket route handlers initialization."""

import logging

from viberoute.routes import NAMESPACE
from .connection import ConnectionHandler
from .guide import GuideHandler

logger = logging.getLogger(__name__)


def register_websocket_handlers(socketio, guide_service, state_store):
    """Register all WebSocket event handlers with SocketIO.

    Args:
        socketio: Flask-SocketIO instance
        guide_service: GuideService running the model queries
        state_store: ViewStateStore holding per-client page state
    """
    logger.info(f"Registering WebSocket handlers for namespace: {NAMESPACE}")

    ConnectionHandler(socketio, state_store, NAMESPACE).register_handlers()
    GuideHandler(socketio, state_store, guide_service, NAMESPACE).register_handlers()

    logger.info("✅ WebSocket handlers registered")


__all__ = ["register_websocket_handlers", "NAMESPACE"]
