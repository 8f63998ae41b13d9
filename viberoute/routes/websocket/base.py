# viberoute/routes/websocket/base.py
"""Base WebSocket handler with common functionality."""

import logging

from flask import request
from flask_socketio import emit

from viberoute.routes import NAMESPACE, get_client_id

logger = logging.getLogger(__name__)


class BaseWebSocketHandler:
    """Base class for WebSocket handlers with common functionality."""

    def __init__(self, socketio, state_store, namespace=NAMESPACE):
        self.socketio = socketio
        self.state_store = state_store
        self.namespace = namespace

    def emit_to_client(self, event, data, room=None):
        """Emit event to a specific client or room."""
        if room:
            self.socketio.emit(event, data, to=room, namespace=self.namespace)
        else:
            emit(event, data, namespace=self.namespace)

    def current_state(self):
        return self.state_store.get(get_client_id())

    def emit_state(self, state, room=None):
        self.emit_to_client("state", state.to_dict(), room=room)

    def log_event(self, event_name, data=None):
        """Log WebSocket events consistently."""
        if data:
            logger.info(f"[WS] {event_name} - Client: {request.sid}, Data: {data}")
        else:
            logger.info(f"[WS] {event_name} - Client: {request.sid}")

    def handle_error(self, error, event_name=""):
        """Log an error and report it to the client."""
        logger.warning(f"[WS] Error in {event_name} - Client: {request.sid}, Error: {error}")
        self.emit_to_client("error", {"message": str(error), "event": event_name})
