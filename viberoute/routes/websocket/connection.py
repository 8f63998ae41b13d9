# viberoute/routes/websocket/connection.py
"""WebSocket connection and disconnection handlers."""

import logging
import time

from .base import BaseWebSocketHandler

logger = logging.getLogger(__name__)


class ConnectionHandler(BaseWebSocketHandler):
    """Handles WebSocket connection lifecycle events."""

    def register_handlers(self):
        """Register connection-related event handlers."""

        @self.socketio.on("connect", namespace=self.namespace)
        def handle_connect(auth=None):
            """Send the current page state to a freshly connected browser."""
            self.log_event("connect")
            self.emit_state(self.current_state())

        @self.socketio.on("disconnect", namespace=self.namespace)
        def handle_disconnect(*args):
            # State is kept: the page may reconnect after a reload.
            self.log_event("disconnect")

        @self.socketio.on("ping", namespace=self.namespace)
        def handle_ping():
            """Handle ping for connection testing."""
            self.emit_to_client("pong", {"timestamp": time.time()})
