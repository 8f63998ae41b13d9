# viberoute/routes/websocket/guide.py
"""WebSocket handlers driving the city guide page."""

import logging

from flask import request

from viberoute.api.services.guide_service import parse_hours
from viberoute.api.services.view_state import InvalidTransition
from viberoute.routes import NAMESPACE
from .base import BaseWebSocketHandler

logger = logging.getLogger(__name__)


def _event_payload(data):
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Event data must be an object")
    return data


class GuideHandler(BaseWebSocketHandler):
    """Handles navigation and category queries over the socket.

    Queries run in a background task. The browser gets a ``state`` event
    with ``loading`` set right away, then ``result`` and a fresh ``state``
    once the model answers, unless a newer query superseded it.
    """

    def __init__(self, socketio, state_store, guide_service, namespace=NAMESPACE):
        super().__init__(socketio, state_store, namespace)
        self.guide_service = guide_service

    def _fail_query(self, state, generation, sid, message):
        state.complete_query(generation, None)
        self.emit_to_client("error", {"message": message, "event": "select_category"}, room=sid)
        self.emit_state(state, room=sid)

    def _run_query(self, state, tab, generation, sid):
        """Background task: query the model and publish the result if still current."""
        try:
            result = self.guide_service.run_query(tab, state.city, state.hours)
        except ValueError as e:
            self._fail_query(state, generation, sid, str(e))
            return
        except Exception as e:
            logger.exception(f"[WS] Query for '{tab}' failed - Client: {sid}, Error: {e}")
            self._fail_query(state, generation, sid, "Si è verificato un errore imprevisto.")
            return

        if not state.complete_query(generation, result):
            return

        payload = {"tab": tab, "generation": generation}
        if result is None:
            payload.update({"data": None, "sources": [], "error": None})
        else:
            payload.update(result.to_dict())
        self.emit_to_client("result", payload, room=sid)
        self.emit_state(state, room=sid)

    def register_handlers(self):
        """Register guide event handlers."""

        @self.socketio.on("submit_city", namespace=self.namespace)
        def handle_submit_city(data):
            self.log_event("submit_city", data)
            state = self.current_state()
            try:
                state.submit_city(_event_payload(data).get("city", ""))
            except (InvalidTransition, ValueError) as e:
                self.handle_error(e, "submit_city")
                return
            self.emit_state(state)

        @self.socketio.on("select_category", namespace=self.namespace)
        def handle_select_category(data):
            self.log_event("select_category", data)
            state = self.current_state()

            try:
                data = _event_payload(data)
                tab = data.get("tab", "")
                if not isinstance(tab, str):
                    raise ValueError("Invalid tab parameter")
                hours = parse_hours(data.get("hours"), state.hours)
                self.guide_service.validate_hours(hours)
                generation = state.begin_query(tab, hours)
            except (InvalidTransition, ValueError) as e:
                self.handle_error(e, "select_category")
                return

            self.emit_state(state)
            if tab == "menu":
                return

            self.socketio.start_background_task(
                self._run_query, state, tab, generation, request.sid
            )

        @self.socketio.on("back", namespace=self.namespace)
        def handle_back():
            state = self.current_state()
            try:
                state.back()
            except InvalidTransition as e:
                self.handle_error(e, "back")
                return
            self.emit_state(state)

        @self.socketio.on("reset", namespace=self.namespace)
        def handle_reset():
            state = self.current_state()
            try:
                state.reset()
            except InvalidTransition as e:
                self.handle_error(e, "reset")
                return
            self.emit_state(state)

        @self.socketio.on("get_state", namespace=self.namespace)
        def handle_get_state():
            self.emit_state(self.current_state())
