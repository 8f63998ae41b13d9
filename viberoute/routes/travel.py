# viberoute/routes/travel.py
"""City guide routes and blueprint configuration."""

import logging
import os
from datetime import datetime, timezone

from flask import Blueprint, jsonify, redirect, render_template, request, url_for

from viberoute.api.config import SUGGESTED_CITIES, get_google_maps_config, get_llm_provider
from viberoute.api.services.guide_service import parse_hours
from viberoute.api.services.view_state import InvalidTransition
from viberoute.routes import get_client_id

logger = logging.getLogger(__name__)

# Static points of interest served by /api/spots.
DEMO_SPOTS = [
    {"id": 1, "name": "Trattoria da Giggi", "type": "Food", "price": "€", "safety": 5,
     "lat": 41.8902, "lng": 12.4922, "description": "Authentic Roman pasta for under 12€."},
    {"id": 2, "name": "YellowSquare Hostel", "type": "Stay", "price": "€€", "safety": 4,
     "lat": 41.9055, "lng": 12.5047, "description": "Best social hostel in Rome with a basement bar."},
    {"id": 3, "name": "Mercato di Testaccio", "type": "Food", "price": "€", "safety": 5,
     "lat": 41.8785, "lng": 12.4775, "description": "Street food heaven. Try the Mordi e Vai sandwich."},
]


def _read_payload():
    """Return the JSON object or form sent with the request."""
    payload = request.get_json(silent=True)
    if payload is None:
        return request.form
    if not isinstance(payload, dict):
        raise ValueError("Request body must be a JSON object")
    return payload


def create_travel_blueprint(base_dir, guide_service, state_store):
    """Create and configure the travel blueprint.

    Args:
        base_dir: Absolute path to the application directory
        guide_service: GuideService running the model queries
        state_store: ViewStateStore holding per-client page state

    Returns:
        Configured Flask Blueprint
    """
    travel_bp = Blueprint(
        "travel",
        __name__,
        template_folder=os.path.join(base_dir, "templates"),
        static_folder=os.path.join(base_dir, "static"),
        static_url_path="/static",
    )

    def current_state():
        return state_store.get(get_client_id())

    def run_tab(state, tab, hours=None):
        """Drive one query through the state machine synchronously."""
        guide_service.validate_hours(hours if hours is not None else state.hours)
        generation = state.begin_query(tab, hours)
        if tab == "menu":
            return None
        try:
            result = guide_service.run_query(tab, state.city, state.hours)
        except Exception:
            state.complete_query(generation, None)
            raise
        state.complete_query(generation, result)
        return result

    # ------------------------------------------------------------------ #
    # Page
    # ------------------------------------------------------------------ #

    @travel_bp.route("/")
    def index():
        """Render the page for the client's current state."""
        return render_template(
            "index.html",
            state=current_state().to_dict(),
            suggestions=SUGGESTED_CITIES,
        )

    @travel_bp.route("/city", methods=["POST"])
    def submit_city():
        payload = _read_payload()
        current_state().submit_city(payload.get("city", ""))
        return redirect(url_for("travel.index"))

    @travel_bp.route("/tab/<tab>", methods=["POST"])
    def select_tab(tab):
        payload = _read_payload()
        state = current_state()
        run_tab(state, tab, parse_hours(payload.get("hours"), state.hours))
        return redirect(url_for("travel.index"))

    @travel_bp.route("/back", methods=["POST"])
    def back():
        current_state().back()
        return redirect(url_for("travel.index"))

    @travel_bp.route("/reset", methods=["POST"])
    def reset():
        current_state().reset()
        return redirect(url_for("travel.index"))

    # ------------------------------------------------------------------ #
    # JSON API
    # ------------------------------------------------------------------ #

    @travel_bp.route("/api/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok", "time": datetime.now(timezone.utc).isoformat()})

    @travel_bp.route("/api/spots")
    def spots():
        return jsonify(DEMO_SPOTS)

    @travel_bp.route("/api/config")
    def api_config():
        """Return client configuration for the frontend."""
        maps = get_google_maps_config()
        return jsonify({
            "provider": get_llm_provider(),
            "google_maps_configured": bool(maps["api_key"]),
            "geocode_results": maps["geocode_results"],
            "suggestions": SUGGESTED_CITIES,
            "default_hours": current_state().hours,
        })

    @travel_bp.route("/api/query/<tab>", methods=["POST"])
    def api_query(tab):
        """Run one query without touching the page state."""
        data = _read_payload()
        result = guide_service.run_query(tab, data.get("city", ""), parse_hours(data.get("hours"), 4))
        if result is None:
            return jsonify({"data": None, "sources": []})
        return jsonify(result.to_dict())

    @travel_bp.route("/api/state")
    def api_state():
        return jsonify(current_state().to_dict())

    # ------------------------------------------------------------------ #
    # Errors
    # ------------------------------------------------------------------ #

    @travel_bp.errorhandler(ValueError)
    def handle_bad_request(e):
        logger.warning(f"Rejected request: {e}")
        return jsonify({"error": str(e)}), 400

    @travel_bp.errorhandler(InvalidTransition)
    def handle_invalid_transition(e):
        logger.warning(f"Invalid transition: {e}")
        return jsonify({"error": str(e)}), 409

    return travel_bp


__all__ = ["create_travel_blueprint"]
