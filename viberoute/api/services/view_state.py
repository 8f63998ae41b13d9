# viberoute/api/services/view_state.py
"""Per-client page state and its transitions.

The page moves between ``explore`` (landing), ``menu`` (city chosen) and one
detail tab per query. Each query bumps a generation counter; a result is
applied only if it belongs to the latest generation, so a slow response can
never overwrite a newer one.
"""

import logging
import threading
import time
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from viberoute.api.config import get_default_hours, get_state_config
from viberoute.api.models import NAVIGATION_TABS, QueryResult

logger = logging.getLogger(__name__)

EXPLORE = "explore"
MENU = "menu"


class InvalidTransition(Exception):
    """Raised when a transition is not allowed from the current state."""


class ViewState:
    """State of one client's page."""

    def __init__(self, hours: Optional[int] = None):
        self.active_tab = EXPLORE
        self.city = ""
        self.hours = hours if hours is not None else get_default_hours()
        self.data: Any = None
        self.sources: List[Dict[str, Any]] = []
        self.error: Optional[str] = None
        self.loading = False
        self.generation = 0
        self.last_activity = datetime.now()

        self._lock = threading.Lock()

    # ------------------------------------------------------------------ #
    # Transitions
    # ------------------------------------------------------------------ #

    def _ensure_idle(self, action: str):
        if self.loading:
            raise InvalidTransition(f"Cannot {action} while a query is loading")

    def _touch(self):
        self.last_activity = datetime.now()

    def submit_city(self, city: str) -> None:
        """explore/menu -> menu."""
        if city is not None and not isinstance(city, str):
            raise ValueError("Invalid city parameter")
        city = (city or "").strip()
        with self._lock:
            self._ensure_idle("change city")
            if not city:
                raise InvalidTransition("A city is required")
            self.city = city
            self.active_tab = MENU
            self.data = None
            self.sources = []
            self.error = None
            self._touch()

    def begin_query(self, tab: str, hours: Optional[int] = None) -> int:
        """menu/detail -> detail, marking the state as loading.

        Returns the generation the eventual result must carry. Selecting
        ``menu`` is plain navigation and does not start a query.
        """
        with self._lock:
            self._ensure_idle("open a category")
            if not self.city:
                raise InvalidTransition("Choose a city first")
            if tab == EXPLORE:
                raise InvalidTransition("Use reset to return to explore")

            self._touch()
            if tab == MENU:
                self.active_tab = MENU
                return self.generation

            if hours is not None:
                self.hours = hours
            self.generation += 1
            self.active_tab = tab
            self.loading = True
            self.sources = []
            self.error = None
            return self.generation

    def complete_query(self, generation: int, result: Optional[QueryResult]) -> bool:
        """Apply ``result`` if it belongs to the current generation.

        Returns False when the result is stale and was dropped.
        """
        with self._lock:
            if generation != self.generation or not self.loading:
                logger.info(
                    f"Dropping stale result (generation {generation}, current {self.generation})"
                )
                return False

            if result is None:
                self.data = None
                self.sources = []
                self.error = None
            else:
                self.data = result.data
                self.sources = [s.to_dict() for s in result.sources]
                self.error = result.error
            self.loading = False
            self._touch()
            return True

    def back(self) -> None:
        """detail -> menu."""
        with self._lock:
            self._ensure_idle("go back")
            if self.active_tab in NAVIGATION_TABS:
                raise InvalidTransition(f"Cannot go back from '{self.active_tab}'")
            self.active_tab = MENU
            self._touch()

    def reset(self) -> None:
        """Any idle state -> explore."""
        with self._lock:
            self._ensure_idle("reset")
            self.active_tab = EXPLORE
            self.city = ""
            self.data = None
            self.sources = []
            self.error = None
            self._touch()

    def to_dict(self) -> dict:
        with self._lock:
            return {
                "active_tab": self.active_tab,
                "city": self.city,
                "hours": self.hours,
                "data": self.data,
                "sources": list(self.sources),
                "error": self.error,
                "loading": self.loading,
                "generation": self.generation,
            }


class ViewStateStore:
    """Keeps one ViewState per client and expires idle ones."""

    def __init__(self, start_cleanup: bool = True):
        self.config = get_state_config()
        self.states: Dict[str, ViewState] = {}
        self.lock = threading.Lock()

        if start_cleanup:
            self.cleanup_thread = threading.Thread(target=self._cleanup_loop, daemon=True)
            self.cleanup_thread.start()

        logger.info("ViewStateStore initialized")

    def get(self, client_id: str) -> ViewState:
        """Return the state for ``client_id``, creating it on first use."""
        with self.lock:
            state = self.states.get(client_id)
            if state is None:
                state = ViewState()
                self.states[client_id] = state
                logger.debug(f"Created view state for client {client_id}")
            return state

    def cleanup_idle(self) -> int:
        """Remove states idle for longer than the configured timeout."""
        cutoff = datetime.now() - timedelta(seconds=self.config["idle_timeout_seconds"])
        with self.lock:
            expired = [
                cid for cid, state in self.states.items()
                if state.last_activity < cutoff and not state.loading
            ]
            for cid in expired:
                del self.states[cid]

        if expired:
            logger.info(f"Expired {len(expired)} idle view states")
        return len(expired)

    def _cleanup_loop(self):
        while True:
            time.sleep(self.config["cleanup_interval_seconds"])
            try:
                self.cleanup_idle()
            except Exception as e:
                logger.error(f"Error in view state cleanup: {e}")
