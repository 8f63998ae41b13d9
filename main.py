"""
VibeRoute – main application entry point

Run locally with `python main.py`; the page is served on `/` and the JSON
API under `/api/`.
"""

import logging

from dotenv import load_dotenv

# --------------------------------------------------------------------------- #
# Environment & logging
# --------------------------------------------------------------------------- #
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

from viberoute.api.config import get_port  # noqa: E402
from viberoute.app import create_app  # noqa: E402

app, socketio = create_app()

# --------------------------------------------------------------------------- #
# Local development runner
# --------------------------------------------------------------------------- #
if __name__ == "__main__":
    port = get_port()
    logger.info("VibeRoute server running on http://localhost:%d", port)
    socketio.run(app, host="0.0.0.0", port=port, debug=False, allow_unsafe_werkzeug=True)

__all__ = ["app", "socketio"]
