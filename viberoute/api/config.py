# viberoute/api/config.py
"""Configuration management for the city guide API."""
import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

SUGGESTED_CITIES = [
    "Roma", "Parigi", "Tokyo", "New York", "Londra", "Barcellona", "Berlino", "Milano",
]


def _env_flag(name, default="false"):
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def get_gemini_api_key():
    """Get Gemini API key from environment.

    A missing key is not an error here: the model call fails later instead.
    """
    api_key = os.getenv("GEMINI_API_KEY", "")
    if not api_key:
        logger.warning("GEMINI_API_KEY not set; model calls will fail")
    return api_key


def get_gemini_model():
    return os.getenv("GEMINI_MODEL", "gemini-3-flash-preview")


def get_llm_provider():
    """Return the configured model provider ("gemini" or "openai")."""
    provider = os.getenv("LLM_PROVIDER", "gemini").strip().lower()
    if provider not in ("gemini", "openai"):
        raise ValueError(f"Invalid LLM_PROVIDER '{provider}'. Must be one of: gemini, openai")
    return provider


def get_openai_config():
    """Get OpenAI configuration for the alternative provider."""
    return {
        "api_key": os.getenv("OPENAI_API_KEY", ""),
        "model": os.getenv("OPENAI_CHAT_MODEL", "gpt-4.1"),
    }


def get_google_maps_config():
    """Get Google Maps configuration."""
    return {
        "api_key": os.getenv("GOOGLE_MAPS_API_KEY", ""),
        "geocode_results": _env_flag("GEOCODE_RESULTS"),
    }


def get_port():
    """Get port configuration."""
    return int(os.getenv("PORT", 3000))


def get_default_hours():
    return int(os.getenv("DEFAULT_HOURS", 4))


def get_cors_origins():
    return os.getenv("CORS_ORIGINS", "*").split(",")


def get_state_config():
    """Get per-client view state configuration."""
    return {
        "idle_timeout_seconds": int(os.getenv("STATE_IDLE_TIMEOUT_SECONDS", "3600")),
        "cleanup_interval_seconds": int(os.getenv("STATE_CLEANUP_INTERVAL_SECONDS", "300")),
    }
