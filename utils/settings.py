"""Environment-driven configuration for the relay."""

import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_NOMINATIM_URL = "https://nominatim.openstreetmap.org"
DEFAULT_OSRM_URL = "https://router.project-osrm.org"


@dataclass(frozen=True)
class Settings:
    """Runtime configuration read from the process environment.

    Attributes:
        openai_api_key: API key for the model endpoint (None when unset).
        openai_model: Model name passed to the Responses API.
        database_dir: Directory holding app.db (None when unset).
        nominatim_url: Base URL of the place search service.
        osrm_url: Base URL of the routing service.
        geocoder_user_agent: User-Agent header sent to the place search service.
        http_timeout_seconds: Total timeout for geocoding and routing calls.
        demo_session_id: Session id shared by every websocket connection.
        log_level: Name of the root logging level.
    """

    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    database_dir: Optional[str] = None
    nominatim_url: str = DEFAULT_NOMINATIM_URL
    osrm_url: str = DEFAULT_OSRM_URL
    geocoder_user_agent: str = "Wandermap/1.0"
    http_timeout_seconds: float = 15.0
    demo_session_id: str = "global-demo-session"
    log_level: str = "INFO"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name}={raw!r} is not a number") from exc


def load_settings() -> Settings:
    """Build a Settings instance from environment variables."""
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        database_dir=os.getenv("DATABASE_DIR") or None,
        nominatim_url=os.getenv("NOMINATIM_URL", DEFAULT_NOMINATIM_URL).rstrip("/"),
        osrm_url=os.getenv("OSRM_URL", DEFAULT_OSRM_URL).rstrip("/"),
        geocoder_user_agent=os.getenv("GEOCODER_USER_AGENT", "Wandermap/1.0"),
        http_timeout_seconds=_float_env("HTTP_TIMEOUT_SECONDS", 15.0),
        demo_session_id=os.getenv("DEMO_SESSION_ID", "global-demo-session"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
