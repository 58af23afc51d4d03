"""
Environment-driven settings for the relay
"""
import logging
import os
from typing import List, Optional

logger = logging.getLogger("eodsa_relay")

DEFAULT_PORT = 3001
DEFAULT_HOST = "0.0.0.0"
DEFAULT_ORIGINS = [
    "http://localhost:3000",
    "https://localhost:3000",
]

# Socket.IO heartbeat, seconds
PING_INTERVAL = 25
PING_TIMEOUT = 60
TRANSPORTS = ["polling", "websocket"]


def get_port() -> int:
    raw = os.environ.get("PORT")
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid PORT %r, falling back to %d", raw, DEFAULT_PORT)
        return DEFAULT_PORT


def get_host() -> str:
    return os.environ.get("SERVER_HOST", DEFAULT_HOST)


def get_environment() -> str:
    return os.environ.get("APP_ENV", "development")


def get_log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").upper()


def get_public_domain() -> Optional[str]:
    return os.environ.get("RAILWAY_PUBLIC_DOMAIN") or None


def get_allowed_origins() -> List[str]:
    """
    Origins allowed to open a Socket.IO session

    ALLOWED_ORIGINS (comma separated) replaces the defaults entirely.
    Otherwise the localhost defaults are extended with the Railway and
    Vercel domains and FRONTEND_URL, whichever are set.
    """
    explicit = os.environ.get("ALLOWED_ORIGINS")
    if explicit:
        return [origin.strip() for origin in explicit.split(",") if origin.strip()]

    origins = list(DEFAULT_ORIGINS)

    railway = os.environ.get("RAILWAY_PUBLIC_DOMAIN")
    if railway:
        origins.append(f"https://{railway}")

    vercel = os.environ.get("VERCEL_URL")
    if vercel:
        origins.append(f"https://{vercel}")

    frontend = os.environ.get("FRONTEND_URL")
    if frontend:
        origins.append(frontend)

    logger.info("🌐 Allowed CORS origins: %s", origins)
    return origins
