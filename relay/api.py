"""
HTTP handlers served next to the Socket.IO endpoint
"""
import logging

import socketio
from aiohttp import web

from .state import connected_clients
from .utils import utc_timestamp

logger = logging.getLogger("eodsa_relay")

SIO_KEY = web.AppKey("sio", socketio.AsyncServer)

FALLBACK_TEXT = "EODSA WebSocket Server - Running"

# ============================================================
# HEALTH
# ============================================================

async def api_health(request: web.Request) -> web.Response:
    """Liveness probe with the number of connected Socket.IO clients"""
    sio = request.app[SIO_KEY]
    return web.json_response({
        "status": "healthy",
        "timestamp": utc_timestamp(),
        "connectedClients": connected_clients(sio)
    })

# ============================================================
# FALLBACK
# ============================================================

async def api_fallback(request: web.Request) -> web.Response:
    """Any other request gets a fixed plaintext acknowledgment"""
    return web.Response(text=FALLBACK_TEXT, content_type="text/plain")


def setup_routes(app: web.Application) -> None:
    # Must run after the Socket.IO server is attached so /socket.io/ wins
    app.router.add_get("/health", api_health)
    app.router.add_route("*", "/{tail:.*}", api_fallback)
