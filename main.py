#!/usr/bin/env python3
"""
EODSA Relay - Entry Point
Socket.IO fan-out relay on aiohttp + health check + graceful shutdown
"""
import asyncio
import logging
import sys
from typing import List, Optional, Union

import socketio
from aiohttp import web

from relay import config, dispatch, membership
from relay.api import SIO_KEY, setup_routes
from relay.state import connected_clients
from relay.utils import log_loop_exception, log_uncaught_exception

logger = logging.getLogger("eodsa_relay")


def create_sio(origins: Optional[Union[str, List[str]]] = None) -> socketio.AsyncServer:
    """Socket.IO server with the configured CORS allow-list and heartbeat"""
    return socketio.AsyncServer(
        async_mode="aiohttp",
        cors_allowed_origins=origins if origins is not None else config.get_allowed_origins(),
        cors_credentials=True,
        transports=config.TRANSPORTS,
        ping_interval=config.PING_INTERVAL,
        ping_timeout=config.PING_TIMEOUT,
        logger=False,
        engineio_logger=False,
    )


async def on_startup(app: web.Application):
    asyncio.get_running_loop().set_exception_handler(log_loop_exception)

    logger.info("🚀 EODSA WebSocket Server Started!")
    logger.info("📡 Port: %d", config.get_port())
    logger.info("🌐 Environment: %s", config.get_environment())
    logger.info("🎭 Ready for backstage control and live updates")

    public_domain = config.get_public_domain()
    if public_domain:
        logger.info("🔗 Public URL: https://%s", public_domain)

    logger.info("✨ Health check: /health")
    logger.info(f"📊 Connected clients: {connected_clients(app[SIO_KEY])}")


async def on_shutdown(app: web.Application):
    logger.info("🛑 Shutdown signal received, shutting down gracefully")


async def on_cleanup(app: web.Application):
    logger.info("✅ Server closed")


def create_app(sio: Optional[socketio.AsyncServer] = None) -> web.Application:
    """Create the aiohttp application with the relay attached"""
    app = web.Application()
    if sio is None:
        sio = create_sio()

    app[SIO_KEY] = sio

    sio.attach(app)
    membership.register_handlers(sio)
    dispatch.register_handlers(sio)
    setup_routes(app)

    app.on_startup.append(on_startup)
    app.on_shutdown.append(on_shutdown)
    app.on_cleanup.append(on_cleanup)
    return app


def main():
    logging.basicConfig(
        level=config.get_log_level(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    sys.excepthook = log_uncaught_exception

    app = create_app()
    host = config.get_host()
    port = config.get_port()

    try:
        web.run_app(app, host=host, port=port, print=None)
    except OSError as e:
        logger.error(f"🚨 Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
