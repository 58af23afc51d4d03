"""
Helpers for handler error containment and process-level fault logging
"""
import functools
import logging
from datetime import datetime, timezone

logger = logging.getLogger("eodsa_relay")


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC string"""
    return datetime.now(timezone.utc).isoformat()


def contained(handler):
    """Wrap a Socket.IO event handler so a failure is logged against the sid
    and never reaches the client or the transport"""

    @functools.wraps(handler)
    async def wrapper(sid, *args):
        try:
            return await handler(sid, *args)
        except Exception as e:
            logger.error(f"🚨 Socket error for {sid}: {e}", exc_info=True)
            return None

    return wrapper


def log_uncaught_exception(exc_type, exc_value, exc_tb):
    """sys.excepthook replacement; the interpreter still exits with status 1"""
    if issubclass(exc_type, KeyboardInterrupt):
        return
    logger.critical(
        "🚨 Uncaught Exception: %s", exc_value,
        exc_info=(exc_type, exc_value, exc_tb)
    )


def log_loop_exception(loop, context):
    """asyncio loop exception handler: log and keep serving"""
    exc = context.get("exception")
    logger.error(
        "🚨 Unhandled Rejection: %s (reason: %s)",
        context.get("message"), exc,
        exc_info=exc if exc is not None else False
    )
