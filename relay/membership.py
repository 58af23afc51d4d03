"""
Membership registry - connection lifecycle and room joins

Every client declares its rooms once, at session start, with one of the
join:* events. Room membership itself is kept by the Socket.IO manager and is
dropped by it on disconnect; per-connection attributes go into the
connection's own session record.
"""
import logging
from typing import Any, Mapping

from .rooms import (
    EVENT, JUDGES, SOUND, BACKSTAGE, ANNOUNCER, REGISTRATION, MEDIA,
    ROLE_ROOMS, room_name,
)
from .state import connected_clients
from .utils import contained

logger = logging.getLogger("eodsa_relay")

JUDGE_ROLE = "judge"

ROLE_JOIN_MESSAGES = {
    SOUND: "🎵 Sound tech joined event %s",
    BACKSTAGE: "🎭 Backstage joined event %s",
    ANNOUNCER: "📢 Announcer joined event %s",
    REGISTRATION: "✅ Registration joined event %s",
    MEDIA: "📸 Media joined event %s",
}


def _bare_event_id(data: Any) -> Any:
    # join:<role> normally carries the event id itself
    if isinstance(data, Mapping):
        return data.get("eventId")
    return data


# ============================================================
# JOIN OPERATIONS
# ============================================================

async def join_event_room(sio, sid: str, data: Any = None) -> str:
    """Join the plain observer room for an event; no role is recorded"""
    event_id = _bare_event_id(data)
    room = room_name(EVENT, event_id)
    await sio.enter_room(sid, room)
    logger.info("📡 Socket %s joined event room: %s", sid, event_id)
    return room


async def join_judge_room(sio, sid: str, data: Any = None) -> str:
    """Join the judges room; payload is {eventId, judgeId}"""
    fields = data if isinstance(data, Mapping) else {}
    event_id = fields.get("eventId")
    judge_id = fields.get("judgeId")

    room = room_name(JUDGES, event_id)
    await sio.enter_room(sid, room)
    async with sio.session(sid) as session:
        session["role"] = JUDGE_ROLE
        session["judgeId"] = judge_id
        session["eventId"] = event_id

    logger.info("⚖️ Judge %s joined event %s", judge_id, event_id)
    return room


async def join_role_room(sio, role: str, sid: str, data: Any = None) -> str:
    """Join <role>:<eventId> and record the role on the connection"""
    event_id = _bare_event_id(data)
    room = room_name(role, event_id)
    await sio.enter_room(sid, room)
    async with sio.session(sid) as session:
        session["role"] = role
        session["eventId"] = event_id

    logger.info(ROLE_JOIN_MESSAGES.get(role, f"{role} joined event %s"), event_id)
    return room


def _role_handler(sio, role: str):
    async def handler(sid, data=None):
        await join_role_room(sio, role, sid, data)
    handler.__name__ = f"join_{role}"
    return handler


# ============================================================
# REGISTRATION
# ============================================================

def register_handlers(sio) -> None:
    """Attach lifecycle and join:* handlers to a Socket.IO server"""

    async def connect(sid, environ, auth=None):
        logger.info(f"🔌 Client connected: {sid} (Total: {connected_clients(sio)})")

    async def disconnect(sid, reason=None):
        logger.info(
            f"❌ Client disconnected: {sid} (Reason: {reason}) "
            f"(Remaining: {connected_clients(sio)})"
        )

    async def join_event(sid, data=None):
        await join_event_room(sio, sid, data)

    async def join_judge(sid, data=None):
        await join_judge_room(sio, sid, data)

    sio.on("connect", connect)
    sio.on("disconnect", disconnect)
    sio.on("join:event", contained(join_event))
    sio.on("join:judge", contained(join_judge))
    for role in ROLE_ROOMS:
        sio.on(f"join:{role}", contained(_role_handler(sio, role)))
