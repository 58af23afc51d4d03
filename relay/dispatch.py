"""
Fan-out dispatcher

Each inbound event is re-emitted, payload untouched, to a fixed set of rooms
for the payload's eventId. The routes below are the whole of the routing
logic; a new event kind is a new row here.
"""
import asyncio
import logging
from typing import Any, Dict, Mapping, Tuple

from .rooms import (
    EVENT, JUDGES, SOUND, BACKSTAGE, ANNOUNCER, REGISTRATION, MEDIA,
    room_name, event_id_of,
)
from .utils import contained

logger = logging.getLogger("eodsa_relay")

# event name -> room prefixes to rebroadcast to
FANOUT_ROUTES: Dict[str, Tuple[str, ...]] = {
    "performance:reorder": (EVENT, JUDGES, SOUND, ANNOUNCER, REGISTRATION, MEDIA),
    "performance:status": (EVENT, JUDGES, SOUND, BACKSTAGE, ANNOUNCER, REGISTRATION, MEDIA),
    "performance:music_cue": (EVENT, JUDGES, SOUND, BACKSTAGE, ANNOUNCER, REGISTRATION, MEDIA),
    "entry:music_updated": (EVENT, JUDGES, SOUND, BACKSTAGE, ANNOUNCER, REGISTRATION, MEDIA),
    "entry:video_updated": (EVENT, JUDGES, SOUND, BACKSTAGE, ANNOUNCER, REGISTRATION, MEDIA),
    "event:control": (EVENT, JUDGES, SOUND, ANNOUNCER, REGISTRATION, MEDIA),
    "presence:update": (EVENT, BACKSTAGE, ANNOUNCER, REGISTRATION, MEDIA),
    # announcer initiated it, so no announcer room
    "performance:announced": (EVENT, BACKSTAGE, JUDGES, SOUND, REGISTRATION, MEDIA),
}

# Log lines only, never used for routing
SUMMARIES: Dict[str, str] = {
    "performance:reorder": "🔄 Performance reorder broadcast for event {eventId}",
    "performance:status": "📊 Status update broadcast: {performanceId} -> {status}",
    "performance:music_cue": "🎵 Music cue broadcast: {performanceId} -> {musicCue}",
    "entry:music_updated": "🎶 Entry music updated: {entryId}",
    "entry:video_updated": "📹 Entry video updated: {entryId}",
    "event:control": "🎯 Event control: {action} for event {eventId}",
    "presence:update": "👥 Presence update: {performanceId} -> {presence}",
    "performance:announced": "📢 Performance announced: {performanceId}",
}

TEST_NOTIFICATION_EVENT = "test:notification"
NOTIFICATION_EVENT = "notification"
TEST_NOTIFICATION_MESSAGE = "Test notification from backstage!"


class _Fields(dict):
    def __missing__(self, key):
        return None


def rooms_for(event_name: str, event_id: Any) -> Tuple[str, ...]:
    """Concrete destination rooms for an event; empty for unknown names"""
    return tuple(room_name(prefix, event_id) for prefix in FANOUT_ROUTES.get(event_name, ()))


def summarize(event_name: str, data: Any) -> str:
    template = SUMMARIES.get(event_name, "📨 {event} broadcast for event {eventId}")
    fields = _Fields(data if isinstance(data, Mapping) else {})
    fields["event"] = event_name
    fields["presence"] = "Present" if fields["present"] else "Absent"
    return template.format_map(fields)


async def dispatch(sio, event_name: str, sid: str, data: Any = None) -> Tuple[str, ...]:
    """Rebroadcast data under event_name to every room routed for its eventId

    Returns the rooms emitted to. A missing eventId is not an error: it
    names rooms like judges:None, the same ones a join without an id lands in.
    """
    rooms = rooms_for(event_name, event_id_of(data))
    logger.info(summarize(event_name, data))

    results = await asyncio.gather(
        *(sio.emit(event_name, data, to=room) for room in rooms),
        return_exceptions=True
    )
    for room, result in zip(rooms, results):
        if isinstance(result, Exception):
            logger.error(f"🚨 Failed to emit {event_name} to {room} for {sid}: {result}")
    return rooms


async def send_test_notification(sio, sid: str, data: Any = None) -> None:
    """Emit a canned info notification to the plain event room"""
    logger.info("📢 Sending test notification: %s", data)
    event_id = event_id_of(data)
    await sio.emit(NOTIFICATION_EVENT, {
        "type": "info",
        "message": TEST_NOTIFICATION_MESSAGE,
        "eventId": event_id
    }, to=room_name(EVENT, event_id))


def _route_handler(sio, event_name: str):
    async def handler(sid, data=None):
        await dispatch(sio, event_name, sid, data)
    handler.__name__ = "relay_" + event_name.replace(":", "_")
    return handler


def register_handlers(sio) -> None:
    """Attach one relay handler per route plus test:notification"""
    for event_name in FANOUT_ROUTES:
        sio.on(event_name, contained(_route_handler(sio, event_name)))

    async def test_notification(sid, data=None):
        await send_test_notification(sio, sid, data)

    sio.on(TEST_NOTIFICATION_EVENT, contained(test_notification))
