"""
Room naming shared by the membership registry and the dispatcher
"""
from typing import Any, Mapping, Optional

# Room prefixes, one per audience
EVENT = "event"
JUDGES = "judges"
SOUND = "sound"
BACKSTAGE = "backstage"
ANNOUNCER = "announcer"
REGISTRATION = "registration"
MEDIA = "media"

ALL_PREFIXES = (EVENT, JUDGES, SOUND, BACKSTAGE, ANNOUNCER, REGISTRATION, MEDIA)

# Roles that join through the bare-id "join:<role>" events
ROLE_ROOMS = (SOUND, BACKSTAGE, ANNOUNCER, REGISTRATION, MEDIA)


def room_name(prefix: str, event_id: Any) -> str:
    """Build the room key for an audience of one event, e.g. judges:evt1"""
    return f"{prefix}:{event_id}"


def event_id_of(data: Any) -> Optional[Any]:
    """Read eventId from a payload mapping, None if there isn't one"""
    if isinstance(data, Mapping):
        return data.get("eventId")
    return None
