import os
from collections import defaultdict
from contextlib import asynccontextmanager
from types import SimpleNamespace

import pytest

from relay import dispatch, membership


# Environment variables read by relay.config
_ENV_VARS_TO_ISOLATE = [
    "PORT",
    "SERVER_HOST",
    "ALLOWED_ORIGINS",
    "RAILWAY_PUBLIC_DOMAIN",
    "VERCEL_URL",
    "FRONTEND_URL",
    "APP_ENV",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def env_isolation():
    """Isolate environment variables between tests."""
    backup = {k: os.environ.get(k) for k in _ENV_VARS_TO_ISOLATE}
    for k in _ENV_VARS_TO_ISOLATE:
        os.environ.pop(k, None)
    try:
        yield
    finally:
        for k, v in backup.items():
            if v is None:
                os.environ.pop(k, None)
            else:
                os.environ[k] = v


class FakeSocketServer:
    """Records what the relay asks of socketio.AsyncServer.

    Rooms and sessions behave like the real manager: entering a room twice
    is a no-op, emitting to an empty room delivers nothing, and disconnect
    drops every membership of the sid.
    """

    def __init__(self):
        self.handlers = {}
        self.rooms = defaultdict(set)
        self.sessions = defaultdict(dict)
        self.emitted = []
        self.inbox = defaultdict(list)
        self.eio = SimpleNamespace(sockets={})

    def on(self, event, handler=None, namespace=None):
        self.handlers[event] = handler

    async def enter_room(self, sid, room, namespace=None):
        self.rooms[room].add(sid)

    async def emit(self, event, data=None, to=None, room=None, **kwargs):
        target = to if to is not None else room
        self.emitted.append((event, data, target))
        for sid in sorted(self.rooms.get(target, ())):
            self.inbox[sid].append((event, data))

    @asynccontextmanager
    async def session(self, sid, namespace=None):
        yield self.sessions[sid]

    def rooms_of(self, sid):
        return {room for room, members in self.rooms.items() if sid in members}

    async def connect(self, sid):
        self.eio.sockets[sid] = SimpleNamespace(closing=False, closed=False)
        await self.handlers["connect"](sid, {}, None)

    async def disconnect(self, sid, reason="client namespace disconnect"):
        for members in self.rooms.values():
            members.discard(sid)
        self.sessions.pop(sid, None)
        self.inbox.pop(sid, None)
        socket = self.eio.sockets.get(sid)
        if socket is not None:
            socket.closing = True
        await self.handlers["disconnect"](sid, reason)
        self.eio.sockets.pop(sid, None)

    async def trigger(self, event, sid, data=None):
        # Socket.IO ignores events that have no handler
        handler = self.handlers.get(event)
        if handler is None:
            return None
        return await handler(sid, data)


@pytest.fixture
def sio():
    server = FakeSocketServer()
    membership.register_handlers(server)
    dispatch.register_handlers(server)
    return server
