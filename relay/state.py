"""
Connection counts, read from the Socket.IO server
Room membership and per-connection attributes live there too; nothing is
mirrored in this process
"""


def connected_clients(sio) -> int:
    """Engine.IO sessions that are open and not on their way out"""
    return sum(
        1 for socket in sio.eio.sockets.values()
        if not socket.closing and not socket.closed
    )
