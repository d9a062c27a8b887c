"""Socket.IO transport: online presence and message delivery.

A user may hold several sockets at once (tabs, devices). Presence maps each
user id to its live socket ids; ``getOnlineUsers`` is rebroadcast to every
client whenever that set of users changes.
"""
from __future__ import annotations

import threading
from collections import defaultdict
from typing import Dict, List, Optional, Set

from flask import current_app, request
from flask_login import current_user
from flask_socketio import SocketIO, ConnectionRefusedError

ONLINE_USERS_EVENT = "getOnlineUsers"
NEW_MESSAGE_EVENT = "newMessage"


class Presence:
    """Thread-safe user id <-> socket id registry."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_user: Dict[str, Set[str]] = defaultdict(set)
        self._by_sid: Dict[str, str] = {}

    def add(self, user_id: str, sid: str) -> None:
        with self._lock:
            self._by_user[user_id].add(sid)
            self._by_sid[sid] = user_id

    def remove(self, sid: str) -> Optional[str]:
        with self._lock:
            user_id = self._by_sid.pop(sid, None)
            if user_id is None:
                return None
            sids = self._by_user.get(user_id)
            if sids is not None:
                sids.discard(sid)
                if not sids:
                    del self._by_user[user_id]
            return user_id

    def sids_for(self, user_id: str) -> List[str]:
        with self._lock:
            return sorted(self._by_user.get(user_id, ()))

    def online_user_ids(self) -> List[str]:
        with self._lock:
            return sorted(self._by_user)


def _presence() -> Presence:
    return current_app.extensions["presence"]


def _socketio() -> SocketIO:
    return current_app.extensions["socketio"]


def broadcast_online_users() -> None:
    _socketio().emit(ONLINE_USERS_EVENT, _presence().online_user_ids())


def notify_new_message(message: dict) -> int:
    """Emit ``newMessage`` to every socket of the receiver; returns how many."""
    sids = _presence().sids_for(message["receiver_id"])
    sio = _socketio()
    for sid in sids:
        sio.emit(NEW_MESSAGE_EVENT, message, to=sid)
    return len(sids)


def register_socket_handlers(socketio: SocketIO) -> None:
    @socketio.on("connect")
    def on_connect(auth=None):
        if not current_user.is_authenticated:
            raise ConnectionRefusedError("unauthorized")
        user_id = str(current_user.get_id())
        _presence().add(user_id, request.sid)
        current_app.logger.info("socket connected: user=%s sid=%s", user_id, request.sid)
        broadcast_online_users()

    @socketio.on("disconnect")
    def on_disconnect(*args):
        user_id = _presence().remove(request.sid)
        if user_id is not None:
            current_app.logger.info("socket disconnected: user=%s sid=%s", user_id, request.sid)
            broadcast_online_users()
