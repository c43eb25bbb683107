"""
State synchronization.

Every connected viewer is a Session. Inbound commands go through
SyncHub.handle, which checks privilege, validates the payload, applies the
store transition and then commits: the full snapshot is sent to every
session, admin or not. Failed commands never broadcast.
"""
import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

from shared.events import Event, admin_login_event, command_event, match_result_event
from shared.pubsub import PubSubClient

from .commands import Command, LoginAdmin, SetMatchWinner, command_type_for
from .exceptions import ConstraintViolation, NotFound, PrivilegeDenied, ValidationFailure
from .models import Snapshot
from .store import TournamentStore

logger = logging.getLogger(__name__)

STATE_EVENT = 'state'
ERROR_EVENT = 'errorMsg'
ADMIN_STATUS_EVENT = 'adminStatus'


class Channel:
    """Transport seam: delivers one event to one session."""

    def emit(self, event: str, data: Any, to: str):
        raise NotImplementedError


class SocketIOChannel(Channel):
    def __init__(self, socketio):
        self.socketio = socketio

    def emit(self, event: str, data: Any, to: str):
        self.socketio.emit(event, data, to=to)


@dataclass
class Session:
    sid: str
    is_admin: bool = False


class SyncHub:
    """
    Owns the connected sessions and funnels every mutation through commit.

    Events are handled one at a time, broadcast included. The store has no
    locking of its own; the hub lock is what keeps Socket.IO worker threads
    from interleaving.
    """

    def __init__(self,
                 store: TournamentStore,
                 channel: Channel,
                 admin_password: str,
                 pubsub: Optional[PubSubClient] = None,
                 tournament_id: str = 'default'):
        self.store = store
        self.channel = channel
        self.admin_password = admin_password
        self.pubsub = pubsub
        self.tournament_id = tournament_id
        self.sessions: Dict[str, Session] = {}
        self._lock = threading.RLock()

    # ==================== Sessions ====================

    def connect(self, sid: str) -> Session:
        """Register a session and send it the current state."""
        with self._lock:
            session = Session(sid=sid)
            self.sessions[sid] = session
            self._send(sid, STATE_EVENT, self.store.snapshot().to_dict())
            logger.info(f"Session {sid} connected ({len(self.sessions)} total)")
            return session

    def disconnect(self, sid: str):
        with self._lock:
            if self.sessions.pop(sid, None) is not None:
                logger.info(f"Session {sid} disconnected ({len(self.sessions)} total)")

    def login(self, session: Session, password: str) -> bool:
        session.is_admin = password == self.admin_password
        self._send(session.sid, ADMIN_STATUS_EVENT, {'ok': session.is_admin})
        logger.info(f"Admin login for session {session.sid}: {'ok' if session.is_admin else 'rejected'}")
        self._publish(admin_login_event(self.tournament_id, session.sid, session.is_admin))
        return session.is_admin

    def snapshot(self) -> Snapshot:
        with self._lock:
            return self.store.snapshot()

    # ==================== Commands ====================

    def handle(self, sid: str, event: str, payload: Any = None) -> Optional[Snapshot]:
        """
        Process one inbound event.

        Returns the committed snapshot, or None when nothing changed.
        """
        with self._lock:
            session = self.sessions.get(sid)
            if session is None:
                logger.warning(f"Event '{event}' from unknown session {sid}")
                return None

            try:
                command = self._parse(session, event, payload)
                if isinstance(command, LoginAdmin):
                    self.login(session, command.password)
                    return None
                snapshot = command.apply(self.store)
            except PrivilegeDenied as e:
                logger.debug(f"Dropped from {sid}: {e}")
                return None
            except ConstraintViolation as e:
                self._send(sid, ERROR_EVENT, {'msg': str(e)})
                return None
            except (ValidationFailure, NotFound) as e:
                logger.debug(f"Ignored '{event}' from {sid}: {e}")
                return None

            self.commit(snapshot, command)
            return snapshot

    def _parse(self, session: Session, event: str, payload: Any) -> Command:
        command_type = command_type_for(event)
        if command_type is None:
            raise ValidationFailure('event', f"Unknown event '{event}'")
        if command_type.privileged and not session.is_admin:
            raise PrivilegeDenied(event)
        return command_type.from_payload(payload)

    # ==================== Commit ====================

    def commit(self, snapshot: Snapshot, command: Command = None):
        """Broadcast the snapshot to every session and publish the change."""
        data = snapshot.to_dict()
        for sid in list(self.sessions):
            self._send(sid, STATE_EVENT, data)

        if command is not None:
            logger.info(f"Committed '{command.event}' to {len(self.sessions)} sessions")
            self._publish(self._event_for(command))

    def _event_for(self, command: Command) -> Event:
        if isinstance(command, SetMatchWinner):
            match = self.store.get_match(command.match_id)
            return match_result_event(self.tournament_id, match.id, command.winner, match.round_num)
        return command_event(self.tournament_id, command.event, command.to_dict())

    def _send(self, sid: str, event: str, data: Any):
        # One broken session must not stop delivery to the others
        try:
            self.channel.emit(event, data, to=sid)
        except Exception as e:
            logger.warning(f"Failed to send '{event}' to session {sid}: {e}")

    def _publish(self, event: Event):
        if self.pubsub is not None:
            self.pubsub.record(self.tournament_id, event)
