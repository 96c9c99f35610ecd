"""In-memory room sessions.

Each room owns one authoritative ``GameState``. Moves for a room are applied
one at a time under that room's lock, so the engine never sees two
concurrent writers for the same game. Nothing here is persisted.
"""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

from unorules.engine import (
    GameState,
    Move,
    UnoError,
    execute_move,
    initialize_game,
)

logger = logging.getLogger(__name__)

ROOM_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
ROOM_CODE_LENGTH = 6


class SessionError(UnoError):
    """Base class for session/room errors."""


class RoomNotFound(SessionError, KeyError):
    def __init__(self, room_code: str):
        super().__init__(f"Room not found: {room_code}")
        self.room_code = room_code

    def __str__(self) -> str:
        return self.args[0]


class NotInRoom(SessionError):
    """The connection is not bound to any room."""


@dataclass
class MoveOutcome:
    """Result of submitting a move to a session."""

    accepted: bool
    state: GameState
    error: Optional[str] = None


@dataclass
class GameSession:
    """One room: its players' game state and the lock serializing moves."""

    room_code: str
    state: GameState
    rng: random.Random = field(default_factory=random.Random)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def submit(self, player_id: str, move: Move) -> MoveOutcome:
        """Apply ``move`` on behalf of ``player_id`` if it is their turn."""
        with self._lock:
            current = self.state
            if current.player_index(player_id) is None:
                return MoveOutcome(False, current, "You are not in this game")
            if player_id != current.current_player.id:
                return MoveOutcome(False, current, "Not your turn")

            new_state = execute_move(current, move, rng=self.rng)
            if new_state is current:
                logger.info("Room %s: rejected %s from %s", self.room_code, move.kind.value, player_id)
                return MoveOutcome(False, current, "Invalid move")

            self.state = new_state
            return MoveOutcome(True, new_state)


@dataclass
class _Binding:
    room_code: str
    player_id: str


class SessionRegistry:
    """Rooms keyed by room code, plus which connection plays in which room."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._rooms: Dict[str, GameSession] = {}
        self._connections: Dict[str, _Binding] = {}
        self._lock = threading.Lock()

    def _new_room_code(self) -> str:
        while True:
            code = "".join(self._rng.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH))
            if code not in self._rooms:
                return code

    def create_room(
        self,
        player_ids: Sequence[str],
        player_names: Optional[Sequence[str]] = None,
        *,
        room_code: Optional[str] = None,
        allow_stacking: bool = True,
        rng: Optional[random.Random] = None,
    ) -> GameSession:
        """Start a game for ``player_ids`` in a new room.

        Raises:
            InvalidPlayerCount: fewer than two players.
            SessionError: ``room_code`` is already taken.
        """
        game_rng = rng or random.Random()
        state = initialize_game(player_ids, player_names, allow_stacking=allow_stacking, rng=game_rng)
        with self._lock:
            code = room_code.upper() if room_code else self._new_room_code()
            if code in self._rooms:
                raise SessionError(f"Room already exists: {code}")
            session = GameSession(room_code=code, state=state, rng=game_rng)
            self._rooms[code] = session
        logger.info("Room %s created for %d players", code, len(player_ids))
        return session

    def get(self, room_code: str) -> GameSession:
        try:
            return self._rooms[room_code.upper()]
        except KeyError:
            raise RoomNotFound(room_code) from None

    def remove(self, room_code: str) -> None:
        code = room_code.upper()
        with self._lock:
            if self._rooms.pop(code, None) is None:
                raise RoomNotFound(room_code)
            self._connections = {
                conn: b for conn, b in self._connections.items() if b.room_code != code
            }
        logger.info("Room %s removed", code)

    def bind(self, connection_id: str, room_code: str, player_id: str) -> None:
        """Record that ``connection_id`` plays as ``player_id`` in ``room_code``."""
        session = self.get(room_code)
        if session.state.player_index(player_id) is None:
            raise SessionError(f"Player {player_id} is not in room {session.room_code}")
        with self._lock:
            self._connections[connection_id] = _Binding(session.room_code, player_id)

    def unbind(self, connection_id: str) -> None:
        with self._lock:
            self._connections.pop(connection_id, None)

    def lookup(self, connection_id: str) -> tuple[str, str]:
        """Return (room_code, player_id) for a bound connection."""
        binding = self._connections.get(connection_id)
        if binding is None:
            raise NotInRoom(f"Connection {connection_id} is not in a room")
        return binding.room_code, binding.player_id

    def submit(self, connection_id: str, move: Move) -> MoveOutcome:
        room_code, player_id = self.lookup(connection_id)
        return self.get(room_code).submit(player_id, move)

    def __len__(self) -> int:
        return len(self._rooms)
