from collections import OrderedDict
from typing import Callable, Optional, Tuple
import threading, time, uuid

from .logs import log
from .state import EditorController, ImageEditClient

MAX_SESSIONS = 256
SESSION_TTL = 60 * 60  # seconds of inactivity before a session is dropped


class SessionRegistry:
    """
    One EditorController per browser session, kept only in process memory.

    Bounded: sessions idle for longer than `ttl` are dropped, and past
    `max_sessions` the least recently used one goes first. A controller with
    an edit in flight is never dropped.
    """

    def __init__(
        self,
        editor: ImageEditClient,
        factory: Optional[Callable[..., EditorController]] = None,
        *,
        max_sessions: int = MAX_SESSIONS,
        ttl: float = SESSION_TTL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.editor = editor
        self.max_sessions = max_sessions
        self.ttl = ttl
        self._factory = factory or EditorController
        self._clock = clock
        self._controllers: "OrderedDict[str, Tuple[EditorController, float]]" = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def new_id() -> str:
        return uuid.uuid4().hex

    def peek(self, session_id: Optional[str]) -> Optional[EditorController]:
        """The session's controller if it exists; never creates one."""
        if not session_id:
            return None
        with self._lock:
            entry = self._controllers.get(session_id)
            if entry is None:
                return None
            self._touch(session_id, entry[0])
            return entry[0]

    def get(self, session_id: str) -> EditorController:
        with self._lock:
            entry = self._controllers.get(session_id)
            ctrl = entry[0] if entry else self._factory(self.editor, name=session_id[:8])
            self._touch(session_id, ctrl)
            self._evict(keep=session_id)
            return ctrl

    def _touch(self, session_id: str, ctrl: EditorController) -> None:
        self._controllers[session_id] = (ctrl, self._clock())
        self._controllers.move_to_end(session_id)

    def _evict(self, keep: str) -> None:
        now = self._clock()
        for sid, (ctrl, last_used) in list(self._controllers.items()):
            if sid == keep or ctrl.state.is_loading:
                continue
            if now - last_used > self.ttl or len(self._controllers) > self.max_sessions:
                del self._controllers[sid]
                log(f"[sessions] DROP {sid[:8]}")

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._controllers

    def __len__(self) -> int:
        return len(self._controllers)
