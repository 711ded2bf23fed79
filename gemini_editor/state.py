"""
Per-session editor state and the two user transitions that drive it.

EditorState is an immutable snapshot. EditorController owns the current
snapshot, replaces it at every step of a transition and hands each new
snapshot to its subscribers, in order.
"""
from dataclasses import dataclass, replace, asdict
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol
import threading

from .errors import (
    EditorBusyError,
    EditorError,
    InvalidFileType,
    ReadError,
    ValidationError,
)
from .logs import log
from .services.encoding import file_to_base64


class ImageEditClient(Protocol):
    async def edit(self, image_data: str, mime_type: str, prompt: str) -> str: ...


@dataclass(frozen=True)
class SelectedImage:
    filename: str
    mime_type: str


@dataclass(frozen=True)
class EditorState:
    selected_file: Optional[SelectedImage] = None
    original_data: Optional[str] = None
    edited_data: Optional[str] = None
    prompt: str = ""
    is_loading: bool = False
    error: Optional[str] = None

    @property
    def mime_type(self) -> Optional[str]:
        return self.selected_file.mime_type if self.selected_file else None

    @property
    def is_ready(self) -> bool:
        return self.selected_file is not None and self.original_data is not None

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["mime_type"] = self.mime_type
        d["is_ready"] = self.is_ready
        return d


Listener = Callable[[EditorState], None]


def _declared_type(upload) -> str:
    return (getattr(upload, "mimetype", None) or getattr(upload, "content_type", None) or "").lower()


class EditorController:
    """Holds one session's EditorState and sequences file encoding and the edit call."""

    def __init__(
        self,
        editor: ImageEditClient,
        *,
        encoder: Callable[[Any], Awaitable[str]] = file_to_base64,
        name: str = "session",
    ):
        self.editor = editor
        self.encoder = encoder
        self.name = name
        self._state = EditorState()
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    # ---------- store ----------
    @property
    def state(self) -> EditorState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _update(self, **changes) -> EditorState:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as e:
                log(f"[{self.name}] WARN listener {listener!r} failed: {e}")
        return self._state

    def _fail(self, err: EditorError) -> EditorState:
        return self._update(error=err.message)

    # ---------- transitions ----------
    def set_prompt(self, text: str) -> EditorState:
        return self._update(prompt=text or "")

    async def select_image(self, upload) -> EditorState:
        if upload is None or not getattr(upload, "filename", None):
            return self._state

        mime_type = _declared_type(upload)
        selected = SelectedImage(filename=upload.filename, mime_type=mime_type)
        with self._lock:
            if self._state.is_loading:
                raise EditorBusyError()
            if not mime_type.startswith("image/"):
                log(f"[{self.name}] REJECT upload {upload.filename!r} (type={mime_type or 'unknown'})")
                return self._fail(InvalidFileType())
            self._update(error=None, edited_data=None, selected_file=selected, original_data=None)

        log(f"[{self.name}] UPLOAD → {upload.filename} (mime={mime_type})")
        try:
            encoded = await self.encoder(upload)
        except Exception as e:
            err = e if isinstance(e, ReadError) else ReadError()
            log(f"[{self.name}] ERROR reading {upload.filename}: {e.__cause__ or e}")
            with self._lock:
                if self._state.selected_file is not selected:
                    return self._state
                return self._fail(err)

        with self._lock:
            # a newer upload replaced this one while it was being read
            if self._state.selected_file is not selected:
                log(f"[{self.name}] DROP stale encoding of {upload.filename}")
                return self._state
            log(f"[{self.name}] UPLOAD DONE ← {len(encoded)} base64 chars")
            return self._update(original_data=encoded)

    async def submit(self) -> EditorState:
        with self._lock:
            current = self._state
            if current.is_loading:
                raise EditorBusyError()
            if not current.original_data or not current.selected_file or not current.prompt.strip():
                return self._fail(ValidationError())
            self._update(is_loading=True, error=None, edited_data=None)

        try:
            result = await self.editor.edit(
                current.original_data,
                current.selected_file.mime_type,
                current.prompt,
            )
            self._update(edited_data=result)
            log(f"[{self.name}] EDIT DONE ← {len(result)} base64 chars")
        except Exception as e:
            log(f"[{self.name}] ERROR {e}")
            self._update(error=str(e))
        finally:
            self._update(is_loading=False)
        return self._state
