from typing import Any, Dict, Optional

from flask import current_app, session

from .state import EditorController, EditorState


def data_uri(mime_type: Optional[str], data: Optional[str]) -> Optional[str]:
    """Inline resource for an <img src>: data:<mime>;base64,<data>."""
    if not data or not mime_type:
        return None
    return f"data:{mime_type};base64,{data}"


def current_controller() -> EditorController:
    """The session's controller, created on first use. Only state-changing routes call this."""
    registry = current_app.config["EDITOR_SESSIONS"]
    sid = session.get("sid")
    if not sid:
        sid = registry.new_id()
        session["sid"] = sid
    return registry.get(sid)


def current_state() -> EditorState:
    """Read-only view of the session's state; an unknown session reads as empty."""
    ctrl = current_app.config["EDITOR_SESSIONS"].peek(session.get("sid"))
    return ctrl.state if ctrl is not None else EditorState()


def state_payload(state: EditorState) -> Dict[str, Any]:
    d = state.to_dict()
    d["original_url"] = data_uri(state.mime_type, state.original_data)
    d["edited_url"] = data_uri(state.mime_type, state.edited_data)
    return d
