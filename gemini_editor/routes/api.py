from flask import Blueprint, current_app, jsonify, request

from ..errors import EditorBusyError
from ..views import current_controller, current_state, state_payload

api_bp = Blueprint("api", __name__, url_prefix="/api")

def _reply(state, failure_status: int = 400):
    body = state_payload(state)
    return jsonify(body), (failure_status if state.error else 200)

def _busy(e: EditorBusyError):
    return jsonify({"error": e.message, **state_payload(current_state())}), 409

@api_bp.get("/state")
def get_state():
    return jsonify(state_payload(current_state()))

@api_bp.post("/image")
async def select_image():
    """
    multipart/form-data: image (file, required)
    -> state snapshot; 400 with {error} if the file was rejected or unreadable
    """
    upload = request.files.get("image")
    if upload is None or not upload.filename:
        return jsonify({"error": "image required"}), 400
    try:
        state = await current_controller().select_image(upload)
    except EditorBusyError as e:
        return _busy(e)
    return _reply(state)

@api_bp.put("/prompt")
def set_prompt():
    data = request.get_json(force=True, silent=True) or {}
    prompt = data.get("prompt")
    if not isinstance(prompt, str):
        return jsonify({"error": "prompt must be a string"}), 400
    return jsonify(state_payload(current_controller().set_prompt(prompt)))

@api_bp.post("/edits")
async def submit_edit():
    """
    JSON body (optional): { prompt }
    Runs the edit for the session's image and prompt.
    -> state snapshot; 400 on validation errors, 502 when generation failed, 409 while busy
    """
    ctrl = current_controller()
    data = request.get_json(force=True, silent=True) or {}
    if isinstance(data.get("prompt"), str):
        ctrl.set_prompt(data["prompt"])
    ready = ctrl.state.is_ready and bool(ctrl.state.prompt.strip())
    try:
        state = await ctrl.submit()
    except EditorBusyError as e:
        return _busy(e)
    return _reply(state, failure_status=502 if ready else 400)

@api_bp.get("/health")
def health():
    configured = current_app.config["EDITOR_CONFIG"].has_api_key
    return jsonify({
        "configured": configured,
        "message": "Gemini API key configured" if configured else "Gemini API key not set",
    })
