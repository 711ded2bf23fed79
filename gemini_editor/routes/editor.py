from flask import Blueprint, redirect, render_template, request, url_for

from ..errors import EditorBusyError
from ..logs import log
from ..views import current_controller, current_state

editor_bp = Blueprint("editor", __name__)

@editor_bp.get("/")
def index():
    return render_template("index.html", state=current_state())

@editor_bp.post("/image")
async def select_image():
    """
    Form action of the upload surface.
      multipart/form-data: image (file)
    Encodes the image into the session state, then back to the page.
    """
    ctrl = current_controller()
    try:
        await ctrl.select_image(request.files.get("image"))
    except EditorBusyError:
        log("[editor] upload ignored while an edit is in flight")
    return redirect(url_for("editor.index"))

@editor_bp.post("/edits")
async def submit_edit():
    """
    Form action of the "Generate Image" button.
      form: prompt (string)
    Blocks until the edit call finishes, then back to the page.
    """
    ctrl = current_controller()
    if "prompt" in request.form:
        ctrl.set_prompt(request.form["prompt"])
    try:
        await ctrl.submit()
    except EditorBusyError:
        log("[editor] submit ignored while an edit is in flight")
    return redirect(url_for("editor.index"))
