from typing import Optional
import secrets

from flask import Flask
from flask_cors import CORS

from .config import Config
from .logs import log
from .routes.api import api_bp
from .routes.editor import editor_bp
from .services.model import GeminiImageEditor
from .sessions import SessionRegistry
from .state import ImageEditClient
from .views import data_uri

def create_app(config: Optional[Config] = None, editor: Optional[ImageEditClient] = None) -> Flask:
    config = config or Config.from_env()
    editor = editor or GeminiImageEditor(config.api_key, model=config.model)

    app = Flask(__name__)
    CORS(app)
    # sessions live only in process memory, so a per-process key is enough
    app.secret_key = secrets.token_hex(32)
    app.config["EDITOR_CONFIG"] = config
    app.config["EDITOR_SESSIONS"] = SessionRegistry(editor)
    app.jinja_env.globals["data_uri"] = data_uri

    if not config.has_api_key:
        log("[app] WARN GEMINI_API_KEY is not set; every edit will fail until it is configured")

    # routes
    app.register_blueprint(editor_bp)
    app.register_blueprint(api_bp)
    return app

def main() -> None:
    app = create_app()
    app.run(debug=True)

if __name__ == "__main__":
    main()
