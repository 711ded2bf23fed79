"""Shared fixtures: image uploads, a stub edit client, and the Flask app."""

import io

import pytest
from PIL import Image
from werkzeug.datastructures import FileStorage

from gemini_editor.app import create_app
from gemini_editor.config import Config


class StubEditor:
    """Stands in for GeminiImageEditor; records every call."""

    def __init__(self, result="ZWRpdGVkLWRhdGE=", error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def edit(self, image_data, mime_type, prompt):
        self.calls.append((image_data, mime_type, prompt))
        if self.error is not None:
            raise self.error
        return self.result


def make_upload(content=b"fake-content", filename="cat.png", content_type="image/png"):
    return FileStorage(stream=io.BytesIO(content), filename=filename, content_type=content_type)


@pytest.fixture
def png_bytes():
    """A real 8x8 PNG."""
    buf = io.BytesIO()
    Image.new("RGB", (8, 8), color="red").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def stub_editor():
    return StubEditor()


@pytest.fixture
def app(stub_editor):
    app = create_app(config=Config(api_key="test-key"), editor=stub_editor)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
