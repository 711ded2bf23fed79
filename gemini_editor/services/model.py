from typing import Optional
import asyncio, base64, time

# pip install google-genai
from google import genai
from google.genai import types

from ..config import DEFAULT_MODEL
from ..errors import GenerationError, NoImageInResponse
from ..logs import log


# ---------- helpers ----------
def _first_inline_image(resp) -> Optional[bytes]:
    # Only the first candidate is considered; its parts are scanned in order.
    candidates = getattr(resp, "candidates", None) or []
    if not candidates:
        return None
    parts = getattr(getattr(candidates[0], "content", None), "parts", None) or []
    for part in parts:
        inline = getattr(part, "inline_data", None)
        if inline is not None and getattr(inline, "data", None):
            return inline.data
    return None


def _as_base64(data) -> str:
    if isinstance(data, str):
        return data
    return base64.b64encode(data).decode("ascii")


# ---------- client ----------
class GeminiImageEditor:
    """Submits one image plus an edit instruction to Gemini and returns the edited image."""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        model: str = DEFAULT_MODEL,
        client: Optional[genai.Client] = None,
    ):
        self.api_key = api_key
        self.model = model
        self._client = client

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self.api_key:
                raise RuntimeError("GEMINI_API_KEY is not configured.")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def edit(self, image_data: str, mime_type: str, prompt: str) -> str:
        """
        One outbound call: an inline image part (tagged with mime_type) followed
        by the prompt text, restricted to IMAGE output. Returns the base64
        encoding of the first inline image in the response.

        Every failure is raised as GenerationError("Failed to generate image: ...").
        """
        try:
            client = self._get_client()
            contents = types.Content(
                role="user",
                parts=[
                    types.Part.from_bytes(data=base64.b64decode(image_data), mime_type=mime_type),
                    types.Part.from_text(text=prompt),
                ],
            )
            call_t0 = time.perf_counter()
            log(f"[edit] CALL → model={self.model}, mime={mime_type}")
            resp = await asyncio.to_thread(
                client.models.generate_content,
                model=self.model,
                contents=contents,
                config=types.GenerateContentConfig(response_modalities=["IMAGE"]),
            )
            log(f"[edit] RECV ← {time.perf_counter() - call_t0:.2f}s")

            data = _first_inline_image(resp)
            if not data:
                raise NoImageInResponse()
            return _as_base64(data)

        except Exception as e:
            log(f"[edit] ERROR editing image with Gemini: {e}")
            raise GenerationError(str(e) or "An unknown error occurred.") from e
