from dataclasses import dataclass
from typing import Optional
import os

from dotenv import load_dotenv

DEFAULT_MODEL = "gemini-2.5-flash-image"


@dataclass(frozen=True)
class Config:
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls) -> "Config":
        """Read the Gemini credential once, at startup (.env in the cwd or project root)."""
        load_dotenv()
        api_key = (os.getenv("GEMINI_API_KEY") or "").strip() or None
        return cls(api_key=api_key)
