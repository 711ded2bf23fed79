"""Gemini Image Editor: upload an image, describe an edit, get the edited image back."""

__version__ = "1.0.0"
