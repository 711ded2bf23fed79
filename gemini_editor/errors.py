from typing import Optional


class EditorError(Exception):
    """Base class for failures surfaced to the user as an error message."""

    default_message = "Something went wrong."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class InvalidFileType(EditorError):
    default_message = "Please upload a valid image file (PNG, JPEG, etc.)."


class ReadError(EditorError):
    default_message = "Failed to read the image file."


class ValidationError(EditorError):
    default_message = "Please upload an image and enter an editing prompt."


class GenerationError(EditorError):
    """Any failure of the remote edit call, wrapped with the underlying detail."""

    default_message = "Failed to generate image: An unknown error occurred."

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or "An unknown error occurred."
        super().__init__(f"Failed to generate image: {self.detail}")


class NoImageInResponse(EditorError):
    default_message = "No image data found in the Gemini API response."


class EditorBusyError(EditorError):
    default_message = "An edit is already in progress. Please wait for it to finish."
