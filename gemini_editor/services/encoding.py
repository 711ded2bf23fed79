import asyncio
import base64

from ..errors import ReadError


async def file_to_base64(upload) -> str:
    """
    Read the whole uploaded file and return its content as base64 text
    (no "data:" header). The blocking read runs off the calling thread.
    Raises ReadError if the file cannot be read.
    """
    try:
        raw = await asyncio.to_thread(upload.read)
    except (OSError, ValueError) as e:
        raise ReadError() from e
    return base64.b64encode(raw).decode("ascii")
