"""Video references: content-type detection and payload preparation.

A video reaches the pipeline as one of:
  - a data URI   data:video/mp4;base64,AAAA...
  - a URL        https://cdn.example.com/spot.mp4
  - a local path ./spot.mov  (read and converted to a data URI)

Local paths are only honoured when the caller runs on the same machine as
the file; the HTTP API turns them off.
"""

from __future__ import annotations

import asyncio
import base64
import mimetypes
import re
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

DEFAULT_CONTENT_TYPE = "video/mp4"

MEDIA_TYPES = {
    ".mp4": "video/mp4",
    ".m4v": "video/mp4",
    ".webm": "video/webm",
    ".mov": "video/quicktime",
    ".avi": "video/x-msvideo",
    ".mkv": "video/x-matroska",
}

_DATA_URI_RE = re.compile(r"^data:([^;,]+)[;,]")


def is_data_uri(video: str) -> bool:
    return video.startswith("data:")


def is_url(video: str) -> bool:
    return urlparse(video).scheme in ("http", "https")


def detect_content_type(video: str, content_type: str | None = None) -> str:
    """Return the MIME type for a video reference.

    An explicit content type wins, then the data URI prefix, then the
    file extension. Unknown references default to video/mp4.
    """
    if content_type:
        return content_type

    match = _DATA_URI_RE.match(video)
    if match:
        return match.group(1)

    path = urlparse(video).path if is_url(video) else video
    suffix = Path(path).suffix.lower()
    if suffix in MEDIA_TYPES:
        return MEDIA_TYPES[suffix]

    guessed, _ = mimetypes.guess_type(path)
    if guessed and guessed.startswith("video/"):
        return guessed
    return DEFAULT_CONTENT_TYPE


def to_data_uri(path: str | Path, content_type: str | None = None) -> str:
    """Read a local file into a base64 data URI."""
    p = Path(path)
    mime = detect_content_type(str(p), content_type)
    encoded = base64.b64encode(p.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{encoded}"


def is_remote(video: str) -> bool:
    """True for references that never touch the local filesystem."""
    return is_data_uri(video) or is_url(video)


def resolve_video(video: str, content_type: str | None = None, resolve_local: bool = True) -> str:
    """Turn a local path into a data URI; leave data URIs and URLs untouched.

    With ``resolve_local=False`` anything that is not a data URI or an
    http(s) URL raises ValueError instead of being read from disk.
    """
    if is_remote(video):
        return video
    if not resolve_local:
        raise ValueError("Video must be a data URI or an http(s) URL")
    if Path(video).is_file():
        return to_data_uri(video, content_type)
    return video


async def prepare_video(video: str, content_type: str | None = None, resolve_local: bool = True) -> str:
    """Async ``resolve_video``: local files are read in a worker thread."""
    if is_remote(video):
        return video
    return await asyncio.to_thread(resolve_video, video, content_type, resolve_local)


def video_part(video: str) -> dict[str, Any]:
    """OpenAI-compatible content part carrying an already prepared video reference."""
    return {
        "type": "image_url",
        "image_url": {"url": video},
    }
