"""
Caller-side media references attached to log steps.

A ``MediaProvider`` only records where the media comes from. Turning it into
an embeddable payload happens at report build time in
``vision_report.reporting.media.MediaResolver``, which never raises.
"""

import base64
from enum import Enum
from pathlib import Path
from typing import Union


class MediaType(Enum):
    """Kind of media reference."""
    PATH = "PATH"
    URL = "URL"
    BASE64 = "BASE64"


class MediaProvider:
    """Reference to a screenshot or other attachment for a log step."""

    __slots__ = ("_source", "_type")

    def __init__(self, source: str, media_type: MediaType):
        if source is None:
            raise ValueError("Media source cannot be None")
        if not isinstance(media_type, MediaType):
            raise ValueError(f"Unsupported media type: {media_type!r}")
        self._source = source.strip()
        self._type = media_type

    @property
    def source(self) -> str:
        return self._source

    @property
    def type(self) -> MediaType:
        return self._type

    @classmethod
    def from_path(cls, file_path: Union[str, Path]) -> "MediaProvider":
        """Reference a local file. The file is read when the report is built."""
        if file_path is None or not str(file_path).strip():
            raise ValueError("File path cannot be None or empty.")
        return cls(str(Path(str(file_path).strip()).absolute()), MediaType.PATH)

    @classmethod
    def from_url(cls, url: str) -> "MediaProvider":
        """Reference a remote image fetched over HTTP(S) at build time."""
        if url is None or not url.strip():
            raise ValueError("URL cannot be None or empty.")
        lowered = url.strip().lower()
        if not lowered.startswith(("http://", "https://")):
            raise ValueError("Invalid URL: must start with http:// or https://")
        return cls(url, MediaType.URL)

    @classmethod
    def from_base64(cls, data: str) -> "MediaProvider":
        """Reference an inline base64 payload, with or without a data URI prefix."""
        if data is None or not data.strip():
            raise ValueError("Base64 string cannot be None or empty.")
        return cls(data, MediaType.BASE64)

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str = "image/png") -> "MediaProvider":
        """Embed raw bytes immediately as a data URI."""
        if not data:
            raise ValueError("Byte content cannot be None or empty.")
        encoded = base64.b64encode(data).decode("ascii")
        return cls(f"data:{mime_type};base64,{encoded}", MediaType.BASE64)

    def __eq__(self, other) -> bool:
        if not isinstance(other, MediaProvider):
            return NotImplemented
        return self._source == other._source and self._type == other._type

    def __hash__(self) -> int:
        return hash((self._source, self._type))

    def __repr__(self) -> str:
        source = "[base64-data]" if self._type == MediaType.BASE64 else self._source
        return f"MediaProvider(type={self._type.value}, source={source!r})"
