"""
Resolution of media references into embeddable data URIs.
"""

import base64
import binascii
import mimetypes
import re
import urllib.request
from pathlib import Path
from typing import Callable, Optional, Tuple

from vision_report.api.media import MediaProvider, MediaType
from vision_report.core.errors import MediaResolutionError
from vision_report.core.logging import get_logger
from vision_report.reporting.models import MediaModel
from vision_report.reporting.results import Result

DEFAULT_MIME_TYPE = "image/png"

_DATA_URI_RE = re.compile(r"^data:[\w.+-]+/[\w.+-]+(?:;[\w.+-]+=[\w.+-]+)*;base64,", re.IGNORECASE)
_BASE64_RE = re.compile(r"^(?:[A-Za-z0-9+/]{4})*(?:[A-Za-z0-9+/]{2}==|[A-Za-z0-9+/]{3}=)?$")
_WHITESPACE_RE = re.compile(r"\s+")

# Returns the response body and its Content-Type header (if any).
Fetcher = Callable[[str], Tuple[bytes, Optional[str]]]

logger = get_logger(__name__)


def fetch_url(url: str) -> Tuple[bytes, Optional[str]]:
    """
    Download ``url`` and return its body and content type.

    Raises:
        MediaResolutionError: on network or protocol errors
    """
    try:
        with urllib.request.urlopen(url) as response:
            return response.read(), response.headers.get_content_type()
    except (OSError, ValueError) as e:
        raise MediaResolutionError(f"Could not download {url}: {e}") from e


def encode_data_uri(data: bytes, mime_type: str = DEFAULT_MIME_TYPE) -> str:
    """Encode bytes as a ``data:`` URI safe for direct embedding in HTML."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def is_valid_base64(text: str) -> bool:
    """Check ``text`` only uses the base64 alphabet with correct padding."""
    if not text or not _BASE64_RE.match(text):
        return False
    try:
        base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


class MediaResolver:
    """
    Turn ``MediaProvider`` references into ``MediaModel`` payloads.

    Resolution is fail-open: a missing file, an unreachable URL or a malformed
    payload is logged as a warning and resolves to ``None``. Nothing raises
    past ``resolve``.
    """

    def __init__(self, default_mime_type: str = DEFAULT_MIME_TYPE, fetch: Optional[Fetcher] = None):
        self.default_mime_type = default_mime_type or DEFAULT_MIME_TYPE
        self.fetch = fetch if fetch is not None else fetch_url

    def resolve(self, provider: Optional[MediaProvider]) -> Optional[MediaModel]:
        result = self.resolve_with_diagnostic(provider)
        if not result.ok:
            logger.warning(str(result.diagnostic))
        return result.value

    def resolve_with_diagnostic(self, provider: Optional[MediaProvider]) -> Result[MediaModel]:
        """Resolve ``provider`` and report why it degraded, if it did."""
        if provider is None:
            return Result.failure("media", "Media reference is None")
        try:
            if provider.type == MediaType.PATH:
                return self._from_path(provider.source)
            if provider.type == MediaType.URL:
                return self._from_url(provider.source)
            if provider.type == MediaType.BASE64:
                return self._from_base64(provider.source)
        except Exception as e:
            return Result.failure("media", f"Failed to process media {provider!r}", e)
        return Result.failure("media", f"Unsupported media type: {provider.type}")

    def _guess_mime_type(self, name: str) -> str:
        mime_type, _ = mimetypes.guess_type(name)
        return mime_type or self.default_mime_type

    def _from_path(self, source: str) -> Result[MediaModel]:
        if not source or not source.strip():
            return Result.failure("media", "File path is empty")
        path = Path(source)
        if not path.is_file():
            return Result.failure("media", f"Media file not found: {source}")
        try:
            data = path.read_bytes()
        except OSError as e:
            return Result.failure("media", f"Error reading media file: {source}", e)
        if not data:
            return Result.failure("media", f"Media file is empty: {source}")
        return Result.success(MediaModel(encode_data_uri(data, self._guess_mime_type(path.name)), path.name))

    def _from_url(self, url: str) -> Result[MediaModel]:
        if not url or not url.strip():
            return Result.failure("media", "URL is empty")
        try:
            data, content_type = self.fetch(url)
        except (MediaResolutionError, OSError, ValueError) as e:
            return Result.failure("media", f"Failed to fetch media from URL: {url}", e)
        if not data:
            return Result.failure("media", f"Empty response from URL: {url}")
        if content_type and content_type.startswith("image/"):
            mime_type = content_type
        else:
            mime_type = self.default_mime_type
        return Result.success(MediaModel(encode_data_uri(data, mime_type), "Screenshot (URL)"))

    def _from_base64(self, source: str) -> Result[MediaModel]:
        if not source or not source.strip():
            return Result.failure("media", "Base64 payload is empty")
        source = source.strip()
        marker = _DATA_URI_RE.match(source)
        prefix = marker.group(0) if marker else f"data:{self.default_mime_type};base64,"
        payload = _WHITESPACE_RE.sub("", source[marker.end():] if marker else source)
        if not is_valid_base64(payload):
            return Result.failure("media", "Invalid Base64 content")
        return Result.success(MediaModel(f"{prefix}{payload}", "Screenshot (Base64)"))
