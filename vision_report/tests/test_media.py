import base64
from pathlib import Path
from urllib.error import URLError

import pytest

from vision_report.api.media import MediaProvider, MediaType
from vision_report.core.errors import MediaResolutionError
from vision_report.reporting.media import MediaResolver, encode_data_uri, fetch_url, is_valid_base64


def _fetcher(body: bytes, content_type=None):
    calls = []

    def fetch(url):
        calls.append(url)
        return body, content_type

    fetch.calls = calls
    return fetch


def _failing_fetch(url):
    raise URLError("unreachable")


def test_from_path_does_not_require_existing_file(tmp_path: Path) -> None:
    provider = MediaProvider.from_path(tmp_path / "missing.png")
    assert provider.type == MediaType.PATH
    assert Path(provider.source).is_absolute()


@pytest.mark.parametrize("factory,value", [
    (MediaProvider.from_path, ""),
    (MediaProvider.from_path, None),
    (MediaProvider.from_url, "   "),
    (MediaProvider.from_url, "ftp://example.com/a.png"),
    (MediaProvider.from_base64, ""),
    (MediaProvider.from_bytes, b""),
])
def test_factories_reject_blank_or_invalid_input(factory, value):
    with pytest.raises(ValueError):
        factory(value)


def test_from_bytes_embeds_data_uri():
    provider = MediaProvider.from_bytes(b"abc", mime_type="image/jpeg")
    assert provider.type == MediaType.BASE64
    assert provider.source == "data:image/jpeg;base64,YWJj"


def test_repr_hides_inline_payload(png_base64):
    assert png_base64 not in repr(MediaProvider.from_base64(png_base64))


def test_resolve_path_reads_and_encodes(png_file: Path) -> None:
    media = MediaResolver().resolve(MediaProvider.from_path(png_file))
    assert media is not None
    assert media.has_media()
    assert media.title == "screenshot.png"
    assert media.payload == encode_data_uri(png_file.read_bytes(), "image/png")


def test_resolve_path_guesses_mime_type(tmp_path: Path) -> None:
    path = tmp_path / "photo.jpg"
    path.write_bytes(b"\xff\xd8\xff")
    media = MediaResolver().resolve(MediaProvider.from_path(path))
    assert media.payload.startswith("data:image/jpeg;base64,")


def test_resolve_missing_file_returns_none_and_warns(tmp_path: Path, capsys) -> None:
    result = MediaResolver().resolve(MediaProvider.from_path(tmp_path / "nope.png"))
    assert result is None
    assert "Media file not found" in capsys.readouterr().err


def test_resolve_directory_returns_none(tmp_path: Path) -> None:
    assert MediaResolver().resolve(MediaProvider.from_path(tmp_path)) is None


def test_resolve_empty_file_returns_none(tmp_path: Path) -> None:
    path = tmp_path / "empty.png"
    path.write_bytes(b"")
    result = MediaResolver().resolve_with_diagnostic(MediaProvider.from_path(path))
    assert result.value is None
    assert not result.ok


def test_resolve_url_uses_fetcher_and_content_type():
    fetch = _fetcher(b"GIF89a", "image/gif")
    media = MediaResolver(fetch=fetch).resolve(MediaProvider.from_url("https://example.com/a.gif"))
    assert fetch.calls == ["https://example.com/a.gif"]
    assert media.payload == "data:image/gif;base64," + base64.b64encode(b"GIF89a").decode()
    assert media.title == "Screenshot (URL)"


def test_resolve_url_non_image_content_type_uses_default():
    media = MediaResolver(fetch=_fetcher(b"data", "text/html")).resolve(
        MediaProvider.from_url("http://example.com/x")
    )
    assert media.payload.startswith("data:image/png;base64,")


def test_resolve_url_network_error_returns_none(capsys):
    result = MediaResolver(fetch=_failing_fetch).resolve(MediaProvider.from_url("http://example.invalid/a.png"))
    assert result is None
    assert "Failed to fetch media" in capsys.readouterr().err


def test_fetch_url_wraps_network_errors(monkeypatch):
    def urlopen(url):
        raise URLError("connection refused")

    monkeypatch.setattr("urllib.request.urlopen", urlopen)
    with pytest.raises(MediaResolutionError):
        fetch_url("http://example.invalid/a.png")
    result = MediaResolver().resolve_with_diagnostic(MediaProvider.from_url("http://example.invalid/a.png"))
    assert not result.ok
    assert isinstance(result.diagnostic.error, MediaResolutionError)


def test_resolve_base64_adds_default_marker(png_base64):
    media = MediaResolver().resolve(MediaProvider.from_base64(png_base64))
    assert media.payload == f"data:image/png;base64,{png_base64}"
    assert media.title == "Screenshot (Base64)"


def test_resolve_base64_with_marker_passes_through(png_base64):
    uri = f"data:image/gif;base64,{png_base64}"
    assert MediaResolver().resolve(MediaProvider.from_base64(uri)).payload == uri


def test_resolve_base64_with_marker_rejects_markup_in_payload(capsys):
    provider = MediaProvider.from_base64('data:image/png;base64,AAAA" onerror="alert(1)')
    assert MediaResolver().resolve(provider) is None
    assert "Invalid Base64 content" in capsys.readouterr().err


def test_resolve_base64_strips_line_breaks(png_base64):
    wrapped = png_base64[:40] + "\n" + png_base64[40:]
    media = MediaResolver().resolve(MediaProvider.from_base64(wrapped))
    assert media.payload.endswith(png_base64)


@pytest.mark.parametrize("payload", ["not base64!", "abc", "ab$d", "===="])
def test_resolve_invalid_base64_returns_none(payload):
    assert MediaResolver().resolve(MediaProvider.from_base64(payload)) is None


def test_resolve_none_returns_none():
    result = MediaResolver().resolve_with_diagnostic(None)
    assert result.value is None
    assert "None" in str(result.diagnostic)


def test_custom_default_mime_type(png_base64):
    media = MediaResolver(default_mime_type="image/webp").resolve(MediaProvider.from_base64(png_base64))
    assert media.payload.startswith("data:image/webp;base64,")


def test_is_valid_base64():
    assert is_valid_base64("YWJj")
    assert is_valid_base64("YQ==")
    assert not is_valid_base64("")
    assert not is_valid_base64("YQ=")
