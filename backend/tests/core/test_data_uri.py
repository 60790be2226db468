"""
Tests for alchemist.core.data_uri
"""

import pytest

from alchemist.core import (
    InvalidDataUriError,
    build_data_uri,
    is_data_uri,
    parse_data_uri,
    png_dimensions,
    require_image_data_uri,
)


class TestDataUri:

    def test_build_then_parse_keeps_mime_and_payload(self):
        uri = build_data_uri("audio/wav", b"RIFF....WAVE")
        mime, params, payload = parse_data_uri(uri)
        assert uri.startswith("data:audio/wav;base64,")
        assert mime == "audio/wav"
        assert params == {}
        assert payload == b"RIFF....WAVE"

    def test_parse_reads_mime_parameters(self):
        mime, params, payload = parse_data_uri("data:audio/L16;codec=pcm;rate=24000;base64,AAAA")
        assert mime == "audio/l16"
        assert params == {"codec": "pcm", "rate": "24000"}
        assert payload == b"\x00\x00\x00"

    @pytest.mark.parametrize("value", ["", "hello", "data:image/png,notbase64", "http://x/y.png"])
    def test_parse_rejects_non_data_uris(self, value):
        with pytest.raises(InvalidDataUriError):
            parse_data_uri(value)

    def test_parse_rejects_bad_base64(self):
        with pytest.raises(InvalidDataUriError):
            parse_data_uri("data:image/png;base64,@@@")

    def test_is_data_uri(self):
        assert is_data_uri("data:image/png;base64,AAAA")
        assert not is_data_uri("image.png")
        assert not is_data_uri(None)

    def test_require_image_data_uri_accepts_images(self, png_data_uri, png_bytes):
        mime, payload = require_image_data_uri(png_data_uri)
        assert mime == "image/png"
        assert payload == png_bytes

    def test_require_image_data_uri_rejects_other_media(self):
        with pytest.raises(InvalidDataUriError, match="image"):
            require_image_data_uri(build_data_uri("audio/wav", b"abc"))

    def test_require_image_data_uri_rejects_empty_payload(self):
        with pytest.raises(InvalidDataUriError, match="empty"):
            require_image_data_uri("data:image/png;base64,")

    def test_png_dimensions(self, png_bytes):
        assert png_dimensions(png_bytes) == (1, 1)
        assert png_dimensions(b"\xff\xd8\xff\xe0 jpeg") is None
        assert png_dimensions(b"") is None
