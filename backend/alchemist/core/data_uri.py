"""
Base64 data URI helpers.

Images and audio cross every module boundary as
``data:<mime>[;param=value...];base64,<payload>``.
"""

import base64
import binascii
import re
import struct
from typing import Dict, Optional, Tuple

from .exceptions import InvalidDataUriError

_DATA_URI_RE = re.compile(r"^data:(?P<header>[^,]*?);base64,(?P<payload>.*)$", re.DOTALL)


def build_data_uri(mime_type: str, payload: bytes) -> str:
    """Encode raw bytes as a base64 data URI."""
    encoded = base64.b64encode(payload).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def is_data_uri(value: str) -> bool:
    return isinstance(value, str) and bool(_DATA_URI_RE.match(value))


def parse_data_uri(uri: str) -> Tuple[str, Dict[str, str], bytes]:
    """
    Split a data URI into (mime type, parameters, decoded payload).

    Raises:
        InvalidDataUriError: if the string is not a base64 data URI or the
            payload does not decode.
    """
    match = _DATA_URI_RE.match(uri or "")
    if not match:
        raise InvalidDataUriError("Expected a base64 data URI (data:<mime>;base64,<data>)")

    header_parts = [part.strip() for part in match.group("header").split(";") if part.strip()]
    mime_type = header_parts[0].lower() if header_parts else "text/plain"
    params: Dict[str, str] = {}
    for part in header_parts[1:]:
        if "=" in part:
            key, value = part.split("=", 1)
            params[key.strip().lower()] = value.strip()

    try:
        payload = base64.b64decode(match.group("payload"), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidDataUriError("Data URI payload is not valid base64") from exc

    return mime_type, params, payload


def require_image_data_uri(uri: str) -> Tuple[str, bytes]:
    """Parse a data URI and insist it carries an image."""
    mime_type, _params, payload = parse_data_uri(uri)
    if not mime_type.startswith("image/"):
        raise InvalidDataUriError(f"Expected an image data URI, got '{mime_type}'")
    if not payload:
        raise InvalidDataUriError("Image data URI has an empty payload")
    return mime_type, payload


_PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def png_dimensions(payload: bytes) -> Optional[Tuple[int, int]]:
    """(width, height) from a PNG's IHDR chunk, or None for anything else."""
    if len(payload) < 24 or payload[:8] != _PNG_SIGNATURE or payload[12:16] != b"IHDR":
        return None
    width, height = struct.unpack(">II", payload[16:24])
    return width, height
