"""Audio payload location, fetching and normalization helpers.

Gemini speech models return audio either inline (raw 16-bit PCM tagged
``audio/L16;codec=pcm;rate=24000``, sometimes an already-containerised
format) or as a file URI. Everything leaves this module as one playable
container with an explicit MIME type.
"""

from __future__ import annotations

import io
import os
import wave
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

import httpx

from alchemist.core import SpeechGenerationError
from alchemist.services.pipeline.step_support import decode_blob_data, iter_response_parts

DEFAULT_SAMPLE_RATE = 24000
DEFAULT_CHANNELS = 1
SAMPLE_WIDTH_BYTES = 2

RAW_PCM_MIME_TYPES = {"audio/l16", "audio/pcm", "audio/x-pcm", "audio/raw"}
UNTYPED_MIME_TYPES = {None, "", "application/octet-stream", "binary/octet-stream"}

CONTAINER_MIME_ALIASES = {
    "audio/wav": "audio/wav",
    "audio/x-wav": "audio/wav",
    "audio/wave": "audio/wav",
    "audio/vnd.wave": "audio/wav",
    "audio/mpeg": "audio/mpeg",
    "audio/mp3": "audio/mpeg",
    "audio/ogg": "audio/ogg",
    "audio/opus": "audio/ogg",
    "audio/flac": "audio/flac",
    "audio/aac": "audio/aac",
    "audio/mp4": "audio/mp4",
    "audio/webm": "audio/webm",
}

GEMINI_FILE_HOSTS = {"generativelanguage.googleapis.com"}


@dataclass(frozen=True)
class AudioSource:
    """Where a response's audio lives: inline bytes or a fetchable URI."""
    data: bytes | None = None
    uri: str | None = None
    mime_type: str | None = None


def parse_mime(mime_type: str | None) -> tuple[str | None, dict[str, str]]:
    if not mime_type:
        return None, {}
    parts = [part.strip() for part in mime_type.split(";") if part.strip()]
    mime_base = parts[0].lower() if parts else None
    params: dict[str, str] = {}
    for part in parts[1:]:
        if "=" not in part:
            continue
        key, value = part.split("=", 1)
        params[key.strip().lower()] = value.strip()
    return mime_base, params


def locate_audio_payload(response: Any) -> AudioSource | None:
    """Find the first audio part in a speech response."""
    for part in iter_response_parts(response):
        inline_data = getattr(part, "inline_data", None)
        if inline_data is not None:
            mime_type = getattr(inline_data, "mime_type", None)
            data = decode_blob_data(getattr(inline_data, "data", None))
            if data is not None:
                return AudioSource(data=data, mime_type=mime_type)

        file_data = getattr(part, "file_data", None)
        file_uri = getattr(file_data, "file_uri", None) if file_data is not None else None
        if isinstance(file_uri, str) and file_uri:
            return AudioSource(uri=file_uri, mime_type=getattr(file_data, "mime_type", None))
    return None


def _request_headers(url: str) -> dict[str, str]:
    host = urlparse(url).hostname or ""
    api_key = os.getenv("GEMINI_API_KEY")
    if host in GEMINI_FILE_HOSTS and api_key:
        return {"x-goog-api-key": api_key}
    return {}


async def fetch_audio_payload(url: str, timeout: float = 60.0) -> tuple[bytes, str | None]:
    """
    Download an audio payload delivered by URL.

    Raises:
        SpeechGenerationError: on transport or HTTP errors, with the cause chained
    """
    try:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            response = await client.get(url, headers=_request_headers(url))
            response.raise_for_status()
    except httpx.HTTPError as exc:
        raise SpeechGenerationError(f"Failed to fetch synthesized audio: {exc}") from exc
    return response.content, response.headers.get("content-type")


def sniff_container(audio_bytes: bytes) -> str | None:
    """Recognize common containers from their magic bytes."""
    if audio_bytes[:4] == b"RIFF" and audio_bytes[8:12] == b"WAVE":
        return "audio/wav"
    if audio_bytes[:3] == b"ID3" or (len(audio_bytes) > 1 and audio_bytes[0] == 0xFF and audio_bytes[1] & 0xE0 == 0xE0):
        return "audio/mpeg"
    if audio_bytes[:4] == b"OggS":
        return "audio/ogg"
    if audio_bytes[:4] == b"fLaC":
        return "audio/flac"
    return None


def _int_param(params: dict[str, str], key: str, default: int) -> int:
    try:
        value = int(params.get(key, default))
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def pcm_l16_to_wav(audio_bytes: bytes, params: dict[str, str]) -> bytes:
    """
    Wrap headerless 16-bit PCM in a WAV container.

    ``rate`` and ``channels`` MIME parameters set the header; a trailing
    partial frame is dropped.

    Raises:
        SpeechGenerationError: if the payload holds no complete frame
    """
    rate = _int_param(params, "rate", DEFAULT_SAMPLE_RATE)
    channels = _int_param(params, "channels", DEFAULT_CHANNELS)
    frame_size = SAMPLE_WIDTH_BYTES * channels
    usable = len(audio_bytes) - (len(audio_bytes) % frame_size)
    if usable <= 0:
        raise SpeechGenerationError("Synthesized audio payload contains no complete PCM frames.")

    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wavf:
        wavf.setnchannels(channels)
        wavf.setsampwidth(SAMPLE_WIDTH_BYTES)
        wavf.setframerate(rate)
        wavf.writeframes(audio_bytes[:usable])
    return buffer.getvalue()


def normalize_audio(audio_bytes: bytes, mime_type: str | None) -> tuple[bytes, str]:
    """
    Return (container bytes, container MIME type) for any speech payload.

    Raw PCM (explicitly tagged, or untyped and not a recognizable
    container) is wrapped as WAV; known containers pass through.

    Raises:
        SpeechGenerationError: for empty payloads or unsupported MIME types
    """
    if not audio_bytes:
        raise SpeechGenerationError("Synthesized audio payload is empty.")

    mime_base, params = parse_mime(mime_type)

    if mime_base in RAW_PCM_MIME_TYPES:
        return pcm_l16_to_wav(audio_bytes, params), "audio/wav"

    if mime_base in UNTYPED_MIME_TYPES:
        sniffed = sniff_container(audio_bytes)
        if sniffed:
            return audio_bytes, sniffed
        return pcm_l16_to_wav(audio_bytes, params), "audio/wav"

    container = CONTAINER_MIME_ALIASES.get(mime_base)
    if container:
        return audio_bytes, container

    raise SpeechGenerationError(f"Unsupported audio payload type: {mime_type!r}")
