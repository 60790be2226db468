"""Speech Step - synthesize narration and normalize it to one playable container."""

from __future__ import annotations

from typing import Awaitable, Callable

from alchemist.config import AUDIO_FETCH_TIMEOUT, TTS_VOICES, get_default_voice
from alchemist.core import SpeechGenerationError, build_data_uri, get_logger
from alchemist.services.infrastructure.llm.prompting_engine import PromptConfig, PromptingEngine
from alchemist.services.pipeline.schemas import SpeechRequest, SynthesizedAudio
from alchemist.services.pipeline.step_support import failure_reason

from .audio_payload import fetch_audio_payload, locate_audio_payload, normalize_audio, parse_mime

logger = get_logger(__name__, component="speech_step")

AudioFetcher = Callable[[str, float], Awaitable[tuple[bytes, "str | None"]]]


def resolve_voice(voice: str | None) -> str:
    default_voice = get_default_voice()
    if not voice:
        return default_voice
    if voice not in TTS_VOICES:
        logger.warning(f"Unknown TTS voice '{voice}', falling back to {default_voice}")
        return default_voice
    return voice


def _pick_mime(part_mime: str | None, fetched_mime: str | None) -> str | None:
    fetched_base, _ = parse_mime(fetched_mime)
    if fetched_base and fetched_base != "application/octet-stream":
        return fetched_mime
    return part_mime or fetched_mime


async def generate_speech(
    engine: PromptingEngine,
    request: SpeechRequest,
    fetch_payload: AudioFetcher = fetch_audio_payload,
) -> SynthesizedAudio:
    """
    Synthesize ``request.text`` and return it as an audio data URI.

    Never returns an empty success: every path without playable audio
    raises.

    Raises:
        SpeechGenerationError: blank text, failed call, missing or empty
            payload, fetch failure (cause chained) or unusable audio
    """
    text = (request.text or "").strip()
    if not text:
        raise SpeechGenerationError("No narration text to synthesize.")

    voice = resolve_voice(request.voice)
    result = await engine.generate(
        text,
        config=PromptConfig(response_modalities=["AUDIO"], voice_name=voice),
        context={"step": "speech", "voice": voice},
    )
    if not result.get("success"):
        raise SpeechGenerationError(f"Text-to-speech generation failed: {failure_reason(result)}")

    source = locate_audio_payload(result.get("raw_response"))
    if source is None:
        raise SpeechGenerationError("Text-to-speech generation failed: the model did not return audio data.")

    if source.data is not None:
        audio_bytes, mime_type = source.data, source.mime_type
    else:
        try:
            audio_bytes, fetched_mime = await fetch_payload(source.uri, AUDIO_FETCH_TIMEOUT)
        except SpeechGenerationError:
            raise
        except Exception as exc:
            raise SpeechGenerationError(f"Failed to fetch synthesized audio: {exc}") from exc
        mime_type = _pick_mime(source.mime_type, fetched_mime)
        if not audio_bytes:
            raise SpeechGenerationError("Fetched audio payload is empty.")

    container_bytes, container_mime = normalize_audio(audio_bytes, mime_type)
    logger.info(
        "Speech synthesized",
        extra={
            "voice": voice,
            "source_mime": mime_type,
            "container": container_mime,
            "bytes": len(container_bytes),
            "delivered_by_uri": source.data is None,
        },
    )
    return SynthesizedAudio(audio_data_uri=build_data_uri(container_mime, container_bytes))
