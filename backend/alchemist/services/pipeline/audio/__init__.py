from .speech_step import generate_speech, resolve_voice
from .audio_payload import (
    AudioSource,
    fetch_audio_payload,
    locate_audio_payload,
    normalize_audio,
    parse_mime,
    pcm_l16_to_wav,
)

__all__ = [
    "generate_speech",
    "resolve_voice",
    "AudioSource",
    "fetch_audio_payload",
    "locate_audio_payload",
    "normalize_audio",
    "parse_mime",
    "pcm_l16_to_wav",
]
