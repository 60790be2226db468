from .script_step import generate_audio_script, clean_script_text

__all__ = ["generate_audio_script", "clean_script_text"]
