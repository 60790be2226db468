"""
Input validation utilities
"""

import re
from datetime import datetime
from typing import Optional

from .exceptions import TopicValidationError


def require_topic(topic: Optional[str]) -> str:
    """Return the stripped topic or raise if it is blank."""
    cleaned = (topic or "").strip()
    if not cleaned:
        raise TopicValidationError("Topic cannot be empty.")
    return cleaned


def require_prompt(prompt: Optional[str]) -> str:
    cleaned = (prompt or "").strip()
    if not cleaned:
        raise TopicValidationError("Prompt cannot be empty.")
    return cleaned


def safe_filename_fragment(text: str, max_length: int = 25, fallback: str = "generated_image") -> str:
    """Slug of the first characters: non-word characters become '_', runs collapse."""
    fragment = re.sub(r"[^a-zA-Z0-9_]", "_", (text or "")[:max_length])
    fragment = re.sub(r"_+", "_", fragment)
    return fragment or fallback


def suggest_download_name(
    prompt: str,
    *,
    background_removed: bool = False,
    size: Optional[tuple[int, int]] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Suggested file name for a downloaded alchemist image.

    Example:
        gemini_alchemist_A_red_fox_in_snow_no_bg_20261018093000.png
    """
    stamp = (now or datetime.now()).strftime("%Y%m%d%H%M%S")
    name = f"gemini_alchemist_{safe_filename_fragment(prompt)}"
    if background_removed:
        name += "_no_bg"
    if size:
        name += f"_{size[0]}x{size[1]}"
    return f"{name}_{stamp}.png"
