"""
JSON parsing utilities for model responses.

Structured steps request ``application/json`` output, but models still
occasionally wrap the payload in markdown fences, add prose around it or
emit invalid escape sequences. These helpers recover the object.
"""

import json
import re
from typing import Any, Dict, List, Optional

# A backslash plus, when present, the escape it legally starts
_ESCAPE_RE = re.compile(r'\\(["\\/bfnrt]|u[0-9a-fA-F]{4})?')


def extract_largest_balanced_json(text: str) -> Optional[str]:
    """Extract the largest balanced JSON object from text.

    Scans for balanced braces/brackets while respecting string literals
    and escapes.

    Returns:
        The largest balanced JSON object substring, or None if not found.
    """
    if not text:
        return None

    in_string = False
    escape = False
    stack: List[str] = []
    start_idx: Optional[int] = None
    best: Optional[str] = None

    for i, ch in enumerate(text):
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
            continue

        if ch in "{[":
            if not stack:
                start_idx = i
            stack.append(ch)
            continue

        if ch in "}]" and stack:
            open_ch = stack[-1]
            if (open_ch == "{" and ch == "}") or (open_ch == "[" and ch == "]"):
                stack.pop()
                if not stack and start_idx is not None:
                    candidate = text[start_idx:i + 1]
                    if candidate.startswith("{") and (best is None or len(candidate) > len(best)):
                        best = candidate
                    start_idx = None
            else:
                # Mismatched closing; reset state.
                stack.clear()
                start_idx = None

    return best


def fix_json_escapes(text: str) -> str:
    """Escape lone backslashes while preserving valid JSON escapes.

    Generated HTML and LaTeX-flavoured text often contain sequences such
    as ``\\d`` or ``\\(`` that are not legal JSON escapes.
    """
    return _ESCAPE_RE.sub(lambda m: m.group(0) if m.group(1) else "\\\\", text)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence (```lang ... ```), if any."""
    stripped = (text or "").strip()
    if not stripped.startswith("```"):
        return stripped
    first_newline = stripped.find("\n")
    body = stripped[first_newline + 1:] if first_newline != -1 else stripped[3:]
    body = body.rstrip()
    if body.endswith("```"):
        body = body[:-3]
    return body.strip()


def parse_json_response(text: str, default: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Parse a JSON object from a model response with error recovery.

    Handles:
    - Markdown code block wrapping (```json ... ```)
    - Invalid escape sequences
    - Prose before or after the object

    Returns:
        Parsed JSON dict, or ``default`` (empty dict) if nothing parses
    """
    if default is None:
        default = {}

    text = strip_code_fences(text or "")
    if not text:
        return default

    for candidate in (text, fix_json_escapes(text)):
        try:
            parsed = json.loads(candidate)
            if isinstance(parsed, dict):
                return parsed
        except json.JSONDecodeError:
            pass

    candidate = extract_largest_balanced_json(text)
    if candidate:
        for attempt in (candidate, fix_json_escapes(candidate)):
            try:
                parsed = json.loads(attempt)
                if isinstance(parsed, dict):
                    return parsed
            except json.JSONDecodeError:
                pass

    return default
