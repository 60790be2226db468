"""
Parsing Module

Provides utilities for parsing JSON and cleaning text from model responses.

Usage:
    from alchemist.services.infrastructure.parsing import parse_json_response, strip_code_fences
"""

from .json_parser import (
    parse_json_response,
    extract_largest_balanced_json,
    fix_json_escapes,
    strip_code_fences,
)

__all__ = [
    "parse_json_response",
    "extract_largest_balanced_json",
    "fix_json_escapes",
    "strip_code_fences",
]
