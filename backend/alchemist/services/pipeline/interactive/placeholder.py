"""
Image placeholder substitution for generated lesson documents.
"""

import re
from typing import Tuple

from alchemist.config import IMAGE_PLACEHOLDER_TOKEN


def substitute_image_placeholder_counted(
    html_content: str,
    image_data_uri: str,
    token: str = IMAGE_PLACEHOLDER_TOKEN,
) -> Tuple[str, int]:
    """
    Replace every literal occurrence of ``token`` with ``image_data_uri``.

    The token is regex-escaped and the replacement is supplied through a
    function, so neither side is interpreted as a pattern or template.

    Returns:
        (new document, number of replacements)
    """
    return re.compile(re.escape(token)).subn(lambda _match: image_data_uri, html_content)


def substitute_image_placeholder(
    html_content: str,
    image_data_uri: str,
    token: str = IMAGE_PLACEHOLDER_TOKEN,
) -> str:
    """Global literal substitution; a document without the token is returned unchanged."""
    substituted, _count = substitute_image_placeholder_counted(html_content, image_data_uri, token)
    return substituted
