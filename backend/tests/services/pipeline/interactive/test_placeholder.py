"""
Tests for alchemist.services.pipeline.interactive.placeholder
"""

from alchemist.config import IMAGE_PLACEHOLDER_TOKEN
from alchemist.services.pipeline.interactive import (
    substitute_image_placeholder,
    substitute_image_placeholder_counted,
)

URI = "data:image/png;base64,iVBORw0K+/=="


class TestSubstituteImagePlaceholder:

    def test_every_occurrence_replaced(self):
        html = f'<img src="{IMAGE_PLACEHOLDER_TOKEN}"><img src="{IMAGE_PLACEHOLDER_TOKEN}">'
        result, count = substitute_image_placeholder_counted(html, URI)
        assert count == 2
        assert result == f'<img src="{URI}"><img src="{URI}">'

    def test_no_occurrence_returns_input(self):
        html = "<p>No image here</p>"
        assert substitute_image_placeholder(html, URI) == html
        assert substitute_image_placeholder_counted(html, URI)[1] == 0

    def test_replacement_with_backreference_characters(self):
        uri = r"data:image/png;base64,\1\g<0>$&"
        assert substitute_image_placeholder(IMAGE_PLACEHOLDER_TOKEN, uri) == uri

    def test_token_with_regex_characters(self):
        token = "[IMG].*(src)?"
        html = f"a {token} b .* c"
        assert substitute_image_placeholder(html, URI, token=token) == f"a {URI} b .* c"

    def test_quotes_around_token_are_kept(self):
        html = f"<img src='{IMAGE_PLACEHOLDER_TOKEN}' alt=\"x\">"
        assert substitute_image_placeholder(html, URI) == f"<img src='{URI}' alt=\"x\">"
