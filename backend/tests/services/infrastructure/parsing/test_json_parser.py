"""
Tests for alchemist.services.infrastructure.parsing.json_parser
"""

from alchemist.services.infrastructure.parsing import (
    extract_largest_balanced_json,
    fix_json_escapes,
    parse_json_response,
    strip_code_fences,
)


class TestStripCodeFences:

    def test_fenced_block(self):
        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_closing_fence_on_last_line(self):
        assert strip_code_fences("```html\n<html></html>```") == "<html></html>"

    def test_unfenced_text_is_stripped_only(self):
        assert strip_code_fences("  plain  ") == "plain"


class TestFixJsonEscapes:

    def test_keeps_valid_escapes(self):
        assert fix_json_escapes(r'"line\nquote\" é"') == r'"line\nquote\" é"'

    def test_doubles_invalid_escapes(self):
        assert fix_json_escapes(r'"\d+ and \("') == r'"\\d+ and \\("'

    def test_escaped_backslash_is_untouched(self):
        assert fix_json_escapes(r'"\\d"') == r'"\\d"'


class TestParseJsonResponse:

    def test_plain_object(self):
        assert parse_json_response('{"html_content": "<p>x</p>"}') == {"html_content": "<p>x</p>"}

    def test_prose_around_object(self):
        text = 'Here you go:\n{"overall_topic": "Cells", "planned_modules": []}\nEnjoy!'
        assert parse_json_response(text)["overall_topic"] == "Cells"

    def test_invalid_escape_recovered(self):
        assert parse_json_response(r'{"pattern": "\d+"}') == {"pattern": "\\d+"}

    def test_arrays_are_not_objects(self):
        assert parse_json_response("[1, 2, 3]") == {}

    def test_default(self):
        assert parse_json_response("nothing", default={"fallback": True}) == {"fallback": True}

    def test_largest_object_wins(self):
        text = '{"a": 1} and {"b": {"c": 2}}'
        assert extract_largest_balanced_json(text) == '{"b": {"c": 2}}'

    def test_braces_inside_strings(self):
        text = '{"css": "body { margin: 0 }"}'
        assert extract_largest_balanced_json(text) == text
