"""Tests for llm_core utils module."""

import pytest

from llm_core.utils import extract_json_text, is_failed_response, parse_json_response


class TestIsFailedResponse:
    """Tests for is_failed_response utility function."""

    def test_empty_string_is_failed(self):
        """Test that empty string is considered failed."""
        assert is_failed_response("") is True

    def test_none_is_failed(self):
        """Test that None is considered failed."""
        assert is_failed_response(None) is True

    def test_whitespace_only_is_failed(self):
        """Test that whitespace-only string is considered failed."""
        assert is_failed_response("   ") is True
        assert is_failed_response("\t\n") is True
        assert is_failed_response("  \n  \t  ") is True

    def test_error_prefix_is_failed(self):
        """Test that 'Error:' prefix indicates failure."""
        assert is_failed_response("Error: something went wrong") is True
        assert is_failed_response("Error:no space") is True

    def test_error_prefix_with_whitespace_is_failed(self):
        """Test that 'Error:' prefix with leading whitespace is failed."""
        assert is_failed_response("  Error: something went wrong") is True
        assert is_failed_response("\nError: test") is True

    def test_valid_content_not_failed(self):
        """Test that valid content is not considered failed."""
        assert is_failed_response("Hello, world!") is False
        assert is_failed_response("Some valid response") is False

    def test_content_containing_error_word_not_failed(self):
        """Test that content containing 'Error' but not as prefix is not failed."""
        assert is_failed_response("This is not an Error message") is False
        assert is_failed_response("error: lowercase") is False  # Case sensitive

    def test_newlines_and_content_not_failed(self):
        """Test that content with newlines is not failed."""
        assert is_failed_response("Line 1\nLine 2\nLine 3") is False

    def test_single_character_not_failed(self):
        """Test that single character response is not failed."""
        assert is_failed_response("a") is False
        assert is_failed_response("1") is False


class TestExtractJsonText:
    """Tests for extract_json_text."""

    def test_fenced_json(self):
        """Test JSON inside a Markdown code fence is extracted."""
        content = 'Here you go:\n```json\n{"a": 1}\n```\nThanks'
        assert extract_json_text(content) == '{"a": 1}'

    def test_object_with_surrounding_prose(self):
        content = 'Sure! {"genre": "Fantasy"} Hope that helps.'
        assert extract_json_text(content) == '{"genre": "Fantasy"}'

    def test_array(self):
        assert extract_json_text('Result: [1, 2, 3]') == "[1, 2, 3]"

    def test_plain_text_returned_stripped(self):
        assert extract_json_text("  no json here  ") == "no json here"


class TestParseJsonResponse:
    """Tests for parse_json_response."""

    def test_parses_fenced_object(self):
        """Test a fenced object decodes to a dict."""
        assert parse_json_response('```\n{"keywords": ["dragons"]}\n```') == {"keywords": ["dragons"]}

    def test_invalid_json_raises_value_error(self):
        """Test undecodable content raises ValueError."""
        with pytest.raises(ValueError, match="not valid JSON"):
            parse_json_response("{not json}")
