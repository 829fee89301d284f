"""
Tests for JSON extraction from model output
"""
import sys
import os

# Add backend directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sage.agent.parsing import extract_json_array, extract_json_object


class TestExtractJsonArray:
    def test_plain_array(self):
        assert extract_json_array('[{"a": 1}]') == [{"a": 1}]

    def test_surrounding_prose(self):
        text = 'Sure! Here are the questions:\n[{"a": 1}, {"a": 2}]\nHope this helps.'
        assert extract_json_array(text) == [{"a": 1}, {"a": 2}]

    def test_markdown_fence(self):
        assert extract_json_array('```json\n[1, 2, 3]\n```') == [1, 2, 3]

    def test_invalid_json(self):
        assert extract_json_array("[1, 2,") is None
        assert extract_json_array("[not json]") is None

    def test_no_array(self):
        assert extract_json_array("no brackets here") is None

    def test_empty_input(self):
        assert extract_json_array("") is None
        assert extract_json_array(None) is None

    def test_deeply_nested_input(self):
        text = "[" * 100000 + "]" * 100000
        assert extract_json_array(text) is None


class TestExtractJsonObject:
    def test_deeply_nested_object(self):
        text = "{\"a\": " * 100000 + "1" + "}" * 100000
        assert extract_json_object(text) is None

    def test_object(self):
        assert extract_json_object('Result: {"proTip": "x"}') == {"proTip": "x"}

    def test_rejects_non_object(self):
        assert extract_json_object("{") is None

    def test_nested(self):
        text = '{"a": {"b": [1, 2]}, "c": "d"}'
        assert extract_json_object(text) == {"a": {"b": [1, 2]}, "c": "d"}
