"""Tests for the Gemini REST client. All HTTP calls are mocked."""

import json
from unittest.mock import Mock, patch

import pytest
import requests

from agrismart.services.gemini_client import (
    GeminiClient,
    GeminiError,
    build_prompt,
    extract_text,
    parse_json_text,
)

AI_ASSESSMENT = {
    "assessment": "Healthy tomato plant",
    "problems": [],
    "recommendations": ["Keep watering schedule"],
    "preventativeCare": ["Mulch the soil"],
    "optimalConditions": {"temperature": "21-27°C"},
}


def _gemini_body(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _response(status_code: int = 200, body=None) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = body if body is not None else {}
    return response


@pytest.fixture
def gemini():
    return GeminiClient("https://gemini.test/v1beta/", "secret", "gemini-test", timeout=5)


class TestParseJsonText:
    def test_plain_json(self):
        assert parse_json_text(json.dumps(AI_ASSESSMENT)) == AI_ASSESSMENT

    def test_strips_code_fences(self):
        text = f"```json\n{json.dumps(AI_ASSESSMENT)}\n```"
        assert parse_json_text(text) == AI_ASSESSMENT

    def test_strips_bare_fences(self):
        assert parse_json_text('```\n{"assessment": "ok"}\n```') == {"assessment": "ok"}

    @pytest.mark.parametrize("text", ["", "Sorry, I cannot help", '{"assessment": '])
    def test_invalid_json_raises(self, text):
        with pytest.raises(GeminiError):
            parse_json_text(text)

    def test_non_object_raises(self):
        with pytest.raises(GeminiError, match="not a JSON object"):
            parse_json_text("[1, 2, 3]")


class TestExtractText:
    def test_joins_parts(self):
        body = {"candidates": [{"content": {"parts": [{"text": "a"}, {"text": "b"}]}}]}
        assert extract_text(body) == "a\nb"

    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"candidates": []},
            {"candidates": ["oops"]},
            [],
            {"candidates": [{}]},
            {"candidates": "none"},
            {"candidates": [{"content": "blocked"}]},
            {"candidates": [{"content": {"parts": "text"}}]},
            {"candidates": [{"content": {"parts": [{"text": 5}, {"text": None}]}}]},
        ],
    )
    def test_empty(self, body):
        assert extract_text(body) == ""


class TestBuildPrompt:
    def test_embeds_readings_and_schema(self, make_reading):
        prompt = build_prompt(make_reading(plantType="Tomato"))
        assert "- Temperature: 22.0°C" in prompt
        assert "- Nitrogen: 150.0 ppm" in prompt
        assert "- Plant Type: Tomato" in prompt
        assert '"preventativeCare"' in prompt
        assert "Current Weather" not in prompt

    def test_minimal_reading(self, make_reading):
        prompt = build_prompt(make_reading(nitrogen=None, phosphorus=None, potassium=None))
        assert "Nitrogen:" not in prompt
        assert "- Plant Type: Not specified" in prompt

    def test_includes_weather(self, make_reading, make_snapshot):
        prompt = build_prompt(make_reading(), make_snapshot(uv_index=6))
        assert "Current Weather (Wageningen):" in prompt
        assert "- Pressure: 1013.0 hPa" in prompt
        assert "- UV Index: 6.0" in prompt


class TestGeminiClient:
    def test_is_configured(self):
        assert GeminiClient("https://x", "", "m", 5).is_configured is False
        assert GeminiClient("https://x", "key", "m", 5).is_configured is True

    def test_generate_assessment(self, gemini, make_reading):
        fenced = f"```json\n{json.dumps(AI_ASSESSMENT)}\n```"
        with patch("agrismart.services.gemini_client.requests.post", return_value=_response(body=_gemini_body(fenced))) as post:
            result = gemini.generate_assessment(make_reading())

        assert result == AI_ASSESSMENT
        args, kwargs = post.call_args
        assert args[0] == "https://gemini.test/v1beta/models/gemini-test:generateContent"
        assert kwargs["params"] == {"key": "secret"}
        assert kwargs["timeout"] == 5
        assert "Sensor Data:" in kwargs["json"]["contents"][0]["parts"][0]["text"]

    @pytest.mark.parametrize("status_code", [429, 404, 500])
    def test_http_errors(self, gemini, make_reading, status_code):
        with patch("agrismart.services.gemini_client.requests.post", return_value=_response(status_code)):
            with pytest.raises(GeminiError) as exc_info:
                gemini.generate_assessment(make_reading())
        assert exc_info.value.status_code == status_code

    def test_transport_error(self, gemini, make_reading):
        with patch("agrismart.services.gemini_client.requests.post", side_effect=requests.ConnectionError("down")):
            with pytest.raises(GeminiError) as exc_info:
                gemini.generate_assessment(make_reading())
        assert exc_info.value.status_code is None

    def test_no_candidates(self, gemini, make_reading):
        with patch("agrismart.services.gemini_client.requests.post", return_value=_response(body={"candidates": []})):
            with pytest.raises(GeminiError, match="no candidates"):
                gemini.generate_assessment(make_reading())

    def test_unparseable_reply(self, gemini, make_reading):
        body = _gemini_body("The plant looks fine!")
        with patch("agrismart.services.gemini_client.requests.post", return_value=_response(body=body)):
            with pytest.raises(GeminiError, match="Could not parse"):
                gemini.generate_assessment(make_reading())

    def test_non_string_parts_are_ignored(self):
        body = {"candidates": [{"content": {"parts": [{"text": 5}, {"text": '{"assessment": "ok"}'}]}}]}
        assert extract_text(body) == '{"assessment": "ok"}'

    @pytest.mark.parametrize(
        "body",
        [
            {"candidates": [{"content": "blocked"}]},
            {"candidates": [{"content": {"parts": [{"text": 5}]}}]},
        ],
    )
    def test_malformed_reply_shape(self, gemini, make_reading, body):
        with patch("agrismart.services.gemini_client.requests.post", return_value=_response(body=body)):
            with pytest.raises(GeminiError, match="no candidates"):
                gemini.generate_assessment(make_reading())
