"""Tests for the Gemini client boundary (SDK mocked)."""

from unittest.mock import MagicMock, PropertyMock, patch

import pytest

from execution.legal_analyzer.config import AnalyzerConfig
from execution.legal_analyzer.errors import UpstreamUnavailable
from execution.legal_analyzer.model_client import GeminiClient, to_gemini_part
from execution.legal_analyzer.prompts import InlineDataPart, TextPart
from tests.conftest import SAMPLE_PDF_BYTES


@pytest.fixture
def mock_genai():
    with patch("execution.legal_analyzer.model_client.genai") as genai:
        yield genai


class TestToGeminiPart:
    def test_text_part(self):
        assert to_gemini_part(TextPart("Clause 1")) == {"text": "Clause 1"}

    def test_inline_data_part(self):
        part = InlineDataPart(data=SAMPLE_PDF_BYTES, mime_type="application/pdf")
        assert to_gemini_part(part) == {
            "inline_data": {"mime_type": "application/pdf", "data": SAMPLE_PDF_BYTES},
        }

    def test_unknown_part(self):
        with pytest.raises(TypeError):
            to_gemini_part("raw string")


class TestGeminiClient:
    def test_configures_once(self, mock_genai):
        client = GeminiClient(api_key="abc", model_name="gemini-2.5-flash", timeout_seconds=30)
        mock_genai.configure.assert_called_once_with(api_key="abc")
        mock_genai.GenerativeModel.assert_called_once_with("gemini-2.5-flash")
        assert client.timeout_seconds == 30

    def test_from_config(self, mock_genai):
        config = AnalyzerConfig(api_key="abc", model_name="gemini-1.5-flash", timeout_seconds=12)
        client = GeminiClient.from_config(config)
        assert client.model_name == "gemini-1.5-flash"
        assert client.timeout_seconds == 12

    def test_requires_key(self, mock_genai):
        with pytest.raises(ValueError):
            GeminiClient(api_key="", model_name="gemini-2.5-flash")

    def test_generate_sends_single_user_turn(self, mock_genai):
        model = mock_genai.GenerativeModel.return_value
        model.generate_content.return_value = MagicMock(text='{"summary": "S"}')
        client = GeminiClient(api_key="abc", model_name="m", timeout_seconds=30)

        parts = [InlineDataPart(data=b"%PDF", mime_type="application/pdf"), TextPart("Analyze")]
        assert client.generate(parts) == '{"summary": "S"}'

        model.generate_content.assert_called_once_with(
            [{
                "role": "user",
                "parts": [
                    {"inline_data": {"mime_type": "application/pdf", "data": b"%PDF"}},
                    {"text": "Analyze"},
                ],
            }],
            request_options={"timeout": 30},
        )

    def test_no_timeout(self, mock_genai):
        model = mock_genai.GenerativeModel.return_value
        model.generate_content.return_value = MagicMock(text="{}")
        client = GeminiClient(api_key="abc", model_name="m")
        client.generate([TextPart("x")])
        assert model.generate_content.call_args.kwargs["request_options"] is None

    def test_sdk_failure_is_upstream_unavailable(self, mock_genai):
        model = mock_genai.GenerativeModel.return_value
        model.generate_content.side_effect = RuntimeError("429 quota exceeded")
        client = GeminiClient(api_key="abc", model_name="m")

        with pytest.raises(UpstreamUnavailable) as exc_info:
            client.generate([TextPart("x")])
        assert exc_info.value.details == "429 quota exceeded"
        assert exc_info.value.status_code == 500

    def test_blocked_reply_is_upstream_unavailable(self, mock_genai):
        response = MagicMock()
        type(response).text = PropertyMock(side_effect=ValueError("blocked"))
        mock_genai.GenerativeModel.return_value.generate_content.return_value = response
        client = GeminiClient(api_key="abc", model_name="m")

        with pytest.raises(UpstreamUnavailable, match="internal server error"):
            client.generate([TextPart("x")])

    def test_no_retry(self, mock_genai):
        model = mock_genai.GenerativeModel.return_value
        model.generate_content.side_effect = TimeoutError("deadline exceeded")
        client = GeminiClient(api_key="abc", model_name="m")

        with pytest.raises(UpstreamUnavailable):
            client.generate([TextPart("x")])
        assert model.generate_content.call_count == 1
