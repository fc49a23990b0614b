# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Tests for API key discovery and the Gemini generate callable."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from comfytheme.ai.gemini import GeminiGenerator, require_api_key, resolve_api_key
from comfytheme.utils.error_handler import MissingCredentialError


class TestResolveApiKey:
    def test_primary_variable(self):
        assert resolve_api_key({"GEMINI_API_KEY": "abc", "API_KEY": "xyz"}) == "abc"

    def test_fallback_variable(self):
        assert resolve_api_key({"API_KEY": "xyz"}) == "xyz"

    def test_blank_ignored(self):
        assert resolve_api_key({"GEMINI_API_KEY": "  ", "API_KEY": "xyz"}) == "xyz"

    def test_none(self):
        assert resolve_api_key({}) is None

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.setenv("API_KEY", "from-env")
        assert resolve_api_key() == "from-env"


class TestRequireApiKey:
    def test_present(self):
        assert require_api_key({"GEMINI_API_KEY": "abc"}) == "abc"

    def test_missing(self):
        with pytest.raises(MissingCredentialError, match="API key is missing"):
            require_api_key({})


class TestGeminiGenerator:
    def test_requests_json(self):
        with patch("comfytheme.ai.gemini.genai.Client") as mock_client_cls:
            client = mock_client_cls.return_value
            client.models.generate_content.return_value = MagicMock(text='{"ok": true}')
            generate = GeminiGenerator("key", model="gemini-test")
            result = generate("be a designer", "convert this")

        assert result == '{"ok": true}'
        assert mock_client_cls.call_args.kwargs["api_key"] == "key"
        kwargs = client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["contents"] == "convert this"
        assert kwargs["config"].system_instruction == "be a designer"
        assert kwargs["config"].response_mime_type == "application/json"

    def test_client_errors_propagate(self):
        with patch("comfytheme.ai.gemini.genai.Client") as mock_client_cls:
            mock_client_cls.return_value.models.generate_content.side_effect = RuntimeError("quota")
            generate = GeminiGenerator("key")
            with pytest.raises(RuntimeError, match="quota"):
                generate("s", "p")
