# Copyright (c) 2026 Nate Tritle. Licensed under the MIT License.
"""Gemini backend for the AI remix, plus API key discovery."""

from __future__ import annotations

import logging
import os
from typing import Mapping

from google import genai
from google.genai import types

from comfytheme.core.constants import AI_REQUEST_TIMEOUT_MS, API_KEY_ENV_VARS, DEFAULT_AI_MODEL
from comfytheme.utils.error_handler import MissingCredentialError

logger = logging.getLogger("comfytheme.ai.gemini")


def resolve_api_key(environ: Mapping[str, str] | None = None) -> str | None:
    """Return the first non-empty API key from the environment, if any."""
    env = os.environ if environ is None else environ
    for name in API_KEY_ENV_VARS:
        value = env.get(name, "").strip()
        if value:
            return value
    return None


def require_api_key(environ: Mapping[str, str] | None = None) -> str:
    """Return the API key or raise MissingCredentialError."""
    key = resolve_api_key(environ)
    if key is None:
        raise MissingCredentialError(
            "API key is missing. AI features require GEMINI_API_KEY "
            "(or API_KEY) in the environment."
        )
    return key


class GeminiGenerator:
    """``generate(system_instruction, prompt)`` backed by google-genai.

    Asks for a JSON response and returns the raw text (or None when the
    service sends no text). Errors from the client propagate unchanged;
    ``transform_theme`` wraps them.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_AI_MODEL,
        timeout_ms: int = AI_REQUEST_TIMEOUT_MS,
    ) -> None:
        self.model = model
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=timeout_ms),
        )

    def __call__(self, system_instruction: str, prompt: str) -> str | None:
        logger.debug("Calling %s (%d prompt chars)", self.model, len(prompt))
        response = self._client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=system_instruction,
                response_mime_type="application/json",
            ),
        )
        return response.text
