"""Gemini adapter for the assistant session port."""

from collections.abc import AsyncIterator
from typing import Any

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from finledger.application.ports.assistant import (
    AssistantSessionPort,
    ConversationTurn,
)
from finledger.domain.errors import AssistantError, AssistantNotConfiguredError
from finledger.domain.models import ChatRole
from finledger.infrastructure.logging.logger import get_app_logger
from finledger.infrastructure.settings import FinLedgerSettings


REQUEST_TIMEOUT_SECONDS = 60
GENERATION_CONFIG = {
    "temperature": 0.3,
    "max_output_tokens": 1024,
}

_ASSISTANT_FAILURES = (
    google_exceptions.GoogleAPIError,
    genai.types.BlockedPromptException,
    genai.types.StopCandidateException,
)

_ROLE_MAP = {
    ChatRole.USER: "user",
    ChatRole.ASSISTANT: "model",
}


class GeminiAssistantSession(AssistantSessionPort):
    """AssistantSessionPort implementation backed by google-generativeai.

    The grounding document is sent as the system instruction of a model built
    for each request, so every turn sees the current ledger state.
    """

    def __init__(self, settings: FinLedgerSettings, logger=None) -> None:
        """Initialize the session.

        Args:
            settings: Settings providing the API key and model name.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._settings = settings
        self._logger = logger or get_app_logger()
        self._configured = False

    async def send(
        self,
        turns: list[ConversationTurn],
        grounding_document: str,
    ) -> str:
        model = self._build_model(grounding_document)
        try:
            response = await model.generate_content_async(
                to_contents(turns),
                request_options={"timeout": REQUEST_TIMEOUT_SECONDS},
            )
        except _ASSISTANT_FAILURES as exc:
            self._logger.error(f"Gemini request failed: {exc}")
            raise AssistantError(str(exc)) from exc
        try:
            return response.text
        except ValueError as exc:
            raise AssistantError("The assistant returned no text.") from exc

    async def stream(
        self,
        turns: list[ConversationTurn],
        grounding_document: str,
    ) -> AsyncIterator[str]:
        model = self._build_model(grounding_document)
        try:
            response = await model.generate_content_async(
                to_contents(turns),
                stream=True,
                request_options={"timeout": REQUEST_TIMEOUT_SECONDS},
            )
            async for chunk in response:
                text = _chunk_text(chunk)
                if text:
                    yield text
        except _ASSISTANT_FAILURES as exc:
            self._logger.error(f"Gemini stream failed: {exc}")
            raise AssistantError(str(exc)) from exc

    def _build_model(self, grounding_document: str) -> genai.GenerativeModel:
        if not self._settings.is_assistant_configured:
            raise AssistantNotConfiguredError()
        if not self._configured:
            genai.configure(api_key=self._settings.gemini_api_key)
            self._configured = True
        return genai.GenerativeModel(
            model_name=self._settings.gemini_model,
            system_instruction=grounding_document,
            generation_config=GENERATION_CONFIG,
        )


def to_contents(turns: list[ConversationTurn]) -> list[dict[str, Any]]:
    """Convert conversation turns into Gemini content dictionaries."""
    return [
        {"role": _ROLE_MAP[ChatRole(turn.role)], "parts": [turn.content]}
        for turn in turns
    ]


def _chunk_text(chunk) -> str:
    # Chunks without parts (safety stops, finish markers) raise on .text.
    try:
        return chunk.text
    except ValueError:
        return ""


__all__ = ["GeminiAssistantSession", "to_contents"]
