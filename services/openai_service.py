# services/openai_service.py
from __future__ import annotations

import logging
from typing import Optional

from openai import OpenAI, OpenAIError

from config import Settings, settings as default_settings
from errors import UpstreamError
from request_context import get_request_id

log = logging.getLogger("llm")

class CompletionClient:
    """Sends one user prompt to the chat-completions API in JSON-object mode."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or default_settings
        self._client: Optional[OpenAI] = None

    def _openai(self) -> OpenAI:
        if not self.settings.OPENAI_API_KEY:
            raise UpstreamError("OpenAI API key not configured.")
        if self._client is None:
            self._client = OpenAI(
                api_key=self.settings.OPENAI_API_KEY,
                base_url=self.settings.OPENAI_BASE_URL,
                timeout=self.settings.OPENAI_TIMEOUT_SECONDS,
                max_retries=self.settings.OPENAI_MAX_RETRIES,
            )
        return self._client

    def complete(self, prompt: str) -> str:
        """Return the raw text of the first choice; JSON decoding is left to the caller."""
        client = self._openai()
        rid = get_request_id()
        try:
            chat = client.chat.completions.create(
                model=self.settings.OPENAI_MODEL,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.settings.OPENAI_TEMPERATURE,
                response_format={"type": "json_object"},
            )
        except OpenAIError as e:
            log.warning("LLM call failed: %s", e, extra={"request_id": rid, "model": self.settings.OPENAI_MODEL})
            raise UpstreamError(str(e)) from e

        if not chat.choices:
            raise UpstreamError("Completion service returned no choices")
        content = chat.choices[0].message.content
        if content is None:
            raise UpstreamError("Completion service returned an empty message")

        log.info("LLM call ok (json_mode)", extra={"request_id": rid, "model": self.settings.OPENAI_MODEL})
        return content
