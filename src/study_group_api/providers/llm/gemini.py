import json
import logging
import re
from typing import Any

import httpx

from study_group_api.config import Settings

logger = logging.getLogger(__name__)
PAYLOAD_LOG_LIMIT = 4000

_LEADING_FENCE = re.compile(r"^```[\w-]*\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```$")


class LLMError(Exception):
    """Base class for every failure raised by the model adapter."""


class LLMConfigError(LLMError):
    pass


class LLMServiceError(LLMError):
    """The Gemini call itself failed or returned no usable text."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class LLMParseError(LLMError):
    """Gemini answered, but the text is not valid JSON."""

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text


def strip_code_fences(text: str) -> str:
    """Remove one leading fence (bare or with any language tag) and one trailing fence."""
    cleaned = text.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


class GeminiProvider:
    """Schema-constrained JSON generation over the Gemini REST API."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self.model = settings.gemini_model
        self.temperature = settings.llm_temperature
        self.generate_url = f"{settings.gemini_base_url}/models/{self.model}:generateContent"
        self._transport = transport

    async def generate_json(
        self,
        prompt: str,
        schema: dict[str, Any],
        timeout: float | None = None,
    ) -> Any:
        """Send ``prompt`` and return the parsed JSON value.

        ``timeout`` overrides ``settings.llm_timeout_seconds`` for this call.
        When both are ``None`` the request waits for Gemini indefinitely.
        """
        if not self.settings.gemini_api_key:
            raise LLMConfigError("Missing GEMINI_API_KEY environment variable")

        effective_timeout = timeout if timeout is not None else self.settings.llm_timeout_seconds
        request_body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseJsonSchema": schema,
                "temperature": self.temperature,
            },
        }
        logger.info(
            "gemini.request model=%s prompt_chars=%d temperature=%.2f timeout=%s",
            self.model,
            len(prompt),
            self.temperature,
            effective_timeout,
        )
        logger.debug("gemini.request.prompt=%s", self._clip(prompt, PAYLOAD_LOG_LIMIT))

        try:
            async with httpx.AsyncClient(timeout=effective_timeout, transport=self._transport) as client:
                http_response = await client.post(
                    self.generate_url,
                    json=request_body,
                    headers={"x-goog-api-key": self.settings.gemini_api_key},
                )
        except httpx.HTTPError as exc:
            raise LLMServiceError(f"Gemini request failed: {exc.__class__.__name__}: {exc}") from exc

        text = self._extract_text(http_response)
        logger.info("gemini.response chars=%d", len(text))
        logger.debug("gemini.response.payload=%s", self._clip(text, PAYLOAD_LOG_LIMIT))

        cleaned = strip_code_fences(text)
        try:
            return json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise LLMParseError(f"Gemini returned invalid JSON: {exc}", raw_text=cleaned) from exc

    def _extract_text(self, response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            data = None

        if response.status_code != 200:
            message = self._error_message(data) or f"Gemini API returned HTTP {response.status_code}"
            raise LLMServiceError(message, status_code=response.status_code)
        if not isinstance(data, dict):
            raise LLMServiceError("Gemini API returned a non-JSON body", status_code=response.status_code)
        if "error" in data:
            raise LLMServiceError(self._error_message(data) or "Gemini API error", status_code=response.status_code)

        candidates = data.get("candidates") or []
        if not candidates:
            raise LLMServiceError("Gemini API returned no candidates")
        parts = (candidates[0].get("content") or {}).get("parts") or []
        texts = [str(part["text"]) for part in parts if isinstance(part, dict) and part.get("text") is not None]
        if not texts:
            raise LLMServiceError("Gemini API returned no text")
        return "".join(texts)

    @staticmethod
    def _error_message(data: Any) -> str:
        if isinstance(data, dict) and isinstance(data.get("error"), dict):
            message = data["error"].get("message")
            if message:
                return f"Gemini API error: {message}"
        return ""

    @staticmethod
    def _clip(text: str, limit: int) -> str:
        normalized = " ".join(text.split()).strip()
        if len(normalized) <= limit:
            return normalized
        return f"{normalized[:limit]}...(truncated)"
