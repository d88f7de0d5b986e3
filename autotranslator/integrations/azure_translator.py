from __future__ import annotations

import logging
from typing import Callable, Protocol

import httpx


logger = logging.getLogger(__name__)


class ProviderError(RuntimeError):
    """Raised when a single translation request fails."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TranslationProvider(Protocol):
    """Single-string machine translation backend."""

    async def translate(self, text: str, *, target_locale: str) -> str:
        """Return `text` translated into `target_locale`."""


class AzureTranslatorProvider:
    """Azure AI Translator (Text Translation v3) provider."""

    def __init__(
        self,
        api_key: str,
        region: str,
        *,
        endpoint: str = "https://api.cognitive.microsofttranslator.com/translate",
        api_version: str = "3.0",
        timeout_seconds: float = 15.0,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        self._api_key = api_key
        self._region = region
        self._endpoint = endpoint
        self._api_version = api_version
        self._client_factory = client_factory or (
            lambda: httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds))
        )

    async def translate(self, text: str, *, target_locale: str) -> str:
        params = {"api-version": self._api_version, "to": target_locale}
        headers = {
            "Content-Type": "application/json",
            "Ocp-Apim-Subscription-Key": self._api_key,
            "Ocp-Apim-Subscription-Region": self._region,
        }

        try:
            async with self._client_factory() as client:
                response = await client.post(
                    self._endpoint,
                    params=params,
                    json=[{"Text": text}],
                    headers=headers,
                )
        except httpx.HTTPError as exc:
            raise ProviderError(f"Translator request failed: {exc}") from exc

        if response.status_code < 200 or response.status_code >= 300:
            raise ProviderError(self._extract_error(response), status_code=response.status_code)

        try:
            payload = response.json()
            return payload[0]["translations"][0]["text"]
        except (ValueError, LookupError, TypeError) as exc:
            raise ProviderError(
                "Unexpected translator response payload.",
                status_code=response.status_code,
            ) from exc

    def _extract_error(self, response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict):
            error = payload.get("error")
            if isinstance(error, dict):
                code = error.get("code")
                message = error.get("message")
                if code and message:
                    return f"Translator error {code}: {message}"
                if message:
                    return f"Translator error: {message}"

        return f"Translator request failed with status {response.status_code}."
