from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from autotranslator.integrations.azure_translator import TranslationProvider

logger = logging.getLogger(__name__)


class TranslationFailure(RuntimeError):
    """Raised once every retry for a single string has failed."""

    def __init__(self, text: str, target_locale: str, attempts: int) -> None:
        super().__init__(
            f'Persistent error translating "{text}" to {target_locale} after {attempts} attempts.'
        )
        self.text = text
        self.target_locale = target_locale
        self.attempts = attempts


class TranslationService:
    """Provider wrapper adding retry with exponential backoff and a per-run cache."""

    def __init__(
        self,
        provider: TranslationProvider,
        *,
        retry_count: int = 3,
        delay_ms: int = 1000,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        cache: bool = True,
    ) -> None:
        if retry_count < 1:
            raise ValueError("retry_count must be at least 1.")
        self._provider = provider
        self._retry_count = retry_count
        self._delay_ms = delay_ms
        self._sleep = sleep
        self._cache_enabled = cache
        self._cache: dict[tuple[str, str], str] = {}
        self._lock = asyncio.Lock()

    @property
    def retry_count(self) -> int:
        return self._retry_count

    async def translate(self, text: str, target_locale: str) -> str:
        if not text:
            return text

        cache_key = (text, target_locale)
        if self._cache_enabled:
            async with self._lock:
                cached = self._cache.get(cache_key)
            if cached is not None:
                return cached

        translated = await self._translate_with_retry(text, target_locale)

        if self._cache_enabled:
            async with self._lock:
                self._cache[cache_key] = translated
        return translated

    async def _translate_with_retry(self, text: str, target_locale: str) -> str:
        delay_ms = self._delay_ms
        last_error: Exception | None = None
        for attempt in range(1, self._retry_count + 1):
            try:
                return await self._provider.translate(text, target_locale=target_locale)
            except Exception as exc:
                last_error = exc
                logger.error(
                    'Error translating "%s" (attempt %s of %s): %s',
                    text,
                    attempt,
                    self._retry_count,
                    exc,
                )
                if attempt < self._retry_count:
                    logger.info("Retrying in %sms...", delay_ms)
                    await self._sleep(delay_ms / 1000)
                    delay_ms *= 2
        raise TranslationFailure(text, target_locale, self._retry_count) from last_error
