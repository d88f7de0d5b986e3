from __future__ import annotations

import pytest

from autotranslator.integrations.azure_translator import ProviderError
from autotranslator.services.translation import TranslationFailure, TranslationService


class FlakyProvider:
    """Fails the first `failures` calls, then echoes a tagged translation."""

    def __init__(self, failures: int = 0) -> None:
        self.failures = failures
        self.calls: list[tuple[str, str]] = []

    async def translate(self, text: str, *, target_locale: str) -> str:
        self.calls.append((text, target_locale))
        if len(self.calls) <= self.failures:
            raise ProviderError("service unavailable", status_code=503)
        return f"{target_locale}:{text}"


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.mark.asyncio
async def test_translate_returns_provider_result() -> None:
    provider = FlakyProvider()
    service = TranslationService(provider, sleep=RecordingSleep())

    assert await service.translate("Hello", "es") == "es:Hello"
    assert provider.calls == [("Hello", "es")]


@pytest.mark.asyncio
@pytest.mark.parametrize("attempts_needed", [2, 3])
async def test_translate_recovers_before_retries_run_out(attempts_needed: int) -> None:
    provider = FlakyProvider(failures=attempts_needed - 1)
    sleep = RecordingSleep()
    service = TranslationService(provider, retry_count=3, delay_ms=1000, sleep=sleep)

    assert await service.translate("Hello", "fr") == "fr:Hello"
    assert len(provider.calls) == attempts_needed
    assert sleep.delays == [1.0, 2.0][: attempts_needed - 1]
    assert all(call == ("Hello", "fr") for call in provider.calls)


@pytest.mark.asyncio
async def test_translate_raises_failure_after_exhausting_retries() -> None:
    provider = FlakyProvider(failures=100)
    sleep = RecordingSleep()
    service = TranslationService(provider, retry_count=4, delay_ms=250, sleep=sleep)

    with pytest.raises(TranslationFailure) as exc:
        await service.translate("Hello", "ru")

    assert len(provider.calls) == 4
    assert sleep.delays == [0.25, 0.5, 1.0]
    assert exc.value.text == "Hello"
    assert exc.value.target_locale == "ru"
    assert exc.value.attempts == 4
    assert isinstance(exc.value.__cause__, ProviderError)


@pytest.mark.asyncio
async def test_translate_logs_each_failed_attempt(caplog: pytest.LogCaptureFixture) -> None:
    service = TranslationService(FlakyProvider(failures=100), retry_count=2, sleep=RecordingSleep())

    with caplog.at_level("ERROR"), pytest.raises(TranslationFailure):
        await service.translate("Bye", "ar")

    messages = [record.getMessage() for record in caplog.records if record.levelname == "ERROR"]
    assert any("attempt 1 of 2" in message for message in messages)
    assert any("attempt 2 of 2" in message for message in messages)


@pytest.mark.asyncio
async def test_repeated_strings_hit_cache() -> None:
    provider = FlakyProvider()
    service = TranslationService(provider, sleep=RecordingSleep())

    first = await service.translate("Save", "es")
    second = await service.translate("Save", "es")
    other_locale = await service.translate("Save", "fr")

    assert first == second == "es:Save"
    assert other_locale == "fr:Save"
    assert len(provider.calls) == 2


@pytest.mark.asyncio
async def test_cache_can_be_disabled() -> None:
    provider = FlakyProvider()
    service = TranslationService(provider, cache=False, sleep=RecordingSleep())

    await service.translate("Save", "es")
    await service.translate("Save", "es")

    assert len(provider.calls) == 2


@pytest.mark.asyncio
async def test_empty_text_skips_provider() -> None:
    provider = FlakyProvider()
    service = TranslationService(provider, sleep=RecordingSleep())

    assert await service.translate("", "es") == ""
    assert provider.calls == []


def test_retry_count_must_be_positive() -> None:
    with pytest.raises(ValueError):
        TranslationService(FlakyProvider(), retry_count=0)
