from __future__ import annotations

from pathlib import Path

import pytest

from autotranslator.integrations.azure_translator import ProviderError
from autotranslator.integrations.locale_files import (
    JsonLocaleFormat,
    LocaleFileStore,
    TypeScriptLocaleFormat,
)
from autotranslator.services.calendar_locale import day_names, month_names
from autotranslator.services.orchestrator import LocaleOrchestrator
from autotranslator.services.translation import TranslationFailure, TranslationService
from autotranslator.services.tree_translator import TreeTranslator


class StubProvider:
    def __init__(self, *, fail_for: str | None = None) -> None:
        self.calls: list[tuple[str, str]] = []
        self._fail_for = fail_for

    async def translate(self, text: str, *, target_locale: str) -> str:
        self.calls.append((text, target_locale))
        if target_locale == self._fail_for:
            raise ProviderError("boom", status_code=500)
        return f"{target_locale}({text})"


async def _no_sleep(_: float) -> None:
    return None


def build_orchestrator(
    store: LocaleFileStore,
    provider: StubProvider,
    *,
    dry_run: bool = False,
) -> LocaleOrchestrator:
    service = TranslationService(provider, retry_count=2, delay_ms=1, sleep=_no_sleep)
    return LocaleOrchestrator(store, TreeTranslator(service), service, dry_run=dry_run)


@pytest.mark.asyncio
async def test_full_translation_into_empty_locale(tmp_path: Path) -> None:
    store = LocaleFileStore(tmp_path, JsonLocaleFormat())
    provider = StubProvider()
    source = {"greeting": "Hello", "nums": [1, 2, 3], "nested": {"a": "Yes"}}

    result = await build_orchestrator(store, provider).run_locale(source, "es")

    assert result.written is True
    assert result.missing_count == 3
    assert await store.read("es") == {
        "greeting": "es(Hello)",
        "nums": [1, 2, 3],
        "nested": {"a": "es(Yes)"},
    }
    assert sorted(provider.calls) == [("Hello", "es"), ("Yes", "es")]


@pytest.mark.asyncio
async def test_partial_target_only_translates_missing_keys(tmp_path: Path) -> None:
    store = LocaleFileStore(tmp_path, JsonLocaleFormat())
    await store.write("fr", {"a": "translated-X"})
    provider = StubProvider()

    await build_orchestrator(store, provider).run_locale({"a": "X", "b": "Y"}, "fr")

    assert provider.calls == [("Y", "fr")]
    assert await store.read("fr") == {"a": "translated-X", "b": "fr(Y)"}


@pytest.mark.asyncio
async def test_no_missing_keys_skips_write(tmp_path: Path) -> None:
    store = LocaleFileStore(tmp_path, JsonLocaleFormat())
    path = await store.write("ru", {"a": "old"})
    before = path.stat().st_mtime_ns
    provider = StubProvider()

    result = await build_orchestrator(store, provider).run_locale({"a": "new"}, "ru")

    assert result.written is False
    assert result.missing_count == 0
    assert provider.calls == []
    assert path.stat().st_mtime_ns == before


@pytest.mark.asyncio
async def test_empty_diff_creates_no_file(tmp_path: Path) -> None:
    store = LocaleFileStore(tmp_path, JsonLocaleFormat())

    await build_orchestrator(store, StubProvider()).run_locale({}, "es")

    assert not store.path_for("es").exists()


@pytest.mark.asyncio
async def test_calendar_locale_is_derived_not_machine_translated(tmp_path: Path) -> None:
    store = LocaleFileStore(tmp_path, TypeScriptLocaleFormat())
    provider = StubProvider()
    source = {
        "title": "Agenda",
        "calendar_locale": {"monthNames": ["Janeiro"], "today": "Hoje"},
    }

    await build_orchestrator(store, provider).run_locale(source, "en")

    persisted = await store.read("en")
    assert list(persisted) == ["title", "calendar_locale"]
    assert persisted["calendar_locale"] == {
        "monthNames": month_names("en"),
        "monthNamesShort": month_names("en", short=True),
        "dayNames": day_names("en"),
        "dayNamesShort": day_names("en", short=True),
        "today": "en(Hoje)",
    }
    assert ("Janeiro", "en") not in provider.calls
    assert "    calendar_locale: {\n" in store.path_for("en").read_text(encoding="utf-8")


@pytest.mark.asyncio
async def test_run_all_is_sequential_and_reports(tmp_path: Path) -> None:
    store = LocaleFileStore(tmp_path, JsonLocaleFormat())
    await store.write("fr", {"a": "déjà"})
    provider = StubProvider()

    report = await build_orchestrator(store, provider).run_all({"a": "X"}, ["es", "fr", "ar"])

    assert [result.locale for result in report.results] == ["es", "fr", "ar"]
    assert report.written_locales == ["es", "ar"]
    assert provider.calls == [("X", "es"), ("X", "ar")]


@pytest.mark.asyncio
async def test_failure_aborts_run_but_keeps_completed_locales(tmp_path: Path) -> None:
    store = LocaleFileStore(tmp_path, JsonLocaleFormat())
    provider = StubProvider(fail_for="fr")

    with pytest.raises(TranslationFailure) as exc:
        await build_orchestrator(store, provider).run_all({"a": "X"}, ["es", "fr", "ar"])

    assert exc.value.target_locale == "fr"
    assert exc.value.attempts == 2
    assert await store.read("es") == {"a": "es(X)"}
    assert not store.path_for("fr").exists()
    assert not store.path_for("ar").exists()
    assert all(locale != "ar" for _, locale in provider.calls)


@pytest.mark.asyncio
async def test_dry_run_reports_without_translating(tmp_path: Path) -> None:
    store = LocaleFileStore(tmp_path, JsonLocaleFormat())
    provider = StubProvider()

    report = await build_orchestrator(store, provider, dry_run=True).run_all(
        {"a": "X", "b": {"c": "Y"}}, ["es"]
    )

    assert report.results[0].missing_count == 2
    assert report.results[0].written is False
    assert provider.calls == []
    assert not store.path_for("es").exists()
