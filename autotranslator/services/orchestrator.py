from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Sequence

from autotranslator.integrations.locale_files import LocaleFileStore
from autotranslator.schemas.tree import CALENDAR_LOCALE_KEY, LocalizationTree, is_empty_tree
from autotranslator.services.calendar_locale import build_calendar_locale
from autotranslator.services.differ import count_leaves, find_missing_keys
from autotranslator.services.merge import merge_and_persist
from autotranslator.services.translation import TranslationService
from autotranslator.services.tree_translator import TreeTranslator

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LocaleResult:
    locale: str
    missing_count: int
    written: bool
    path: Path


@dataclass(slots=True)
class RunReport:
    results: list[LocaleResult] = field(default_factory=list)

    @property
    def written_locales(self) -> list[str]:
        return [result.locale for result in self.results if result.written]


class LocaleOrchestrator:
    """Runs diff, translate, merge and persist for each target locale in turn."""

    def __init__(
        self,
        store: LocaleFileStore,
        tree_translator: TreeTranslator,
        translation_service: TranslationService,
        *,
        today_text: str = "Hoje",
        dry_run: bool = False,
    ) -> None:
        self._store = store
        self._tree_translator = tree_translator
        self._translation_service = translation_service
        self._today_text = today_text
        self._dry_run = dry_run

    async def run_locale(self, source: LocalizationTree, locale: str) -> LocaleResult:
        path = self._store.path_for(locale)
        existing = await self._store.read(locale)
        missing = find_missing_keys(source, existing)

        if is_empty_tree(missing):
            logger.info("No missing keys for %s", locale)
            return LocaleResult(locale=locale, missing_count=0, written=False, path=path)

        missing_count = count_leaves(missing)
        if self._dry_run:
            logger.info("%s: %s missing keys (dry run, nothing written)", locale, missing_count)
            return LocaleResult(locale=locale, missing_count=missing_count, written=False, path=path)

        # calendar_locale is derived from locale data below, never machine-translated.
        to_translate = {key: value for key, value in missing.items() if key != CALENDAR_LOCALE_KEY}
        translated_part = await self._tree_translator.translate_tree(to_translate, locale)
        translated = {key: translated_part.get(key, missing[key]) for key in missing}

        _, path = await merge_and_persist(
            self._store,
            locale,
            existing,
            translated,
            missing,
            calendar_factory=partial(
                build_calendar_locale,
                translator=self._translation_service,
                today_text=self._today_text,
            ),
        )
        return LocaleResult(locale=locale, missing_count=missing_count, written=True, path=path)

    async def run_all(self, source: LocalizationTree, locales: Sequence[str]) -> RunReport:
        report = RunReport()
        for locale in locales:
            logger.info("Starting translation for locale: %s", locale)
            result = await self.run_locale(source, locale)
            report.results.append(result)
            logger.info("Translation finished for locale: %s", locale)
        logger.info("All translations completed for %s locales", len(report.results))
        return report
