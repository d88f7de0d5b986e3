from __future__ import annotations

import logging
from pathlib import Path
from typing import Awaitable, Callable

from autotranslator.integrations.locale_files import LocaleFileStore
from autotranslator.schemas.tree import CALENDAR_LOCALE_KEY, CalendarLocale, LocalizationTree

logger = logging.getLogger(__name__)

CalendarFactory = Callable[[str], Awaitable[CalendarLocale]]


def merge_translations(existing: LocalizationTree, translated: LocalizationTree) -> LocalizationTree:
    """Shallow top-level merge; translated keys replace existing ones of the same name."""
    # Top-level only: a translated subtree replaces the existing one whole, so
    # already-translated siblings inside a partially missing subtree are dropped.
    merged = dict(existing)
    merged.update(translated)
    return merged


async def merge_and_persist(
    store: LocaleFileStore,
    locale: str,
    existing: LocalizationTree,
    translated: LocalizationTree,
    missing_keys: LocalizationTree,
    *,
    calendar_factory: CalendarFactory | None = None,
) -> tuple[LocalizationTree, Path]:
    merged = merge_translations(existing, translated)

    if CALENDAR_LOCALE_KEY in missing_keys and calendar_factory is not None:
        calendar = await calendar_factory(locale)
        merged[CALENDAR_LOCALE_KEY] = calendar.as_tree()

    path = await store.write(locale, merged)
    logger.info("Translation file saved to %s", path)
    return merged, path
