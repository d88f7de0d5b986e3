from __future__ import annotations

import asyncio
import logging
from typing import Any

from autotranslator.schemas.tree import LocalizationTree, NodeKind, node_kind
from autotranslator.services.translation import TranslationService

logger = logging.getLogger(__name__)


class TreeTranslator:
    """Translate every string leaf of a localization tree, keeping its shape.

    Sibling keys and list elements are dispatched concurrently; the number of
    in-flight provider calls is capped by `max_concurrency`.
    """

    def __init__(self, translator: TranslationService, *, max_concurrency: int = 8) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1.")
        self._translator = translator
        self._max_concurrency = max_concurrency

    async def translate_tree(self, tree: LocalizationTree, target_locale: str) -> LocalizationTree:
        semaphore = asyncio.Semaphore(self._max_concurrency)
        return await self._translate_mapping(tree, target_locale, semaphore, path=())

    async def _translate_mapping(
        self,
        tree: LocalizationTree,
        target_locale: str,
        semaphore: asyncio.Semaphore,
        *,
        path: tuple[str, ...],
    ) -> LocalizationTree:
        keys = list(tree)
        values = await asyncio.gather(
            *[
                self._translate_value(tree[key], target_locale, semaphore, path=(*path, key))
                for key in keys
            ]
        )
        return dict(zip(keys, values))

    async def _translate_value(
        self,
        value: Any,
        target_locale: str,
        semaphore: asyncio.Semaphore,
        *,
        path: tuple[str, ...],
    ) -> Any:
        kind = node_kind(value)
        if kind is NodeKind.TEXT:
            logger.info("Translating key: %s", ".".join(path))
            return await self._translate_text(value, target_locale, semaphore)
        if kind is NodeKind.TEXT_LIST:
            logger.info("Translating key: %s", ".".join(path))
            return list(
                await asyncio.gather(
                    *[
                        self._translate_text(item, target_locale, semaphore)
                        if isinstance(item, str)
                        else _passthrough(item)
                        for item in value
                    ]
                )
            )
        if kind is NodeKind.SUBTREE:
            return await self._translate_mapping(value, target_locale, semaphore, path=path)
        return value

    async def _translate_text(
        self,
        text: str,
        target_locale: str,
        semaphore: asyncio.Semaphore,
    ) -> str:
        async with semaphore:
            return await self._translator.translate(text, target_locale)


async def _passthrough(value: Any) -> Any:
    return value
