from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from autotranslator.schemas.tree import LocalizationTree
from autotranslator.utils.js_literal import JSLiteralError, format_module, parse_module


logger = logging.getLogger(__name__)


class UnsupportedFormat(ValueError):
    """Raised when a locale file extension has no registered format."""


class SourceFileMissing(FileNotFoundError):
    """Raised when the source-of-truth locale file does not exist."""


class LocaleFileError(ValueError):
    """Raised when a locale file cannot be parsed."""


class LocaleFormat(Protocol):
    """Serializer/deserializer for one on-disk locale file format."""

    extension: str

    def loads(self, text: str) -> LocalizationTree:
        """Parse file contents into a localization tree."""

    def dumps(self, tree: LocalizationTree) -> str:
        """Render a localization tree as file contents."""


class JsonLocaleFormat:
    extension = ".json"

    def loads(self, text: str) -> LocalizationTree:
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise LocaleFileError(f"Invalid locale JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise LocaleFileError("Locale JSON document must be an object")
        return data

    def dumps(self, tree: LocalizationTree) -> str:
        return json.dumps(tree, ensure_ascii=False, indent=2)


class TypeScriptLocaleFormat:
    """Module exporting the tree as its default object literal."""

    def __init__(self, extension: str = ".ts") -> None:
        self.extension = extension

    def loads(self, text: str) -> LocalizationTree:
        if not text.strip():
            return {}
        try:
            return parse_module(text)
        except JSLiteralError as exc:
            raise LocaleFileError(f"Unable to read locale module: {exc}") from exc

    def dumps(self, tree: LocalizationTree) -> str:
        return format_module(tree)


def get_locale_format(path: str | Path) -> LocaleFormat:
    """Select the locale format from a file extension."""
    suffix = Path(path).suffix.lower()
    if suffix == ".json":
        return JsonLocaleFormat()
    if suffix in {".ts", ".js"}:
        return TypeScriptLocaleFormat(suffix)
    raise UnsupportedFormat(f"Unsupported file format: {suffix or path}")


def _load_file(path: Path, fmt: LocaleFormat) -> LocalizationTree:
    try:
        return fmt.loads(path.read_text(encoding="utf-8"))
    except LocaleFileError as exc:
        raise LocaleFileError(f"{path}: {exc}") from exc


def load_source_tree(path: Path, fmt: LocaleFormat) -> LocalizationTree:
    if not path.exists():
        raise SourceFileMissing(f"Source file not found: {path}")
    tree = _load_file(path, fmt)
    logger.info("Loaded %s top-level keys from %s", len(tree), path)
    return tree


class LocaleFileStore:
    """Reads and fully rewrites `{output_dir}/{locale}{ext}` files."""

    def __init__(self, output_dir: Path, fmt: LocaleFormat) -> None:
        self._output_dir = Path(output_dir)
        self._format = fmt

    @property
    def format(self) -> LocaleFormat:
        return self._format

    def path_for(self, locale: str) -> Path:
        return self._output_dir / f"{locale}{self._format.extension}"

    async def read(self, locale: str) -> LocalizationTree:
        return await asyncio.to_thread(self._read_sync, locale)

    async def write(self, locale: str, tree: LocalizationTree) -> Path:
        return await asyncio.to_thread(self._write_sync, locale, tree)

    def _read_sync(self, locale: str) -> LocalizationTree:
        path = self.path_for(locale)
        if not path.exists():
            logger.debug("No existing translations for %s at %s", locale, path)
            return {}
        return _load_file(path, self._format)

    def _write_sync(self, locale: str, tree: LocalizationTree) -> Path:
        path = self.path_for(locale)
        path.parent.mkdir(parents=True, exist_ok=True)
        content = self._format.dumps(tree)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{locale}.", suffix=".tmp", dir=path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return path
