"""Command line entrypoint: translate missing keys for every configured locale."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Sequence

from autotranslator.core.config import AppSettings, get_settings
from autotranslator.core.project import (
    ConfigError,
    ProjectConfig,
    load_environment,
    load_project_config,
    resolve_credentials,
)
from autotranslator.integrations.azure_translator import AzureTranslatorProvider, TranslationProvider
from autotranslator.integrations.locale_files import (
    LocaleFileError,
    LocaleFileStore,
    SourceFileMissing,
    UnsupportedFormat,
    get_locale_format,
    load_source_tree,
)
from autotranslator.services.orchestrator import LocaleOrchestrator, RunReport
from autotranslator.services.translation import TranslationFailure, TranslationService
from autotranslator.services.tree_translator import TreeTranslator


logger = logging.getLogger("autotranslator")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="autotranslator",
        description=(
            "Translate keys missing from each target locale file using Azure Translator "
            "and merge them into the existing translations."
        ),
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to translator.config.json (default: TRANSLATOR_CONFIG or ./translator.config.json).",
    )
    parser.add_argument(
        "--languages",
        nargs="+",
        default=None,
        help="Override the configured target locales.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report missing keys per locale without translating or writing files.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging verbosity (default: LOG_LEVEL or INFO).",
    )
    return parser


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        )
    root_logger.setLevel(level)


def build_provider(settings: AppSettings, config: ProjectConfig) -> TranslationProvider:
    credentials = resolve_credentials(config)
    return AzureTranslatorProvider(
        credentials.api_key.get_secret_value() if credentials.api_key else "",
        credentials.region.get_secret_value() if credentials.region else "",
        endpoint=settings.translator_endpoint,
        api_version=settings.translator_api_version,
        timeout_seconds=settings.request_timeout_seconds,
    )


def build_orchestrator(
    settings: AppSettings,
    config: ProjectConfig,
    provider: TranslationProvider,
    *,
    dry_run: bool = False,
) -> LocaleOrchestrator:
    fmt = get_locale_format(config.language_source)
    translation_service = TranslationService(
        provider,
        retry_count=settings.retry_count,
        delay_ms=settings.retry_delay_ms,
    )
    return LocaleOrchestrator(
        LocaleFileStore(config.output_path, fmt),
        TreeTranslator(translation_service, max_concurrency=settings.max_concurrency),
        translation_service,
        today_text=settings.today_text,
        dry_run=dry_run,
    )


async def _run(args: argparse.Namespace, settings: AppSettings, config_path: Path) -> RunReport:
    config = load_project_config(config_path)
    locales = args.languages or config.languages

    fmt = get_locale_format(config.language_source)
    source = load_source_tree(config.source_path, fmt)

    provider = build_provider(settings, config)
    orchestrator = build_orchestrator(settings, config, provider, dry_run=args.dry_run)
    return await orchestrator.run_all(source, locales)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_level or "INFO")

    # The project .env must be loaded before settings read TRANSLATOR_* knobs.
    if args.config:
        load_environment(Path(args.config).resolve().parent)
    settings = get_settings()
    config_path = Path(args.config or settings.config_path).resolve()
    if not args.config:
        load_environment(config_path.parent)
    _configure_logging(args.log_level or settings.log_level)

    try:
        report = asyncio.run(_run(args, settings, config_path))
    except (ConfigError, SourceFileMissing, UnsupportedFormat, LocaleFileError) as exc:
        logger.error("%s", exc)
        return 1
    except TranslationFailure as exc:
        logger.error("Translation aborted for %s: %s", exc.target_locale, exc)
        return 1

    for result in report.results:
        status = "written" if result.written else "unchanged"
        logger.info("%s: %s missing keys, %s (%s)", result.locale, result.missing_count, status, result.path)
    logger.info("All translations completed!")
    return 0


def run() -> None:
    """Entrypoint for the `autotranslator` console script."""
    sys.exit(main())


if __name__ == "__main__":
    run()
