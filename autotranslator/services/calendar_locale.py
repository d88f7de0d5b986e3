from __future__ import annotations

import logging
from datetime import date, timedelta

from babel import Locale, UnknownLocaleError
from babel.dates import format_date

from autotranslator.schemas.tree import CalendarLocale
from autotranslator.services.translation import TranslationService

logger = logging.getLogger(__name__)

# Date-formatting aliases; translation requests keep the original code.
_CALENDAR_LOCALE_ALIASES = {"lzh": "zh"}

_REFERENCE_SUNDAY = date(2021, 6, 6)
_REFERENCE_YEAR = 2021


def calendar_locale_code(locale: str) -> str:
    normalized = locale.replace("_", "-")
    return _CALENDAR_LOCALE_ALIASES.get(normalized.lower(), normalized)


def _babel_locale(locale: str) -> Locale:
    code = calendar_locale_code(locale)
    try:
        return Locale.parse(code, sep="-")
    except (UnknownLocaleError, ValueError):
        logger.warning("No calendar data for locale %s; falling back to en", code)
        return Locale.parse("en")


def month_names(locale: str, *, short: bool = False) -> list[str]:
    babel_locale = _babel_locale(locale)
    pattern = "LLL" if short else "LLLL"
    return [
        format_date(date(_REFERENCE_YEAR, month, 2), pattern, locale=babel_locale)
        for month in range(1, 13)
    ]


def day_names(locale: str, *, short: bool = False) -> list[str]:
    """Weekday names starting from Sunday."""
    babel_locale = _babel_locale(locale)
    pattern = "ccc" if short else "cccc"
    return [
        format_date(_REFERENCE_SUNDAY + timedelta(days=offset), pattern, locale=babel_locale)
        for offset in range(7)
    ]


async def build_calendar_locale(
    locale: str,
    translator: TranslationService,
    *,
    today_text: str = "Hoje",
) -> CalendarLocale:
    return CalendarLocale(
        month_names=month_names(locale),
        month_names_short=month_names(locale, short=True),
        day_names=day_names(locale),
        day_names_short=day_names(locale, short=True),
        today=await translator.translate(today_text, locale),
    )
