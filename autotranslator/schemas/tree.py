from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

CALENDAR_LOCALE_KEY = "calendar_locale"

LocalizationTree = dict[str, Any]


class NodeKind(str, Enum):
    TEXT = "text"
    TEXT_LIST = "text_list"
    SUBTREE = "subtree"
    SCALAR = "scalar"


def node_kind(value: Any) -> NodeKind:
    """Classify a localization tree value."""
    if isinstance(value, str):
        return NodeKind.TEXT
    if isinstance(value, (list, tuple)):
        return NodeKind.TEXT_LIST
    if isinstance(value, dict):
        return NodeKind.SUBTREE
    return NodeKind.SCALAR


def is_empty_tree(tree: LocalizationTree | None) -> bool:
    return not tree


class CalendarLocale(BaseModel):
    """Month and weekday names for a locale, in calendar-widget shape."""

    month_names: list[str] = Field(alias="monthNames")
    month_names_short: list[str] = Field(alias="monthNamesShort")
    day_names: list[str] = Field(alias="dayNames")
    day_names_short: list[str] = Field(alias="dayNamesShort")
    today: str

    model_config = ConfigDict(populate_by_name=True)

    def as_tree(self) -> LocalizationTree:
        return self.model_dump(by_alias=True)
