"""
Built-in date, time and age conditions.

These can be registered by name into any condition set::

    registry.register("discounts", "day_of_week")

Each reads ``context["now"]`` when present so evaluations are
reproducible, and falls back to the current local time otherwise.
``account_age`` also needs ``context["registered_at"]`` and measures the
age in the unit chosen by the rule.
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from typing import Any

from .definitions import CallableValue, ConditionDefinition
from .operators import COLLECTION_ANY_NONE, FieldType
from .periods import AGE_UNITS, AgeValue
from .utils import parse_instant

_GROUP_DATE = "Date & Time: Date"
_GROUP_TIME = "Date & Time: Time"
_GROUP_PERIOD = "Date & Time: Period"
_GROUP_USER = "User"


def current_datetime(context: Mapping[str, Any]) -> datetime.datetime:
    now = context.get("now")
    if now is not None:
        parsed = parse_instant(now)
        if parsed is not None:
            return parsed
    return datetime.datetime.now()


def time_of_day(moment: datetime.datetime) -> str:
    hour = moment.hour
    if 5 <= hour < 8:
        return "early_morning"
    if 8 <= hour < 12:
        return "morning"
    if 12 <= hour < 17:
        return "afternoon"
    if 17 <= hour < 21:
        return "evening"
    if hour >= 21:
        return "night"
    return "late_night"


def is_business_hours(moment: datetime.datetime) -> bool:
    return moment.isoweekday() <= 5 and 9 <= moment.hour < 17


def _define(
    name: str,
    field_type: FieldType,
    getter: Any,
    *,
    label: str,
    group: str,
    multiple: bool = False,
) -> ConditionDefinition:
    return ConditionDefinition(
        name=name,
        type=field_type,
        multiple=multiple,
        provider=CallableValue(lambda context: getter(current_datetime(context))),
        operators=tuple(COLLECTION_ANY_NONE) if multiple else None,
        label=label,
        group=group,
    )


BUILTIN_CONDITIONS: dict[str, ConditionDefinition] = {
    definition.name: definition
    for definition in (
        _define(
            "current_date",
            FieldType.DATE,
            lambda now: now.date().isoformat(),
            label="Date",
            group=_GROUP_DATE,
        ),
        _define(
            "current_year",
            FieldType.NUMBER,
            lambda now: now.year,
            label="Year",
            group=_GROUP_DATE,
        ),
        _define(
            "current_month",
            FieldType.SELECT,
            lambda now: str(now.month),
            label="Month",
            group=_GROUP_DATE,
            multiple=True,
        ),
        _define(
            "day_of_month",
            FieldType.NUMBER,
            lambda now: now.day,
            label="Day of Month",
            group=_GROUP_DATE,
        ),
        _define(
            "day_of_week",
            FieldType.SELECT,
            lambda now: str(now.isoweekday()),
            label="Day of Week",
            group=_GROUP_DATE,
            multiple=True,
        ),
        _define(
            "day_of_year",
            FieldType.NUMBER,
            lambda now: now.timetuple().tm_yday,
            label="Day of Year",
            group=_GROUP_DATE,
        ),
        _define(
            "current_time",
            FieldType.TIME,
            lambda now: now.strftime("%H:%M"),
            label="Time",
            group=_GROUP_TIME,
        ),
        _define(
            "time_of_day",
            FieldType.SELECT,
            time_of_day,
            label="Time of Day",
            group=_GROUP_TIME,
            multiple=True,
        ),
        _define(
            "is_weekend",
            FieldType.BOOLEAN,
            lambda now: now.isoweekday() >= 6,
            label="Is Weekend",
            group=_GROUP_PERIOD,
        ),
        _define(
            "is_business_hours",
            FieldType.BOOLEAN,
            is_business_hours,
            label="Is Business Hours",
            group=_GROUP_PERIOD,
        ),
        _define(
            "current_quarter",
            FieldType.NUMBER,
            lambda now: (now.month - 1) // 3 + 1,
            label="Quarter",
            group=_GROUP_PERIOD,
        ),
        ConditionDefinition(
            name="account_age",
            type=FieldType.NUMBER_UNIT,
            provider=AgeValue("registered_at"),
            required_context_keys=("registered_at",),
            label="Account Age",
            group=_GROUP_USER,
            units=AGE_UNITS,
        ),
    )
}


def get_builtin(name: str) -> ConditionDefinition | None:
    return BUILTIN_CONDITIONS.get(name)
