"""Three-tier suggestion configuration: defaults, stored preferences, request overrides."""

from collections.abc import Mapping
from typing import Any, Optional, Union

from models.entities import PartialSuggestionConfig, SuggestionConfig
from services import settings

ConfigSource = Union[PartialSuggestionConfig, Mapping, None]

DEFAULT_CONFIG = SuggestionConfig(
    max_daily_minutes=480,  # 8 hours
    buffer_minutes=30,
    prefer_mornings=True,
    max_high_priority_per_day=2,
    timezone=settings.SUGGESTION_DEFAULT_TIMEZONE,
)

TUNING_FIELDS = (
    "max_daily_minutes",
    "buffer_minutes",
    "prefer_mornings",
    "max_high_priority_per_day",
)


def _get(source: ConfigSource, name: str) -> Any:
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def _first_set(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def resolve_config(
    defaults: ConfigSource = None,
    stored: ConfigSource = None,
    override: ConfigSource = None,
) -> SuggestionConfig:
    """
    Merge three partial configurations field by field.

    A field set in ``override`` wins over ``stored``, which wins over
    ``defaults``; anything still missing comes from DEFAULT_CONFIG.
    Stored preferences carry no timezone, so ``timezone`` is only read
    from the override and default tiers.

    Args:
        defaults: Base tier (DEFAULT_CONFIG when omitted)
        stored: The user's saved preferences, if any
        override: Per-request overrides, if any

    Returns:
        Fully populated SuggestionConfig
    """
    resolved = {
        name: _first_set(
            _get(override, name),
            _get(stored, name),
            _get(defaults, name),
            getattr(DEFAULT_CONFIG, name),
        )
        for name in TUNING_FIELDS
    }
    resolved["timezone"] = _first_set(
        _get(override, "timezone"),
        _get(defaults, "timezone"),
        DEFAULT_CONFIG.timezone,
    )
    return SuggestionConfig(**resolved)
