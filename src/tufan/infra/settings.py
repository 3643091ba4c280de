"""Resort-wide settings loaded from the environment.

Settings are read once per process and cached; call
``load_settings.cache_clear()`` after changing the environment (tests do).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

NumberGrouping = Literal["south_asian", "western"]

_GROUPINGS = ("south_asian", "western")

DEFAULT_CURRENCY_SYMBOL = "৳"


class SettingsError(ValueError):
    """Raised when an environment variable holds an unusable value."""


@dataclass(frozen=True)
class ResortSettings:
    """Display and clock configuration.

    Attributes:
        timezone: IANA zone name used for "today" comparisons. None means
                  the machine's local timezone.
        currency_symbol: Prefix used when formatting money.
        number_grouping: Digit grouping for formatted numbers.
    """

    timezone: str | None = None
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    number_grouping: NumberGrouping = "south_asian"

    @property
    def tzinfo(self) -> ZoneInfo | None:
        return ZoneInfo(self.timezone) if self.timezone else None


@lru_cache(maxsize=1)
def load_settings() -> ResortSettings:
    """Build settings from TUFAN_* environment variables.

    Raises:
        SettingsError: If TUFAN_TIMEZONE is not a known zone or
            TUFAN_NUMBER_GROUPING is not one of the supported styles.
    """
    tz_name = os.environ.get("TUFAN_TIMEZONE", "").strip() or None
    if tz_name is not None:
        try:
            ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise SettingsError(f"Unknown TUFAN_TIMEZONE: {tz_name}") from exc

    grouping = os.environ.get("TUFAN_NUMBER_GROUPING", "south_asian").strip().lower()
    if grouping not in _GROUPINGS:
        raise SettingsError(
            f"TUFAN_NUMBER_GROUPING must be one of {_GROUPINGS}, got '{grouping}'"
        )

    symbol = os.environ.get("TUFAN_CURRENCY_SYMBOL") or DEFAULT_CURRENCY_SYMBOL

    return ResortSettings(
        timezone=tz_name,
        currency_symbol=symbol,
        number_grouping=grouping,  # type: ignore[arg-type]
    )
