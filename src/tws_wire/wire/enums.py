"""Enumeration tables consulted while encoding.

* **Bar size** -- the gateway expects the *one-based* position of the bar
  size in :data:`BAR_SIZES`, not its name.  Position 0 is a placeholder
  and never valid.  Bar sizes below 30 seconds do not work for some
  securities; the gateway, not this table, decides that.
* **What to show** -- the kind of quote a bar is built from.  Sent as the
  upper-case name (``TRADES``, ``MIDPOINT``, ``BID``, ``ASK``).
* **Financial-advisor data type** -- numeric codes for the FA
  configuration documents.

All tables are module-level constants and are never mutated.
"""
from __future__ import annotations

import enum
from types import MappingProxyType

# ---------------------------------------------------------------------------
# Bar sizes
# ---------------------------------------------------------------------------

BAR_SIZES: tuple[str, ...] = (
    "invalid",  # zero is not a valid bar size
    "one_second",
    "five_seconds",
    "fifteen_seconds",
    "thirty_seconds",
    "one_minute",
    "two_minutes",
    "five_minutes",
    "fifteen_minutes",
    "thirty_minutes",
    "one_hour",
    "one_day",
)


class BarSize(enum.StrEnum):
    """Valid historical bar sizes, in wire order."""

    ONE_SECOND = "one_second"
    FIVE_SECONDS = "five_seconds"
    FIFTEEN_SECONDS = "fifteen_seconds"
    THIRTY_SECONDS = "thirty_seconds"
    ONE_MINUTE = "one_minute"
    TWO_MINUTES = "two_minutes"
    FIVE_MINUTES = "five_minutes"
    FIFTEEN_MINUTES = "fifteen_minutes"
    THIRTY_MINUTES = "thirty_minutes"
    ONE_HOUR = "one_hour"
    ONE_DAY = "one_day"

    @property
    def index(self) -> int:
        """Return the one-based wire index of this bar size."""
        return BAR_SIZES.index(self.value)

    @classmethod
    def from_index(cls, index: int) -> BarSize:
        """Return the bar size at one-based *index*.

        Raises :class:`ValueError` for 0 or anything out of range.
        """
        if not 1 <= index < len(BAR_SIZES):
            raise ValueError(f"Bar size index out of range: {index}")
        return cls(BAR_SIZES[index])


BAR_SIZE_ALIASES: MappingProxyType[str, BarSize] = MappingProxyType(
    {
        # Short names
        "second": BarSize.ONE_SECOND,
        "minute": BarSize.ONE_MINUTE,
        "hour": BarSize.ONE_HOUR,
        "day": BarSize.ONE_DAY,
        # Gateway display strings, after normalisation ("1 secs" -> "1_secs")
        "1_sec": BarSize.ONE_SECOND,
        "1_secs": BarSize.ONE_SECOND,
        "5_secs": BarSize.FIVE_SECONDS,
        "15_secs": BarSize.FIFTEEN_SECONDS,
        "30_secs": BarSize.THIRTY_SECONDS,
        "1_min": BarSize.ONE_MINUTE,
        "2_mins": BarSize.TWO_MINUTES,
        "5_mins": BarSize.FIVE_MINUTES,
        "15_mins": BarSize.FIFTEEN_MINUTES,
        "30_mins": BarSize.THIRTY_MINUTES,
        "1_hour": BarSize.ONE_HOUR,
        "1_day": BarSize.ONE_DAY,
    }
)


# ---------------------------------------------------------------------------
# What to show
# ---------------------------------------------------------------------------

class WhatToShow(enum.StrEnum):
    """Quote type historical and real-time bars are built from."""

    TRADES = "trades"
    MIDPOINT = "midpoint"
    BID = "bid"
    ASK = "ask"

    @property
    def wire(self) -> str:
        """Return the upper-case token the gateway expects."""
        return self.value.upper()


HISTORICAL_TYPES: tuple[WhatToShow, ...] = tuple(WhatToShow)


# ---------------------------------------------------------------------------
# Financial-advisor data types
# ---------------------------------------------------------------------------

class FaDataType(enum.IntEnum):
    """Financial-advisor configuration documents."""

    GROUPS = 1
    PROFILES = 2
    ALIASES = 3


FA_DATA_TYPES: MappingProxyType[int, str] = MappingProxyType(
    {member.value: member.name for member in FaDataType}
)
