"""Pre-encode validation of enumeration fields.

Historical-data and real-time-bars requests carry two enumerations that
the caller may supply in several spellings:

* ``what_to_show`` -- a :class:`~tws_wire.wire.enums.WhatToShow` member or
  a display string such as ``"Trades"``.
* ``bar_size`` -- a :class:`~tws_wire.wire.enums.BarSize` member, a
  display string such as ``"One Day"`` or ``"1 day"``, or an already
  resolved one-based index.

Each value is normalised to its canonical member and then checked for
membership.  Anything else raises
:class:`~tws_wire.core.errors.InvalidEnumerationValue` naming the field
and its legal values.  The checks run while the message is being
encoded, before the dispatcher has produced or written any bytes.

Other numeric "mode" fields (exercise action, order type codes, ...) are
passed through untouched.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from tws_wire.core.errors import InvalidEnumerationValue, MissingPayloadField
from tws_wire.wire.enums import (
    BAR_SIZE_ALIASES,
    BAR_SIZES,
    BarSize,
    FaDataType,
    WhatToShow,
)

_SEPARATORS: re.Pattern[str] = re.compile(r"[\s\-]+")


def normalize_name(value: str) -> str:
    """Fold a display string to the canonical symbolic spelling.

    >>> normalize_name("  One Hour ")
    'one_hour'
    """
    return _SEPARATORS.sub("_", value.strip().lower())


def normalize_what_to_show(value: Any, *, field: str = "what_to_show") -> WhatToShow:
    """Return the :class:`WhatToShow` member for *value*.

    Raises
    ------
    InvalidEnumerationValue
        If *value* does not name one of trades, midpoint, bid or ask.
    """
    if isinstance(value, WhatToShow):
        return value
    if isinstance(value, str):
        try:
            return WhatToShow(normalize_name(value))
        except ValueError:
            pass
    raise InvalidEnumerationValue(field, value, [member.value for member in WhatToShow])


def normalize_bar_size(value: Any, *, field: str = "bar_size") -> BarSize:
    """Return the :class:`BarSize` member for *value*.

    Raises
    ------
    InvalidEnumerationValue
        If *value* is not a bar size name, a known alias, or an index
        between 1 and 11.
    """
    if isinstance(value, BarSize):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return BarSize.from_index(value)
        except ValueError:
            pass
    elif isinstance(value, str):
        name = normalize_name(value)
        if name in BAR_SIZES[1:]:
            return BarSize(name)
        if name in BAR_SIZE_ALIASES:
            return BAR_SIZE_ALIASES[name]
    raise InvalidEnumerationValue(field, value, BAR_SIZES[1:])


def normalize_fa_data_type(value: Any, *, field: str = "fa_data_type") -> FaDataType:
    """Return the :class:`FaDataType` for a code (1-3) or a name such as ``"groups"``.

    Raises
    ------
    InvalidEnumerationValue
        If *value* is neither a known code nor a known name.
    """
    if isinstance(value, FaDataType):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return FaDataType(value)
        except ValueError:
            pass
    elif isinstance(value, str):
        name = normalize_name(value).upper()
        if name in FaDataType.__members__:
            return FaDataType[name]
    raise InvalidEnumerationValue(field, value, [member.name for member in FaDataType])


def validate_bar_request(payload: Mapping[str, Any], *, kind: str | None = None) -> dict[str, Any]:
    """Validate the enumerations of a bar-data request.

    Returns a *new* dictionary in which ``what_to_show`` and ``bar_size``
    hold canonical members.  The caller's mapping is left untouched, so
    encoding the same payload twice gives identical output.

    Raises
    ------
    MissingPayloadField
        If either field is absent.
    InvalidEnumerationValue
        If either field is not a member of its table.
    """
    for name in ("what_to_show", "bar_size"):
        if name not in payload:
            raise MissingPayloadField(name, kind=kind)
    normalized = dict(payload)
    normalized["what_to_show"] = normalize_what_to_show(payload["what_to_show"])
    normalized["bar_size"] = normalize_bar_size(payload["bar_size"])
    return normalized
