"""Wire-token encoding and field flattening.

The gateway protocol has no length prefixes and no message framing beyond
a single NUL byte after every token:

* **flatten** -- turns the nested field structure an encode procedure
  builds into one flat, depth-first list of scalars.  Empty nested
  sequences disappear; they do *not* become empty tokens.
* **encode_token** -- renders one scalar as ASCII text plus the
  terminator.  ``True``/``False`` become ``1``/``0`` and
  :data:`~tws_wire.core.types.UNSET` becomes the empty token.
* **encode_fields** -- both steps for a whole message, producing the
  ``bytes`` handed to the transport.
* **split_tokens** -- the inverse used by tests and debug logging.

All helpers are synchronous and side-effect-free.
"""
from __future__ import annotations

import enum
import math
from collections.abc import Iterable, Iterator
from typing import Any

from tws_wire.core.errors import UnencodableToken
from tws_wire.core.types import UnsetType, WireToken

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

TERMINATOR: bytes = b"\0"
"""Appended after every token, including the empty one."""

DEFAULT_ENCODING: str = "ascii"


# ---------------------------------------------------------------------------
# Flattening
# ---------------------------------------------------------------------------

def _iter_flat(fields: Iterable[Any]) -> Iterator[Any]:
    for item in fields:
        if isinstance(item, (list, tuple)):
            yield from _iter_flat(item)
        else:
            yield item


def flatten(fields: Iterable[Any]) -> list[Any]:
    """Return *fields* with nested lists and tuples expanded in place.

    Strings and bytes are scalars.  Order is left-to-right, depth-first.

    >>> flatten([1, [2, [], [3]], "ab"])
    [1, 2, 3, 'ab']
    """
    return list(_iter_flat(fields))


# ---------------------------------------------------------------------------
# Token encoding
# ---------------------------------------------------------------------------

def token_text(value: WireToken) -> str:
    """Return the wire text for a single scalar, without the terminator.

    Raises
    ------
    UnencodableToken
        If *value* is ``None``, a non-finite float, or any other value
        with no wire form.
    """
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, UnsetType):
        return ""
    if isinstance(value, enum.Enum):
        value = value.value
    if isinstance(value, str):
        if "\0" in value:
            raise UnencodableToken(
                "String token contains the NUL terminator",
                details={"value": value},
            )
        return value
    if isinstance(value, float) and not math.isfinite(value):
        raise UnencodableToken(
            f"Non-finite float {value!r} has no wire form",
            details={"value": repr(value)},
        )
    if isinstance(value, (int, float)):
        return str(value)
    raise UnencodableToken(
        f"Cannot encode {type(value).__name__} as a wire token",
        details={"type": type(value).__name__, "value": repr(value)},
    )


def encode_token(value: WireToken, *, encoding: str = DEFAULT_ENCODING) -> bytes:
    """Return *value* as wire bytes followed by :data:`TERMINATOR`."""
    text = token_text(value)
    try:
        return text.encode(encoding) + TERMINATOR
    except UnicodeEncodeError as exc:
        raise UnencodableToken(
            f"Token {text!r} cannot be encoded as {encoding}",
            details={"value": text, "encoding": encoding},
        ) from exc


def encode_fields(fields: Iterable[Any], *, encoding: str = DEFAULT_ENCODING) -> bytes:
    """Flatten *fields* and encode every token into one byte string.

    Nothing is produced unless every token encodes, so an
    :class:`UnencodableToken` never leaves a partial message behind.
    """
    return b"".join(encode_token(token, encoding=encoding) for token in flatten(fields))


def split_tokens(data: bytes, *, encoding: str = DEFAULT_ENCODING) -> list[str]:
    """Split terminated wire bytes back into token strings.

    >>> split_tokens(b"4\\x001\\x0042\\x00")
    ['4', '1', '42']
    """
    if not data:
        return []
    if not data.endswith(TERMINATOR):
        raise ValueError("Wire data does not end with a token terminator")
    return [chunk.decode(encoding) for chunk in data[:-1].split(TERMINATOR)]
