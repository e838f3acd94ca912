"""tws-wire wire subpackage -- tokens, enumeration tables, validation, transport.

This subpackage implements everything below the message registry.  It
provides:

* **Token encoding** -- flattening nested fields and rendering NUL
  terminated ASCII tokens (:mod:`~tws_wire.wire.tokens`).
* **Enumeration tables** -- bar sizes, what-to-show quote types and FA
  data types (:mod:`~tws_wire.wire.enums`).
* **Validation** -- normalisation and membership checks run before any
  bytes are produced (:mod:`~tws_wire.wire.validation`).
* **Socket transport** -- the production
  :class:`~tws_wire.core.interfaces.Transport` (:mod:`~tws_wire.wire.stream`).
"""
from __future__ import annotations

# -- Enumeration tables -----------------------------------------------------
from tws_wire.wire.enums import (
    BAR_SIZE_ALIASES,
    BAR_SIZES,
    FA_DATA_TYPES,
    HISTORICAL_TYPES,
    BarSize,
    FaDataType,
    WhatToShow,
)

# -- Socket transport -------------------------------------------------------
from tws_wire.wire.stream import SocketTransport

# -- Tokens -----------------------------------------------------------------
from tws_wire.wire.tokens import (
    DEFAULT_ENCODING,
    TERMINATOR,
    encode_fields,
    encode_token,
    flatten,
    split_tokens,
    token_text,
)

# -- Validation -------------------------------------------------------------
from tws_wire.wire.validation import (
    normalize_bar_size,
    normalize_fa_data_type,
    normalize_name,
    normalize_what_to_show,
    validate_bar_request,
)

__all__ = [
    # Tokens
    "TERMINATOR",
    "DEFAULT_ENCODING",
    "flatten",
    "token_text",
    "encode_token",
    "encode_fields",
    "split_tokens",
    # Enumerations
    "BAR_SIZES",
    "BAR_SIZE_ALIASES",
    "BarSize",
    "WhatToShow",
    "HISTORICAL_TYPES",
    "FaDataType",
    "FA_DATA_TYPES",
    # Validation
    "normalize_name",
    "normalize_what_to_show",
    "normalize_bar_size",
    "normalize_fa_data_type",
    "validate_bar_request",
    # Transport
    "SocketTransport",
]
