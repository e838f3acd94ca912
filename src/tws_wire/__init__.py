"""tws-wire -- outgoing message encoder for the TWS / IB Gateway socket API.

Encodes typed client requests into the gateway's positional,
NUL-terminated token format and writes them to an established stream.

Layers
------
1. Core types, errors, config and transport interface (:mod:`tws_wire.core`)
2. Tokens, enumeration tables, validation, socket transport (:mod:`tws_wire.wire`)
3. Message kinds and registry (:mod:`tws_wire.messages`)
4. Dispatcher (:mod:`tws_wire.dispatcher`)
"""
from __future__ import annotations

__version__ = "0.1.0"

# ---------------------------------------------------------------------------
# Core types, errors, config, interfaces
# ---------------------------------------------------------------------------
from tws_wire.core.config import ClientConfig
from tws_wire.core.errors import (
    EncodingError,
    InvalidEnumerationValue,
    MissingPayloadField,
    RegistryError,
    TransportConnectFailure,
    TransportError,
    TransportWriteFailure,
    UnencodableToken,
    UnknownMessageKind,
    WireProtocolError,
)
from tws_wire.core.interfaces import InMemoryTransport, Transport
from tws_wire.core.types import (
    UNSET,
    ComboLeg,
    Contract,
    ExecutionFilter,
    Order,
    ScannerSubscription,
    TagValue,
    UnderComp,
    UnsetType,
)

# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------
from tws_wire.dispatcher import MessageDispatcher, encode_message, send

# ---------------------------------------------------------------------------
# Message kinds
# ---------------------------------------------------------------------------
from tws_wire.messages import (
    DEFAULT_REGISTRY,
    FieldSpec,
    MessageKind,
    MessageRegistry,
    SubjectPolicy,
)

# ---------------------------------------------------------------------------
# Wire
# ---------------------------------------------------------------------------
from tws_wire.wire import (
    BAR_SIZES,
    BarSize,
    FaDataType,
    SocketTransport,
    WhatToShow,
    encode_token,
    flatten,
    split_tokens,
)

__all__ = [
    # Meta
    "__version__",
    # Core types
    "UNSET",
    "UnsetType",
    "Contract",
    "ComboLeg",
    "UnderComp",
    "TagValue",
    "Order",
    "ExecutionFilter",
    "ScannerSubscription",
    # Config
    "ClientConfig",
    # Error hierarchy
    "WireProtocolError",
    "EncodingError",
    "RegistryError",
    "TransportError",
    "InvalidEnumerationValue",
    "MissingPayloadField",
    "UnencodableToken",
    "UnknownMessageKind",
    "TransportWriteFailure",
    "TransportConnectFailure",
    # Transport
    "Transport",
    "InMemoryTransport",
    "SocketTransport",
    # Wire
    "flatten",
    "encode_token",
    "split_tokens",
    "BAR_SIZES",
    "BarSize",
    "WhatToShow",
    "FaDataType",
    # Messages
    "DEFAULT_REGISTRY",
    "MessageKind",
    "MessageRegistry",
    "FieldSpec",
    "SubjectPolicy",
    # Dispatcher
    "send",
    "encode_message",
    "MessageDispatcher",
]
