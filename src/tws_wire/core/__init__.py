"""tws-wire core -- errors, shared types, configuration and interfaces."""
from __future__ import annotations

from tws_wire.core.config import ClientConfig
from tws_wire.core.errors import (
    DuplicateMessageKind,
    EncodingError,
    InvalidContractString,
    InvalidEnumerationValue,
    MissingPayloadField,
    RegistryError,
    TransportClosed,
    TransportConnectFailure,
    TransportError,
    TransportWriteFailure,
    UnencodableToken,
    UnknownMessageKind,
    WireProtocolError,
)
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
    WireToken,
    unset_if_none,
)

__all__ = [
    "ClientConfig",
    "WireProtocolError",
    "EncodingError",
    "RegistryError",
    "TransportError",
    "InvalidEnumerationValue",
    "MissingPayloadField",
    "UnencodableToken",
    "InvalidContractString",
    "UnknownMessageKind",
    "DuplicateMessageKind",
    "TransportWriteFailure",
    "TransportClosed",
    "TransportConnectFailure",
    "UNSET",
    "UnsetType",
    "WireToken",
    "unset_if_none",
    "Contract",
    "ComboLeg",
    "UnderComp",
    "TagValue",
    "Order",
    "ExecutionFilter",
    "ScannerSubscription",
]
