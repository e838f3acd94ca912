"""tws-wire error-code hierarchy.

Every failure the outgoing encoder can report is represented as a concrete
exception class with a stable error code.

Hierarchy
---------
::

    WireProtocolError
    +-- EncodingError    (TW-E1xx)
    +-- RegistryError    (TW-E2xx)
    +-- TransportError   (TW-E3xx)

Usage
-----
Raise concrete subclasses directly::

    raise UnknownMessageKind("request_fortune", details={"kind": "request_fortune"})

Catch by category::

    try:
        dispatcher.send("request_historical_data", payload)
    except EncodingError:
        # handles InvalidEnumerationValue, MissingPayloadField, etc.
        ...

None of these errors are logged by the library; they always surface to the
caller of :func:`tws_wire.dispatcher.send`.
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class WireProtocolError(Exception):
    """Base exception for all tws-wire errors.

    Attributes
    ----------
    code : str
        Error code, e.g. ``"TW-E100"``.
    message : str
        Human-readable description.
    details : dict[str, Any]
        Machine-readable context specific to the error instance.
    resolution : str
        Suggested action for the caller.
    """

    code: str = "TW-E000"
    message: str = "Unknown wire protocol error"
    resolution: str = ""

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        resolution: str | None = None,
    ) -> None:
        self.details: dict[str, Any] = details or {}
        if message is not None:
            self.message = message
        if resolution is not None:
            self.resolution = resolution
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the error to a plain dictionary (for logs or APIs)."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            payload["detail"] = self.details
        if self.resolution:
            payload["resolution"] = self.resolution
        return {"error": payload}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


# ===================================================================
# Category base classes
# ===================================================================

class EncodingError(WireProtocolError):
    """TW-E1xx -- The payload could not be turned into wire tokens."""

    code = "TW-E1XX"


class RegistryError(WireProtocolError):
    """TW-E2xx -- Message kind lookup and registration errors."""

    code = "TW-E2XX"


class TransportError(WireProtocolError):
    """TW-E3xx -- The transport collaborator could not deliver the bytes."""

    code = "TW-E3XX"


# ===================================================================
# TW-E1xx  Encoding Errors
# ===================================================================

class InvalidEnumerationValue(EncodingError):
    """TW-E100 -- A value is not a member of its enumeration table."""

    code = "TW-E100"
    message = "Value is not a member of the enumeration"
    resolution = "Use one of the legal values listed in the error details."

    def __init__(
        self,
        field: str,
        value: Any,
        legal: Iterable[Any],
    ) -> None:
        self.field = field
        self.value = value
        self.legal: tuple[Any, ...] = tuple(legal)
        super().__init__(
            f"{field} must be one of {list(self.legal)}, got {value!r}",
            details={"field": field, "value": repr(value), "legal": list(self.legal)},
        )


class MissingPayloadField(EncodingError):
    """TW-E101 -- A required payload field was not supplied."""

    code = "TW-E101"
    message = "Required payload field is missing"
    resolution = "Add the field to the request payload."

    def __init__(self, field: str, *, kind: str | None = None) -> None:
        self.field = field
        self.kind = kind
        where = f" for {kind}" if kind else ""
        super().__init__(
            f"Missing required payload field {field!r}{where}",
            details={"field": field, "kind": kind},
        )


class UnencodableToken(EncodingError):
    """TW-E102 -- A value reached the token encoder that has no wire form."""

    code = "TW-E102"
    message = "Value cannot be encoded as a wire token"
    resolution = (
        "Pass int, float, str, bool or UNSET; use UNSET rather than None "
        "for fields that should be sent empty."
    )


class InvalidContractString(EncodingError):
    """TW-E103 -- A colon-delimited contract string could not be parsed."""

    code = "TW-E103"
    message = "Contract string is malformed"
    resolution = (
        "Use 'symbol:sec_type:expiry:strike:right:multiplier:exchange:"
        "primary_exchange:currency:local_symbol'."
    )


# ===================================================================
# TW-E2xx  Registry Errors
# ===================================================================

class UnknownMessageKind(RegistryError):
    """TW-E200 -- The requested message kind is not registered."""

    code = "TW-E200"
    message = "Unknown message kind"
    resolution = "Use one of the names returned by MessageRegistry.names()."


class DuplicateMessageKind(RegistryError):
    """TW-E201 -- A name was registered twice."""

    code = "TW-E201"
    message = "Message kind is already registered"
    resolution = "Register each name once; use an alias for shared definitions."


# ===================================================================
# TW-E3xx  Transport Errors
# ===================================================================

class TransportWriteFailure(TransportError):
    """TW-E300 -- The underlying stream rejected the write."""

    code = "TW-E300"
    message = "Transport write failed"
    resolution = (
        "Delivery state is unknown; reconnect and resend according to "
        "your own retry policy."
    )


class TransportClosed(TransportError):
    """TW-E301 -- A write was attempted on a closed transport."""

    code = "TW-E301"
    message = "Transport is closed"
    resolution = "Open a new connection before sending."


class TransportConnectFailure(TransportError):
    """TW-E302 -- The connection to the gateway could not be opened."""

    code = "TW-E302"
    message = "Transport connection failed"
    resolution = (
        "Check that the gateway is running and accepts API connections "
        "on the configured host and port."
    )


# ---------------------------------------------------------------------------
# Lookup helper
# ---------------------------------------------------------------------------

_CODE_MAP: dict[str, type[WireProtocolError]] = {
    cls.code: cls
    for cls in [
        # E1xx
        InvalidEnumerationValue,
        MissingPayloadField,
        UnencodableToken,
        InvalidContractString,
        # E2xx
        UnknownMessageKind,
        DuplicateMessageKind,
        # E3xx
        TransportWriteFailure,
        TransportClosed,
        TransportConnectFailure,
    ]
}


def error_class_for_code(code: str) -> type[WireProtocolError]:
    """Return the exception class registered for *code*.

    Raises
    ------
    KeyError
        If *code* is not a recognised tws-wire error code.
    """
    return _CODE_MAP[code]
