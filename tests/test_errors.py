"""Tests for the tws-wire error hierarchy."""
from __future__ import annotations

import pytest

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
    error_class_for_code,
)


class TestHierarchy:

    @pytest.mark.parametrize(
        ("cls", "category", "code"),
        [
            (UnencodableToken, EncodingError, "TW-E102"),
            (InvalidContractString, EncodingError, "TW-E103"),
            (UnknownMessageKind, RegistryError, "TW-E200"),
            (DuplicateMessageKind, RegistryError, "TW-E201"),
            (TransportWriteFailure, TransportError, "TW-E300"),
            (TransportClosed, TransportError, "TW-E301"),
            (TransportConnectFailure, TransportError, "TW-E302"),
        ],
    )
    def test_category_and_code(self, cls: type, category: type, code: str) -> None:
        err = cls()
        assert isinstance(err, category)
        assert isinstance(err, WireProtocolError)
        assert err.code == code
        assert error_class_for_code(code) is cls

    def test_unknown_code(self) -> None:
        with pytest.raises(KeyError):
            error_class_for_code("TW-E999")


class TestWireProtocolError:

    def test_default_message(self) -> None:
        err = TransportClosed()
        assert str(err) == "Transport is closed"
        assert err.details == {}

    def test_custom_message_and_details(self) -> None:
        err = UnknownMessageKind("Unknown message kind: 'x'", details={"kind": "x"})
        assert str(err) == "Unknown message kind: 'x'"
        assert err.details == {"kind": "x"}

    def test_to_dict(self) -> None:
        err = DuplicateMessageKind("dup", details={"name": "ping"})
        assert err.to_dict() == {
            "error": {
                "code": "TW-E201",
                "message": "dup",
                "detail": {"name": "ping"},
                "resolution": DuplicateMessageKind.resolution,
            }
        }

    def test_to_dict_omits_empty(self) -> None:
        err = WireProtocolError("plain")
        assert err.to_dict() == {"error": {"code": "TW-E000", "message": "plain"}}

    def test_resolution_override(self) -> None:
        err = TransportWriteFailure(resolution="Try again later.")
        assert err.resolution == "Try again later."

    def test_repr(self) -> None:
        assert repr(TransportClosed()) == "TransportClosed(code='TW-E301', message='Transport is closed')"


class TestInvalidEnumerationValue:

    def test_attributes(self) -> None:
        err = InvalidEnumerationValue("bar_size", "fortnight", ["one_day", "one_hour"])
        assert err.field == "bar_size"
        assert err.value == "fortnight"
        assert err.legal == ("one_day", "one_hour")
        assert str(err) == "bar_size must be one of ['one_day', 'one_hour'], got 'fortnight'"
        assert err.details["legal"] == ["one_day", "one_hour"]
        assert error_class_for_code("TW-E100") is InvalidEnumerationValue


class TestMissingPayloadField:

    def test_with_kind(self) -> None:
        err = MissingPayloadField("contract", kind="place_order")
        assert str(err) == "Missing required payload field 'contract' for place_order"
        assert err.details == {"field": "contract", "kind": "place_order"}
        assert err.code == "TW-E101"

    def test_without_kind(self) -> None:
        err = MissingPayloadField("id")
        assert str(err) == "Missing required payload field 'id'"
        assert err.kind is None
