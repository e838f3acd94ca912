"""The closed set of outgoing message kinds.

Simple kinds are declared as data (id, version, subject policy, ordered
payload field names).  Kinds with bespoke layouts point at an encoder in
:mod:`tws_wire.messages.encoders`.  Aliases share one definition when the
gateway treats two client operations identically on the wire.

:data:`DEFAULT_REGISTRY` is built once at import time and frozen.
"""
from __future__ import annotations

from tws_wire.messages import encoders
from tws_wire.messages.registry import (
    FieldSpec,
    MessageKind,
    MessageRegistry,
    SubjectPolicy,
)
from tws_wire.wire.validation import normalize_fa_data_type

_NONE = SubjectPolicy.NONE
_REQUIRED = SubjectPolicy.REQUIRED
_OPTIONAL = SubjectPolicy.OPTIONAL
_REQUEST_ID = SubjectPolicy.REQUEST_ID

# ---------------------------------------------------------------------------
# Data-driven kinds
# ---------------------------------------------------------------------------

# (name, id, version, subject, fields, aliases)
_SIMPLE_KINDS: tuple[tuple[str, int, int, SubjectPolicy, tuple[FieldSpec, ...], tuple[str, ...]], ...] = (
    # No data
    ("request_open_orders", 5, 1, _NONE, (), ()),
    ("cancel_news_bulletins", 13, 1, _NONE, (), ()),
    ("request_all_open_orders", 16, 1, _NONE, (), ()),
    ("request_managed_accounts", 17, 1, _NONE, (), ()),
    ("request_scanner_parameters", 24, 1, _NONE, (), ()),
    ("request_current_time", 49, 1, _NONE, (), ()),
    ("request_global_cancel", 58, 1, _NONE, (), ()),
    # Ticker id only
    ("cancel_market_data", 2, 1, _REQUIRED, (), ()),
    ("cancel_market_depth", 11, 1, _REQUIRED, (), ()),
    ("cancel_scanner_subscription", 23, 1, _REQUIRED, (), ()),
    ("cancel_historical_data", 25, 1, _REQUIRED, (), ()),
    ("cancel_real_time_bars", 51, 1, _REQUIRED, (), ()),
    # Request id only
    ("cancel_fundamental_data", 53, 1, _REQUIRED, (), ()),
    ("cancel_implied_volatility", 56, 1, _REQUIRED, (), ("cancel_calculate_implied_volatility",)),
    ("cancel_option_price", 57, 1, _REQUIRED, (), ("cancel_calculate_option_price",)),
    # Order id only
    ("cancel_order", 4, 1, _REQUIRED, (), ()),
    # One or two keys
    ("request_ids", 8, 1, _NONE, (FieldSpec("number_of_ids"),), ()),
    ("request_news_bulletins", 12, 1, _NONE, (FieldSpec("all_messages"),), ()),
    ("set_server_loglevel", 14, 1, _NONE, (FieldSpec("log_level"),), ()),
    ("request_auto_open_orders", 15, 1, _NONE, (FieldSpec("auto_bind"),), ()),
    (
        "request_fa", 18, 1, _NONE,
        (FieldSpec("fa_data_type", convert=normalize_fa_data_type),),
        (),
    ),
    (
        "replace_fa", 19, 1, _NONE,
        (FieldSpec("fa_data_type", convert=normalize_fa_data_type), FieldSpec("xml")),
        (),
    ),
    # account_code is only needed for advisor accounts
    (
        "request_account_data", 6, 2, _NONE,
        (FieldSpec("subscribe"), FieldSpec("account_code", default="")),
        ("request_account_updates",),
    ),
)

# ---------------------------------------------------------------------------
# Kinds with bespoke encoders
# ---------------------------------------------------------------------------

# (name, id, version, subject, encoder, aliases)
_BESPOKE_KINDS = (
    ("request_market_data", 1, 9, _REQUIRED, encoders.encode_request_market_data, ()),
    ("place_order", 3, 31, _REQUIRED, encoders.encode_place_order, ()),
    ("request_executions", 7, 3, _OPTIONAL, encoders.encode_request_executions, ()),
    (
        "request_contract_data", 9, 6, _REQUIRED,
        encoders.encode_request_contract_data,
        ("request_contract_details",),
    ),
    ("request_market_depth", 10, 3, _REQUIRED, encoders.encode_request_market_depth, ()),
    ("request_historical_data", 20, 4, _REQUIRED, encoders.encode_request_historical_data, ()),
    ("exercise_options", 21, 1, _REQUIRED, encoders.encode_exercise_options, ()),
    (
        "request_scanner_subscription", 22, 3, _REQUIRED,
        encoders.encode_request_scanner_subscription,
        (),
    ),
    ("request_real_time_bars", 50, 1, _REQUIRED, encoders.encode_request_real_time_bars, ()),
    (
        "request_fundamental_data", 52, 1, _REQUEST_ID,
        encoders.encode_request_fundamental_data,
        (),
    ),
    (
        "request_implied_volatility", 54, 1, _REQUEST_ID,
        encoders.encode_request_implied_volatility,
        ("calculate_implied_volatility", "request_calculate_implied_volatility"),
    ),
    (
        "request_option_price", 55, 1, _REQUEST_ID,
        encoders.encode_request_option_price,
        ("calculate_option_price", "request_calculate_option_price"),
    ),
)


def build_registry() -> MessageRegistry:
    """Return a new, unfrozen registry holding every outgoing kind."""
    registry = MessageRegistry()
    for name, message_id, version, subject, fields, aliases in _SIMPLE_KINDS:
        registry.register(
            MessageKind(name, message_id, version, subject, fields=fields),
            *aliases,
        )
    for name, message_id, version, subject, encoder, aliases in _BESPOKE_KINDS:
        registry.register(
            MessageKind(name, message_id, version, subject, encoder=encoder),
            *aliases,
        )
    return registry


DEFAULT_REGISTRY: MessageRegistry = build_registry().freeze()
