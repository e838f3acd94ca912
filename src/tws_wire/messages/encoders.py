"""Body encoders for message kinds with bespoke layouts.

Each function takes the request payload and the
:class:`~tws_wire.messages.registry.MessageKind` being encoded and returns
the body fields that follow the header (id, version, subject).  The
result may nest; the dispatcher flattens it.

Absent-value conventions differ per field and are part of the protocol:

* ``UNSET`` (empty token) for optional numerics, taken from the domain
  models' defaults;
* an empty string for text fields;
* an empty list where a whole block is omitted (combo legs of a non-BAG
  contract), which contributes no tokens at all.

Domain objects are only read, never mutated.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from tws_wire.core.types import Contract
from tws_wire.messages.registry import require
from tws_wire.wire.validation import validate_bar_request

if TYPE_CHECKING:
    from tws_wire.core.types import ExecutionFilter, Order, ScannerSubscription
    from tws_wire.messages.registry import MessageKind


def _contract(payload: Mapping[str, Any], kind: MessageKind, *, allow_string: bool = False) -> Contract:
    contract = require(payload, "contract", kind.name)
    if allow_string and isinstance(contract, str):
        return Contract.from_colon_string(contract)
    return contract


# ---------------------------------------------------------------------------
# Market data
# ---------------------------------------------------------------------------

def encode_request_market_data(payload: Mapping[str, Any], kind: MessageKind) -> list[Any]:
    """Body of ``request_market_data`` (id 1, version 9)."""
    contract = _contract(payload, kind)
    return [
        contract.con_id,
        contract.serialize("long"),
        contract.serialize_combo_legs("short"),
        contract.serialize_under_comp(),
        payload.get("generic_tick_list", ""),
        payload.get("snapshot", False),
    ]


def encode_request_market_depth(payload: Mapping[str, Any], kind: MessageKind) -> list[Any]:
    """Body of ``request_market_depth`` (id 10, version 3)."""
    contract = _contract(payload, kind)
    return [contract.serialize("short"), require(payload, "num_rows", kind.name)]


# ---------------------------------------------------------------------------
# Bar data
# ---------------------------------------------------------------------------

def encode_request_historical_data(payload: Mapping[str, Any], kind: MessageKind) -> list[Any]:
    """Body of ``request_historical_data`` (id 20, version 4).

    ``what_to_show`` and ``bar_size`` are validated before anything else
    is read.  The contract may be a :class:`Contract` or its
    colon-delimited string form.  ``end_date_time`` defaults to ``""``
    (now), ``duration`` to ``"1 D"``, ``use_rth`` and ``format_date`` to 1.
    """
    data = validate_bar_request(payload, kind=kind.name)
    contract = _contract(data, kind, allow_string=True)
    return [
        contract.serialize("long"),
        contract.include_expired,
        data.get("end_date_time", ""),
        data["bar_size"].index,
        data.get("duration", "1 D"),
        data.get("use_rth", 1),
        data["what_to_show"].wire,
        data.get("format_date", 1),
        contract.serialize_combo_legs("short"),
    ]


def encode_request_real_time_bars(payload: Mapping[str, Any], kind: MessageKind) -> list[Any]:
    """Body of ``request_real_time_bars`` (id 50, version 1)."""
    data = validate_bar_request(payload, kind=kind.name)
    contract = _contract(data, kind, allow_string=True)
    return [
        contract.serialize("long"),
        data["bar_size"].index,
        data["what_to_show"].wire,
        data.get("use_rth", 1),
    ]


# ---------------------------------------------------------------------------
# Contract details, options, fundamentals
# ---------------------------------------------------------------------------

def encode_request_contract_data(payload: Mapping[str, Any], kind: MessageKind) -> list[Any]:
    """Body of ``request_contract_data`` (id 9, version 6)."""
    contract = _contract(payload, kind)
    return [
        contract.con_id,
        contract.serialize("short"),
        contract.include_expired,
        contract.sec_id_type,
        contract.sec_id,
    ]


def encode_exercise_options(payload: Mapping[str, Any], kind: MessageKind) -> list[Any]:
    """Body of ``exercise_options`` (id 21, version 1).

    ``exercise_action`` is 1 (exercise) or 2 (lapse); ``override`` is 1 to
    override the gateway's natural action.  Neither is validated here.
    """
    contract = _contract(payload, kind)
    return [
        contract.serialize("short"),
        require(payload, "exercise_action", kind.name),
        require(payload, "exercise_quantity", kind.name),
        payload.get("account", ""),
        payload.get("override", 0),
    ]


def encode_request_fundamental_data(payload: Mapping[str, Any], kind: MessageKind) -> list[Any]:
    """Body of ``request_fundamental_data`` (id 52, version 1)."""
    contract = _contract(payload, kind)
    return [
        contract.symbol,
        contract.sec_type,
        contract.exchange,
        contract.primary_exchange,
        contract.currency,
        contract.local_symbol,
        require(payload, "report_type", kind.name),
    ]


def encode_request_implied_volatility(payload: Mapping[str, Any], kind: MessageKind) -> list[Any]:
    """Body of ``request_implied_volatility`` (id 54, version 1)."""
    contract = _contract(payload, kind)
    return [
        contract.con_id,
        contract.serialize("long"),
        require(payload, "option_price", kind.name),
        require(payload, "under_price", kind.name),
    ]


def encode_request_option_price(payload: Mapping[str, Any], kind: MessageKind) -> list[Any]:
    """Body of ``request_option_price`` (id 55, version 1)."""
    contract = _contract(payload, kind)
    return [
        contract.con_id,
        contract.serialize("long"),
        require(payload, "volatility", kind.name),
        require(payload, "under_price", kind.name),
    ]


# ---------------------------------------------------------------------------
# Executions and scanners
# ---------------------------------------------------------------------------

def encode_request_executions(payload: Mapping[str, Any], kind: MessageKind) -> list[Any]:
    """Body of ``request_executions`` (id 7, version 3)."""
    flt: ExecutionFilter = require(payload, "filter", kind.name)
    return [
        flt.client_id,
        flt.acct_code,
        flt.time,
        flt.symbol,
        flt.sec_type,
        flt.exchange,
        flt.side,
    ]


def encode_request_scanner_subscription(payload: Mapping[str, Any], kind: MessageKind) -> list[Any]:
    """Body of ``request_scanner_subscription`` (id 22, version 3)."""
    sub: ScannerSubscription = require(payload, "subscription", kind.name)
    return [
        sub.number_of_rows,
        sub.instrument,
        sub.location_code,
        sub.scan_code,
        sub.above_price,
        sub.below_price,
        sub.above_volume,
        sub.market_cap_above,
        sub.market_cap_below,
        sub.moody_rating_above,
        sub.moody_rating_below,
        sub.sp_rating_above,
        sub.sp_rating_below,
        sub.maturity_date_above,
        sub.maturity_date_below,
        sub.coupon_rate_above,
        sub.coupon_rate_below,
        sub.exclude_convertible,
        sub.average_option_volume_above,
        sub.scanner_setting_pairs,
        sub.stock_type_filter,
    ]


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------

def encode_place_order(payload: Mapping[str, Any], kind: MessageKind) -> list[Any]:
    """Body of ``place_order`` (id 3, version 31)."""
    contract = _contract(payload, kind)
    order: Order = require(payload, "order", kind.name)
    return [
        contract.serialize("long"),
        contract.sec_id_type,
        contract.sec_id,
        # main order fields
        order.action,
        order.total_quantity,
        order.order_type,
        order.limit_price,
        order.aux_price,
        # extended order fields
        order.tif,
        order.oca_group,
        order.account,
        order.open_close,
        order.origin,
        order.order_ref,
        order.transmit,
        order.parent_id,
        order.block_order,
        order.sweep_to_fill,
        order.display_size,
        order.trigger_method,
        order.outside_rth,
        order.hidden,
        contract.serialize_combo_legs("long"),
        "",  # deprecated shares allocation
        order.discretionary_amount,
        order.good_after_time,
        order.good_till_date,
        order.fa_group,
        order.fa_method,
        order.fa_percentage,
        order.fa_profile,
        # institutional short sale slot
        order.short_sale_slot,
        order.designated_location,
        order.oca_type,
        order.rule_80a,
        order.settling_firm,
        order.all_or_none,
        order.min_quantity,
        order.percent_offset,
        order.etrade_only,
        order.firm_quote_only,
        order.nbbo_price_cap,
        order.auction_strategy,
        order.starting_price,
        order.stock_ref_price,
        order.delta,
        order.stock_range_lower,
        order.stock_range_upper,
        order.override_percentage_constraints,
        # volatility orders
        order.volatility,
        order.volatility_type,
        order.delta_neutral_order_type,
        order.delta_neutral_aux_price,
        order.continuous_update,
        order.reference_price_type,
        order.trail_stop_price,
        # scale orders
        order.scale_init_level_size,
        order.scale_subs_level_size,
        order.scale_price_increment,
        order.clearing_account,
        order.clearing_intent,
        order.not_held,
        contract.serialize_under_comp(),
        contract.serialize_algo(),
        order.what_if,
    ]
