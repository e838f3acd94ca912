"""tws-wire shared domain types.

This module defines the ``UNSET`` sentinel, the wire-token type alias, and
the Pydantic models for the domain objects that outgoing messages embed
(contracts, orders, execution filters, scanner subscriptions).

Key design decisions:
* ``UNSET`` is a dedicated singleton, not ``None`` and not a numeric
  placeholder.  It encodes as an empty token, which the gateway reads as
  "field left unset".  ``None`` never reaches the wire; the token encoder
  rejects it.
* Numeric fields that the gateway treats as optional default to ``UNSET``.
  A caller who really wants to send a large number sends that number.
* Models are frozen: the encoder only reads them.
* Contracts carry their own serialization variants (short form, long form,
  combo legs, under component, algo parameters) because several messages
  embed the same contract in slightly different shapes.
"""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from tws_wire.core.errors import InvalidContractString

# ---------------------------------------------------------------------------
# UNSET sentinel
# ---------------------------------------------------------------------------

class UnsetType:
    """Type of the :data:`UNSET` sentinel.

    There is exactly one instance.  It is falsy, compares equal only to
    itself, and survives ``copy``/``deepcopy``/pickling as the same object.
    """

    __slots__ = ()
    _instance: UnsetType | None = None

    def __new__(cls) -> UnsetType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> UnsetType:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> UnsetType:
        return self

    def __reduce__(self) -> str:
        return "UNSET"


UNSET = UnsetType()
"""Marker for a field intentionally left unset; encoded as an empty token."""

WireToken = int | float | str | bool | UnsetType
"""A scalar that the token encoder can put on the wire."""

SerializationForm = Literal["short", "long"]


def unset_if_none(value: Any) -> Any:
    """Map ``None`` to :data:`UNSET`; pass everything else through."""
    return UNSET if value is None else value


_MODEL_CONFIG = ConfigDict(strict=True, frozen=True, arbitrary_types_allowed=True)


# ---------------------------------------------------------------------------
# Contract and its parts
# ---------------------------------------------------------------------------

class ComboLeg(BaseModel):
    """One leg of a combination (``BAG``) contract."""

    model_config = _MODEL_CONFIG

    con_id: int = 0
    ratio: int = 0
    action: str = Field(default="", description="BUY, SELL or SSHORT.")
    exchange: str = ""
    open_close: int = Field(
        default=0,
        description="0 = same as parent, 1 = open, 2 = close, 3 = unknown.",
    )
    short_sale_slot: int = Field(
        default=0,
        description="0 for retail, 1 or 2 for institutions.",
    )
    designated_location: str = Field(
        default="",
        description="Only populated when short_sale_slot is 2.",
    )

    def serialize(self, form: SerializationForm = "short") -> list[Any]:
        """Return the leg's fields; the long form adds the short-sale slots."""
        fields: list[Any] = [self.con_id, self.ratio, self.action, self.exchange]
        if form == "long":
            fields += [self.open_close, self.short_sale_slot, self.designated_location]
        return fields


class UnderComp(BaseModel):
    """Delta-neutral underlying component of a contract."""

    model_config = _MODEL_CONFIG

    con_id: int = 0
    delta: float = 0.0
    price: float = 0.0


class TagValue(BaseModel):
    """A single algo parameter."""

    model_config = _MODEL_CONFIG

    tag: str
    value: str


class Contract(BaseModel):
    """A tradable instrument as the gateway understands it."""

    model_config = _MODEL_CONFIG

    con_id: int = 0
    symbol: str = ""
    sec_type: str = Field(default="", description="STK, OPT, FUT, IND, FOP, CASH, BAG.")
    expiry: str = Field(default="", description="YYYYMM or YYYYMMDD.")
    strike: float = 0.0
    right: str = Field(default="", description="P, PUT, C or CALL for options.")
    multiplier: str = ""
    exchange: str = ""
    primary_exchange: str = ""
    currency: str = ""
    local_symbol: str = ""
    include_expired: bool = False
    sec_id_type: str = Field(default="", description="CUSIP, SEDOL, ISIN or RIC.")
    sec_id: str = ""
    combo_legs: list[ComboLeg] = Field(default_factory=list)
    under_comp: UnderComp | None = None
    algo_strategy: str = ""
    algo_params: list[TagValue] = Field(default_factory=list)

    # -- Construction -------------------------------------------------------

    @classmethod
    def from_colon_string(cls, text: str) -> Contract:
        """Build a contract from its colon-delimited form.

        The format is::

            symbol:sec_type:expiry:strike:right:multiplier:exchange:primary_exchange:currency:local_symbol

        e.g. ``GBP:FUT:200809:::62500:GLOBEX::USD:``.  Fields that do not
        apply are left blank.

        Raises
        ------
        InvalidContractString
            If the string does not have exactly ten fields or the strike
            is not a number.
        """
        parts = text.split(":")
        if len(parts) != 10:
            raise InvalidContractString(
                f"Expected 10 colon-separated fields, got {len(parts)}",
                details={"contract": text, "fields": len(parts)},
            )
        (symbol, sec_type, expiry, strike, right, multiplier,
         exchange, primary_exchange, currency, local_symbol) = parts
        try:
            strike_value = float(strike) if strike else 0.0
        except ValueError as exc:
            raise InvalidContractString(
                f"Strike {strike!r} is not a number",
                details={"contract": text, "strike": strike},
            ) from exc
        return cls(
            symbol=symbol,
            sec_type=sec_type,
            expiry=expiry,
            strike=strike_value,
            right=right,
            multiplier=multiplier,
            exchange=exchange,
            primary_exchange=primary_exchange,
            currency=currency,
            local_symbol=local_symbol,
        )

    # -- Serialization variants --------------------------------------------

    def serialize(self, form: SerializationForm = "long") -> list[Any]:
        """Return the standard contract fields.

        The long form includes ``primary_exchange``; the short form omits it.
        """
        fields: list[Any] = [
            self.symbol,
            self.sec_type,
            self.expiry,
            self.strike,
            self.right,
            self.multiplier,
            self.exchange,
        ]
        if form == "long":
            fields.append(self.primary_exchange)
        fields += [self.currency, self.local_symbol]
        return fields

    def serialize_short(self) -> list[Any]:
        return self.serialize("short")

    def serialize_long(self) -> list[Any]:
        return self.serialize("long")

    def serialize_combo_legs(self, form: SerializationForm = "short") -> list[Any]:
        """Return the combo-leg block.

        Only ``BAG`` contracts send legs at all; for any other security type
        the block is empty and contributes no tokens.
        """
        if self.sec_type.upper() != "BAG":
            return []
        if not self.combo_legs:
            return [0]
        return [len(self.combo_legs), [leg.serialize(form) for leg in self.combo_legs]]

    def serialize_under_comp(self) -> list[Any]:
        """Return ``[False]`` or ``[True, con_id, delta, price]``."""
        if self.under_comp is None:
            return [False]
        return [True, self.under_comp.con_id, self.under_comp.delta, self.under_comp.price]

    def serialize_algo(self) -> list[Any]:
        """Return ``[""]`` or the strategy followed by its tag/value pairs."""
        if not self.algo_strategy:
            return [""]
        return [
            self.algo_strategy,
            len(self.algo_params),
            [[param.tag, param.value] for param in self.algo_params],
        ]


# ---------------------------------------------------------------------------
# Order
# ---------------------------------------------------------------------------

class Order(BaseModel):
    """Order parameters sent with ``place_order``.

    Fields typed ``X | UnsetType`` are sent as empty tokens unless the
    caller supplies a value.
    """

    model_config = _MODEL_CONFIG

    # Main order fields
    action: str = Field(default="", description="BUY, SELL or SSHORT.")
    total_quantity: int = 0
    order_type: str = ""
    limit_price: float = 0.0
    aux_price: float = 0.0

    # Extended order fields
    tif: str = Field(default="", description="Time in force: DAY, GTC, IOC, GTD.")
    oca_group: str = ""
    account: str = ""
    open_close: str = "O"
    origin: int = Field(default=0, description="0 = customer, 1 = firm.")
    order_ref: str = ""
    transmit: bool = True
    parent_id: int = 0
    block_order: bool = False
    sweep_to_fill: bool = False
    display_size: int = 0
    trigger_method: int = 0
    outside_rth: bool = False
    hidden: bool = False
    discretionary_amount: float = 0.0
    good_after_time: str = ""
    good_till_date: str = ""

    # Financial advisor fields
    fa_group: str = ""
    fa_method: str = ""
    fa_percentage: str = ""
    fa_profile: str = ""

    # Institutional short sale slot fields
    short_sale_slot: int = 0
    designated_location: str = ""

    oca_type: int = 0
    rule_80a: str = ""
    settling_firm: str = ""
    all_or_none: bool = False
    min_quantity: int | UnsetType = UNSET
    percent_offset: float | UnsetType = UNSET
    etrade_only: bool = False
    firm_quote_only: bool = False
    nbbo_price_cap: float | UnsetType = UNSET

    # BOX / pegged-to-stock / volatility orders
    auction_strategy: int | UnsetType = UNSET
    starting_price: float | UnsetType = UNSET
    stock_ref_price: float | UnsetType = UNSET
    delta: float | UnsetType = UNSET
    stock_range_lower: float | UnsetType = UNSET
    stock_range_upper: float | UnsetType = UNSET
    override_percentage_constraints: bool = False
    volatility: float | UnsetType = UNSET
    volatility_type: int | UnsetType = UNSET
    delta_neutral_order_type: str = ""
    delta_neutral_aux_price: float | UnsetType = UNSET
    continuous_update: bool = False
    reference_price_type: int | UnsetType = UNSET
    trail_stop_price: float | UnsetType = UNSET

    # Scale orders
    scale_init_level_size: int | UnsetType = UNSET
    scale_subs_level_size: int | UnsetType = UNSET
    scale_price_increment: float | UnsetType = UNSET

    # Clearing
    clearing_account: str = ""
    clearing_intent: str = Field(default="", description="IB, Away or PTA.")

    not_held: bool = False
    what_if: bool = False


# ---------------------------------------------------------------------------
# Execution filter and scanner subscription
# ---------------------------------------------------------------------------

class ExecutionFilter(BaseModel):
    """Selects which executions ``request_executions`` reports."""

    model_config = _MODEL_CONFIG

    client_id: int = 0
    acct_code: str = ""
    time: str = Field(default="", description="yyyymmdd-hh:mm:ss")
    symbol: str = ""
    sec_type: str = ""
    exchange: str = ""
    side: str = ""


class ScannerSubscription(BaseModel):
    """Market scanner parameters for ``request_scanner_subscription``."""

    model_config = _MODEL_CONFIG

    number_of_rows: int | UnsetType = UNSET
    instrument: str = ""
    location_code: str = ""
    scan_code: str = ""
    above_price: float | UnsetType = UNSET
    below_price: float | UnsetType = UNSET
    above_volume: int | UnsetType = UNSET
    market_cap_above: float | UnsetType = UNSET
    market_cap_below: float | UnsetType = UNSET
    moody_rating_above: str = ""
    moody_rating_below: str = ""
    sp_rating_above: str = ""
    sp_rating_below: str = ""
    maturity_date_above: str = ""
    maturity_date_below: str = ""
    coupon_rate_above: float | UnsetType = UNSET
    coupon_rate_below: float | UnsetType = UNSET
    exclude_convertible: str = ""
    average_option_volume_above: int | UnsetType = UNSET
    scanner_setting_pairs: str = ""
    stock_type_filter: str = ""
