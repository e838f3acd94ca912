"""Tests for the token layout of every bespoke message kind.

Each test encodes a realistic payload through the default registry and
checks the resulting token positions.  The data-driven kinds are covered
in ``test_registry.py``.
"""
from __future__ import annotations

from typing import Any

import pytest

from tws_wire.core.errors import (
    InvalidContractString,
    InvalidEnumerationValue,
    MissingPayloadField,
    UnencodableToken,
)
from tws_wire.core.types import (
    ComboLeg,
    Contract,
    ExecutionFilter,
    Order,
    ScannerSubscription,
    TagValue,
    UnderComp,
)
from tws_wire.dispatcher import encode_message
from tws_wire.wire.tokens import split_tokens

# ===================================================================
# Helpers and fixtures
# ===================================================================

STOCK_TOKENS = ["AAPL", "STK", "", "0.0", "", "", "SMART", "", "USD", ""]
STOCK_SHORT_TOKENS = ["AAPL", "STK", "", "0.0", "", "", "SMART", "USD", ""]


def tokens(kind: str, payload: dict[str, Any] | None = None) -> list[str]:
    return split_tokens(encode_message(kind, payload))


@pytest.fixture
def stock() -> Contract:
    return Contract(symbol="AAPL", sec_type="STK", exchange="SMART", currency="USD")


@pytest.fixture
def bag() -> Contract:
    return Contract(
        symbol="SPY",
        sec_type="BAG",
        exchange="SMART",
        currency="USD",
        combo_legs=[
            ComboLeg(con_id=101, ratio=1, action="BUY", exchange="SMART"),
            ComboLeg(con_id=102, ratio=1, action="SELL", exchange="SMART"),
        ],
    )


# ===================================================================
# Market data
# ===================================================================


class TestRequestMarketData:
    """request_market_data: id 1, version 9."""

    def test_layout(self, stock: Contract) -> None:
        assert tokens("request_market_data", {"id": 7, "contract": stock}) == [
            "1", "9", "7", "0", *STOCK_TOKENS, "0", "", "0",
        ]

    def test_tick_list_and_snapshot(self, stock: Contract) -> None:
        result = tokens(
            "request_market_data",
            {"id": 7, "contract": stock, "generic_tick_list": "100,101", "snapshot": True},
        )
        assert result[-2:] == ["100,101", "1"]

    def test_bag_sends_short_legs(self, bag: Contract) -> None:
        result = tokens("request_market_data", {"id": 7, "contract": bag})
        assert result[14:23] == ["2", "101", "1", "BUY", "SMART", "102", "1", "SELL", "SMART"]
        assert len(result) == 17 + 9

    def test_under_comp(self, stock: Contract) -> None:
        contract = stock.model_copy(update={"under_comp": UnderComp(con_id=5, delta=0.5, price=10.0)})
        result = tokens("request_market_data", {"id": 7, "contract": contract})
        assert result[14:18] == ["1", "5", "0.5", "10.0"]

    def test_missing_contract(self) -> None:
        with pytest.raises(MissingPayloadField) as excinfo:
            encode_message("request_market_data", {"id": 7})
        assert excinfo.value.field == "contract"
        assert excinfo.value.kind == "request_market_data"


class TestRequestMarketDepth:
    """request_market_depth: id 10, version 3."""

    def test_layout(self, stock: Contract) -> None:
        assert tokens("request_market_depth", {"id": 3, "contract": stock, "num_rows": 5}) == [
            "10", "3", "3", *STOCK_SHORT_TOKENS, "5",
        ]

    def test_missing_num_rows(self, stock: Contract) -> None:
        with pytest.raises(MissingPayloadField, match="num_rows"):
            encode_message("request_market_depth", {"id": 3, "contract": stock})


# ===================================================================
# Bar data
# ===================================================================


class TestRequestHistoricalData:
    """request_historical_data: id 20, version 4."""

    def test_layout(self, stock: Contract) -> None:
        result = tokens(
            "request_historical_data",
            {
                "id": 5,
                "contract": stock,
                "end_date_time": "20240102 16:00:00",
                "duration": "1 W",
                "bar_size": "one_day",
                "what_to_show": "Trades",
                "use_rth": 0,
                "format_date": 2,
            },
        )
        assert result == [
            "20", "4", "5", *STOCK_TOKENS,
            "0", "20240102 16:00:00", "11", "1 W", "0", "TRADES", "2",
        ]

    def test_defaults(self, stock: Contract) -> None:
        result = tokens(
            "request_historical_data",
            {"id": 5, "contract": stock, "bar_size": "one_hour", "what_to_show": "bid"},
        )
        assert len(result) == 20
        assert result[14:] == ["", "10", "1 D", "1", "BID", "1"]

    def test_contract_string(self) -> None:
        result = tokens(
            "request_historical_data",
            {
                "id": 5,
                "contract": "GBP:FUT:200809:::62500:GLOBEX::USD:",
                "bar_size": 11,
                "what_to_show": "midpoint",
            },
        )
        assert result[3:13] == ["GBP", "FUT", "200809", "0.0", "", "62500", "GLOBEX", "", "USD", ""]
        assert result[15] == "11"
        assert result[18] == "MIDPOINT"

    def test_bag_appends_legs(self, bag: Contract) -> None:
        result = tokens(
            "request_historical_data",
            {"id": 5, "contract": bag, "bar_size": "one_day", "what_to_show": "trades"},
        )
        assert result[20:] == ["2", "101", "1", "BUY", "SMART", "102", "1", "SELL", "SMART"]

    def test_include_expired(self, stock: Contract) -> None:
        contract = stock.model_copy(update={"include_expired": True})
        result = tokens(
            "request_historical_data",
            {"id": 5, "contract": contract, "bar_size": "day", "what_to_show": "ask"},
        )
        assert result[13] == "1"

    def test_bad_contract_string(self) -> None:
        with pytest.raises(InvalidContractString):
            encode_message(
                "request_historical_data",
                {"id": 5, "contract": "AAPL", "bar_size": "day", "what_to_show": "trades"},
            )

    def test_validation_precedes_contract(self) -> None:
        """An invalid bar size is reported even when the contract is missing."""
        with pytest.raises(InvalidEnumerationValue):
            encode_message(
                "request_historical_data",
                {"id": 5, "bar_size": "fortnight", "what_to_show": "trades"},
            )


class TestRequestRealTimeBars:
    """request_real_time_bars: id 50, version 1."""

    def test_layout(self, stock: Contract) -> None:
        result = tokens(
            "request_real_time_bars",
            {"id": 4, "contract": stock, "bar_size": "five_seconds", "what_to_show": "TRADES"},
        )
        assert result == ["50", "1", "4", *STOCK_TOKENS, "2", "TRADES", "1"]

    def test_what_to_show_rejected(self, stock: Contract) -> None:
        with pytest.raises(InvalidEnumerationValue) as excinfo:
            encode_message(
                "request_real_time_bars",
                {"id": 4, "contract": stock, "bar_size": "five_seconds", "what_to_show": "volume"},
            )
        assert excinfo.value.field == "what_to_show"


# ===================================================================
# Contract details, options, fundamentals
# ===================================================================


class TestRequestContractData:
    """request_contract_data: id 9, version 6."""

    def test_layout(self) -> None:
        contract = Contract(
            con_id=265598,
            symbol="AAPL",
            sec_type="STK",
            exchange="SMART",
            currency="USD",
            sec_id_type="ISIN",
            sec_id="US0378331005",
        )
        assert tokens("request_contract_details", {"id": 2, "contract": contract}) == [
            "9", "6", "2", "265598",
            "AAPL", "STK", "", "0.0", "", "", "SMART", "USD", "",
            "0", "ISIN", "US0378331005",
        ]


class TestExerciseOptions:
    """exercise_options: id 21, version 1."""

    def test_layout(self) -> None:
        contract = Contract.from_colon_string("IBM:OPT:20241220:150:C:100:SMART::USD:")
        result = tokens(
            "exercise_options",
            {
                "id": 11,
                "contract": contract,
                "exercise_action": 1,
                "exercise_quantity": 10,
                "account": "DU123",
                "override": 1,
            },
        )
        assert result == [
            "21", "1", "11",
            "IBM", "OPT", "20241220", "150.0", "C", "100", "SMART", "USD", "",
            "1", "10", "DU123", "1",
        ]

    def test_defaults(self, stock: Contract) -> None:
        result = tokens(
            "exercise_options",
            {"id": 11, "contract": stock, "exercise_action": 2, "exercise_quantity": 1},
        )
        assert result[-2:] == ["", "0"]


class TestRequestFundamentalData:
    """request_fundamental_data: id 52, version 1."""

    def test_layout(self) -> None:
        contract = Contract(
            symbol="IBM", sec_type="STK", exchange="SMART", primary_exchange="NYSE", currency="USD",
        )
        result = tokens(
            "request_fundamental_data",
            {"request_id": 8, "contract": contract, "report_type": "ReportSnapshot"},
        )
        assert result == ["52", "1", "8", "IBM", "STK", "SMART", "NYSE", "USD", "", "ReportSnapshot"]

    def test_id_fallback(self, stock: Contract) -> None:
        result = tokens(
            "request_fundamental_data", {"id": 9, "contract": stock, "report_type": "RESC"},
        )
        assert result[2] == "9"

    def test_missing_report_type(self, stock: Contract) -> None:
        with pytest.raises(MissingPayloadField, match="report_type"):
            encode_message("request_fundamental_data", {"request_id": 8, "contract": stock})


class TestOptionCalculations:
    """request_implied_volatility (54) and request_option_price (55)."""

    def test_implied_volatility(self, stock: Contract) -> None:
        result = tokens(
            "calculate_implied_volatility",
            {"request_id": 3, "contract": stock, "option_price": 2.5, "under_price": 100.0},
        )
        assert result == ["54", "1", "3", "0", *STOCK_TOKENS, "2.5", "100.0"]

    def test_option_price(self, stock: Contract) -> None:
        result = tokens(
            "request_option_price",
            {"request_id": 3, "contract": stock, "volatility": 0.3, "under_price": 100.0},
        )
        assert result == ["55", "1", "3", "0", *STOCK_TOKENS, "0.3", "100.0"]

    def test_nan_option_price_rejected(self, stock: Contract) -> None:
        with pytest.raises(UnencodableToken):
            encode_message(
                "request_implied_volatility",
                {"request_id": 1, "contract": stock, "option_price": float("nan"), "under_price": 1e20},
            )

    def test_missing_under_price(self, stock: Contract) -> None:
        with pytest.raises(MissingPayloadField, match="under_price"):
            encode_message(
                "request_option_price", {"request_id": 3, "contract": stock, "volatility": 0.3},
            )


# ===================================================================
# Executions and scanners
# ===================================================================


class TestRequestExecutions:
    """request_executions: id 7, version 3."""

    def test_with_request_id(self) -> None:
        flt = ExecutionFilter(client_id=2, acct_code="DU1", symbol="IBM", side="BUY")
        assert tokens("request_executions", {"id": 3, "filter": flt}) == [
            "7", "3", "3", "2", "DU1", "", "IBM", "", "", "BUY",
        ]

    def test_without_request_id(self) -> None:
        result = tokens("request_executions", {"filter": ExecutionFilter()})
        assert result == ["7", "3", "0", "", "", "", "", "", ""]

    def test_missing_filter(self) -> None:
        with pytest.raises(MissingPayloadField, match="filter"):
            encode_message("request_executions", {"id": 3})


class TestRequestScannerSubscription:
    """request_scanner_subscription: id 22, version 3."""

    def test_defaults_are_empty(self) -> None:
        result = tokens("request_scanner_subscription", {"id": 9, "subscription": ScannerSubscription()})
        assert result[:3] == ["22", "3", "9"]
        assert len(result) == 24
        assert result[3:] == [""] * 21

    def test_layout(self) -> None:
        sub = ScannerSubscription(
            number_of_rows=10,
            instrument="STK",
            location_code="STK.US.MAJOR",
            scan_code="TOP_PERC_GAIN",
            above_price=5.0,
            above_volume=100000,
            stock_type_filter="ALL",
        )
        result = tokens("request_scanner_subscription", {"id": 9, "subscription": sub})
        assert result[3:10] == ["10", "STK", "STK.US.MAJOR", "TOP_PERC_GAIN", "5.0", "", "100000"]
        assert result[-1] == "ALL"


# ===================================================================
# Orders
# ===================================================================


class TestPlaceOrder:
    """place_order: id 3, version 31."""

    @pytest.fixture
    def order(self) -> Order:
        return Order(action="BUY", total_quantity=100, order_type="LMT", limit_price=150.0)

    def test_header_and_length(self, stock: Contract, order: Order) -> None:
        result = tokens("place_order", {"id": 1001, "contract": stock, "order": order})
        assert result[:3] == ["3", "31", "1001"]
        assert len(result) == 76

    def test_main_fields(self, stock: Contract, order: Order) -> None:
        result = tokens("place_order", {"id": 1001, "contract": stock, "order": order})
        assert result[3:13] == STOCK_TOKENS
        assert result[15:20] == ["BUY", "100", "LMT", "150.0", "0.0"]
        assert result[23] == "O"
        assert result[26] == "1"

    def test_unset_fields_are_empty(self, stock: Contract, order: Order) -> None:
        result = tokens("place_order", {"id": 1001, "contract": stock, "order": order})
        for index in (48, 49, 52, 53, 54, 55, 56, 57, 58, 60, 61, 63, 65, 66, 67, 68, 69):
            assert result[index] == "", index

    def test_explicit_optional_values(self, stock: Contract) -> None:
        order = Order(min_quantity=10, volatility=0.2, volatility_type=2)
        result = tokens("place_order", {"id": 1, "contract": stock, "order": order})
        assert result[48] == "10"
        assert result[60] == "0.2"
        assert result[61] == "2"

    def test_tail(self, stock: Contract, order: Order) -> None:
        result = tokens("place_order", {"id": 1001, "contract": stock, "order": order})
        assert result[34] == ""
        assert result[73:] == ["0", "", "0"]

    def test_bag_sends_long_legs(self, bag: Contract, order: Order) -> None:
        result = tokens("place_order", {"id": 1001, "contract": bag, "order": order})
        assert len(result) == 76 + 15
        assert result[34:49] == [
            "2",
            "101", "1", "BUY", "SMART", "0", "0", "",
            "102", "1", "SELL", "SMART", "0", "0", "",
        ]
        assert result[49] == ""

    def test_algo(self, stock: Contract, order: Order) -> None:
        contract = stock.model_copy(
            update={"algo_strategy": "Vwap", "algo_params": [TagValue(tag="maxPctVol", value="0.1")]},
        )
        result = tokens("place_order", {"id": 1, "contract": contract, "order": order})
        assert result[74:] == ["Vwap", "1", "maxPctVol", "0.1", "0"]

    def test_what_if(self, stock: Contract) -> None:
        result = tokens("place_order", {"id": 1, "contract": stock, "order": Order(what_if=True)})
        assert result[-1] == "1"

    def test_missing_order(self, stock: Contract) -> None:
        with pytest.raises(MissingPayloadField, match="order"):
            encode_message("place_order", {"id": 1, "contract": stock})

    def test_inputs_not_mutated(self, stock: Contract, order: Order) -> None:
        before = (stock.model_dump(), order.model_dump())
        encode_message("place_order", {"id": 1, "contract": stock, "order": order})
        assert (stock.model_dump(), order.model_dump()) == before
