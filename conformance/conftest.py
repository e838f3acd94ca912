"""Shared fixtures for tws-wire conformance tests.

Provides an in-memory transport, a dispatcher bound to it, representative
domain objects, and a minimal valid payload for every registered kind.
"""
from __future__ import annotations

from typing import Any

import pytest

from tws_wire.core.interfaces import InMemoryTransport
from tws_wire.core.types import (
    ComboLeg,
    Contract,
    ExecutionFilter,
    Order,
    ScannerSubscription,
)
from tws_wire.dispatcher import MessageDispatcher

# ---------------------------------------------------------------------------
# Transport fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def transport() -> InMemoryTransport:
    return InMemoryTransport()


@pytest.fixture()
def dispatcher(transport: InMemoryTransport) -> MessageDispatcher:
    return MessageDispatcher(transport)


# ---------------------------------------------------------------------------
# Domain objects
# ---------------------------------------------------------------------------
@pytest.fixture()
def contract() -> Contract:
    return Contract(symbol="AAPL", sec_type="STK", exchange="SMART", currency="USD")


@pytest.fixture()
def bag_contract() -> Contract:
    return Contract(symbol="SPY", sec_type="BAG", exchange="SMART", currency="USD")


@pytest.fixture()
def combo_contract() -> Contract:
    return Contract(
        symbol="SPY",
        sec_type="BAG",
        exchange="SMART",
        currency="USD",
        combo_legs=[ComboLeg(con_id=1, ratio=1, action="BUY", exchange="SMART")],
    )


@pytest.fixture()
def order() -> Order:
    return Order(action="BUY", total_quantity=100, order_type="MKT")


# ---------------------------------------------------------------------------
# Minimal payloads, keyed by canonical kind name
# ---------------------------------------------------------------------------
@pytest.fixture()
def minimal_payloads(contract: Contract, order: Order) -> dict[str, dict[str, Any]]:
    bars = {"id": 1, "contract": contract, "bar_size": "one_day", "what_to_show": "trades"}
    return {
        "request_market_data": {"id": 1, "contract": contract},
        "cancel_market_data": {"id": 1},
        "place_order": {"id": 1, "contract": contract, "order": order},
        "cancel_order": {"id": 1},
        "request_open_orders": {},
        "request_account_data": {"subscribe": True},
        "request_executions": {"filter": ExecutionFilter()},
        "request_ids": {"number_of_ids": 1},
        "request_contract_data": {"id": 1, "contract": contract},
        "request_market_depth": {"id": 1, "contract": contract, "num_rows": 5},
        "cancel_market_depth": {"id": 1},
        "request_news_bulletins": {"all_messages": True},
        "cancel_news_bulletins": {},
        "set_server_loglevel": {"log_level": 3},
        "request_auto_open_orders": {"auto_bind": True},
        "request_all_open_orders": {},
        "request_managed_accounts": {},
        "request_fa": {"fa_data_type": "groups"},
        "replace_fa": {"fa_data_type": "groups", "xml": "<ListOfGroups/>"},
        "request_historical_data": dict(bars),
        "exercise_options": {
            "id": 1, "contract": contract, "exercise_action": 1, "exercise_quantity": 1,
        },
        "request_scanner_subscription": {"id": 1, "subscription": ScannerSubscription()},
        "cancel_scanner_subscription": {"id": 1},
        "request_scanner_parameters": {},
        "cancel_historical_data": {"id": 1},
        "request_current_time": {},
        "request_real_time_bars": dict(bars),
        "cancel_real_time_bars": {"id": 1},
        "request_fundamental_data": {
            "request_id": 1, "contract": contract, "report_type": "ReportsFinSummary",
        },
        "cancel_fundamental_data": {"id": 1},
        "request_implied_volatility": {
            "request_id": 1, "contract": contract, "option_price": 1.5, "under_price": 100.0,
        },
        "request_option_price": {
            "request_id": 1, "contract": contract, "volatility": 0.2, "under_price": 100.0,
        },
        "cancel_implied_volatility": {"id": 1},
        "cancel_option_price": {"id": 1},
        "request_global_cancel": {},
    }
