#!/usr/bin/env python3
"""tws-wire quickstart -- encoding outgoing gateway requests.

Demonstrates the core workflow:

1. Create a dispatcher bound to an in-memory transport.
2. Send simple requests (current time, next order ids).
3. Request historical bars using display-string enumeration values.
4. Place a limit order.
5. Watch a validation error stop a bad request before any bytes are written.

Run:
    python examples/quickstart.py

To talk to a running gateway instead, replace the transport with
``SocketTransport.connect(ClientConfig(port=7497))``.  The connection
handshake is not part of this library.
"""
from __future__ import annotations

import logging

from tws_wire import (
    ClientConfig,
    Contract,
    InMemoryTransport,
    InvalidEnumerationValue,
    MessageDispatcher,
    Order,
)


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    # -- Step 1: Create the dispatcher --------------------------------------
    transport = InMemoryTransport()
    dispatcher = MessageDispatcher(transport, config=ClientConfig(log_messages=True))
    print("[1] Dispatcher created")

    # -- Step 2: Simple requests --------------------------------------------
    dispatcher.request_current_time()
    dispatcher.request_ids(number_of_ids=1)
    print(f"[2] Simple requests: {transport.tokens()}")
    transport.clear()

    # -- Step 3: Historical bars --------------------------------------------
    aapl = Contract(symbol="AAPL", sec_type="STK", exchange="SMART", currency="USD")
    dispatcher.request_historical_data(
        id=1,
        contract=aapl,
        duration="1 W",
        bar_size="1 hour",
        what_to_show="Trades",
    )
    print(f"[3] Historical data request: {transport.tokens()}")
    transport.clear()

    # -- Step 4: Place an order ---------------------------------------------
    order = Order(action="BUY", total_quantity=100, order_type="LMT", limit_price=150.0)
    data = dispatcher.place_order(id=1001, contract=aapl, order=order)
    tokens = transport.tokens()
    print(f"[4] Order sent: {len(data)} bytes, {len(tokens)} tokens")
    transport.clear()

    # -- Step 5: Validation failure -----------------------------------------
    try:
        dispatcher.request_historical_data(
            id=2, contract=aapl, bar_size="two_days", what_to_show="Trades",
        )
    except InvalidEnumerationValue as exc:
        print(f"[5] Rejected: [{exc.code}] {exc.message}")
    print(f"    bytes written: {len(transport.data)}")


if __name__ == "__main__":
    main()
