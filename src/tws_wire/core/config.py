"""tws-wire client configuration.

Defines the validated configuration model shared by the socket transport
and the dispatcher.  A default-constructed instance targets a gateway
running on the local machine.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ClientConfig(BaseModel):
    """Configuration for a gateway client.

    The encoder itself needs nothing but ``encoding``; the remaining
    fields describe where :class:`~tws_wire.wire.stream.SocketTransport`
    connects.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    host: str = Field(
        default="127.0.0.1",
        description="Gateway host name or address.",
    )
    port: int = Field(
        default=7496,
        ge=1,
        le=65535,
        description="Gateway API port (7496 live TWS, 7497 paper by convention).",
    )
    client_id: int = Field(
        default=0,
        ge=0,
        description="Client id announced to the gateway by the connection layer.",
    )
    connect_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Seconds to wait for the TCP connection to be established.",
    )
    encoding: str = Field(
        default="ascii",
        description="Text encoding applied to every wire token.",
    )
    log_messages: bool = Field(
        default=False,
        description=(
            "When True, the dispatcher's debug log line includes the "
            "rendered tokens of every outgoing message."
        ),
    )
