"""Outgoing message dispatcher -- the main entry point.

The dispatcher turns ``(kind, payload)`` into bytes and hands them to a
transport:

1. **Resolve** -- look the kind up in the registry
   (:class:`~tws_wire.core.errors.UnknownMessageKind` if absent).
2. **Encode** -- run the kind's encode procedure; enumeration validation
   happens here.
3. **Flatten + serialise** -- produce one ``bytes`` object of NUL
   terminated tokens.
4. **Write** -- a single ``transport.write(data)`` call.

Steps 1-3 finish before step 4 starts, so an encoding or validation error
never leaves a partial message on the wire.  Transport errors propagate
unchanged; there is no retry and no buffering across calls.  The
dispatcher holds no mutable state and may be shared between threads,
provided the transport serialises its writes.

Usage
-----
::

    from tws_wire import InMemoryTransport, send

    transport = InMemoryTransport()
    send("cancel_order", {"id": 42}, transport)
    transport.tokens()   # ['4', '1', '42']
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from tws_wire.core.config import ClientConfig
from tws_wire.messages.kinds import DEFAULT_REGISTRY
from tws_wire.wire.tokens import DEFAULT_ENCODING, TERMINATOR, encode_fields, split_tokens

if TYPE_CHECKING:
    from tws_wire.core.interfaces import Transport
    from tws_wire.messages.registry import MessageKind, MessageRegistry

logger = logging.getLogger(__name__)


def encode_message(
    kind: str | MessageKind,
    payload: Mapping[str, Any] | None = None,
    *,
    registry: MessageRegistry | None = None,
    encoding: str = DEFAULT_ENCODING,
) -> bytes:
    """Return the complete wire bytes for one message without sending them.

    Raises
    ------
    UnknownMessageKind
        If *kind* is not registered.
    EncodingError
        If the payload is incomplete, fails enumeration validation, or
        contains a value with no wire form.
    """
    definition = (registry if registry is not None else DEFAULT_REGISTRY).resolve(kind)
    return encode_fields(definition.encode(payload), encoding=encoding)


def send(
    kind: str | MessageKind,
    payload: Mapping[str, Any] | None,
    transport: Transport,
    *,
    registry: MessageRegistry | None = None,
    encoding: str = DEFAULT_ENCODING,
) -> bytes:
    """Encode one message and write it to *transport* in a single call.

    Returns the bytes that were written.  Any exception raised by
    ``transport.write`` reaches the caller unchanged.
    """
    data = encode_message(kind, payload, registry=registry, encoding=encoding)
    transport.write(data)
    return data


class MessageDispatcher:
    """Binds a transport, a registry and a configuration.

    Parameters
    ----------
    transport:
        Destination of every encoded message.
    config:
        Client configuration; only ``encoding`` and ``log_messages`` are
        used here.
    registry:
        Kinds this dispatcher accepts.  Defaults to
        :data:`~tws_wire.messages.kinds.DEFAULT_REGISTRY`.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        config: ClientConfig | None = None,
        registry: MessageRegistry | None = None,
    ) -> None:
        self._transport = transport
        self._config = config or ClientConfig()
        self._registry = registry if registry is not None else DEFAULT_REGISTRY

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def registry(self) -> MessageRegistry:
        return self._registry

    def encode(self, kind: str | MessageKind, payload: Mapping[str, Any] | None = None) -> bytes:
        """Return the wire bytes for *kind* and *payload* without sending."""
        return encode_message(
            kind, payload, registry=self._registry, encoding=self._config.encoding
        )

    def send(self, kind: str | MessageKind, payload: Mapping[str, Any] | None = None) -> bytes:
        """Encode and write one message; return the bytes written."""
        definition = self._registry.resolve(kind)
        data = encode_fields(definition.encode(payload), encoding=self._config.encoding)
        if logger.isEnabledFor(logging.DEBUG):
            if self._config.log_messages:
                logger.debug(
                    "-> %s (id=%d v=%d) %s",
                    definition.name, definition.message_id, definition.version,
                    split_tokens(data, encoding=self._config.encoding),
                )
            else:
                logger.debug(
                    "-> %s (id=%d v=%d, %d tokens)",
                    definition.name, definition.message_id, definition.version,
                    data.count(TERMINATOR),
                )
        self._transport.write(data)
        return data

    def __getattr__(self, name: str) -> Any:
        """Expose every registered kind as a method: ``dispatcher.cancel_order(id=42)``."""
        if name.startswith("_") or name not in self._registry:
            raise AttributeError(name)

        def _send(**payload: Any) -> bytes:
            return self.send(name, payload)

        _send.__name__ = name
        return _send
