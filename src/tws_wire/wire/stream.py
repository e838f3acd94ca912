"""TCP socket transport for outgoing gateway messages.

:class:`SocketTransport` is the production implementation of the
:class:`~tws_wire.core.interfaces.Transport` interface.  It owns nothing
but the write side of a connected socket:

* every :meth:`~SocketTransport.write` is one blocking ``sendall``;
* an ``OSError`` from the socket becomes
  :class:`~tws_wire.core.errors.TransportWriteFailure` (chained), with
  delivery state unknown;
* a connect that fails in :meth:`~SocketTransport.connect` raises
  :class:`~tws_wire.core.errors.TransportConnectFailure` instead;
* there is no buffering, retrying, or reconnecting.

The connection handshake (client version, client id) and the reader
thread for incoming messages belong to the connection layer that owns the
socket, not to this module.
"""
from __future__ import annotations

import logging
import socket
from types import TracebackType

from tws_wire.core.config import ClientConfig
from tws_wire.core.errors import TransportClosed, TransportConnectFailure, TransportWriteFailure

logger = logging.getLogger(__name__)


class SocketTransport:
    """Writes encoded messages to a connected stream socket.

    Parameters
    ----------
    sock:
        A connected :class:`socket.socket`.  The transport takes
        ownership and closes it in :meth:`close`.
    """

    def __init__(self, sock: socket.socket) -> None:
        self._sock: socket.socket | None = sock

    @classmethod
    def connect(cls, config: ClientConfig | None = None) -> SocketTransport:
        """Open a TCP connection to the gateway described by *config*.

        Raises
        ------
        TransportConnectFailure
            If the connection cannot be established.
        """
        config = config or ClientConfig()
        try:
            sock = socket.create_connection(
                (config.host, config.port),
                timeout=config.connect_timeout,
            )
        except OSError as exc:
            raise TransportConnectFailure(
                f"Could not connect to {config.host}:{config.port}: {exc}",
                details={"host": config.host, "port": config.port},
            ) from exc
        # Writes block; the connect timeout only bounds the handshake.
        sock.settimeout(None)
        logger.debug("Connected to %s:%d", config.host, config.port)
        return cls(sock)

    def write(self, data: bytes) -> None:
        """Send *data* in full.

        Raises
        ------
        TransportClosed
            If :meth:`close` has been called.
        TransportWriteFailure
            If the socket reports an error; some bytes may have been sent.
        """
        if self._sock is None:
            raise TransportClosed()
        try:
            self._sock.sendall(data)
        except OSError as exc:
            raise TransportWriteFailure(
                f"Socket write of {len(data)} bytes failed: {exc}",
                details={"size": len(data)},
            ) from exc

    def close(self) -> None:
        """Close the socket.  Safe to call more than once."""
        if self._sock is None:
            return
        sock, self._sock = self._sock, None
        sock.close()
        logger.debug("Socket transport closed")

    @property
    def closed(self) -> bool:
        return self._sock is None

    def __enter__(self) -> SocketTransport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
