"""tws-wire abstract interfaces and in-memory implementations.

This module defines the *structural* interface (``typing.Protocol``) of the
transport the dispatcher writes to, plus an in-memory implementation
suitable for testing and local development.

The Protocol class is decorated with ``@runtime_checkable`` so that
``isinstance`` checks work at run-time in addition to static analysis.

The in-memory implementation is **not** thread-safe.  The dispatcher does
not serialise writes either; callers that share one transport between
threads must serialise sends themselves.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from tws_wire.core.errors import TransportClosed
from tws_wire.wire.tokens import split_tokens

# ===================================================================
# Protocol (interface) definitions
# ===================================================================

@runtime_checkable
class Transport(Protocol):
    """Sink for encoded outgoing messages.

    Implementations write *data* to the underlying stream synchronously
    and raise :class:`~tws_wire.core.errors.TransportWriteFailure` (or
    another :class:`~tws_wire.core.errors.TransportError`) if the write
    cannot complete.  They MUST NOT retry on the dispatcher's behalf.
    """

    def write(self, data: bytes) -> None:
        """Write *data* to the stream in full or raise."""
        ...


# ===================================================================
# In-memory implementation (testing / development)
# ===================================================================

class InMemoryTransport:
    """In-memory transport that records every write.

    Writes are held in a plain ``list``.  Setting ``fail_with`` makes the
    next writes raise that exception instead, which lets tests exercise
    the failure path without a socket.
    """

    def __init__(self) -> None:
        self._writes: list[bytes] = []
        self._closed = False
        self.fail_with: Exception | None = None

    # -- Protocol implementation ---------------------------------------

    def write(self, data: bytes) -> None:
        """Record *data*, or raise if the transport is closed or failing."""
        if self._closed:
            raise TransportClosed("In-memory transport is closed")
        if self.fail_with is not None:
            raise self.fail_with
        self._writes.append(bytes(data))

    # -- inspection helpers (not part of the Protocol) -----------------

    @property
    def writes(self) -> list[bytes]:
        """Each write call's data, in order (test helper)."""
        return list(self._writes)

    @property
    def data(self) -> bytes:
        """Everything written so far, concatenated (test helper)."""
        return b"".join(self._writes)

    def tokens(self) -> list[str]:
        """Split everything written so far into decoded tokens (test helper)."""
        return split_tokens(self.data)

    def clear(self) -> None:
        """Forget all recorded writes (test helper)."""
        self._writes.clear()

    def close(self) -> None:
        """Reject any further writes with :class:`TransportClosed`."""
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

