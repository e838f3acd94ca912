"""Message kind records and the registry that resolves them.

A :class:`MessageKind` is an immutable record of everything the gateway
needs to recognise an outgoing message: its numeric id, its protocol
version, whether it carries a subject identifier, and how its body is
built.  The body comes from exactly one of two sources:

* ``fields`` -- an ordered tuple of :class:`FieldSpec` read from the
  payload by name (most simple requests and cancellations);
* ``encoder`` -- a plain function of ``(payload, kind)`` for messages with
  bespoke layouts (orders, historical data, scanner subscriptions, ...).

The id/version pair is a contract with the remote gateway.  It never
changes at run time, and the number and order of fields produced for a
pair must match what the gateway expects exactly.
"""
from __future__ import annotations

import enum
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from tws_wire.core.errors import (
    DuplicateMessageKind,
    MissingPayloadField,
    RegistryError,
    UnknownMessageKind,
)


class _Required:
    """Marker for a :class:`FieldSpec` without a default."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "REQUIRED"


REQUIRED: Any = _Required()


class SubjectPolicy(enum.StrEnum):
    """Whether, and from where, a message carries its subject identifier.

    * **NONE** -- no subject token; an ``id`` in the payload is ignored.
    * **REQUIRED** -- ``payload["id"]`` (ticker, order or request id) must
      be present.
    * **OPTIONAL** -- the subject token is sent only if ``id`` is present.
    * **REQUEST_ID** -- ``payload["request_id"]`` must be present
      (``id`` is accepted as a fallback).
    """

    NONE = "none"
    REQUIRED = "required"
    OPTIONAL = "optional"
    REQUEST_ID = "request_id"


@dataclass(frozen=True)
class FieldSpec:
    """One named payload field of a data-driven message kind.

    ``convert`` is applied to the payload value (or the default) before it
    is placed in the body; it may raise an encoding error.  A payload value
    of ``None`` counts as absent, so it takes the default when there is one.
    """

    name: str
    default: Any = REQUIRED
    convert: Callable[[Any], Any] | None = None


Encoder = Callable[[Mapping[str, Any], "MessageKind"], list[Any]]


def require(payload: Mapping[str, Any], key: str, kind: str | None = None) -> Any:
    """Return ``payload[key]``; raise :class:`MissingPayloadField` if absent or ``None``."""
    value = payload.get(key)
    if value is None:
        raise MissingPayloadField(key, kind=kind)
    return value


@dataclass(frozen=True)
class MessageKind:
    """Immutable definition of one outgoing message kind."""

    name: str
    message_id: int
    version: int = 1
    subject: SubjectPolicy = SubjectPolicy.REQUIRED
    fields: tuple[FieldSpec, ...] = ()
    encoder: Encoder | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.message_id <= 0 or self.version <= 0:
            raise ValueError(
                f"{self.name}: message id and version must be positive "
                f"(got {self.message_id}, {self.version})"
            )
        if self.fields and self.encoder is not None:
            raise ValueError(f"{self.name}: define either fields or an encoder, not both")

    @property
    def id(self) -> int:
        """The numeric wire identifier."""
        return self.message_id

    def header(self, payload: Mapping[str, Any]) -> list[Any]:
        """Return ``[message_id, version]`` plus the subject id when carried."""
        head: list[Any] = [self.message_id, self.version]
        if self.subject is SubjectPolicy.REQUIRED:
            head.append(require(payload, "id", self.name))
        elif self.subject is SubjectPolicy.OPTIONAL:
            if payload.get("id") is not None:
                head.append(payload["id"])
        elif self.subject is SubjectPolicy.REQUEST_ID:
            subject = payload.get("request_id")
            if subject is None:
                subject = require(payload, "id", self.name)
            head.append(subject)
        return head

    def body(self, payload: Mapping[str, Any]) -> list[Any]:
        """Return the kind-specific fields that follow the header."""
        if self.encoder is not None:
            return self.encoder(payload, self)
        values: list[Any] = []
        for field_spec in self.fields:
            value = payload.get(field_spec.name)
            if value is None:
                value = field_spec.default
            if value is REQUIRED or value is None:
                raise MissingPayloadField(field_spec.name, kind=self.name)
            if field_spec.convert is not None:
                value = field_spec.convert(value)
            values.append(value)
        return values

    def encode(self, payload: Mapping[str, Any] | None = None) -> list[Any]:
        """Return the full, still nested, field sequence for *payload*.

        The first two elements are always the message id and version.
        Nothing here writes to a transport, and *payload* is not mutated.
        """
        payload = payload if payload is not None else {}
        return [*self.header(payload), *self.body(payload)]


class MessageRegistry:
    """Name-to-kind lookup for outgoing messages.

    Several names may resolve to the same :class:`MessageKind` when the
    gateway treats two client operations identically on the wire.  Once
    :meth:`freeze` has been called the registry rejects new names.
    """

    def __init__(self) -> None:
        self._by_name: dict[str, MessageKind] = {}
        self._by_id: dict[int, MessageKind] = {}
        self._frozen = False

    def register(self, kind: MessageKind, *aliases: str) -> MessageKind:
        """Add *kind* under its own name and any *aliases*.

        Raises
        ------
        DuplicateMessageKind
            If a name or the message id is already taken.
        RegistryError
            If the registry is frozen.
        """
        self._check_open()
        existing = self._by_id.get(kind.message_id)
        if existing is not None:
            raise DuplicateMessageKind(
                f"Message id {kind.message_id} is already registered as {existing.name!r}",
                details={"message_id": kind.message_id, "name": kind.name},
            )
        self._add_name(kind.name, kind)
        self._by_id[kind.message_id] = kind
        for alias in aliases:
            self._add_name(alias, kind)
        return kind

    def alias(self, alias: str, name: str) -> MessageKind:
        """Make *alias* resolve to the kind registered as *name*."""
        self._check_open()
        kind = self.get(name)
        self._add_name(alias, kind)
        return kind

    def freeze(self) -> MessageRegistry:
        """Reject any further registration and return ``self``."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -- lookup ---------------------------------------------------------

    def get(self, name: str) -> MessageKind:
        """Return the kind registered as *name*.

        Raises :class:`UnknownMessageKind` if there is none.
        """
        try:
            return self._by_name[name]
        except (KeyError, TypeError):
            raise UnknownMessageKind(
                f"Unknown message kind: {name!r}",
                details={"kind": repr(name)},
            ) from None

    def resolve(self, kind: str | MessageKind) -> MessageKind:
        """Return *kind* itself if it is a registered record, else look it up by name."""
        if isinstance(kind, MessageKind):
            if self._by_name.get(kind.name) is not kind:
                raise UnknownMessageKind(
                    f"Message kind {kind.name!r} is not registered here",
                    details={"kind": kind.name},
                )
            return kind
        return self.get(kind)

    def by_id(self, message_id: int) -> MessageKind:
        """Return the kind with numeric *message_id*."""
        try:
            return self._by_id[message_id]
        except KeyError:
            raise UnknownMessageKind(
                f"No message kind with id {message_id}",
                details={"message_id": message_id},
            ) from None

    def names(self) -> list[str]:
        """All registered names, aliases included, sorted."""
        return sorted(self._by_name)

    def aliases_of(self, name: str) -> list[str]:
        """Every name that resolves to the same kind as *name*, sorted."""
        kind = self.get(name)
        return sorted(n for n, k in self._by_name.items() if k is kind)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[MessageKind]:
        """Iterate over distinct kinds in message-id order."""
        return iter(sorted(self._by_id.values(), key=lambda k: k.message_id))

    def __len__(self) -> int:
        return len(self._by_id)

    # -- internals ------------------------------------------------------

    def _check_open(self) -> None:
        if self._frozen:
            raise RegistryError("Message registry is frozen")

    def _add_name(self, name: str, kind: MessageKind) -> None:
        if name in self._by_name:
            raise DuplicateMessageKind(
                f"Message kind name {name!r} is already registered",
                details={"name": name},
            )
        self._by_name[name] = kind
