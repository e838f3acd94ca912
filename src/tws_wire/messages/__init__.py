"""tws-wire outgoing messages -- kind records, registry and body encoders.

This subpackage implements the variant set of outgoing gateway requests.
It provides:

* **MessageKind** / **FieldSpec** / **SubjectPolicy** -- the immutable
  record describing one kind (:mod:`~tws_wire.messages.registry`).
* **MessageRegistry** -- name and id lookup with aliases.
* **DEFAULT_REGISTRY** -- every kind the client can send, frozen at
  import time (:mod:`~tws_wire.messages.kinds`).
* **Body encoders** for kinds with bespoke layouts
  (:mod:`~tws_wire.messages.encoders`).
"""
from __future__ import annotations

from tws_wire.messages.kinds import DEFAULT_REGISTRY, build_registry
from tws_wire.messages.registry import (
    REQUIRED,
    FieldSpec,
    MessageKind,
    MessageRegistry,
    SubjectPolicy,
    require,
)

__all__ = [
    "DEFAULT_REGISTRY",
    "build_registry",
    "MessageKind",
    "MessageRegistry",
    "FieldSpec",
    "SubjectPolicy",
    "REQUIRED",
    "require",
]
