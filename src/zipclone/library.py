"""
Describes the surface of the wrapped archive library.
Four factory functions produce a ``ZipFile`` container via an error-first callback.
Their parameter lists differ: three take ``(primary, options, callback)`` and
``from_random_access_reader`` takes ``(reader, total_size, options, callback)``.
"""

from __future__ import annotations

import typing as t
from dataclasses import dataclass

from zipclone.exceptions import UnknownFactoryError

CONTAINER_ATTR = "ZipFile"
ITEM_ATTR = "Entry"

# Option key and instance attribute controlling manual ("lazy") entry delivery
MANUAL_DELIVERY_OPTION = "lazy_entries"
DELIVER_NEXT_METHOD = "_read_entry"
ITEM_EVENT = "entry"

# (primary, secondary, options, callback)
CANONICAL_ARITY = 4

Options = dict[str, t.Any]
Callback = t.Callable[..., t.Any]
CanonicalFactory = t.Callable[[t.Any, t.Any, Options, Callback], t.Any]
Transform = t.Callable[[CanonicalFactory], CanonicalFactory]


@dataclass(frozen=True)
class FactoryDescriptor:
    """
    Static description of one factory function.

    Parameters
    ----------
    name : str
        Attribute name of the factory on the library namespace.
    arity : int
        Number of native positional parameters, callback included.
    """

    name: str
    arity: int

    def __post_init__(self) -> None:
        if self.arity not in (CANONICAL_ARITY - 1, CANONICAL_ARITY):
            raise ValueError(f"Factory {self.name!r} has unsupported arity {self.arity}")

    @property
    def secondary_position(self) -> int | None:
        """Position of the extra positional argument, ``None`` for short factories."""
        return 1 if self.arity == CANONICAL_ARITY else None

    @property
    def has_secondary(self) -> bool:
        return self.secondary_position is not None


FACTORIES: tuple[FactoryDescriptor, ...] = (
    FactoryDescriptor(name="open", arity=3),
    FactoryDescriptor(name="from_fd", arity=3),
    FactoryDescriptor(name="from_buffer", arity=3),
    FactoryDescriptor(name="from_random_access_reader", arity=4),
)

_FACTORIES_BY_NAME: dict[str, FactoryDescriptor] = {factory.name: factory for factory in FACTORIES}


def get_factory(name: str) -> FactoryDescriptor:
    """
    Look up the descriptor of a known factory.

    Parameters
    ----------
    name : str
        Factory name.

    Returns
    -------
    FactoryDescriptor
        Matching descriptor.

    Raises
    ------
    UnknownFactoryError
        If ``name`` is not one of the four known factories.
    """
    try:
        return _FACTORIES_BY_NAME[name]
    except KeyError:
        raise UnknownFactoryError(name=name, known=tuple(_FACTORIES_BY_NAME)) from None


@t.runtime_checkable
class EventEmitting(t.Protocol):
    """Minimal event surface shared by containers."""

    def on(self, event: str, listener: t.Callable[..., t.Any]) -> t.Any: ...

    def emit(self, event: str, *args: t.Any) -> t.Any: ...


@t.runtime_checkable
class Container(EventEmitting, t.Protocol):
    """Surface of the library's ``ZipFile`` that retyping relies on."""

    lazy_entries: bool

    def _read_entry(self) -> t.Any: ...
