"""
Replaces factory functions on a library namespace with patched versions.
Transforms operate on canonical calls, so one transform can be applied to every factory.
"""

import typing as t

import structlog

from zipclone.library import FACTORIES, Transform, get_factory
from zipclone.namespace import get_symbol, set_symbol
from zipclone.normalize import to_canonical, to_native

log = structlog.get_logger(__name__)


def apply_patch(
    namespace: t.Any,
    factory_name: str,
    transform: Transform,
) -> t.Callable[..., t.Any]:
    """
    Patch one factory of ``namespace`` in place.

    The transform receives the current entry point adapted to a canonical call
    ``(primary, secondary, options, callback)`` and returns a canonical function.
    ``secondary`` is ``None`` for factories that do not take it and ``options`` is always a dict.

    Example::

        def mark(original):
            def patched(primary, secondary, options, callback):
                def done(err, zip_file=None):
                    if err is not None:
                        callback(err)
                        return
                    zip_file.marked = True
                    callback(None, zip_file)

                return original(primary, secondary, options, done)

            return patched

        apply_patch(library, "open", mark)

    Parameters
    ----------
    namespace : typing.Any
        Library namespace to mutate.
    factory_name : str
        One of ``open``, ``from_fd``, ``from_buffer`` or ``from_random_access_reader``.
    transform : Transform
        Function mapping a canonical adapter to a canonical patched function.

    Returns
    -------
    typing.Callable[..., typing.Any]
        New public entry point stored on the namespace.

    Raises
    ------
    UnknownFactoryError
        If ``factory_name`` is not a known factory.
    """
    descriptor = get_factory(name=factory_name)
    original = get_symbol(namespace, factory_name)
    patched = transform(to_canonical(descriptor=descriptor, original=original))
    public = to_native(descriptor=descriptor, canonical=patched, original=original)
    set_symbol(namespace, factory_name, public)
    log.debug(
        event="Factory patched",
        factory=factory_name,
        transform=getattr(transform, "__qualname__", repr(transform)),
    )
    return public


def apply_patch_to_all(namespace: t.Any, transform: Transform) -> None:
    """
    Patch every known factory of ``namespace`` with the same transform.

    Parameters
    ----------
    namespace : typing.Any
        Library namespace to mutate.
    transform : Transform
        Function mapping a canonical adapter to a canonical patched function.
    """
    for descriptor in FACTORIES:
        apply_patch(namespace=namespace, factory_name=descriptor.name, transform=transform)
