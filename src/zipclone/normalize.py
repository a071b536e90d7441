"""
Adapts the factories' native calling conventions to one canonical shape.
Canonical calls are ``(primary, secondary, options, callback)`` whatever the native arity,
so a transform written once covers every factory.
"""

import functools
import typing as t

from zipclone.library import Callback, CanonicalFactory, FactoryDescriptor, Options


def conform_options(options: t.Any, callback: Callback | None) -> tuple[Options, Callback | None]:
    """
    Apply the optional-argument rules shared by every factory.

    Parameters
    ----------
    options : typing.Any
        Options as passed by the caller. May be the callback when options were omitted.
    callback : Callback | None
        Completion callback as passed by the caller.

    Returns
    -------
    tuple[Options, Callback | None]
        Options dictionary and callback.
    """
    if callable(options):
        return {}, options
    if not options:
        return {}, callback
    return options, callback


def to_canonical(
    descriptor: FactoryDescriptor,
    original: t.Callable[..., t.Any],
) -> CanonicalFactory:
    """
    Wrap a native factory so it can be driven with a canonical call.

    Parameters
    ----------
    descriptor : FactoryDescriptor
        Descriptor of the wrapped factory.
    original : typing.Callable[..., typing.Any]
        Native factory (or a previously patched public entry point).

    Returns
    -------
    CanonicalFactory
        Adapter taking ``(primary, secondary, options, callback)``.
    """
    if descriptor.has_secondary:
        return original

    @functools.wraps(original)
    def canonical(primary: t.Any, secondary: t.Any, options: Options, callback: Callback) -> t.Any:
        del secondary
        return original(primary, options, callback)

    return canonical


def to_native(
    descriptor: FactoryDescriptor,
    canonical: CanonicalFactory,
    original: t.Callable[..., t.Any],
) -> t.Callable[..., t.Any]:
    """
    Expose a canonical function under the native arity of a factory.

    Parameters
    ----------
    descriptor : FactoryDescriptor
        Descriptor of the factory being replaced.
    canonical : CanonicalFactory
        Patched canonical function.
    original : typing.Callable[..., typing.Any]
        Entry point being replaced, used for the public name and signature.

    Returns
    -------
    typing.Callable[..., typing.Any]
        Public entry point accepting the native parameters.
    """
    if descriptor.has_secondary:

        @functools.wraps(original)
        def native_with_secondary(
            primary: t.Any,
            secondary: t.Any,
            options: t.Any = None,
            callback: Callback | None = None,
        ) -> t.Any:
            options, callback = conform_options(options, callback)
            return canonical(primary, secondary, options, callback)

        return native_with_secondary

    @functools.wraps(original)
    def native(primary: t.Any, options: t.Any = None, callback: Callback | None = None) -> t.Any:
        options, callback = conform_options(options, callback)
        return canonical(primary, None, options, callback)

    return native
