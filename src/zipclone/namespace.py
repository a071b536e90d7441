"""
Uniform access to a library namespace.
A namespace may be a module, a mapping, or any object exposing attributes.
"""

import copy
import types
import typing as t
from collections.abc import Mapping, MutableMapping


def get_symbol(namespace: t.Any, name: str) -> t.Any:
    if isinstance(namespace, Mapping):
        return namespace[name]
    return getattr(namespace, name)


def set_symbol(namespace: t.Any, name: str, value: t.Any) -> None:
    if isinstance(namespace, MutableMapping):
        namespace[name] = value
    else:
        setattr(namespace, name, value)


def copy_namespace(namespace: t.Any) -> t.Any:
    """
    Shallow-copy a namespace so it can be patched without touching the original.

    Parameters
    ----------
    namespace : typing.Any
        Module, mapping or attribute object.

    Returns
    -------
    typing.Any
        New namespace of the same kind whose values are the original objects.
    """
    if isinstance(namespace, types.ModuleType):
        clone = types.ModuleType(namespace.__name__, namespace.__doc__)
        clone.__dict__.update(vars(namespace))
        return clone
    if isinstance(namespace, Mapping):
        return dict(namespace)
    return copy.copy(namespace)
