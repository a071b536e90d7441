"""
Composition facade.
Exposes ``configure`` which clones a library namespace and installs the retyping patches.
"""

import typing as t

import structlog

from zipclone.events import ensure_event_intercept
from zipclone.exceptions import InvalidSubclassError
from zipclone.library import CONTAINER_ATTR, ITEM_ATTR
from zipclone.models import CloneOptions
from zipclone.namespace import copy_namespace, get_symbol, set_symbol
from zipclone.patching import apply_patch_to_all
from zipclone.relabel import relabel_items
from zipclone.retype import retype_container

log = structlog.get_logger(__name__)


def derive_subclass(base: type, supplied: type | None = None) -> type:
    """
    Resolve the subtype that replaces ``base``.

    Parameters
    ----------
    base : type
        Library type being replaced.
    supplied : type | None, optional
        Caller-supplied subtype. A plain subclass named after ``base`` is derived when omitted.

    Returns
    -------
    type
        Subclass of ``base``.

    Raises
    ------
    InvalidSubclassError
        If ``supplied`` does not subclass ``base``.
    """
    if supplied is not None:
        if not isinstance(supplied, type) or not issubclass(supplied, base):
            raise InvalidSubclassError(supplied=supplied, base=base)
        return supplied

    subclass = type(
        base.__name__,
        (base,),
        {"__module__": __name__, "__qualname__": base.__qualname__},
    )
    log.debug(event="Subtype derived", base=base.__qualname__)
    return subclass


def _resolve_options(
    options: CloneOptions | t.Mapping[str, t.Any] | None,
    overrides: dict[str, t.Any],
) -> CloneOptions:
    if isinstance(options, CloneOptions):
        if not overrides:
            return options
        options = options.model_dump(exclude_unset=True)
    return CloneOptions.model_validate({**(options or {}), **overrides})


def configure(
    namespace: t.Any,
    options: CloneOptions | t.Mapping[str, t.Any] | None = None,
    **overrides: t.Any,
) -> t.Any:
    """
    Clone the archive library namespace and optionally retype what it produces.

    With ``retype_container`` every factory delivers an instance of a ``ZipFile`` subclass,
    stored back on the namespace as ``ZipFile``.<br>
    With ``retype_payload_item`` every ``entry`` event carries an instance of an ``Entry``
    subclass, stored back on the namespace as ``Entry``.

    Parameters
    ----------
    namespace : typing.Any
        Library module, mapping or attribute object.
    options : CloneOptions | typing.Mapping[str, typing.Any] | None, optional
        Options, see :class:`zipclone.models.CloneOptions`.
    **overrides : typing.Any
        Options given as keyword arguments. They take precedence over ``options``.

    Returns
    -------
    typing.Any
        The configured namespace.<br>
        This is ``namespace`` itself when ``copy_namespace`` is ``False``.
    """
    resolved = _resolve_options(options=options, overrides=overrides)

    if resolved.copy_namespace:
        namespace = copy_namespace(namespace)
        log.debug(event="Namespace copied", namespace=type(namespace).__name__)

    if resolved.retype_container:
        container_type = derive_subclass(
            base=get_symbol(namespace, CONTAINER_ATTR),
            supplied=resolved.container_type,
        )
        if resolved.enable_event_relabel_infrastructure:
            container_type = ensure_event_intercept(container_type)
        set_symbol(namespace, CONTAINER_ATTR, container_type)
        apply_patch_to_all(
            namespace=namespace,
            transform=lambda original: retype_container(original, container_type),
        )

    if resolved.retype_payload_item:
        item_type = derive_subclass(
            base=get_symbol(namespace, ITEM_ATTR),
            supplied=resolved.item_type,
        )
        set_symbol(namespace, ITEM_ATTR, item_type)
        apply_patch_to_all(
            namespace=namespace,
            transform=lambda original: relabel_items(original, item_type),
        )

    return namespace


clone = configure
