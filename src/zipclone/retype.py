"""
Retypes containers produced by the factories.
A freshly opened ``ZipFile`` is transplanted into an instance of a subtype and the
original instance keeps forwarding its internal events to the new one.
"""

import typing as t

import structlog

from zipclone.library import (
    DELIVER_NEXT_METHOD,
    MANUAL_DELIVERY_OPTION,
    Callback,
    CanonicalFactory,
    Container,
    Options,
)

log = structlog.get_logger(__name__)

T = t.TypeVar("T")

_MISSING = object()


def _slot_names(cls: type) -> list[str]:
    names: list[str] = []
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name in ("__dict__", "__weakref__"):
                continue
            if name.startswith("__") and not name.endswith("__"):
                name = f"_{klass.__name__.lstrip('_')}{name}"
            names.append(name)
    return names


def transplant(instance: t.Any, target_type: type[T]) -> T:
    """
    Copy the state of ``instance`` onto a new, uninitialized ``target_type`` instance.

    ``__init__`` is not run on the new instance, so construction side effects
    happen only once. Instance dict entries and populated slots are copied shallowly.

    Parameters
    ----------
    instance : typing.Any
        Source object.
    target_type : type[T]
        Type of the returned object, usually a subclass of ``type(instance)``.

    Returns
    -------
    T
        New object carrying the state of ``instance``.
    """
    clone = target_type.__new__(target_type)
    source_dict = getattr(instance, "__dict__", None)
    if source_dict is not None:
        clone.__dict__.update(source_dict)
    for name in _slot_names(type(instance)):
        value = getattr(instance, name, _MISSING)
        if value is not _MISSING:
            object.__setattr__(clone, name, value)
    return clone


class EventForwarder:
    """
    Forwarding channel from a superseded emitter to the object replacing it.

    Installed as ``source.emit``: every event ``source`` emits internally is
    emitted by ``target`` instead, so listeners only ever see ``target``.

    Parameters
    ----------
    source : typing.Any
        Emitter whose events are redirected.
    target : typing.Any
        Emitter that re-emits them.
    """

    def __init__(self, source: t.Any, target: t.Any) -> None:
        if not hasattr(source, "__dict__"):
            raise TypeError(
                f"Cannot forward events of {type(source).__qualname__} without an instance dict"
            )
        self.source = source
        self.target = target
        source.__dict__["emit"] = self

    def __call__(self, event: str, *args: t.Any) -> t.Any:
        return self.target.emit(event, *args)

    @property
    def active(self) -> bool:
        return self.source.__dict__.get("emit") is self

    def close(self) -> None:
        """
        Stop forwarding and restore the source's own ``emit``.
        """
        if self.active:
            del self.source.__dict__["emit"]


def retype_container(original: CanonicalFactory, container_type: type) -> CanonicalFactory:
    """
    Make a canonical factory deliver instances of ``container_type``.

    Manual entry delivery is forced while the container is built, so the base
    instance never reads an entry itself. Once retyped, the caller's options are
    restored and, in auto mode, delivery resumes on the new instance.

    Parameters
    ----------
    original : CanonicalFactory
        Canonical adapter of the factory.
    container_type : type
        Subclass of the library's ``ZipFile``.

    Returns
    -------
    CanonicalFactory
        Patched canonical function.
    """

    def patched(primary: t.Any, secondary: t.Any, options: Options, callback: Callback) -> t.Any:
        previous = options.get(MANUAL_DELIVERY_OPTION, _MISSING)
        forced = previous is _MISSING or not previous
        if forced:
            options[MANUAL_DELIVERY_OPTION] = True
            log.debug(event="Manual delivery forced", container=container_type.__qualname__)

        restored = not forced

        def restore_options() -> None:
            nonlocal restored
            if restored:
                return
            restored = True
            if previous is _MISSING:
                options.pop(MANUAL_DELIVERY_OPTION, None)
            else:
                options[MANUAL_DELIVERY_OPTION] = previous

        def on_open(err: BaseException | None, zip_file: Container | None = None) -> None:
            if err is not None:
                restore_options()
                callback(err)
                return

            internal = zip_file
            zip_file = transplant(internal, container_type)
            EventForwarder(source=internal, target=zip_file)
            log.debug(
                event="Container retyped",
                source=type(internal).__qualname__,
                target=container_type.__qualname__,
            )

            if forced:
                restore_options()
                setattr(zip_file, MANUAL_DELIVERY_OPTION, False)
                setattr(internal, MANUAL_DELIVERY_OPTION, False)
                getattr(zip_file, DELIVER_NEXT_METHOD)()
                log.debug(event="Manual delivery restored", container=container_type.__qualname__)

            callback(None, zip_file)

        try:
            return original(primary, secondary, options, on_open)
        except BaseException:
            # Factories may raise before ever calling back
            restore_options()
            raise

    return patched
