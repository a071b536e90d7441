"""
Event interception for container types owned by zipclone.
Interceptors rewrite the arguments of an event before any listener sees them.
The capability is mixed into derived subclasses only, never into the library's own classes.
"""

import typing as t

import structlog

log = structlog.get_logger(__name__)

Interceptor = t.Callable[..., tuple[t.Any, ...]]


class EventInterceptMixin:
    """
    Adds ``intercept()`` to an event emitter exposing ``emit(event, *args)``.

    Interceptors for an event run in registration order, each receiving the
    current arguments and returning the replacement argument tuple.
    They run before ``emit`` dispatches to listeners.
    """

    def intercept(self, event: str, interceptor: Interceptor) -> "EventInterceptMixin":
        """
        Register an interceptor for ``event`` on this instance.

        Parameters
        ----------
        event : str
            Event name.
        interceptor : Interceptor
            Callable returning the replacement argument tuple.

        Returns
        -------
        EventInterceptMixin
            The emitter, for chaining.
        """
        interceptors: dict[str, list[Interceptor]] = self.__dict__.setdefault("_interceptors", {})
        interceptors.setdefault(event, []).append(interceptor)
        return self

    def interceptors(self, event: str) -> list[Interceptor]:
        return list(self.__dict__.get("_interceptors", {}).get(event, ()))

    def emit(self, event: str, *args: t.Any) -> t.Any:
        for interceptor in self.interceptors(event):
            args = tuple(interceptor(*args))
        return super().emit(event, *args)  # type: ignore[misc]


def ensure_event_intercept(container_type: type) -> type:
    """
    Return a type carrying the interception capability.

    Parameters
    ----------
    container_type : type
        Owned container subtype.

    Returns
    -------
    type
        ``container_type`` itself when it already intercepts events,
        otherwise a subclass mixing :class:`EventInterceptMixin` in.
    """
    if issubclass(container_type, EventInterceptMixin):
        return container_type
    intercepting = type(
        container_type.__name__,
        (EventInterceptMixin, container_type),
        {"__module__": container_type.__module__, "__qualname__": container_type.__qualname__},
    )
    log.debug(event="Event interception installed", container=container_type.__qualname__)
    return intercepting
