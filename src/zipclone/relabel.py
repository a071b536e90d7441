"""
Relabels payload items delivered through the container's ``entry`` event.
"""

import typing as t

import structlog

from zipclone.library import ITEM_EVENT, Callback, CanonicalFactory, Options
from zipclone.retype import transplant

log = structlog.get_logger(__name__)


def relabel_items(original: CanonicalFactory, item_type: type) -> CanonicalFactory:
    """
    Make containers produced by a canonical factory emit ``item_type`` entries.

    The produced container must support ``intercept()``
    (see :class:`zipclone.events.EventInterceptMixin`).

    Parameters
    ----------
    original : CanonicalFactory
        Canonical adapter of the factory.
    item_type : type
        Subclass of the library's ``Entry``.

    Returns
    -------
    CanonicalFactory
        Patched canonical function.
    """

    def relabel(entry: t.Any) -> tuple[t.Any]:
        return (transplant(entry, item_type),)

    def patched(primary: t.Any, secondary: t.Any, options: Options, callback: Callback) -> t.Any:
        def on_open(err: BaseException | None, zip_file: t.Any = None) -> None:
            if err is not None:
                callback(err)
                return

            zip_file.intercept(ITEM_EVENT, relabel)
            log.debug(
                event="Item interceptor installed",
                event_name=ITEM_EVENT,
                item=item_type.__qualname__,
            )
            callback(None, zip_file)

        return original(primary, secondary, options, on_open)

    return patched
