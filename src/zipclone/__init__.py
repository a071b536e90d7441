from .core import clone as clone
from .core import configure as configure
from .events import EventInterceptMixin as EventInterceptMixin
from .exceptions import InvalidSubclassError as InvalidSubclassError
from .exceptions import UnknownFactoryError as UnknownFactoryError
from .exceptions import ZipCloneError as ZipCloneError
from .library import FACTORIES as FACTORIES
from .library import FactoryDescriptor as FactoryDescriptor
from .logging import setup_logging as setup_logging
from .models import CloneOptions as CloneOptions
from .patching import apply_patch as apply_patch
from .patching import apply_patch_to_all as apply_patch_to_all
from .retype import EventForwarder as EventForwarder
from .retype import transplant as transplant

patch = apply_patch
patch_all = apply_patch_to_all

__all__ = [
    "configure",
    "clone",
    "apply_patch",
    "apply_patch_to_all",
    "patch",
    "patch_all",
    "CloneOptions",
    "FactoryDescriptor",
    "FACTORIES",
    "transplant",
    "EventForwarder",
    "EventInterceptMixin",
    "ZipCloneError",
    "UnknownFactoryError",
    "InvalidSubclassError",
    "setup_logging",
]
