"""
Zipclone-specific exceptions.
"""

from __future__ import annotations


class ZipCloneError(Exception):
    """
    Base class for caller usage errors raised by zipclone.

    Notes
    -----
    Errors reported by the wrapped library are never wrapped in this class.
    They reach the caller's callback unchanged.
    """


class UnknownFactoryError(ZipCloneError, LookupError):
    """
    Raised when a patch targets a name that is not one of the known factories.
    """

    def __init__(self, name: str, known: tuple[str, ...]) -> None:
        self.name = name
        self.known = known
        super().__init__(f"Unknown factory {name!r}, expected one of: {', '.join(known)}")


class InvalidSubclassError(ZipCloneError, TypeError):
    """
    Raised when a caller-supplied type does not subclass the type it replaces.
    """

    def __init__(self, supplied: type, base: type) -> None:
        self.supplied = supplied
        self.base = base
        name = getattr(supplied, "__qualname__", repr(supplied))
        super().__init__(f"{name} must be a subclass of {base.__qualname__}")
