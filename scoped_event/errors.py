"""
Error taxonomy for the scoped event registry.

Every failure the registry raises is a ScopedEventError subclass carrying a
stable machine-readable code alongside its human readable message. The
subclasses also derive from the matching builtin (TypeError for bad arguments,
ValueError for conflicts) so callers can catch them either way.

The ErrorTaxonomy object groups the classes under short names for callers that
want to match failure kinds without importing this module.
"""

from dataclasses import dataclass
from dataclasses import fields
from typing import Optional
from typing import Type


class ScopedEventError(Exception):
    """Base class for all scoped event errors."""

    code: str = "ESCOPED"
    message: str = "Scoped event error"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingArgumentsError(ScopedEventError, TypeError):
    code = "EARGS"
    message = "Event subscription missing arguments"


class InvalidCallbackError(ScopedEventError, TypeError):
    code = "ECLBK"
    message = "Event callback must be callable"


class DuplicateCallbackError(ScopedEventError, ValueError):
    code = "EEXIST"
    message = "Event callback is already applied"


class NamespaceClaimedError(ScopedEventError, ValueError):
    code = "ECLAIMED"
    message = "Namespace already claimed"


class InvalidNamespaceError(ScopedEventError, TypeError):
    code = "ENS"
    message = "Event namespace must be a string"


class InvalidEventError(ScopedEventError, TypeError):
    code = "ETYPE"
    message = "Event type must be a string"


@dataclass(frozen=True)
class ErrorTaxonomy(object):
    """Read-only view over the closed set of error kinds."""

    base: Type[ScopedEventError] = ScopedEventError
    """Parent of every kind below."""

    args: Type[ScopedEventError] = MissingArgumentsError
    callback: Type[ScopedEventError] = InvalidCallbackError
    exists: Type[ScopedEventError] = DuplicateCallbackError
    claimed: Type[ScopedEventError] = NamespaceClaimedError
    namespace: Type[ScopedEventError] = InvalidNamespaceError
    type: Type[ScopedEventError] = InvalidEventError

    def from_code(self, code: str) -> Optional[Type[ScopedEventError]]:
        """
        Look up an error kind by its machine-readable code.

        Args:
            code (str): The code to look up, e.g. 'EEXIST'.
        Returns:
            Optional[Type[ScopedEventError]]: The matching class, or None.
        """
        for field in fields(self):
            kind = getattr(self, field.name)
            if kind.code == code:
                return kind

        return None


ERRORS = ErrorTaxonomy()
