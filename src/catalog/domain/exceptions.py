"""Domain-level exceptions.

Every failure a store or handler can report is a subclass of
DomainException, so callers (and the CLI) can tell a validation
failure from a missing record from a broken store without reading logs.
"""


class DomainException(Exception):
    """Base class for all catalog errors."""


class ValidationError(DomainException):
    """A required field is missing, a value is invalid, or a unique key is taken."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StorageError(DomainException):
    """The backing store could not be read or written."""


class ConcurrentModificationError(StorageError):
    """A record changed between being read and being written back."""
