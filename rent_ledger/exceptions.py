"""Custom exception hierarchy for rent-ledger."""


class RentLedgerError(Exception):
    """Base exception for all rent-ledger errors."""


class StorageError(RentLedgerError):
    """Raised when the ledger document cannot be read or written."""


class StorageCorruptError(StorageError):
    """Raised when the persisted ledger is unreadable or malformed."""


class StorageIOError(StorageError):
    """Raised when the backing medium rejects a read or write."""


class EntityNotFoundError(RentLedgerError):
    """Raised when a referenced entity does not exist."""


class InvalidEntityStateError(RentLedgerError):
    """Raised when an entity is in an invalid state for the operation."""


class HasDependentsError(InvalidEntityStateError):
    """Raised when deleting an entity that other entities still reference."""


class UnitOccupiedError(InvalidEntityStateError):
    """Raised when an operation requires a vacant unit."""


class ValidationError(RentLedgerError):
    """Raised when caller input is malformed."""


class ConfigurationError(RentLedgerError):
    """Raised when configuration is invalid or missing."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""
