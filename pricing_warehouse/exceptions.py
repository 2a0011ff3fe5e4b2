"""Custom exception hierarchy for pricing-warehouse."""


class WarehouseError(Exception):
    """Base exception for all pricing-warehouse errors."""


class MalformedInputError(WarehouseError):
    """Raised when an input dataset fails to parse or validate."""


class EntityNotFoundError(WarehouseError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class InvalidEntityStateError(WarehouseError):
    """Raised when an entity is in an invalid state for the operation."""


class DivisionUndefined(WarehouseError, ZeroDivisionError):
    """Raised when a ratio is requested over a zero denominator."""


class ConfigError(WarehouseError):
    """Raised when configuration is invalid or missing."""


class SinkError(WarehouseError):
    """Raised when a sink operation fails."""


class InsightError(WarehouseError):
    """Raised when narrative insights cannot be produced or parsed."""
