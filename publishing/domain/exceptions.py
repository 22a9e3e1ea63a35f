"""Domain-specific exceptions: framework-independent."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldViolation:
    """A single field-level validation failure."""

    field: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field}: {self.reason}"


class PublishingError(Exception):
    """Base class for every error raised by the repository layer."""


class ValidationFailedError(PublishingError):
    """Raised when user input fails an entity's field constraints."""

    def __init__(self, entity_type: str, violations: list[FieldViolation]):
        self.entity_type = entity_type
        self.violations = list(violations)
        details = "; ".join(str(v) for v in self.violations)
        super().__init__(f"Invalid {entity_type}: {details}")

    @property
    def fields(self) -> list[str]:
        return [v.field for v in self.violations]


class EntityNotFoundError(PublishingError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateKeyError(PublishingError):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str | None = None):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        if value is None:
            super().__init__(f"{entity_type} with duplicate {field} already exists")
        else:
            super().__init__(f"{entity_type} with {field}='{value}' already exists")


class ImmutableFieldViolationError(PublishingError):
    """Raised when an update tries to change a field that is fixed after creation."""

    def __init__(self, entity_type: str, field: str, entity_id: int | str | None = None):
        self.entity_type = entity_type
        self.field = field
        self.entity_id = entity_id
        super().__init__(f"{entity_type} field '{field}' cannot be changed once set")


class ConstraintViolationError(PublishingError):
    """Raised for store integrity failures other than unique-key collisions."""

    def __init__(self, message: str, constraint: str | None = None):
        self.constraint = constraint
        super().__init__(message)


class TransactionAbortedError(PublishingError):
    """Raised when a unit of work was rolled back because the store failed."""

    def __init__(self, operation: str, cause: BaseException | None = None):
        self.operation = operation
        self.cause = cause
        reason = f": {cause}" if cause is not None else ""
        super().__init__(f"Transaction for '{operation}' was rolled back{reason}")
