"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class SessionIdentityNotFoundError(NotFoundError):
    """Raised when a valid session points at an identity that no longer exists.

    Distinct from having no session at all.
    """

    def __init__(self, identifier: str):
        super().__init__("Identity", identifier)


class PersistenceError(DomainError):
    """Storage read or write failure."""

    pass


class DuplicateKeyError(PersistenceError):
    """Unique index conflict on a provider key."""

    def __init__(self, field: str, value: str | None = None):
        self.field = field
        self.value = value
        detail = f"{field}={value}" if value is not None else field
        super().__init__(f"Duplicate key: {detail}")


class LinkConflictError(DomainError):
    """Account linking could not complete because of a concurrent login."""

    pass
