"""API errors and validation helpers."""

from app.models import DomainKey


class NotFoundError(Exception):
    """Resource not found."""

    def __init__(self, message: str = "Resource not found"):
        self.message = message
        super().__init__(self.message)


class ValidationError(Exception):
    """Validation error."""

    def __init__(self, message: str = "Validation error"):
        self.message = message
        super().__init__(self.message)


def parse_domain(name: str) -> DomainKey:
    """Resolve a domain name ("classes", "classesWithStudents", ...)."""
    try:
        return DomainKey(name)
    except ValueError:
        valid = ", ".join(k.value for k in DomainKey)
        raise ValidationError(f"Invalid domain: {name}. Must be one of {valid}") from None


def require_tracked(domain: DomainKey, tracked: tuple[DomainKey, ...]) -> None:
    """Ensure the orchestrator holds state for ``domain``."""
    if domain not in tracked:
        raise NotFoundError(f"Domain not tracked: {domain.value}")
