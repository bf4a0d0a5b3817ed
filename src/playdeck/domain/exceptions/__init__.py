"""Domain exceptions."""

from typing import Any


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    # Hey future me, message is kept as an attribute so callers (the CLI) can print it
    # without parsing str(exception). Don't raise this directly - use a subclass.
    def __init__(self, message: str, *args: Any) -> None:
        super().__init__(message, *args)
        self.message = message


class ValidationError(DomainException):
    """Input validation failed.

    Example:
        raise ValidationError("Prefix term must not be empty")
        raise ValidationError("Playlist index must be >= 0, got -1")
    """

    pass


class ConfigurationError(DomainException):
    """Application misconfiguration.

    Example:
        raise ConfigurationError("Catalog base URL not configured")
    """

    pass


class ExternalServiceError(DomainException):
    """A collaborator (catalog server, player server) call failed.

    `service` names the collaborator ("catalog" or "player") so log lines and
    CLI errors say which side is broken.
    """

    def __init__(self, message: str, service: str) -> None:
        super().__init__(f"{service}: {message}")
        self.service = service


class ServiceUnavailableError(ExternalServiceError):
    """Transport failure: connection refused, DNS, timeout."""

    pass


class UnexpectedStatusError(ExternalServiceError):
    """Collaborator answered with a non-success HTTP status."""

    def __init__(self, message: str, service: str, status_code: int) -> None:
        super().__init__(message, service)
        self.status_code = status_code


class MalformedResponseError(ExternalServiceError):
    """Response body could not be decoded into the expected shape."""

    pass


__all__ = [
    "DomainException",
    "ValidationError",
    "ConfigurationError",
    "ExternalServiceError",
    "ServiceUnavailableError",
    "UnexpectedStatusError",
    "MalformedResponseError",
]
