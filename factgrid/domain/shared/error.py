"""Error hierarchy for factgrid.

Error layers:
- FactGridError: Base class for all factgrid errors
- DomainError: Lookup failures, bad input, missing credentials (4xx responses)
- InfrastructureError: Storage and upstream failures (503 responses)

Source errors are InfrastructureErrors raised by adapters and probes. The
orchestrators convert them into per-dataset statuses instead of letting
them abort a batch; the HTTP layer only sees them for single-dataset calls.
"""


class FactGridError(Exception):
    """Base class for all factgrid errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors (typically 4xx)
# =============================================================================


class DomainError(FactGridError):
    """Base class for domain errors."""


class NotFoundError(DomainError):
    """Dataset, snapshot or adapter not found."""


class ValidationError(DomainError):
    """Input validation failed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class AuthRequiredError(DomainError):
    """On-demand trigger called without the shared secret."""


# =============================================================================
# Infrastructure Errors (typically 503)
# =============================================================================


class InfrastructureError(FactGridError):
    """Base class for infrastructure/system errors."""


class StorageUnavailableError(InfrastructureError):
    """Database is unavailable."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""


class SourceError(InfrastructureError):
    """Base class for failures talking to a third-party data source."""


class UpstreamUnavailableError(SourceError):
    """Non-success HTTP status, network failure or timeout."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(SourceError):
    """Response parsed but lacks the expected fields or values."""


class AllFallbacksExhaustedError(SourceError):
    """Every variant in a fallback chain failed."""

    def __init__(self, name: str, errors: list[SourceError]) -> None:
        self.errors = errors
        last = errors[-1].message if errors else "no variants configured"
        super().__init__(f"All {len(errors)} sources for {name} failed; last error: {last}")

    @property
    def last(self) -> SourceError | None:
        return self.errors[-1] if self.errors else None


class ProbeError(SourceError):
    """A watchdog probe could not complete."""
