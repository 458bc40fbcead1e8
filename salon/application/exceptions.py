class LLMUpstreamError(RuntimeError):
    """Raised when LLM provider fails (timeouts, network errors, service unavailable)."""
    pass


class LLMContractError(RuntimeError):
    """Raised when LLM adapter violates contract (bad format or missing data)."""
    pass


class ValidationError(ValueError):
    """Raised when input fails a field-level rule before touching the store."""
    pass


class AvailabilityValidationError(ValidationError):
    """Raised for inverted, overlapping or malformed availability windows."""
    pass


class NotFoundError(LookupError):
    pass


class AuthenticationError(RuntimeError):
    pass


class InvalidCredentialsError(AuthenticationError):
    pass


class IdentityNotFoundError(AuthenticationError):
    pass


class IdentityAlreadyExistsError(AuthenticationError):
    pass


class AccessDeniedError(RuntimeError):
    pass


class StoreError(RuntimeError):
    """Base class for document store failures."""
    pass


class StoreUnavailableError(StoreError):
    """Transient failure (network, timeout). Safe to retry."""
    pass


class BatchConflictError(StoreError):
    """A batch precondition failed (document missing or already present). Not retryable."""
    pass


class SlotUnavailableError(RuntimeError):
    """Raised when a requested slot overlaps a booking or lies outside availability."""
    pass


class SuggestionServiceError(RuntimeError):
    """Raised when the suggestion service cannot produce an answer (not for empty results)."""
    pass
