"""Custom exception hierarchy for TuneMatch.

All application exceptions inherit from :class:`TuneMatchError`, which
carries an optional ``provider_name`` so error handlers can identify which
adapter (e.g. "sqlite_match_store", "sqlite_profile_source") caused the
failure.

The hierarchy is organized by how a caller is expected to react:

    TuneMatchError  (base -- catch-all for any TuneMatch error)
    +-- ValidationError       (bad input, surfaced to the caller, never retried)
    +-- NotFoundError         (missing entity, or one the caller may not see)
    +-- ConflictError         (uniqueness violation on insert)
    +-- ExternalSourceError   (listening-history source failure, retryable)
    +-- StoreError            (generic persistence failure, retryable)
    +-- ConfigurationError    (startup / invalid config)

Every class exposes a ``retryable`` flag so transport code can decide
between a 4xx-style rejection and a retry without matching on types.
"""


class TuneMatchError(Exception):
    """Base exception for all TuneMatch errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which adapter triggered the error.  The
    ``__str__`` method prefixes the provider name in brackets for
    structured log output, e.g. ``[sqlite_match_store] database is locked``.
    """

    retryable: bool = False

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Caller errors
# ---------------------------------------------------------------------------

class ValidationError(TuneMatchError):
    """Raised for invalid like targets (self-likes, unknown users)."""

    def __init__(
        self,
        message: str = "Validation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class NotFoundError(TuneMatchError):
    """Raised when an entity does not exist or is not visible to the caller.

    Deleting a match the caller does not participate in raises this rather
    than a permission error, so the match's existence is never confirmed to
    non-participants.
    """

    def __init__(
        self,
        message: str = "Not found",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConflictError(TuneMatchError):
    """Raised when an insert violates a uniqueness constraint.

    The match coordinator treats this as "already exists" and resolves it
    to the persisted row instead of surfacing a failure.
    """

    def __init__(
        self,
        message: str = "Entity already exists",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Infrastructure errors
# ---------------------------------------------------------------------------

class ExternalSourceError(TuneMatchError):
    """Raised when the listening-history profile source fails.

    Retryable: a like persisted before the failure is kept, and match
    creation can be retried later from the persisted likes.
    """

    retryable = True

    def __init__(
        self,
        message: str = "Profile source is unavailable",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class StoreError(TuneMatchError):
    """Raised for generic persistence failures (locked database, I/O error)."""

    retryable = True

    def __init__(
        self,
        message: str = "Persistence operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(TuneMatchError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
