"""Error types for the Glimmer domain.

Services raise these to signal missing records, forbidden actions, conflicting
state and rejected game moves. Each error carries a short machine-readable
``code`` and the HTTP status the REST layer maps it to; the WebSocket relay
sends the same ``code`` back in an ``error`` message.
"""

from __future__ import annotations


class GlimmerError(Exception):
    """Base error for all Glimmer domain exceptions."""

    status_code: int = 400
    code: str = "error"

    def __init__(self, detail: str, *, code: str | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        if code is not None:
            self.code = code


class NotFoundError(GlimmerError):
    """Raised when a requested record does not exist or is not visible to the user."""

    status_code = 404
    code = "not_found"

    def __init__(self, resource: str, identifier: str | None = None) -> None:
        detail = f"{resource} not found" if identifier is None else f"{resource} not found: '{identifier}'"
        super().__init__(detail)


class PermissionDeniedError(GlimmerError):
    """Raised when the acting user may not perform an operation on a record."""

    status_code = 403
    code = "permission_denied"


class ConflictError(GlimmerError):
    """Raised when a create would duplicate a unique record."""

    status_code = 409
    code = "conflict"


class ValidationError(GlimmerError):
    """Raised for requests that are well-formed but semantically invalid."""

    status_code = 400
    code = "validation_error"


class InvalidMoveError(GlimmerError):
    """Raised when a game move is rejected by the game service or engine."""

    status_code = 400
    code = "invalid_move"


class AuthenticationError(GlimmerError):
    """Raised when the acting user cannot be identified."""

    status_code = 401
    code = "not_authenticated"


class AIProviderError(GlimmerError):
    """Raised by text generators when a provider call fails or returns no text.

    The assistant catches this and substitutes fallback text; it never reaches
    HTTP clients.
    """

    status_code = 502
    code = "ai_provider_error"

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"AI provider '{provider}' failed: {message}")
        self.provider = provider
