"""
Auth Client Error Classes

Domain errors surfaced to callers, the local validation error and the
transport error the default adapters raise before the client classifies it.
"""

from typing import Any, Dict, List, Optional

from .types import RequestConfig, Response, StructuredError


class AuthClientError(Exception):
    """Base error class for the authentication client."""

    code = "AUTH_CLIENT_ERROR"
    default_message = "Authentication client error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "name": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ArgumentValidationError(AuthClientError):
    """Local input violates one or more declared rules."""

    code = "ARGUMENT_VALIDATION_ERROR"
    default_message = "Argument validation failed"

    def __init__(self, errors: Dict[str, Dict[str, str]]) -> None:
        self.errors = errors
        self.fields: List[str] = list(errors)
        super().__init__(f"Argument validation failed: {', '.join(self.fields)}")

    def has_error(self, field: str, error: Optional[str] = None) -> bool:
        """
        Check field has error. If error is given checks that rule failed on field.

        Args:
            field: Field name
            error: Rule code for the field (e.g. ``isEmail``, ``length``)
        """
        if field not in self.errors:
            return False
        return error in self.errors[field] if error else True

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["errors"] = self.errors
        return result


class UnexpectedResponse(AuthClientError):
    """Server replied 2xx but the body shape is invalid."""

    code = "UNEXPECTED_RESPONSE"
    default_message = "Unexpected response from authentication service"


class UserNotFound(AuthClientError):
    code = "USER_NOT_FOUND"
    default_message = "User not found"


class UserNotActive(AuthClientError):
    code = "USER_NOT_ACTIVE"
    default_message = "User is not active"


class InvalidPassword(AuthClientError):
    code = "INVALID_PASSWORD"
    default_message = "Invalid password"


class TokenExpired(AuthClientError):
    code = "TOKEN_EXPIRED"
    default_message = "Token expired"


class InvalidToken(AuthClientError):
    code = "INVALID_TOKEN"
    default_message = "Invalid token"


class UnknownClientError(AuthClientError):
    """Server reported an unknown failure or the request never got a response."""

    code = "UNKNOWN_CLIENT_ERROR"
    default_message = "Unknown client error"


class TransportError(Exception):
    """
    Failure surfaced by a transport.

    Built from whatever the underlying HTTP library surfaced. When a response
    was received, ``status``, ``data`` and ``errors`` are read from its
    ``{data, errors}`` envelope; for pre-response failures (DNS, connection,
    timeout) they stay empty.
    """

    def __init__(
        self,
        config: RequestConfig,
        code: Optional[str] = None,
        request: Any = None,
        response: Optional[Response] = None,
        message: Optional[str] = None,
    ) -> None:
        super().__init__(message or _describe(code, response))

        self.config = config
        self.code = code
        self.request = request
        self.response = response
        self.status: Optional[int] = response.status if response is not None else None
        self.data: Any = None
        self.errors: List[StructuredError] = []

        body = response.data if response is not None else None
        if isinstance(body, dict):
            self.data = body.get("data")
            raw_errors = body.get("errors") or []
            if isinstance(raw_errors, list):
                self.errors = [
                    StructuredError.from_dict(e) for e in raw_errors if isinstance(e, dict)
                ]

    def has_errors(self) -> bool:
        """Check if the server reported any structured errors."""
        return bool(self.errors)

    def has_error(self, msg: str) -> bool:
        """Check if the server reported a structured error with this ``msg``."""
        return any(e.msg == msg for e in self.errors)

    def __repr__(self) -> str:
        return f"TransportError(code={self.code!r}, status={self.status!r}, url={self.config.url!r})"


def _describe(code: Optional[str], response: Optional[Response]) -> str:
    if response is not None:
        return f"HTTP {response.status}"
    return code or "Request failed"


def is_auth_client_error(error: Any) -> bool:
    """Check if error is an AuthClientError."""
    return isinstance(error, AuthClientError)
