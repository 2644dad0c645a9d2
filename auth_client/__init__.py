"""
Auth Client Python SDK
auth-service-client

A Python SDK for the authentication service: exchanges credentials for a
token and verifies tokens, with local input validation and typed errors.
Sync and async clients, pluggable transport and logger.
"""

from .client import (
    AuthenticationClient,
    AsyncAuthenticationClient,
    create_authentication_client,
    create_async_authentication_client,
)
from .types import (
    ClientOptions,
    DecodedToken,
    Logger,
    RequestConfig,
    Response,
    Role,
    StructuredError,
    Transport,
    AsyncTransport,
)
from .errors import (
    AuthClientError,
    ArgumentValidationError,
    UnexpectedResponse,
    UserNotFound,
    UserNotActive,
    InvalidPassword,
    TokenExpired,
    InvalidToken,
    UnknownClientError,
    TransportError,
    is_auth_client_error,
)
from .inputs import PasswordInput, DecodedTokenInput
from .transport import HttpTransport, AsyncHttpTransport

__version__ = "1.0.0"
__all__ = [
    # Clients
    "AuthenticationClient",
    "AsyncAuthenticationClient",
    "create_authentication_client",
    "create_async_authentication_client",
    # Types
    "ClientOptions",
    "DecodedToken",
    "Logger",
    "RequestConfig",
    "Response",
    "Role",
    "StructuredError",
    "Transport",
    "AsyncTransport",
    # Inputs
    "PasswordInput",
    "DecodedTokenInput",
    # Transports
    "HttpTransport",
    "AsyncHttpTransport",
    # Errors
    "AuthClientError",
    "ArgumentValidationError",
    "UnexpectedResponse",
    "UserNotFound",
    "UserNotActive",
    "InvalidPassword",
    "TokenExpired",
    "InvalidToken",
    "UnknownClientError",
    "TransportError",
    "is_auth_client_error",
]
