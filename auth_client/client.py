"""
Auth Client

Synchronous and asynchronous clients for the authentication service.
Each call validates its input, sends one request through the configured
transport and maps the outcome to a value or a domain error. No retries.
"""

import logging
from typing import Any, Dict, Optional, Sequence, Tuple, Type, Union

from .errors import (
    ArgumentValidationError,
    AuthClientError,
    InvalidPassword,
    InvalidToken,
    TokenExpired,
    TransportError,
    UnexpectedResponse,
    UnknownClientError,
    UserNotActive,
    UserNotFound,
)
from .inputs import DecodedTokenInput, PasswordInput
from .transport import DEFAULT_TIMEOUT, AsyncHttpTransport, HttpTransport
from .types import (
    DEFAULT_HEADERS,
    AsyncTransport,
    ClientOptions,
    DecodedToken,
    Logger,
    RequestConfig,
    Response,
    Transport,
)


logger = logging.getLogger("auth_client")

ErrorMapping = Sequence[Tuple[str, Type[AuthClientError]]]

# Structured error messages checked in order; the first match wins
PASSWORD_ERRORS: ErrorMapping = (
    ("UserNotFound", UserNotFound),
    ("UserNotActive", UserNotActive),
    ("InvalidPassword", InvalidPassword),
)

VERIFY_ERRORS: ErrorMapping = (
    ("TokenExpired", TokenExpired),
    ("InvalidToken", InvalidToken),
)


def join_path(endpoint: str, path: str) -> str:
    """Append ``path`` to ``endpoint`` with exactly one separating slash."""
    if endpoint.endswith("/"):
        return f"{endpoint}{path}"
    return f"{endpoint}/{path}"


def classify_transport_error(error: TransportError, known: ErrorMapping) -> AuthClientError:
    """Map a transport error to a domain error using the server's structured errors."""
    for msg, error_class in known:
        if error.has_error(msg):
            return error_class()
    return UnknownClientError()


class _BaseAuthenticationClient:
    """Configuration, request building and response interpretation."""

    endpoint: str
    headers: Dict[str, str]
    logger: Optional[Logger]
    timeout: Optional[float]

    def __init__(self, options: Optional[ClientOptions] = None) -> None:
        options = options or ClientOptions()
        self.endpoint = ""
        self.headers = dict(DEFAULT_HEADERS)
        self.logger = None
        self.timeout = None
        self.transport: Any = None
        self.configure(options)

    def configure(self, options: ClientOptions) -> None:
        """
        Overwrite the configuration fields set in ``options``.

        Fields left as None keep their current value. Calls already in flight
        may observe a partially applied configuration; serialize ``configure``
        with ongoing calls if that matters.
        """
        if options.endpoint is not None:
            self.endpoint = options.endpoint
        if options.headers is not None:
            self.headers = dict(options.headers)
        if options.logger is not None:
            self.logger = options.logger
        if options.transport is not None:
            self.transport = options.transport
        if options.timeout is not None:
            self.timeout = options.timeout

    def _log_debug(self, message: str, data: Any = None) -> None:
        logger.debug("[auth_client] %s %s", message, data if data is not None else "")
        debug = getattr(self.logger, "debug", None)
        if debug:
            debug(message, data)

    def _log_error(self, message: str, error: BaseException, data: Any = None) -> None:
        logger.debug("[auth_client] %s failed: %r", message, error)
        log_error = getattr(self.logger, "error", None)
        if log_error:
            log_error(message, error, data)

    # =========================================================================
    # Request building
    # =========================================================================

    def _password_request(self, payload: PasswordInput) -> RequestConfig:
        return RequestConfig(
            url=join_path(self.endpoint, "password"),
            method="POST",
            headers=self.headers,
            data=payload.to_dict(),
            timeout=self.timeout,
        )

    def _verify_request(self, token: str) -> RequestConfig:
        return RequestConfig(
            url=join_path(self.endpoint, "verify"),
            method="POST",
            headers=self.headers,
            data={"token": token},
            timeout=self.timeout,
        )

    # =========================================================================
    # Response interpretation
    # =========================================================================

    def _password_failed(self, error: TransportError, email: str) -> AuthClientError:
        self._log_error("Password", error, {"email": email, "status": error.status})
        return classify_transport_error(error, PASSWORD_ERRORS)

    def _verify_failed(self, error: TransportError) -> AuthClientError:
        self._log_error("Token validation failed", error, {"status": error.status})
        return classify_transport_error(error, VERIFY_ERRORS)

    def _read_token(self, response: Response, email: str) -> str:
        self._log_debug("Password", {"email": email, "status": response.status})
        body = response.data
        token = body.get("data") if isinstance(body, dict) else None
        if not token or not isinstance(token, str):
            error = UnexpectedResponse()
            self._log_error("Password", error, {"email": email})
            raise error
        return token

    def _read_decoded_token(self, response: Response) -> DecodedToken:
        self._log_debug("Client responded", {"status": response.status})
        body = response.data
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict):
            error = UnexpectedResponse()
            self._log_error("Token validation failed", error)
            raise error

        try:
            decoded = DecodedTokenInput(data).validate()
        except ArgumentValidationError as e:
            # Field detail stays in the log; callers only see UnexpectedResponse
            self._log_debug("Decoded token rejected", e.errors)
            error = UnexpectedResponse()
            self._log_error("Token validation failed", error)
            raise error from None

        return DecodedToken.from_dict(decoded.to_dict())


class AuthenticationClient(_BaseAuthenticationClient):
    """
    Authentication Client - synchronous SDK entry point.

    Example:
        with AuthenticationClient(ClientOptions(endpoint="http://localhost:3001/v1/")) as client:
            token = client.password("user@example.com", "secret-password")
            decoded = client.verify(token)
    """

    transport: Transport

    def __init__(self, options: Optional[ClientOptions] = None) -> None:
        super().__init__(options)
        self._default_transport: Optional[HttpTransport] = None
        if self.transport is None:
            self._default_transport = HttpTransport(timeout=self.timeout or DEFAULT_TIMEOUT)
            self.transport = self._default_transport

    def password(self, email: str, password: str, expires_in: Optional[Union[int, float]] = None) -> str:
        """
        Exchange email and password for a token.

        Args:
            email: User email
            password: User password (8-32 characters)
            expires_in: Optional token lifetime in seconds (0-2592000)

        Returns:
            The issued token

        Raises:
            ArgumentValidationError: If the input is invalid (no request is sent)
            UserNotFound, UserNotActive, InvalidPassword: Reported by the service
            UnexpectedResponse: If the success response has no string token
            UnknownClientError: For any other transport failure
        """
        self._log_debug("Password", {"email": email})
        payload = PasswordInput(email, password, expires_in).validate()

        try:
            response = self.transport.request(self._password_request(payload))
        except TransportError as e:
            raise self._password_failed(e, email) from e

        return self._read_token(response, email)

    def verify(self, token: str) -> DecodedToken:
        """
        Verify a token with the service and return its decoded content.

        Raises:
            TokenExpired, InvalidToken: Reported by the service
            UnexpectedResponse: If the decoded token has an invalid shape
            UnknownClientError: For any other transport failure
        """
        self._log_debug("Verifying token")

        try:
            response = self.transport.request(self._verify_request(token))
        except TransportError as e:
            raise self._verify_failed(e) from e

        return self._read_decoded_token(response)

    def close(self) -> None:
        """Close the default transport if the client created one."""
        if self._default_transport is not None:
            self._default_transport.close()

    def __enter__(self) -> "AuthenticationClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class AsyncAuthenticationClient(_BaseAuthenticationClient):
    """
    Authentication Client - asynchronous SDK entry point.

    Same contract as AuthenticationClient; the single request of each call is
    awaited. Independent calls may run concurrently.
    """

    transport: AsyncTransport

    def __init__(self, options: Optional[ClientOptions] = None) -> None:
        super().__init__(options)
        self._default_transport: Optional[AsyncHttpTransport] = None
        if self.transport is None:
            self._default_transport = AsyncHttpTransport(timeout=self.timeout or DEFAULT_TIMEOUT)
            self.transport = self._default_transport

    async def password(
        self, email: str, password: str, expires_in: Optional[Union[int, float]] = None
    ) -> str:
        """Exchange email and password for a token."""
        self._log_debug("Password", {"email": email})
        payload = PasswordInput(email, password, expires_in).validate()

        try:
            response = await self.transport.request(self._password_request(payload))
        except TransportError as e:
            raise self._password_failed(e, email) from e

        return self._read_token(response, email)

    async def verify(self, token: str) -> DecodedToken:
        """Verify a token with the service and return its decoded content."""
        self._log_debug("Verifying token")

        try:
            response = await self.transport.request(self._verify_request(token))
        except TransportError as e:
            raise self._verify_failed(e) from e

        return self._read_decoded_token(response)

    async def close(self) -> None:
        """Close the default transport if the client created one."""
        if self._default_transport is not None:
            await self._default_transport.aclose()

    async def __aenter__(self) -> "AsyncAuthenticationClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


# =============================================================================
# Factory Functions
# =============================================================================

def create_authentication_client(options: Optional[ClientOptions] = None) -> AuthenticationClient:
    """Create a new synchronous authentication client."""
    return AuthenticationClient(options)


def create_async_authentication_client(
    options: Optional[ClientOptions] = None,
) -> AsyncAuthenticationClient:
    """Create a new asynchronous authentication client."""
    return AsyncAuthenticationClient(options)
