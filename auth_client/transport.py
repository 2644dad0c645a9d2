"""
Auth Client Transports

Default httpx-backed transports. A transport sends one RequestConfig and
returns a Response; non-2xx responses and request failures are always raised
as TransportError, never as raw httpx exceptions.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from .errors import TransportError
from .types import Logger, RequestConfig, Response


logger = logging.getLogger("auth_client")

# Request timeout in seconds when neither the transport nor the request sets one
DEFAULT_TIMEOUT = 30.0

# httpx failures normalized into TransportError. InvalidURL is not an HTTPError.
HTTPX_ERRORS = (httpx.HTTPError, httpx.InvalidURL)


def _request_kwargs(config: RequestConfig) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = {
        "method": config.method,
        "url": config.url,
        "headers": config.headers,
    }
    if config.data is not None:
        kwargs["json"] = config.data
    if config.params:
        kwargs["params"] = config.params
    if config.timeout is not None:
        kwargs["timeout"] = config.timeout
    return kwargs


def _decode_body(response: httpx.Response) -> Any:
    # Some servers send JSON envelopes as text/plain; parse whatever arrives
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _to_response(response: httpx.Response, config: RequestConfig, request: httpx.Request) -> Response:
    return Response(
        data=_decode_body(response),
        status=response.status_code,
        status_text=response.reason_phrase,
        headers=dict(response.headers),
        config=config,
        request=request,
    )


class _BaseHttpTransport:
    """Logging and response handling shared by the sync and async transports."""

    def __init__(self, timeout: float, logger: Optional[Logger]) -> None:
        self._timeout = timeout
        self._logger = logger

    def _log_debug(self, message: str, data: Any = None) -> None:
        logger.debug(
            "[auth_client] %s %s %s", message, getattr(data, "method", ""), getattr(data, "url", "")
        )
        debug = getattr(self._logger, "debug", None)
        if debug:
            debug(message, data)

    def _log_error(self, message: str, error: BaseException, data: Any = None) -> None:
        logger.debug("[auth_client] %s %r", message, error)
        log_error = getattr(self._logger, "error", None)
        if log_error:
            log_error(message, error, data)

    def _handle_response(
        self, response: httpx.Response, config: RequestConfig, request: httpx.Request
    ) -> Response:
        result = _to_response(response, config, request)
        if response.is_success:
            return result
        error = TransportError(config, request=request, response=result)
        self._log_error("Request failed.", error, config)
        raise error

    def _handle_exception(
        self, exc: Exception, config: RequestConfig, request: Optional[httpx.Request]
    ) -> TransportError:
        error = TransportError(
            config,
            code=type(exc).__name__,
            request=request,
            message=str(exc) or None,
        )
        self._log_error("Request failed.", error, config)
        return error


class HttpTransport(_BaseHttpTransport):
    """Synchronous transport backed by ``httpx.Client``."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        logger: Optional[Logger] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        super().__init__(timeout, logger)
        self._owns_client = http_client is None
        if http_client is None:
            http_client = httpx.Client(timeout=timeout)
        self._http_client = http_client

    def request(self, config: RequestConfig) -> Response:
        self._log_debug("Requesting.", config)
        request: Optional[httpx.Request] = None
        try:
            request = self._http_client.build_request(**_request_kwargs(config))
            response = self._http_client.send(request)
        except HTTPX_ERRORS as e:
            raise self._handle_exception(e, config, request) from e
        return self._handle_response(response, config, request)

    def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            self._http_client.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class AsyncHttpTransport(_BaseHttpTransport):
    """Asynchronous transport backed by ``httpx.AsyncClient``."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        logger: Optional[Logger] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        super().__init__(timeout, logger)
        self._owns_client = http_client is None
        # Created lazily, inside the running event loop
        self._http_client = http_client

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
        return self._http_client

    async def request(self, config: RequestConfig) -> Response:
        self._log_debug("Requesting.", config)
        request: Optional[httpx.Request] = None
        try:
            client = self._get_client()
            request = client.build_request(**_request_kwargs(config))
            response = await client.send(request)
        except HTTPX_ERRORS as e:
            raise self._handle_exception(e, config, request) from e
        return self._handle_response(response, config, request)

    async def aclose(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "AsyncHttpTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
