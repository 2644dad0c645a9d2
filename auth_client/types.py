"""
Auth Client Type Definitions

Options, request/response shapes and the capability protocols the client
depends on (logger, sync transport, async transport).
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Protocol, Union, runtime_checkable


DEFAULT_HEADERS: Dict[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class Role(str, Enum):
    """Roles a decoded token may carry."""
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    INSTRUCTOR = "INSTRUCTOR"
    PARENT = "PARENT"
    STUDENT = "STUDENT"


@runtime_checkable
class Logger(Protocol):
    """Logger capability. Both methods are optional on the supplied object."""

    def debug(self, message: str, data: Any = None) -> None:
        ...

    def error(self, message: str, error: BaseException, data: Any = None) -> None:
        ...


@dataclass
class RequestConfig:
    """Single outbound request as handed to a transport."""

    url: str
    method: str
    headers: Dict[str, str] = field(default_factory=dict)
    data: Any = None
    params: Optional[Dict[str, Any]] = None
    # Seconds; enforced by the transport
    timeout: Optional[float] = None


@dataclass
class Response:
    """Response returned by a transport. ``data`` is the decoded JSON body."""

    data: Any
    status: int
    status_text: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    config: Optional[RequestConfig] = None
    request: Any = None


@dataclass
class StructuredError:
    """Server-reported error entry."""

    location: Optional[str]
    param: Optional[str]
    msg: Optional[str]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StructuredError":
        return cls(
            location=data.get("location"),
            param=data.get("param"),
            msg=data.get("msg"),
        )


@runtime_checkable
class Transport(Protocol):
    """Synchronous transport capability."""

    def request(self, config: RequestConfig) -> Response:
        """Send the request; raise TransportError on non-2xx or network failure."""
        ...


@runtime_checkable
class AsyncTransport(Protocol):
    """Asynchronous transport capability."""

    async def request(self, config: RequestConfig) -> Response:
        """Send the request; raise TransportError on non-2xx or network failure."""
        ...


@dataclass
class ClientOptions:
    """
    Client configuration. Every field is optional: ``None`` means "not
    supplied", so ``configure`` only overwrites the fields that are set.
    """

    # Base URL of the authentication service (e.g. http://localhost:3001/v1/)
    endpoint: Optional[str] = None
    # Headers sent with every request
    headers: Optional[Dict[str, str]] = None
    # Logger capability (debug/error)
    logger: Optional[Logger] = None
    # Transport capability (sync or async, matching the client)
    transport: Optional[Union[Transport, AsyncTransport]] = None
    # Request timeout in seconds, passed to the transport
    timeout: Optional[float] = None

    @classmethod
    def from_env(cls, prefix: str = "AUTH_") -> "ClientOptions":
        """Load endpoint and timeout from ``{prefix}ENDPOINT`` / ``{prefix}TIMEOUT``."""
        timeout = os.environ.get(f"{prefix}TIMEOUT")
        return cls(
            endpoint=os.environ.get(f"{prefix}ENDPOINT"),
            timeout=float(timeout) if timeout else None,
        )


@dataclass(frozen=True)
class DecodedToken:
    """Decoded token returned by ``verify``."""

    id: str
    email: str
    role: str
    iat: Union[int, float]
    exp: Union[int, float]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DecodedToken":
        return cls(
            id=data["id"],
            email=data["email"],
            role=data["role"],
            iat=data["iat"],
            exp=data["exp"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "role": self.role,
            "iat": self.iat,
            "exp": self.exp,
        }
