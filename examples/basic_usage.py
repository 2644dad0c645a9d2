"""
Auth Client Python SDK - Basic Usage Example

Exchanges credentials for a token and verifies it. Set AUTH_ENDPOINT to the
service base URL (default: http://localhost:3001/v1/).
"""

import asyncio
import logging

from auth_client import (
    AuthenticationClient,
    AsyncAuthenticationClient,
    ClientOptions,
    ArgumentValidationError,
    InvalidPassword,
    UserNotFound,
    UnknownClientError,
)


def options() -> ClientOptions:
    loaded = ClientOptions.from_env()
    if loaded.endpoint is None:
        loaded.endpoint = "http://localhost:3001/v1/"
    return loaded


def sync_example():
    """Synchronous client example."""
    print("=== Sync Client Example ===\n")

    with AuthenticationClient(options()) as client:
        # Rejected locally, no request is sent
        try:
            client.password("not-an-email", "short")
        except ArgumentValidationError as e:
            print(f"Invalid input: {e.errors}")

        try:
            token = client.password("user@example.com", "SecurePassword123", expires_in=3600)
            decoded = client.verify(token)
            print(f"Verified {decoded.email} ({decoded.role})")
        except (UserNotFound, InvalidPassword) as e:
            print(f"Login failed: {e.code}")
        except UnknownClientError:
            print("Service unavailable (expected without a running service)")


async def async_example():
    """Asynchronous client example."""
    print("\n=== Async Client Example ===\n")

    async with AsyncAuthenticationClient(options()) as client:
        try:
            token = await client.password("user@example.com", "SecurePassword123")
            decoded = await client.verify(token)
            print(f"Verified {decoded.email} ({decoded.role})")
        except Exception as e:
            print(f"Error (expected without a running service): {type(e).__name__}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    sync_example()
    asyncio.run(async_example())
