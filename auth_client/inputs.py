"""
Request payloads validated before (password) or after (verify) a request.
"""

from typing import Any, Dict, Mapping, Optional, Union

from .types import Role
from .validation import (
    Validatable,
    is_defined,
    is_email,
    is_in,
    is_number,
    is_string,
    length,
    max_value,
    min_value,
    validate_if,
)


# Longest token lifetime the service accepts (30 days)
MAX_EXPIRES_IN = 2592000


class PasswordInput(Validatable):
    """Credentials exchanged for a token."""

    email: Optional[str]
    password: Optional[str]
    expiresIn: Optional[Union[int, float]]

    FIELDS = ("email", "password", "expiresIn")
    RULES = {
        "email": [is_email("InvalidEmail")],
        "password": [length(8, 32, "InvalidLength")],
        "expiresIn": validate_if(
            is_defined,
            is_number("InvalidNumber"),
            min_value(0, "Min"),
            max_value(MAX_EXPIRES_IN, "Max"),
        ),
    }

    def __init__(self, email: str, password: str, expires_in: Optional[Union[int, float]] = None) -> None:
        super().__init__(email=email, password=password, expiresIn=expires_in)

    def __repr__(self) -> str:
        return f"PasswordInput(email={self.email!r}, password='***', expiresIn={self.expiresIn!r})"


class DecodedTokenInput(Validatable):
    """Shape the verify endpoint must return."""

    id: Optional[str]
    email: Optional[str]
    role: Optional[str]
    iat: Optional[Union[int, float]]
    exp: Optional[Union[int, float]]

    FIELDS = ("id", "email", "role", "iat", "exp")
    RULES = {
        "id": [is_string(), length(24, 24)],
        "email": [is_email()],
        "role": [is_in(role.value for role in Role)],
        "iat": [is_number()],
        "exp": [is_number()],
    }

    def __init__(self, data: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(data)

    def to_dict(self) -> Dict[str, Any]:
        role = self.role
        return {
            "id": self.id,
            "email": self.email,
            "role": role.value if isinstance(role, Role) else role,
            "iat": self.iat,
            "exp": self.exp,
        }
