"""
Field validation for request payloads.

A payload class lists its allowed fields in ``FIELDS`` and declares the rules
for each field in ``RULES``. ``validate`` runs every rule against the current
values and reports all violations at once through ``ArgumentValidationError``.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, Iterable, Mapping, Optional, Sequence, Tuple, TypeVar

from email_validator import EmailNotValidError, validate_email

from .errors import ArgumentValidationError


WHITELIST_RULE = "whitelistValidation"

V = TypeVar("V", bound="Validatable")


@dataclass(frozen=True)
class Rule:
    """A named constraint on a single field value."""

    code: str
    check: Callable[[Any], bool]
    message: str
    params: Tuple[Any, ...] = ()

    def __call__(self, value: Any) -> bool:
        return self.check(value)


@dataclass(frozen=True)
class FieldRules:
    """Rules attached to one field, with an optional guard."""

    rules: Sequence[Rule]
    # Rules run only when the guard returns True for the value
    guard: Optional[Callable[[Any], bool]] = None


def pick(data: Optional[Mapping[str, Any]], allowed: Iterable[str]) -> Dict[str, Any]:
    """Copy only the allowed keys from ``data``."""
    if not data:
        return {}
    return {key: data[key] for key in allowed if key in data}


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return math.isfinite(value)
    # Arbitrarily large ints are still numbers
    return isinstance(value, int)


def _is_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        # Format only, no DNS lookups
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_email(message: Optional[str] = None) -> Rule:
    return Rule("isEmail", _is_email, message or "must be an email")


def is_string(message: Optional[str] = None) -> Rule:
    return Rule("isString", lambda value: isinstance(value, str), message or "must be a string")


def is_number(message: Optional[str] = None) -> Rule:
    return Rule("isNumber", _is_number, message or "must be a number")


def length(minimum: int, maximum: int, message: Optional[str] = None) -> Rule:
    return Rule(
        "length",
        lambda value: isinstance(value, str) and minimum <= len(value) <= maximum,
        message or f"must be between {minimum} and {maximum} characters",
        (minimum, maximum),
    )


def min_value(minimum: float, message: Optional[str] = None) -> Rule:
    return Rule(
        "min",
        lambda value: _is_number(value) and value >= minimum,
        message or f"must not be less than {minimum}",
        (minimum,),
    )


def max_value(maximum: float, message: Optional[str] = None) -> Rule:
    return Rule(
        "max",
        lambda value: _is_number(value) and value <= maximum,
        message or f"must not be greater than {maximum}",
        (maximum,),
    )


def is_in(values: Iterable[Any], message: Optional[str] = None) -> Rule:
    allowed = tuple(values)
    return Rule(
        "isIn",
        lambda value: value in allowed,
        message or f"must be one of: {', '.join(str(v) for v in allowed)}",
        allowed,
    )


def validate_if(guard: Callable[[Any], bool], *rules: Rule) -> FieldRules:
    """Attach rules that only run when ``guard(value)`` is true."""
    return FieldRules(rules, guard)


def is_defined(value: Any) -> bool:
    return value is not None


class Validatable:
    """
    Base class for payloads restricted to an allow-list of fields.

    Subclasses set ``FIELDS`` and ``RULES``. Values for ``RULES`` entries are
    either a list of rules or a ``FieldRules`` built with ``validate_if``.
    """

    FIELDS: ClassVar[Tuple[str, ...]] = ()
    RULES: ClassVar[Dict[str, Any]] = {}

    def __init__(self, data: Optional[Mapping[str, Any]] = None, **values: Any) -> None:
        for name in self.FIELDS:
            setattr(self, name, None)
        for name, value in pick(data, self.FIELDS).items():
            setattr(self, name, value)
        for name, value in pick(values, self.FIELDS).items():
            setattr(self, name, value)

    def _field_rules(self, name: str) -> FieldRules:
        declared = self.RULES.get(name, ())
        if isinstance(declared, FieldRules):
            return declared
        return FieldRules(tuple(declared))

    def validate(self: V, skip_missing: bool = False, forbid_non_whitelisted: bool = True) -> V:
        """
        Validate every declared field.

        Args:
            skip_missing: Skip rules of fields whose value is None
            forbid_non_whitelisted: Report attributes outside ``FIELDS``

        Returns:
            The payload itself

        Raises:
            ArgumentValidationError: If any rule failed
        """
        errors: Dict[str, Dict[str, str]] = {}

        for name in self.FIELDS:
            value = getattr(self, name, None)
            field_rules = self._field_rules(name)
            if field_rules.guard is not None and not field_rules.guard(value):
                continue
            if value is None and skip_missing:
                continue
            failed = {rule.code: rule.message for rule in field_rules.rules if not rule(value)}
            if failed:
                errors[name] = failed

        if forbid_non_whitelisted:
            for name in vars(self):
                if name not in self.FIELDS:
                    errors[name] = {WHITELIST_RULE: f"property {name} should not exist"}

        if errors:
            raise ArgumentValidationError(errors)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Allowed fields whose value is set."""
        result: Dict[str, Any] = {}
        for name in self.FIELDS:
            value = getattr(self, name, None)
            if value is not None:
                result[name] = value
        return result

    def __repr__(self) -> str:
        values = ", ".join(f"{name}={getattr(self, name, None)!r}" for name in self.FIELDS)
        return f"{self.__class__.__name__}({values})"
