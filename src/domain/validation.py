"""
Schema validation - Structural checks, constraints and normalization.

Each input kind (credential creation, credential verification, todo item)
is described by a ValidationSchema: an ordered mapping of field name to
FieldConstraint plus cross-field rules. Schemas are module-level constants
and are never mutated.

Rule Order (fail-fast)
======================

Fields are visited in declaration order. For each field:

1. required   - absent or empty value on a required field
2. invalid_type - value present but not a string
3. normalization - trim, or trim + lowercase for emails (never for passwords);
   a required value that normalizes to nothing is reported as required
4. min_length, then max_length
5. format predicates, in declaration order

Cross-field rules run only after every field passed. The first violation
stops validation and is raised as a single ValidationError.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

import email_validator
from email_validator import EmailNotValidError, validate_email

from .exceptions import SchemaNotFound, ValidationError


class FieldType(str, Enum):
    """Semantic type of an input field."""

    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"


class Normalization(str, Enum):
    """Normalization applied to a present value before constraint checks."""

    NONE = "none"
    TRIM = "trim"
    TRIM_LOWER = "trim_lower"

    def apply(self, value: str) -> str:
        if self is Normalization.TRIM:
            return value.strip()
        if self is Normalization.TRIM_LOWER:
            return value.strip().lower()
        return value


@dataclass(frozen=True)
class FormatRule:
    """Named predicate over a normalized value."""

    reason: str
    message: str
    check: Callable[[str], bool]


@dataclass(frozen=True)
class CrossFieldRule:
    """Predicate over all normalized values, reported on a single field."""

    field: str
    reason: str
    message: str
    check: Callable[[Mapping[str, str | None]], bool]


@dataclass(frozen=True)
class FieldConstraint:
    """
    Static description of one input field.

    Messages default to generic text built from the field label; schemas
    override them where a specific wording is expected by the UI.
    """

    field_type: FieldType
    label: str
    required: bool = True
    min_length: int | None = None
    max_length: int | None = None
    normalization: Normalization = Normalization.TRIM
    rules: tuple[FormatRule, ...] = ()
    required_message: str | None = None
    min_length_message: str | None = None
    max_length_message: str | None = None

    def message_for(self, reason: str) -> str:
        if reason == "required":
            return self.required_message or f"{self.label} is required"
        if reason == "min_length":
            return (
                self.min_length_message
                or f"{self.label} must be at least {self.min_length} characters"
            )
        if reason == "max_length":
            return (
                self.max_length_message
                or f"{self.label} must be at most {self.max_length} characters"
            )
        return f"{self.label} is not valid"


@dataclass(frozen=True)
class ValidationSchema:
    """Ordered field constraints plus cross-field rules for one input kind."""

    name: str
    fields: Mapping[str, FieldConstraint]
    cross_field_rules: tuple[CrossFieldRule, ...] = ()


@dataclass(frozen=True)
class ValidatedInput:
    """Normalized values produced by a successful validation."""

    schema: str
    values: Mapping[str, str | None]

    def __getitem__(self, field: str) -> str | None:
        return self.values[field]


# Only the address grammar is checked: special-use domains (.local, .test,
# localhost) and dotless hosts are well-formed and left to the account service.
email_validator.SPECIAL_USE_DOMAIN_NAMES.clear()


def _is_valid_email(value: str) -> bool:
    try:
        validate_email(value, check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        return False
    return True


_UPPERCASE = re.compile(r"[A-Z]")
_LOWERCASE = re.compile(r"[a-z]")
_DIGIT = re.compile(r"[0-9]")

EMAIL_FORMAT = FormatRule(
    reason="invalid_email",
    message="Email is not valid",
    check=_is_valid_email,
)

PASSWORD_STRENGTH = (
    FormatRule(
        reason="missing_uppercase",
        message="Password must contain an uppercase letter",
        check=lambda value: bool(_UPPERCASE.search(value)),
    ),
    FormatRule(
        reason="missing_lowercase",
        message="Password must contain a lowercase letter",
        check=lambda value: bool(_LOWERCASE.search(value)),
    ),
    FormatRule(
        reason="missing_digit",
        message="Password must contain a digit",
        check=lambda value: bool(_DIGIT.search(value)),
    ),
)

SIGN_UP = ValidationSchema(
    name="signUp",
    fields=MappingProxyType(
        {
            "email": FieldConstraint(
                field_type=FieldType.EMAIL,
                label="Email",
                min_length=5,
                max_length=100,
                normalization=Normalization.TRIM_LOWER,
                rules=(EMAIL_FORMAT,),
            ),
            "password": FieldConstraint(
                field_type=FieldType.PASSWORD,
                label="Password",
                min_length=8,
                max_length=100,
                normalization=Normalization.NONE,
                rules=PASSWORD_STRENGTH,
            ),
            "confirmPassword": FieldConstraint(
                field_type=FieldType.PASSWORD,
                label="Password confirmation",
                normalization=Normalization.NONE,
            ),
        }
    ),
    cross_field_rules=(
        CrossFieldRule(
            field="confirmPassword",
            reason="mismatch",
            message="Passwords do not match",
            check=lambda values: values["password"] == values["confirmPassword"],
        ),
    ),
)

SIGN_IN = ValidationSchema(
    name="signIn",
    fields=MappingProxyType(
        {
            "email": FieldConstraint(
                field_type=FieldType.EMAIL,
                label="Email",
                normalization=Normalization.TRIM_LOWER,
                rules=(EMAIL_FORMAT,),
            ),
            "password": FieldConstraint(
                field_type=FieldType.PASSWORD,
                label="Password",
                normalization=Normalization.NONE,
            ),
        }
    ),
)

TODO = ValidationSchema(
    name="todo",
    fields=MappingProxyType(
        {
            "title": FieldConstraint(
                field_type=FieldType.TEXT,
                label="Title",
                min_length=1,
                max_length=200,
            ),
            "description": FieldConstraint(
                field_type=FieldType.TEXT,
                label="Description",
                required=False,
                max_length=1000,
            ),
        }
    ),
)

SCHEMAS: Mapping[str, ValidationSchema] = MappingProxyType(
    {schema.name: schema for schema in (SIGN_UP, SIGN_IN, TODO)}
)


def _check_field(name: str, constraint: FieldConstraint, raw: object) -> str | None:
    """Validate and normalize a single field, raising on the first violation."""
    if raw is None or raw == "":
        if constraint.required:
            raise ValidationError(name, "required", constraint.message_for("required"))
        return None

    if not isinstance(raw, str):
        raise ValidationError(name, "invalid_type", f"{constraint.label} must be text")

    value = constraint.normalization.apply(raw)
    if not value and constraint.required:
        raise ValidationError(name, "required", constraint.message_for("required"))

    if constraint.min_length is not None and len(value) < constraint.min_length:
        raise ValidationError(name, "min_length", constraint.message_for("min_length"))
    if constraint.max_length is not None and len(value) > constraint.max_length:
        raise ValidationError(name, "max_length", constraint.message_for("max_length"))

    for rule in constraint.rules:
        if not rule.check(value):
            raise ValidationError(name, rule.reason, rule.message)

    # Optional free text that trims to nothing carries no value
    if not value and not constraint.required:
        return None
    return value


def validate(schema_name: str, raw_input: Mapping[str, object]) -> ValidatedInput:
    """
    Apply a named schema to raw input.

    Args:
        schema_name: One of "signUp", "signIn", "todo"
        raw_input: Field name to raw value; missing keys count as absent

    Returns:
        ValidatedInput with every declared field normalized

    Raises:
        SchemaNotFound: If no schema is registered under schema_name
        ValidationError: For the first rule violated
    """
    try:
        schema = SCHEMAS[schema_name]
    except KeyError:
        raise SchemaNotFound(schema_name) from None

    values: dict[str, str | None] = {}
    for name, constraint in schema.fields.items():
        values[name] = _check_field(name, constraint, raw_input.get(name))

    for rule in schema.cross_field_rules:
        if not rule.check(values):
            raise ValidationError(rule.field, rule.reason, rule.message)

    return ValidatedInput(schema=schema.name, values=MappingProxyType(values))
