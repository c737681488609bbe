"""Rule library — the field-level predicates a rule set is declared from.

Rules are frozen dataclasses: parameters are checked once, at construction,
and a rule never changes afterwards. Build them through the factory
functions at the bottom of the module:

    name_rules = (required(), length(3, 50))
    zip_rules = (required(), numeric(), fixed_length(5))
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Optional

from email_validator import EmailNotValidError, validate_email

from recordguard.validators.base import BaseRule, is_empty, is_number
from recordguard.validators.errors import RuleSetConfigError
from recordguard.validators.models import FieldType, NUMERIC_TYPES, RuleKind

# RFC 3339 timestamp, e.g. "2006-01-02T15:04:05Z" or "2006-01-02T15:04:05+07:00"
RFC3339 = "%Y-%m-%dT%H:%M:%S%z"

STRING_ONLY = frozenset({FieldType.STRING})


def _check_bound(value: Any, label: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise RuleSetConfigError(f"{label} must be a non-negative integer, got {value!r}")


@dataclass(frozen=True)
class RequiredRule(BaseRule):
    """Value must be present and non-empty."""

    kind: ClassVar[RuleKind] = RuleKind.REQUIRED
    applies_to: ClassVar[frozenset[FieldType]] = frozenset(FieldType)
    value_types: ClassVar[tuple[type, ...]] = (object,)

    def check(self, value: Any) -> Optional[str]:
        if value is None:
            return "is required"
        if is_empty(value):
            return "must not be empty"
        return None


@dataclass(frozen=True)
class LengthRule(BaseRule):
    """String length within [min, max], both inclusive."""

    kind: ClassVar[RuleKind] = RuleKind.LENGTH
    applies_to: ClassVar[frozenset[FieldType]] = STRING_ONLY

    min: int
    max: int

    def __post_init__(self):
        _check_bound(self.min, "length min")
        _check_bound(self.max, "length max")
        if self.min > self.max:
            raise RuleSetConfigError(f"length min ({self.min}) is greater than max ({self.max})")

    def check(self, value: str) -> Optional[str]:
        if self.min <= len(value) <= self.max:
            return None
        return f"length must be between {self.min} and {self.max} (got {len(value)})"


@dataclass(frozen=True)
class RangeRule(BaseRule):
    """Numeric value within [min, max], both inclusive."""

    kind: ClassVar[RuleKind] = RuleKind.RANGE
    applies_to: ClassVar[frozenset[FieldType]] = NUMERIC_TYPES
    value_types: ClassVar[tuple[type, ...]] = (int, float)

    min: float
    max: float

    def __post_init__(self):
        if not is_number(self.min) or not is_number(self.max):
            raise RuleSetConfigError(f"range bounds must be numbers, got {self.min!r}..{self.max!r}")
        if self.min > self.max:
            raise RuleSetConfigError(f"range min ({self.min}) is greater than max ({self.max})")

    def check(self, value: float) -> Optional[str]:
        if self.min <= value <= self.max:
            return None
        return f"must be between {self.min} and {self.max} (got {value})"


@dataclass(frozen=True)
class NumericRule(BaseRule):
    """String made of ASCII digits only."""

    kind: ClassVar[RuleKind] = RuleKind.NUMERIC
    applies_to: ClassVar[frozenset[FieldType]] = STRING_ONLY

    def check(self, value: str) -> Optional[str]:
        # str.isdigit() alone also accepts superscripts and other scripts' digits
        if value.isascii() and value.isdigit():
            return None
        return "must contain only digits"


@dataclass(frozen=True)
class FixedLengthRule(BaseRule):
    """String of exactly n characters."""

    kind: ClassVar[RuleKind] = RuleKind.FIXED_LENGTH
    applies_to: ClassVar[frozenset[FieldType]] = STRING_ONLY

    n: int

    def __post_init__(self):
        _check_bound(self.n, "fixed length")

    def check(self, value: str) -> Optional[str]:
        if len(value) == self.n:
            return None
        return f"length must be exactly {self.n} (got {len(value)})"


@dataclass(frozen=True)
class DateTimeRule(BaseRule):
    """String that parses with datetime.strptime under the given format."""

    kind: ClassVar[RuleKind] = RuleKind.DATETIME
    applies_to: ClassVar[frozenset[FieldType]] = STRING_ONLY

    format: str = RFC3339

    def __post_init__(self):
        if not isinstance(self.format, str) or not self.format:
            raise RuleSetConfigError(f"datetime format must be a non-empty string, got {self.format!r}")

    def check(self, value: str) -> Optional[str]:
        try:
            datetime.strptime(value, self.format)
        except ValueError:
            return f"must be a date-time in format '{self.format}'"
        return None


@dataclass(frozen=True)
class EmailRule(BaseRule):
    """String shaped like an email address. No DNS lookups are made."""

    kind: ClassVar[RuleKind] = RuleKind.EMAIL
    applies_to: ClassVar[frozenset[FieldType]] = STRING_ONLY

    def check(self, value: str) -> Optional[str]:
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as e:
            return f"must be a valid email address: {e}"
        return None


@dataclass(frozen=True)
class OneOfRule(BaseRule):
    """Value is one of a fixed set of allowed values."""

    kind: ClassVar[RuleKind] = RuleKind.ONE_OF
    value_types: ClassVar[tuple[type, ...]] = (str, int, float)

    values: tuple

    def __post_init__(self):
        if not self.values:
            raise RuleSetConfigError("oneOf needs at least one allowed value")
        object.__setattr__(self, "values", tuple(self.values))

    def check(self, value: Any) -> Optional[str]:
        if value in self.values:
            return None
        return f"must be one of: {', '.join(str(v) for v in self.values)}"


@dataclass(frozen=True)
class PatternRule(BaseRule):
    """String that fully matches a regular expression."""

    kind: ClassVar[RuleKind] = RuleKind.PATTERN
    applies_to: ClassVar[frozenset[FieldType]] = STRING_ONLY

    regex: str
    _compiled: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        try:
            compiled = re.compile(self.regex)
        except (re.error, TypeError) as e:
            raise RuleSetConfigError(f"invalid pattern {self.regex!r}: {e}") from e
        object.__setattr__(self, "_compiled", compiled)

    def check(self, value: str) -> Optional[str]:
        if self._compiled.fullmatch(value):
            return None
        return f"must match pattern '{self.regex}'"


@dataclass(frozen=True)
class EachRule(BaseRule):
    """Inner rule holds for every element of a sequence.

    An empty sequence passes. The engine reports each failing element at
    its own indexed path (``tags[2]``) under the inner rule's kind.
    """

    kind: ClassVar[RuleKind] = RuleKind.EACH
    applies_to: ClassVar[frozenset[FieldType]] = frozenset({FieldType.SEQUENCE})
    value_types: ClassVar[tuple[type, ...]] = (list, tuple)

    inner: BaseRule

    def __post_init__(self):
        if not isinstance(self.inner, BaseRule):
            raise RuleSetConfigError(f"each needs an inner rule, got {self.inner!r}")
        if isinstance(self.inner, EachRule):
            raise RuleSetConfigError("each cannot wrap another each rule")

    def check_elements(self, value: list) -> list[tuple[int, RuleKind, str]]:
        """Failures as (index, rule kind, reason), in element order."""
        failures = []
        for index, element in enumerate(value):
            if isinstance(self.inner, RequiredRule):
                reason = self.inner.check(element)
                if reason:
                    failures.append((index, self.inner.kind, reason))
                continue
            # Optional semantics apply per element too
            if is_empty(element):
                continue
            if not self.inner.accepts(element):
                failures.append((index, RuleKind.TYPE_MISMATCH, f"unexpected type {type(element).__name__}"))
                continue
            reason = self.inner.check(element)
            if reason:
                failures.append((index, self.inner.kind, reason))
        return failures

    def check(self, value: list) -> Optional[str]:
        failures = self.check_elements(value)
        if not failures:
            return None
        return "; ".join(f"[{index}] {reason}" for index, _, reason in failures)


# ── Factories ──

def required() -> RequiredRule:
    return RequiredRule()


def length(min: int, max: int) -> LengthRule:
    return LengthRule(min, max)


def value_range(min: float, max: float) -> RangeRule:
    return RangeRule(min, max)


def numeric() -> NumericRule:
    return NumericRule()


def fixed_length(n: int) -> FixedLengthRule:
    return FixedLengthRule(n)


def datetime_format(fmt: str = RFC3339) -> DateTimeRule:
    return DateTimeRule(fmt)


def email() -> EmailRule:
    return EmailRule()


def one_of(*values: Any) -> OneOfRule:
    return OneOfRule(values)


def pattern(regex: str) -> PatternRule:
    return PatternRule(regex)


def each(inner: BaseRule) -> EachRule:
    return EachRule(inner)
