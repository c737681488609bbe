"""Validation models — rule kinds, field types, violations and the result structure.

All validation is deterministic: same record + same rule set → same result.
"""

from collections import Counter
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RuleKind(str, Enum):
    """Stable identifiers for every rule a violation can reference."""

    REQUIRED = "required"
    LENGTH = "length"
    RANGE = "range"
    NUMERIC = "numeric"
    FIXED_LENGTH = "fixedLength"
    DATETIME = "datetime"
    EMAIL = "email"
    EACH = "each"
    ONE_OF = "oneOf"
    PATTERN = "pattern"

    # Emitted by the engine, never declared
    TYPE_MISMATCH = "type-mismatch"


class FieldType(str, Enum):
    """Value types a record field can be declared with."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    RECORD = "record"      # Nested mapping validated by a nested rule set
    SEQUENCE = "sequence"  # Ordered list of scalars or nested records


SCALAR_TYPES = frozenset({FieldType.STRING, FieldType.INTEGER, FieldType.NUMBER})
NUMERIC_TYPES = frozenset({FieldType.INTEGER, FieldType.NUMBER})


class Violation(BaseModel):
    """A single failed rule application."""

    path: str            # e.g. "addresses[0].zip"
    rule: RuleKind
    reason: str          # Human-readable explanation

    model_config = {"frozen": True, "use_enum_values": True}

    def __str__(self) -> str:
        return f"{self.path}: {self.reason} ({self.rule})"


class ValidationResult(BaseModel):
    """Complete result of one evaluation — the output of the validation engine."""

    rule_set: str = Field(description="Name of the rule set the record was checked against")
    violations: tuple[Violation, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    @property
    def valid(self) -> bool:
        return not self.violations

    def __len__(self) -> int:
        return len(self.violations)

    def paths(self) -> list[str]:
        """Distinct violated paths, in report order."""
        seen: dict[str, None] = {}
        for violation in self.violations:
            seen.setdefault(violation.path, None)
        return list(seen)

    def for_path(self, path: str) -> list[Violation]:
        return [v for v in self.violations if v.path == path]

    def first(self, path: str) -> Optional[Violation]:
        found = self.for_path(path)
        return found[0] if found else None

    def summary(self) -> dict[str, int]:
        """Count of violations by rule kind."""
        return dict(Counter(v.rule for v in self.violations))

    @classmethod
    def build(cls, rule_set: str, violations: list[Violation]) -> "ValidationResult":
        """Build a result from violations collected in evaluation order."""
        return cls(rule_set=rule_set, violations=tuple(violations))
