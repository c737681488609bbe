"""Record validator — declarative rule sets evaluated by a pure engine.

Usage:
    from recordguard.validators import RuleSetBuilder, validate, required, length

    rules = RuleSetBuilder("user").string("name", required(), length(3, 50)).build()
    result = validate({"name": "Al"}, rules)
    if not result.valid:
        # result.violations -> [Violation(path="name", rule="length", ...)]
"""

from recordguard.validators.engine import ValidationEngine, validate, validation_engine
from recordguard.validators.errors import RecordGuardError, RuleSetConfigError
from recordguard.validators.models import FieldType, RuleKind, ValidationResult, Violation
from recordguard.validators.rules import (
    RFC3339,
    datetime_format,
    each,
    email,
    fixed_length,
    length,
    numeric,
    one_of,
    pattern,
    required,
    value_range,
)
from recordguard.validators.ruleset import FieldSpec, RuleSet, RuleSetBuilder

__all__ = [
    "ValidationEngine",
    "validation_engine",
    "validate",
    "ValidationResult",
    "Violation",
    "RuleKind",
    "FieldType",
    "FieldSpec",
    "RuleSet",
    "RuleSetBuilder",
    "RecordGuardError",
    "RuleSetConfigError",
    "RFC3339",
    "required",
    "length",
    "value_range",
    "numeric",
    "fixed_length",
    "datetime_format",
    "email",
    "each",
    "one_of",
    "pattern",
]
