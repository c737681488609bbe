"""Validation Engine — evaluates a rule set against a record and collects every violation.

This is the main entry point for record validation. It walks the rule set's
fields in declaration order, applies each field's rules, recurses into nested
records and sequences, and returns a ValidationResult.

Usage:
    result = validation_engine.validate(record, CUSTOMER_RULES)
    if not result.valid:
        for violation in result.violations:
            ...
"""

import time
from collections.abc import Mapping
from typing import Any

import structlog

from recordguard.validators.base import BaseRule, is_empty, is_number, is_sequence
from recordguard.validators.models import FieldType, RuleKind, ValidationResult, Violation
from recordguard.validators.rules import EachRule, RequiredRule
from recordguard.validators.ruleset import FieldSpec, RuleSet

logger = structlog.get_logger()

_TYPE_CHECKS = {
    FieldType.STRING: lambda v: isinstance(v, str),
    FieldType.INTEGER: lambda v: isinstance(v, int) and not isinstance(v, bool),
    FieldType.NUMBER: is_number,
    FieldType.RECORD: lambda v: isinstance(v, Mapping),
    FieldType.SEQUENCE: is_sequence,
}


def _join(prefix: str, name: str) -> str:
    return f"{prefix}.{name}" if prefix else name


def _mismatch(path: str, expected: FieldType, value: Any) -> Violation:
    return Violation(
        path=path,
        rule=RuleKind.TYPE_MISMATCH,
        reason=f"expected {expected.value}, got {type(value).__name__}",
    )


class ValidationEngine:
    """Evaluates rule sets against records.

    Design principles:
        - Pure: no state is kept between calls, the record is never mutated
        - Complete: every violated rule is reported, not just the first
        - Deterministic: violations come out in field declaration order,
          then rule order, then element index
        - Never raises for bad input data: wrong types become violations
    """

    def validate(self, record: Any, rule_set: RuleSet) -> ValidationResult:
        """Validate one record against a rule set.

        Args:
            record: Mapping of field name to value (decoded JSON object, dict, ...)
            rule_set: Immutable rule set built with RuleSetBuilder

        Returns:
            ValidationResult listing every violation (empty when valid)
        """
        start_time = time.perf_counter()

        violations: list[Violation] = []
        if isinstance(record, Mapping):
            self._check_record(record, rule_set, "", violations)
        else:
            violations.append(_mismatch("", FieldType.RECORD, record))

        result = ValidationResult.build(rule_set.name, violations)

        logger.debug(
            "validation_complete",
            rule_set=rule_set.name,
            valid=result.valid,
            total_violations=len(violations),
            summary=result.summary(),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 3),
        )

        return result

    # ── Traversal ──

    def _check_record(
        self, record: Mapping, rule_set: RuleSet, prefix: str, out: list[Violation]
    ) -> None:
        for spec in rule_set:
            self._check_field(spec, record.get(spec.name), _join(prefix, spec.name), out)

    def _check_field(self, spec: FieldSpec, value: Any, path: str, out: list[Violation]) -> None:
        # Absent or empty: only `required` can fail, and it is the sole violation
        if is_empty(value):
            if spec.required:
                reason = RequiredRule().check(value)
                out.append(Violation(path=path, rule=RuleKind.REQUIRED, reason=reason))
            return

        if not _TYPE_CHECKS[spec.type](value):
            out.append(_mismatch(path, spec.type, value))
            return

        # Scalar elements of the wrong type are reported once, here, and skipped by `each`
        mismatched: set[int] = set()
        if spec.type == FieldType.SEQUENCE and spec.nested is None:
            for index, element in enumerate(value):
                if not is_empty(element) and not _TYPE_CHECKS[spec.items](element):
                    out.append(_mismatch(f"{path}[{index}]", spec.items, element))
                    mismatched.add(index)

        for rule in spec.checks:
            if isinstance(rule, EachRule):
                for index, kind, reason in rule.check_elements(value):
                    if index in mismatched:
                        continue
                    out.append(Violation(path=f"{path}[{index}]", rule=kind, reason=reason))
            else:
                self._apply(rule, value, path, out)

        if spec.nested is None:
            return

        if spec.type == FieldType.RECORD:
            self._check_record(value, spec.nested, path, out)
            return

        # Elements already reported empty by each(required) are not descended into
        skip_empty = any(
            isinstance(rule, EachRule) and isinstance(rule.inner, RequiredRule)
            for rule in spec.checks
        )
        for index, element in enumerate(value):
            element_path = f"{path}[{index}]"
            if skip_empty and is_empty(element):
                continue
            if not isinstance(element, Mapping):
                out.append(_mismatch(element_path, FieldType.RECORD, element))
                continue
            self._check_record(element, spec.nested, element_path, out)

    def _apply(self, rule: BaseRule, value: Any, path: str, out: list[Violation]) -> None:
        if not rule.accepts(value):
            out.append(Violation(
                path=path,
                rule=RuleKind.TYPE_MISMATCH,
                reason=f"rule '{rule.name}' cannot evaluate a {type(value).__name__}",
            ))
            return
        try:
            reason = rule.check(value)
        except (TypeError, ValueError, AttributeError) as e:
            logger.warning(
                "rule_evaluation_failed",
                rule=rule.name,
                path=path,
                error=str(e),
            )
            out.append(Violation(
                path=path,
                rule=RuleKind.TYPE_MISMATCH,
                reason=f"rule '{rule.name}' failed on value: {e}",
            ))
            return
        if reason:
            out.append(Violation(path=path, rule=rule.kind, reason=reason))


# Module-level singleton
validation_engine = ValidationEngine()


def validate(record: Any, rule_set: RuleSet) -> ValidationResult:
    """Validate a record against a rule set using the shared engine."""
    return validation_engine.validate(record, rule_set)
