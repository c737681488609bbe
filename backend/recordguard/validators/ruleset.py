"""Rule sets — the immutable, declarative description of a record type.

A RuleSet pairs a record shape (field names and types) with the rules
attached to each field. It is built once, at startup, through
RuleSetBuilder; every declaration mistake surfaces there as a
RuleSetConfigError instead of as a bad validation result later.

Usage:
    address_rules = (
        RuleSetBuilder("address")
        .string("state", required())
        .string("zip", required(), numeric(), fixed_length(5))
        .build()
    )
"""

from dataclasses import dataclass
from typing import Iterator, Optional

from recordguard.validators.base import BaseRule
from recordguard.validators.errors import RuleSetConfigError
from recordguard.validators.models import FieldType, SCALAR_TYPES
from recordguard.validators.rules import EachRule, RequiredRule

_PATH_CHARS = frozenset(".[]")


@dataclass(frozen=True)
class FieldSpec:
    """One declared field: its type, its rules, and its nested rule set if any."""

    name: str
    type: FieldType
    rules: tuple[BaseRule, ...] = ()
    nested: Optional["RuleSet"] = None
    items: FieldType = FieldType.STRING  # Element type of a sequence without a nested rule set

    @property
    def required(self) -> bool:
        return any(isinstance(rule, RequiredRule) for rule in self.rules)

    @property
    def checks(self) -> tuple[BaseRule, ...]:
        """Rules evaluated once the field is known to be present."""
        return tuple(rule for rule in self.rules if not isinstance(rule, RequiredRule))

    @property
    def element_type(self) -> Optional[FieldType]:
        if self.type != FieldType.SEQUENCE:
            return None
        return FieldType.RECORD if self.nested is not None else self.items


@dataclass(frozen=True)
class RuleSet:
    """Ordered, read-only collection of field specs for one record type."""

    name: str
    fields: tuple[FieldSpec, ...]

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, name: object) -> bool:
        return any(spec.name == name for spec in self.fields)

    @property
    def field_names(self) -> list[str]:
        return [spec.name for spec in self.fields]

    def field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(f"rule set '{self.name}' has no field '{name}'")

    def nested_rule_sets(self) -> list["RuleSet"]:
        """All rule sets reachable from this one, depth first, excluding itself."""
        found = []
        for spec in self.fields:
            if spec.nested is not None:
                found.append(spec.nested)
                found.extend(spec.nested.nested_rule_sets())
        return found

    @staticmethod
    def builder(name: str) -> "RuleSetBuilder":
        return RuleSetBuilder(name)


class RuleSetBuilder:
    """Collects field declarations and attached rules, then builds a RuleSet.

    Declaration methods return the builder so calls can be chained.
    """

    def __init__(self, name: str):
        if not isinstance(name, str) or not name:
            raise RuleSetConfigError(f"rule set name must be a non-empty string, got {name!r}")
        self._name = name
        self._fields: dict[str, dict] = {}

    # ── Declarations ──

    def string(self, name: str, *rules: BaseRule) -> "RuleSetBuilder":
        return self._declare(name, FieldType.STRING, rules)

    def integer(self, name: str, *rules: BaseRule) -> "RuleSetBuilder":
        return self._declare(name, FieldType.INTEGER, rules)

    def number(self, name: str, *rules: BaseRule) -> "RuleSetBuilder":
        return self._declare(name, FieldType.NUMBER, rules)

    def record(self, name: str, nested: "RuleSet", *rules: BaseRule) -> "RuleSetBuilder":
        if not isinstance(nested, RuleSet):
            raise RuleSetConfigError("record field needs a nested RuleSet", field=name)
        return self._declare(name, FieldType.RECORD, rules, nested=nested)

    def sequence(
        self,
        name: str,
        *rules: BaseRule,
        of: Optional["RuleSet"] = None,
        items: FieldType = FieldType.STRING,
    ) -> "RuleSetBuilder":
        """Declare a list field: of records when `of` is given, else of `items` scalars."""
        if of is not None and not isinstance(of, RuleSet):
            raise RuleSetConfigError("sequence 'of' must be a RuleSet", field=name)
        if of is None and items not in SCALAR_TYPES:
            raise RuleSetConfigError(
                f"sequence items must be a scalar type, got {items}; use 'of' for records",
                field=name,
            )
        return self._declare(name, FieldType.SEQUENCE, rules, nested=of, items=items)

    def attach(self, name: str, *rules: BaseRule) -> "RuleSetBuilder":
        """Attach rules declared elsewhere to an already declared field."""
        if name not in self._fields:
            if _PATH_CHARS & set(name):
                raise RuleSetConfigError(
                    "rules for nested fields belong on the nested rule set", field=name
                )
            raise RuleSetConfigError(f"no field named '{name}' in rule set '{self._name}'", field=name)
        self._fields[name]["rules"].extend(rules)
        return self

    # ── Build ──

    def build(self) -> RuleSet:
        if not self._fields:
            raise RuleSetConfigError(f"rule set '{self._name}' declares no fields")

        specs = []
        for name, declared in self._fields.items():
            spec = FieldSpec(
                name=name,
                type=declared["type"],
                rules=tuple(declared["rules"]),
                nested=declared["nested"],
                items=declared["items"],
            )
            self._check_rules(spec)
            specs.append(spec)

        return RuleSet(name=self._name, fields=tuple(specs))

    def _declare(self, name, field_type, rules, nested=None, items=FieldType.STRING) -> "RuleSetBuilder":
        if not isinstance(name, str) or not name:
            raise RuleSetConfigError(f"field name must be a non-empty string, got {name!r}")
        if _PATH_CHARS & set(name):
            raise RuleSetConfigError("field names cannot contain '.', '[' or ']'", field=name)
        if name in self._fields:
            raise RuleSetConfigError(f"field declared twice in rule set '{self._name}'", field=name)

        self._fields[name] = {
            "type": field_type,
            "rules": list(rules),
            "nested": nested,
            "items": items,
        }
        return self

    @staticmethod
    def _check_rules(spec: FieldSpec) -> None:
        for rule in spec.rules:
            if not isinstance(rule, BaseRule):
                raise RuleSetConfigError(f"{rule!r} is not a rule", field=spec.name)
            if not rule.compatible_with(spec.type):
                raise RuleSetConfigError(
                    f"rule '{rule.name}' cannot apply to a {spec.type.value} field",
                    field=spec.name,
                )
            if isinstance(rule, EachRule) and not rule.inner.compatible_with(spec.element_type):
                raise RuleSetConfigError(
                    f"rule 'each({rule.inner.name})' cannot apply to {spec.element_type.value} elements",
                    field=spec.name,
                )
