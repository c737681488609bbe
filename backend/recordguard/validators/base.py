"""Base rule — abstract class implementing the Strategy Pattern.

Each rule is a standalone, independently testable predicate over one value.
New rule kinds are added without modifying the engine.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar, Optional

from recordguard.validators.models import FieldType, RuleKind, SCALAR_TYPES


class BaseRule(ABC):
    """Abstract base for all field rules.

    Contract:
        - check() is deterministic: same value → same outcome
        - check() returns None when the value passes, else a human-readable reason
        - check() is only called with values of an accepted type (see accepts())
        - Rules are immutable once constructed (subclasses are frozen dataclasses)
    """

    kind: ClassVar[RuleKind]

    # Field types this rule may be attached to
    applies_to: ClassVar[frozenset[FieldType]] = SCALAR_TYPES

    # Python types check() knows how to handle
    value_types: ClassVar[tuple[type, ...]] = (str,)

    @abstractmethod
    def check(self, value: Any) -> Optional[str]:
        """Evaluate the rule against a single, present, non-empty value.

        Args:
            value: Field value (already type-checked by the engine)

        Returns:
            None if the rule holds, otherwise the reason it does not
        """
        ...

    def accepts(self, value: Any) -> bool:
        """Whether the value has a type this rule can evaluate."""
        if isinstance(value, bool):
            return bool in self.value_types or object in self.value_types
        return isinstance(value, self.value_types)

    def compatible_with(self, field_type: FieldType) -> bool:
        return field_type in self.applies_to

    @property
    def name(self) -> str:
        """Rule kind as reported in violations."""
        return self.kind.value


# ── Value helpers shared by the rules and the engine ──

def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_empty(value: Any) -> bool:
    """Absent-equivalent values: None, "", and empty sequences or records."""
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, Mapping)):
        return len(value) == 0
    return False
