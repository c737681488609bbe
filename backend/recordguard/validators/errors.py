"""Exceptions raised by the validation core.

Record-level problems are never raised: they are returned as violations.
Only mistakes in a rule declaration surface as exceptions.
"""

from typing import Optional


class RecordGuardError(ValueError):
    """Base class for all recordguard errors."""


class RuleSetConfigError(RecordGuardError):
    """A rule or rule set was declared incorrectly.

    Raised at construction time (rule factories, RuleSetBuilder.build),
    never while a record is being validated.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        if field:
            message = f"{field}: {message}"
        super().__init__(message)
