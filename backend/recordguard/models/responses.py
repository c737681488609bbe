"""API response models."""

from pydantic import BaseModel, Field

from recordguard.validators import ValidationResult


class ViolationResponse(BaseModel):
    """Single violation as returned to API clients."""

    path: str
    rule: str
    reason: str


class ValidationResponse(BaseModel):
    """Outcome of validating one record."""

    rule_set: str
    valid: bool
    violations: list[ViolationResponse] = []
    summary: dict[str, int] = Field(default_factory=dict, description="Count of violations by rule")

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidationResponse":
        return cls(
            rule_set=result.rule_set,
            valid=result.valid,
            violations=[
                ViolationResponse(path=v.path, rule=v.rule, reason=v.reason)
                for v in result.violations
            ],
            summary=result.summary(),
        )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    uptime_seconds: float
    rule_sets: list[str] = []
