"""
passlab.models

Immutable result types returned by the evaluator:
- StrengthCategory / Severity enums
- PasswordWarning, EntropyComponent, PasswordAnalysisResult

None of these ever hold the analysed password itself.
"""

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


class StrengthCategory(str, enum.Enum):
    VERY_WEAK = "Very Weak"
    WEAK = "Weak"
    FAIR = "Fair"
    STRONG = "Strong"


class Severity(str, enum.Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class PasswordWarning:
    # id is a stable key used for de-duplication; it is not meant for display
    id: str
    title: str
    detail: str
    severity: Severity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "detail": self.detail,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class EntropyComponent:
    label: str
    bits: float  # positive = contribution, negative = deduction

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "bits": self.bits}


@dataclass(frozen=True)
class PasswordAnalysisResult:
    """
    Outcome of one evaluator run.

    meter_value is entropy_bits normalised to 0..1 against an 80-bit cap.
    breakdown always starts with the baseline entry, followed by each
    applied adjustment in rule order.
    """
    password_length: int
    entropy_bits: float
    category: StrengthCategory
    meter_value: float
    warnings: Tuple[PasswordWarning, ...] = field(default_factory=tuple)
    breakdown: Tuple[EntropyComponent, ...] = field(default_factory=tuple)

    @property
    def warning_ids(self) -> Tuple[str, ...]:
        return tuple(w.id for w in self.warnings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "password_length": self.password_length,
            "entropy_bits": self.entropy_bits,
            "category": self.category.value,
            "meter_value": self.meter_value,
            "warnings": [w.to_dict() for w in self.warnings],
            "breakdown": [c.to_dict() for c in self.breakdown],
        }
