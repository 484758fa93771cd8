from dataclasses import dataclass, field
from types import MappingProxyType
from enum import Enum
from typing import Any, Mapping, Optional, Tuple
import math

from loanfinder.formatting import fmt_money

AGE_MAX = 15
INCOME_MAX = 25
DEBT_MAX = 20
CREDIT_MAX = 25
RESIDENCY_MAX = 15

FACTOR_MAX = {
    "Age": AGE_MAX,
    "Income": INCOME_MAX,
    "Debt": DEBT_MAX,
    "Credit": CREDIT_MAX,
    "Residency": RESIDENCY_MAX,
}


class CreditRating(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    AVERAGE = "Average"
    POOR = "Poor"
    UNRECOGNIZED = "Unrecognized"

    @classmethod
    def parse(cls, value: Any) -> "CreditRating":
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        for member in (cls.EXCELLENT, cls.GOOD, cls.AVERAGE, cls.POOR):
            if member.value.lower() == key:
                return member
        return cls.UNRECOGNIZED


class ResidencyStatus(str, Enum):
    CITIZEN = "Citizen"
    RESIDENT = "Resident"
    WORK_VISA = "Work Visa"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: Any) -> "ResidencyStatus":
        if isinstance(value, cls):
            return value
        return _RESIDENCY_ALIASES.get(str(value or "").strip().lower(), cls.OTHER)


# Older form values ("citizen", "permanent", "temporary") map onto the same buckets.
_RESIDENCY_ALIASES = {
    "citizen": ResidencyStatus.CITIZEN,
    "nz citizen": ResidencyStatus.CITIZEN,
    "resident": ResidencyStatus.RESIDENT,
    "permanent": ResidencyStatus.RESIDENT,
    "permanent resident": ResidencyStatus.RESIDENT,
    "work visa": ResidencyStatus.WORK_VISA,
    "temporary": ResidencyStatus.WORK_VISA,
    "temporary visa holder": ResidencyStatus.WORK_VISA,
}


class Tier(str, Enum):
    HIGH = "High"
    MODERATE = "Moderate"
    LOW = "Low"


class Impact(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


@dataclass(frozen=True)
class Improvement:
    category: str
    suggestion: str
    impact: Impact


@dataclass(frozen=True)
class BorrowerProfile:
    age: Any
    income: Any
    monthly_debt: Any
    credit_rating: CreditRating = CreditRating.UNRECOGNIZED
    residency_status: ResidencyStatus = ResidencyStatus.OTHER

    def __post_init__(self):
        object.__setattr__(self, "credit_rating", CreditRating.parse(self.credit_rating))
        object.__setattr__(self, "residency_status", ResidencyStatus.parse(self.residency_status))

    @classmethod
    def from_raw(cls, age, income, monthly_debt, credit_rating, residency_status) -> "BorrowerProfile":
        return cls(age, income, monthly_debt, credit_rating, residency_status)


@dataclass(frozen=True)
class EligibilityResult:
    score: int
    tier: Tier
    message: str
    loan_range: str
    loan_limit: int
    improvements: Tuple[Improvement, ...] = ()
    breakdown: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}), hash=False)

    def __post_init__(self):
        object.__setattr__(self, "improvements", tuple(self.improvements))
        object.__setattr__(self, "breakdown", MappingProxyType(dict(self.breakdown)))


TIER_RULES = {
    # tier: (income multiplier, cap, message)
    Tier.HIGH: (0.8, 70000, "You're likely to qualify with most NZ banks"),
    Tier.MODERATE: (0.5, 40000, "Moderate chance with some lenders"),
    Tier.LOW: (0.3, 20000, "Consider improving your financial position"),
}

CREDIT_POINTS = {
    CreditRating.EXCELLENT: 25,
    CreditRating.GOOD: 20,
    CreditRating.AVERAGE: 10,
    CreditRating.POOR: 0,
}

CREDIT_TIP = Improvement("Credit", "Improve credit score by paying bills on time", Impact.HIGH)


def _as_number(x: Any) -> Optional[float]:
    """Finite float or None."""
    if isinstance(x, bool):
        return None
    try:
        v = float(x)
    except (TypeError, ValueError):
        return None
    return v if math.isfinite(v) else None

def _non_negative(x: Any) -> float:
    v = _as_number(x)
    return v if v is not None and v > 0 else 0.0


def age_points(age: Any) -> Tuple[int, Optional[Improvement]]:
    a = _as_number(age)
    if a is None:
        return 5, Improvement("Age", "Age may affect loan eligibility", Impact.LOW)
    if 25 <= a <= 55:
        return 15, None
    if 18 <= a < 25:
        return 12, Improvement("Age", "Age 25+ typically gets better loan terms", Impact.MEDIUM)
    if 55 < a <= 65:
        return 10, Improvement("Age", "Consider applying before retirement age", Impact.LOW)
    return 5, Improvement("Age", "Age may affect loan eligibility", Impact.LOW)

def income_points(income: Any) -> Tuple[int, Optional[Improvement]]:
    i = _non_negative(income)
    if i >= 80000:
        return 25, None
    if i >= 60000:
        return 20, None
    if i >= 40000:
        return 15, None
    if i >= 30000:
        return 10, Improvement("Income", "Increase income to $40K+ for better rates", Impact.HIGH)
    return 5, Improvement("Income", "Most lenders require minimum $35K income", Impact.HIGH)

def debt_ratio(monthly_debt: Any, income: Any) -> float:
    """Monthly debt over monthly income; +inf when there is no income."""
    monthly_income = _non_negative(income) / 12
    if monthly_income <= 0:
        return math.inf
    return _non_negative(monthly_debt) / monthly_income

def debt_points(monthly_debt: Any, income: Any) -> Tuple[int, Optional[Improvement]]:
    ratio = debt_ratio(monthly_debt, income)
    if ratio <= 0.2:
        return 20, None
    if ratio <= 0.3:
        return 15, None
    if ratio <= 0.4:
        return 10, Improvement("Debt", "Reduce monthly debts to under 30% of income", Impact.HIGH)
    return 5, Improvement("Debt", "High debt-to-income ratio - consider debt consolidation", Impact.HIGH)

def credit_points(credit_rating: Any) -> Tuple[int, Optional[Improvement]]:
    rating = CreditRating.parse(credit_rating)
    points = CREDIT_POINTS.get(rating, 0)
    if rating in (CreditRating.EXCELLENT, CreditRating.GOOD):
        return points, None
    return points, CREDIT_TIP

def residency_points(residency_status: Any) -> Tuple[int, Optional[Improvement]]:
    status = ResidencyStatus.parse(residency_status)
    if status in (ResidencyStatus.CITIZEN, ResidencyStatus.RESIDENT):
        return 15, None
    if status is ResidencyStatus.WORK_VISA:
        return 10, Improvement("Residency", "Permanent residency improves loan eligibility", Impact.MEDIUM)
    return 5, Improvement("Residency", "NZ residency or citizenship required for best rates", Impact.HIGH)


def tier_for(score: int) -> Tier:
    if score >= 80:
        return Tier.HIGH
    if score >= 60:
        return Tier.MODERATE
    return Tier.LOW

def loan_limit(income: Any, tier: Tier) -> int:
    multiplier, cap, _ = TIER_RULES[tier]
    return int(round(min(_non_negative(income) * multiplier, cap)))


def score_profile(profile: BorrowerProfile) -> EligibilityResult:
    factors = [
        ("Age", age_points(profile.age)),
        ("Income", income_points(profile.income)),
        ("Debt", debt_points(profile.monthly_debt, profile.income)),
        ("Credit", credit_points(profile.credit_rating)),
        ("Residency", residency_points(profile.residency_status)),
    ]
    breakdown = {name: pts for name, (pts, _) in factors}
    improvements = tuple(tip for _, (_, tip) in factors if tip is not None)

    # Output is always 0-100
    score = int(min(max(round(sum(breakdown.values())), 0), 100))
    tier = tier_for(score)
    limit = loan_limit(profile.income, tier)
    return EligibilityResult(
        score=score,
        tier=tier,
        message=TIER_RULES[tier][2],
        loan_range=fmt_money(limit),
        loan_limit=limit,
        improvements=improvements,
        breakdown=breakdown,
    )

def calculate_eligibility(age, income, monthly_debt, credit_rating, residency_status) -> EligibilityResult:
    """Score raw form values. Never raises; bad inputs land in the lowest bucket."""
    return score_profile(BorrowerProfile.from_raw(age, income, monthly_debt, credit_rating, residency_status))
