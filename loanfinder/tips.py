from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from loanfinder.scoring import (
    FACTOR_MAX,
    CreditRating,
    Impact,
    age_points,
    credit_points,
    debt_ratio,
    debt_points,
    income_points,
    residency_points,
)
from loanfinder.storage import SavedProfile


@dataclass(frozen=True)
class ImprovementTip:
    category: str
    title: str
    description: str
    impact: Impact
    timeframe: str
    actions: Tuple[str, ...]


ALL_TIPS: Tuple[ImprovementTip, ...] = (
    ImprovementTip(
        "Income", "Increase Your Annual Income",
        "Higher income significantly improves loan eligibility and amount",
        Impact.HIGH, "3-12 months",
        ("Ask for a salary increase or promotion",
         "Take on freelance or part-time work",
         "Develop skills for higher-paying roles",
         "Consider changing jobs for better pay"),
    ),
    ImprovementTip(
        "Debt", "Reduce Monthly Debt Payments",
        "Lower debt-to-income ratio makes you more attractive to lenders",
        Impact.HIGH, "1-6 months",
        ("Pay off high-interest credit cards first",
         "Consolidate multiple debts",
         "Avoid taking on new debt",
         "Consider debt consolidation loans"),
    ),
    ImprovementTip(
        "Credit", "Improve Your Credit Rating",
        "Better credit score unlocks lower rates and higher loan amounts",
        Impact.HIGH, "3-12 months",
        ("Pay all bills on time consistently",
         "Keep credit utilization below 30%",
         "Don't close old credit accounts",
         "Check and dispute credit report errors"),
    ),
    ImprovementTip(
        "Age", "Age Considerations",
        "Lenders prefer borrowers in their prime earning years",
        Impact.LOW, "N/A",
        ("If under 25: Build credit history and stable income",
         "If over 55: Consider shorter loan terms",
         "Focus on other factors you can control",
         "Highlight job stability and experience"),
    ),
    ImprovementTip(
        "Residency", "Strengthen Residency Status",
        "Permanent residency improves eligibility with most lenders",
        Impact.MEDIUM, "Varies",
        ("Apply for permanent residency if eligible",
         "Maintain continuous employment",
         "Keep all visa documentation current",
         "Consider specialist lenders for visa holders"),
    ),
    ImprovementTip(
        "Savings", "Build Emergency Savings",
        "Having savings shows financial stability to lenders",
        Impact.MEDIUM, "6-12 months",
        ("Save at least 3-6 months of expenses",
         "Open a dedicated savings account",
         "Set up automatic transfers to savings",
         "Reduce unnecessary expenses"),
    ),
    ImprovementTip(
        "Employment", "Stabilize Employment History",
        "Consistent employment history improves loan approval chances",
        Impact.MEDIUM, "6-24 months",
        ("Stay in current job for at least 12 months",
         "Avoid job-hopping before applying",
         "Get employment contracts in writing",
         "Document any salary increases"),
    ),
    ImprovementTip(
        "Assets", "Build Assets and Equity",
        "Assets can be used as security or demonstrate financial stability",
        Impact.MEDIUM, "12+ months",
        ("Save for a property deposit",
         "Build investment portfolio",
         "Consider secured loans if you have assets",
         "Document all valuable assets"),
    ),
)


def weak_factors(saved: SavedProfile) -> List[str]:
    """Factors holding the score back, most actionable first."""
    profile = saved.to_profile()
    weak = []
    if income_points(profile.income)[0] < 20:  # under $60K
        weak.append("Income")
    if debt_ratio(profile.monthly_debt, profile.income) > 0.3:
        weak.append("Debt")
    if profile.credit_rating in (CreditRating.AVERAGE, CreditRating.POOR, CreditRating.UNRECOGNIZED):
        weak.append("Credit")
    if age_points(profile.age)[0] < FACTOR_MAX["Age"]:
        weak.append("Age")
    if residency_points(profile.residency_status)[0] < FACTOR_MAX["Residency"]:
        weak.append("Residency")
    return weak

def personalized_tips(saved: Optional[SavedProfile]) -> List[ImprovementTip]:
    if saved is None:
        return list(ALL_TIPS)
    order = weak_factors(saved)
    first = [t for c in order for t in ALL_TIPS if t.category == c]
    return first + [t for t in ALL_TIPS if t.category not in order]

def score_breakdown(saved: SavedProfile) -> Dict[str, int]:
    """Percent of the maximum reached for each factor."""
    profile = saved.to_profile()
    points = {
        "Age": age_points(profile.age)[0],
        "Income": income_points(profile.income)[0],
        "Debt": debt_points(profile.monthly_debt, profile.income)[0],
        "Credit": credit_points(profile.credit_rating)[0],
        "Residency": residency_points(profile.residency_status)[0],
    }
    return {name: round(pts / FACTOR_MAX[name] * 100) for name, pts in points.items()}
