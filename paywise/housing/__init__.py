"""Rent, mortgage and home price affordability calculators."""

from paywise.housing.affordability import (
    DtiAnalysis,
    DtiQualification,
    MaxHomePrice,
    MortgageResult,
    MortgageScheduleRow,
    PitiBreakdown,
    RentAffordability,
    analyze_dti,
    compute_mortgage,
    max_home_price,
    mortgage_schedule,
    rent_affordability,
)

__all__ = [
    "DtiAnalysis",
    "DtiQualification",
    "MaxHomePrice",
    "MortgageResult",
    "MortgageScheduleRow",
    "PitiBreakdown",
    "RentAffordability",
    "analyze_dti",
    "compute_mortgage",
    "max_home_price",
    "mortgage_schedule",
    "rent_affordability",
]
