"""Public calculator endpoints.

Thin wrappers over the pure calculation modules. Requests carry Decimal
amounts; responses round money to cents and serialize it as JSON numbers.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field, field_validator

from paywise.budget.allocation import allocate_50_30_20
from paywise.budget.recommendations import Recommendation, evaluate
from paywise.budget.reference import (
    SUBSCRIPTION_CATALOG,
    BudgetCategoryId,
    SubscriptionCategory,
)
from paywise.budget.subscriptions import audit_subscriptions
from paywise.core.config import settings
from paywise.core.logging import get_logger
from paywise.housing.affordability import (
    DEFAULT_ANNUAL_INSURANCE,
    DEFAULT_PROPERTY_TAX_RATE,
    DEFAULT_TERM_YEARS,
    analyze_dti,
    compute_mortgage,
    max_home_price,
    mortgage_schedule,
    rent_affordability,
)
from paywise.income.projector import (
    Frequency,
    IncomeResult,
    income_from_annual,
    project_annual_income,
)
from paywise.loans.amortization import (
    DEFAULT_COMPARISON_TERMS,
    amortization_schedule,
    compare_terms,
    compute_loan,
    round_currency,
)
from paywise.loans.auto import CREDIT_TIERS, DEFAULT_TERM_MONTHS, auto_affordability
from paywise.tax.estimator import TaxInputs, estimate_take_home
from paywise.tax.year_config import TAX_YEAR_CONFIGS, get_tax_year_config

logger = get_logger(__name__)

router = APIRouter(prefix="/api/calculators", tags=["calculators"])

MAX_TERM_MONTHS = 480

# Largest amount any calculator accepts; keeps every result inside the default
# 28-digit Decimal context when rounded to cents.
MAX_AMOUNT = Decimal("1000000000000")

Amount = Annotated[Decimal, Field(ge=0, le=MAX_AMOUNT)]
PositiveAmount = Annotated[Decimal, Field(gt=0, le=MAX_AMOUNT)]


def money(value: Decimal) -> float:
    """Round to cents for a JSON response."""
    return float(round_currency(value))


def percent(value: Decimal) -> float:
    return float(value.quantize(Decimal("0.01")))


# =============================================================================
# Income
# =============================================================================


class IncomeRequest(BaseModel):
    """Paystub data for annual income projection."""

    start_date: date
    as_of_date: date
    ytd_gross: PositiveAmount


class ManualIncomeRequest(BaseModel):
    """A known salary at any frequency."""

    amount: PositiveAmount
    frequency: Frequency = Frequency.ANNUALLY


class IncomeResponse(BaseModel):
    days_worked: int
    daily: float
    weekly: float
    monthly: float
    annual: float
    max_auto_payment: float
    max_rent: float


def _to_income_response(result: IncomeResult) -> IncomeResponse:
    return IncomeResponse(
        days_worked=result.days_worked,
        daily=money(result.daily_rate),
        weekly=money(result.weekly_rate),
        monthly=money(result.monthly_rate),
        annual=money(result.annual_rate),
        max_auto_payment=money(result.max_auto_payment),
        max_rent=money(result.max_rent),
    )


@router.post("/income", response_model=IncomeResponse)
async def calculate_income(payload: IncomeRequest) -> IncomeResponse:
    """Project annual income from year-to-date earnings."""
    result = project_annual_income(payload.start_date, payload.as_of_date, payload.ytd_gross)
    if result is None:
        raise HTTPException(
            status_code=422,
            detail="Insufficient data: the paystub date must be on or after the start date",
        )
    logger.info("income_projected", days_worked=result.days_worked)
    return _to_income_response(result)


@router.post("/income/manual", response_model=IncomeResponse)
async def calculate_manual_income(payload: ManualIncomeRequest) -> IncomeResponse:
    """Break a known salary down into daily, weekly, monthly and annual figures."""
    result = income_from_annual(payload.amount * payload.frequency.per_year)
    if result is None:
        raise HTTPException(
            status_code=422,
            detail="Insufficient data: amount must be positive",
        )
    return _to_income_response(result)


# =============================================================================
# Tax
# =============================================================================


class TaxRequest(BaseModel):
    gross_annual_income: Amount
    state_rate_percent: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    retirement_contribution_percent: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    monthly_health_premium: Amount = Decimal("0")
    tax_year: int | None = None

    @field_validator("tax_year")
    @classmethod
    def validate_tax_year(cls, value: int | None) -> int | None:
        if value is not None and value not in TAX_YEAR_CONFIGS:
            raise ValueError(f"Unsupported tax year. Supported: {sorted(TAX_YEAR_CONFIGS)}")
        return value


class BracketResponse(BaseModel):
    bracket: float | None
    rate: float
    tax_in_bracket: float


class TaxResponse(BaseModel):
    tax_year: int
    gross_annual: float
    federal_tax: float
    fica_tax: float
    social_security: float
    medicare: float
    state_tax: float
    retirement_contribution: float
    health_premiums: float
    total_deductions: float
    net_annual: float
    net_monthly: float
    net_weekly: float
    net_daily: float
    effective_tax_rate: float
    brackets: list[BracketResponse]


@router.post("/tax", response_model=TaxResponse)
async def calculate_tax(payload: TaxRequest) -> TaxResponse:
    """Estimate federal, FICA and state tax and resulting take-home pay."""
    config = get_tax_year_config(payload.tax_year or settings.tax_year)
    result = estimate_take_home(
        TaxInputs(
            gross_annual_income=payload.gross_annual_income,
            state_rate_percent=payload.state_rate_percent,
            retirement_contribution_percent=payload.retirement_contribution_percent,
            monthly_health_premium=payload.monthly_health_premium,
        ),
        config,
    )
    return TaxResponse(
        tax_year=config.tax_year,
        gross_annual=money(result.gross_annual),
        federal_tax=money(result.federal_tax),
        fica_tax=money(result.fica_tax),
        social_security=money(result.social_security),
        medicare=money(result.medicare),
        state_tax=money(result.state_tax),
        retirement_contribution=money(result.retirement_contribution),
        health_premiums=money(result.health_premiums),
        total_deductions=money(result.total_deductions),
        net_annual=money(result.net_annual),
        net_monthly=money(result.net_monthly),
        net_weekly=money(result.net_weekly),
        net_daily=money(result.net_daily),
        effective_tax_rate=percent(result.effective_tax_rate),
        brackets=[
            BracketResponse(
                bracket=float(row["bracket"]) if row["bracket"] is not None else None,
                rate=float(row["rate"]),
                tax_in_bracket=money(row["tax_in_bracket"]),
            )
            for row in result.bracket_breakdown
        ],
    )


# =============================================================================
# Loans
# =============================================================================


class LoanRequest(BaseModel):
    principal: Amount
    annual_rate_percent: Decimal = Field(ge=0, le=100)
    term_months: int = Field(gt=0, le=MAX_TERM_MONTHS)


class LoanCompareRequest(BaseModel):
    principal: Amount
    annual_rate_percent: Decimal = Field(ge=0, le=100)
    terms: list[int] = Field(default_factory=lambda: list(DEFAULT_COMPARISON_TERMS))

    @field_validator("terms")
    @classmethod
    def validate_terms(cls, value: list[int]) -> list[int]:
        if not value:
            raise ValueError("At least one term is required")
        if any(term <= 0 or term > MAX_TERM_MONTHS for term in value):
            raise ValueError(f"Terms must be between 1 and {MAX_TERM_MONTHS} months")
        return value


class LoanResponse(BaseModel):
    term_months: int
    monthly_payment: float
    total_interest: float
    total_paid: float


class AmortizationRowResponse(BaseModel):
    month: int
    payment: float
    principal: float
    interest: float
    balance: float


class ScheduleResponse(BaseModel):
    monthly_payment: float
    total_interest: float
    rows: list[AmortizationRowResponse]


@router.post("/loan", response_model=LoanResponse)
async def calculate_loan(payload: LoanRequest) -> LoanResponse:
    """Monthly payment and total interest for a fixed-rate loan."""
    result = compute_loan(payload.principal, payload.annual_rate_percent, payload.term_months)
    return LoanResponse(
        term_months=payload.term_months,
        monthly_payment=money(result.monthly_payment),
        total_interest=money(result.total_interest),
        total_paid=money(result.total_paid),
    )


@router.post("/loan/compare", response_model=list[LoanResponse])
async def compare_loan_terms(payload: LoanCompareRequest) -> list[LoanResponse]:
    """Payment and interest across several terms at one rate."""
    rows = compare_terms(payload.principal, payload.annual_rate_percent, tuple(payload.terms))
    return [
        LoanResponse(
            term_months=row.term_months,
            monthly_payment=money(row.monthly_payment),
            total_interest=money(row.total_interest),
            total_paid=money(row.total_paid),
        )
        for row in rows
    ]


@router.post("/loan/schedule", response_model=ScheduleResponse)
async def loan_schedule(payload: LoanRequest) -> ScheduleResponse:
    """Month-by-month amortization schedule."""
    rows = amortization_schedule(
        payload.principal, payload.annual_rate_percent, payload.term_months
    )
    return ScheduleResponse(
        monthly_payment=money(rows[0].payment) if rows else 0.0,
        total_interest=money(sum((row.interest for row in rows), Decimal("0"))),
        rows=[
            AmortizationRowResponse(
                month=row.month,
                payment=money(row.payment),
                principal=money(row.principal),
                interest=money(row.interest),
                balance=money(row.balance),
            )
            for row in rows
        ],
    )


class AutoAffordabilityRequest(BaseModel):
    monthly_income: PositiveAmount
    term_months: int = Field(default=DEFAULT_TERM_MONTHS, gt=0, le=MAX_TERM_MONTHS)


class CreditTierResponse(BaseModel):
    name: str
    score_range: str
    apr: float


class PaymentApprovalResponse(BaseModel):
    level: str
    ratio: float
    max_payment: float
    description: str


class LoanEstimateResponse(BaseModel):
    credit_tier: CreditTierResponse
    loan_amount: float
    total_interest: float
    total_cost: float


class AutoAffordabilityResponse(BaseModel):
    monthly_income: float
    term_months: int
    payment_approvals: list[PaymentApprovalResponse]
    loan_estimates: list[LoanEstimateResponse]


@router.get("/credit-tiers", response_model=list[CreditTierResponse])
async def list_credit_tiers() -> list[CreditTierResponse]:
    """Typical auto-loan APR per credit score band."""
    return [
        CreditTierResponse(name=tier.name, score_range=tier.score_range, apr=float(tier.apr))
        for tier in CREDIT_TIERS
    ]


@router.post("/auto-affordability", response_model=AutoAffordabilityResponse)
async def calculate_auto_affordability(
    payload: AutoAffordabilityRequest,
) -> AutoAffordabilityResponse:
    """How much car an income supports at each PTI level and credit tier."""
    result = auto_affordability(payload.monthly_income, payload.term_months)
    return AutoAffordabilityResponse(
        monthly_income=money(result.monthly_income),
        term_months=result.term_months,
        payment_approvals=[
            PaymentApprovalResponse(
                level=approval.pti.value,
                ratio=float(approval.ratio),
                max_payment=money(approval.max_payment),
                description=approval.description,
            )
            for approval in result.payment_approvals
        ],
        loan_estimates=[
            LoanEstimateResponse(
                credit_tier=CreditTierResponse(
                    name=estimate.credit_tier.name,
                    score_range=estimate.credit_tier.score_range,
                    apr=float(estimate.credit_tier.apr),
                ),
                loan_amount=money(estimate.loan_amount),
                total_interest=money(estimate.total_interest),
                total_cost=money(estimate.total_cost),
            )
            for estimate in result.loan_estimates
        ],
    )


# =============================================================================
# Housing
# =============================================================================

MAX_TERM_YEARS = MAX_TERM_MONTHS // 12


class RentRequest(BaseModel):
    monthly_income: PositiveAmount
    current_rent: Amount | None = None


class RentResponse(BaseModel):
    monthly_income: float
    max_rent: float
    conservative_max_rent: float
    current_rent: float | None
    rent_percent: float | None
    is_affordable: bool | None


class MortgageRequest(BaseModel):
    home_price: PositiveAmount
    down_payment_percent: Decimal = Field(ge=0, lt=100)
    annual_rate_percent: Decimal = Field(ge=0, le=100)
    term_years: int = Field(default=DEFAULT_TERM_YEARS, gt=0, le=MAX_TERM_YEARS)
    property_tax_rate_percent: Decimal = Field(default=DEFAULT_PROPERTY_TAX_RATE, ge=0, le=100)
    annual_insurance: Amount = DEFAULT_ANNUAL_INSURANCE


class PitiResponse(BaseModel):
    principal_interest: float
    property_tax: float
    insurance: float
    pmi: float
    total_monthly: float


class MortgageResponse(BaseModel):
    home_price: float
    down_payment: float
    down_payment_percent: float
    loan_amount: float
    annual_rate_percent: float
    term_years: int
    piti: PitiResponse
    total_payments: float
    total_interest: float


class DtiRequest(BaseModel):
    monthly_income: PositiveAmount
    housing_payment: Amount
    other_debts: Amount = Decimal("0")


class DtiResponse(BaseModel):
    monthly_income: float
    housing_payment: float
    other_debts: float
    front_end_dti: float
    back_end_dti: float
    is_affordable: bool
    qualification: str
    description: str


class MaxHomePriceRequest(BaseModel):
    monthly_income: PositiveAmount
    down_payment_percent: Decimal = Field(default=Decimal("20"), ge=0, lt=100)
    annual_rate_percent: Decimal = Field(ge=0, le=100)
    term_years: int = Field(default=DEFAULT_TERM_YEARS, gt=0, le=MAX_TERM_YEARS)


class MaxHomePriceResponse(BaseModel):
    monthly_income: float
    max_housing_payment: float
    max_loan_amount: float
    estimated_max_price: float
    down_payment_percent: float
    annual_rate_percent: float
    term_years: int


class MortgageScheduleRequest(BaseModel):
    principal: PositiveAmount
    annual_rate_percent: Decimal = Field(ge=0, le=100)
    term_years: int = Field(default=DEFAULT_TERM_YEARS, gt=0, le=MAX_TERM_YEARS)


class MortgageScheduleRowResponse(AmortizationRowResponse):
    cumulative_interest: float
    cumulative_principal: float


class MortgageScheduleResponse(BaseModel):
    monthly_payment: float
    total_interest: float
    rows: list[MortgageScheduleRowResponse]


@router.post("/housing/rent", response_model=RentResponse)
async def calculate_rent(payload: RentRequest) -> RentResponse:
    """Rent ceilings at 30% and 25% of gross income."""
    result = rent_affordability(payload.monthly_income, payload.current_rent)
    return RentResponse(
        monthly_income=money(result.monthly_income),
        max_rent=money(result.max_rent),
        conservative_max_rent=money(result.conservative_max_rent),
        current_rent=money(result.current_rent) if result.current_rent is not None else None,
        rent_percent=percent(result.rent_percent) if result.rent_percent is not None else None,
        is_affordable=result.is_affordable,
    )


@router.post("/housing/mortgage", response_model=MortgageResponse)
async def calculate_mortgage(payload: MortgageRequest) -> MortgageResponse:
    """Monthly PITI breakdown and lifetime cost of a home purchase."""
    result = compute_mortgage(
        payload.home_price,
        payload.down_payment_percent,
        payload.annual_rate_percent,
        payload.term_years,
        payload.property_tax_rate_percent,
        payload.annual_insurance,
    )
    piti = result.piti
    return MortgageResponse(
        home_price=money(result.home_price),
        down_payment=money(result.down_payment),
        down_payment_percent=float(result.down_payment_percent),
        loan_amount=money(result.loan_amount),
        annual_rate_percent=float(result.annual_rate_percent),
        term_years=result.term_years,
        piti=PitiResponse(
            principal_interest=money(piti.principal_interest),
            property_tax=money(piti.property_tax),
            insurance=money(piti.insurance),
            pmi=money(piti.pmi),
            total_monthly=money(piti.total_monthly),
        ),
        total_payments=money(result.total_payments),
        total_interest=money(result.total_interest),
    )


@router.post("/housing/dti", response_model=DtiResponse)
async def calculate_dti(payload: DtiRequest) -> DtiResponse:
    """Front-end and back-end debt-to-income ratios for mortgage qualification."""
    result = analyze_dti(payload.monthly_income, payload.housing_payment, payload.other_debts)
    return DtiResponse(
        monthly_income=money(result.monthly_income),
        housing_payment=money(result.housing_payment),
        other_debts=money(result.other_debts),
        front_end_dti=percent(result.front_end_dti),
        back_end_dti=percent(result.back_end_dti),
        is_affordable=result.is_affordable,
        qualification=result.qualification.value,
        description=result.qualification.description,
    )


@router.post("/housing/max-price", response_model=MaxHomePriceResponse)
async def calculate_max_home_price(payload: MaxHomePriceRequest) -> MaxHomePriceResponse:
    """Estimated maximum home price an income supports."""
    result = max_home_price(
        payload.monthly_income,
        payload.down_payment_percent,
        payload.annual_rate_percent,
        payload.term_years,
    )
    return MaxHomePriceResponse(
        monthly_income=money(result.monthly_income),
        max_housing_payment=money(result.max_housing_payment),
        max_loan_amount=money(result.max_loan_amount),
        estimated_max_price=money(result.estimated_max_price),
        down_payment_percent=float(result.down_payment_percent),
        annual_rate_percent=float(result.annual_rate_percent),
        term_years=result.term_years,
    )


@router.post("/housing/schedule", response_model=MortgageScheduleResponse)
async def housing_schedule(payload: MortgageScheduleRequest) -> MortgageScheduleResponse:
    """Mortgage amortization schedule with running totals."""
    rows = mortgage_schedule(payload.principal, payload.annual_rate_percent, payload.term_years)
    return MortgageScheduleResponse(
        monthly_payment=money(rows[0].payment),
        total_interest=money(rows[-1].cumulative_interest),
        rows=[
            MortgageScheduleRowResponse(
                month=row.month,
                payment=money(row.payment),
                principal=money(row.principal),
                interest=money(row.interest),
                balance=money(row.balance),
                cumulative_interest=money(row.cumulative_interest),
                cumulative_principal=money(row.cumulative_principal),
            )
            for row in rows
        ],
    )


# =============================================================================
# Budget
# =============================================================================


class AllocationRequest(BaseModel):
    net_monthly: Amount


class AllocationItemResponse(BaseModel):
    label: str
    percent: float
    monthly: float


class BucketResponse(BaseModel):
    bucket: str
    percent: float
    monthly: float
    weekly: float
    daily: float
    items: list[AllocationItemResponse]


class AllocationResponse(BaseModel):
    net_monthly: float
    buckets: list[BucketResponse]


@router.post("/budget/allocation", response_model=AllocationResponse)
async def calculate_allocation(payload: AllocationRequest) -> AllocationResponse:
    """Split net monthly income by the 50/30/20 rule."""
    allocation = allocate_50_30_20(payload.net_monthly)
    return AllocationResponse(
        net_monthly=money(allocation.net_monthly),
        buckets=[
            BucketResponse(
                bucket=bucket.bucket.value,
                percent=float(bucket.percent),
                monthly=money(bucket.monthly),
                weekly=money(bucket.weekly),
                daily=money(bucket.daily),
                items=[
                    AllocationItemResponse(
                        label=item.label, percent=float(item.percent), monthly=money(item.monthly)
                    )
                    for item in bucket.items
                ],
            )
            for bucket in allocation.buckets
        ],
    )


class RecommendationsRequest(BaseModel):
    monthly_income: Amount
    spending: dict[BudgetCategoryId, Amount] = Field(default_factory=dict)


class RecommendationResponse(BaseModel):
    severity: str
    message: str


def to_recommendation_responses(
    recommendations: list[Recommendation],
) -> list[RecommendationResponse]:
    return [
        RecommendationResponse(severity=rec.severity.value, message=rec.message)
        for rec in recommendations
    ]


@router.post("/budget/recommendations", response_model=list[RecommendationResponse])
async def budget_recommendations(
    payload: RecommendationsRequest,
) -> list[RecommendationResponse]:
    """Evaluate spending against budgeting guidelines."""
    return to_recommendation_responses(evaluate(payload.spending, payload.monthly_income))


# =============================================================================
# Subscriptions
# =============================================================================


class SubscriptionPlanResponse(BaseModel):
    id: str
    name: str
    category: str
    monthly_price: float


class SubscriptionAuditRequest(BaseModel):
    selected_subscriptions: list[str] = Field(default_factory=list)
    custom_sub_amounts: dict[SubscriptionCategory, Amount] = Field(default_factory=dict)
    monthly_income: Amount = Decimal("0")

    @field_validator("selected_subscriptions")
    @classmethod
    def validate_selected(cls, value: list[str]) -> list[str]:
        unknown = [plan_id for plan_id in value if plan_id not in SUBSCRIPTION_CATALOG]
        if unknown:
            raise ValueError(f"Unknown subscriptions: {', '.join(unknown)}")
        return value


class SubscriptionAuditResponse(BaseModel):
    monthly_total: float
    annual_total: float
    percent_of_income: float
    by_category: dict[str, float]
    most_expensive: list[SubscriptionPlanResponse]


@router.get("/subscriptions/catalog", response_model=list[SubscriptionPlanResponse])
async def subscription_catalog() -> list[SubscriptionPlanResponse]:
    """Every known subscription with its typical monthly price."""
    return [
        SubscriptionPlanResponse(
            id=plan_id,
            name=plan.name,
            category=plan.category.value,
            monthly_price=float(plan.monthly_price),
        )
        for plan_id, plan in SUBSCRIPTION_CATALOG.items()
    ]


@router.post("/subscriptions/audit", response_model=SubscriptionAuditResponse)
async def subscription_audit(payload: SubscriptionAuditRequest) -> SubscriptionAuditResponse:
    """Total monthly and annual subscription spending."""
    audit = audit_subscriptions(
        payload.selected_subscriptions, payload.custom_sub_amounts, payload.monthly_income
    )
    return SubscriptionAuditResponse(
        monthly_total=money(audit.monthly_total),
        annual_total=money(audit.annual_total),
        percent_of_income=percent(audit.percent_of_income),
        by_category={category.value: money(amount) for category, amount in audit.by_category.items()},
        most_expensive=[
            SubscriptionPlanResponse(
                id=item.plan_id,
                name=item.plan.name,
                category=item.plan.category.value,
                monthly_price=float(item.plan.monthly_price),
            )
            for item in audit.most_expensive
        ],
    )
