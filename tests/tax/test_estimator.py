"""Tests for the take-home pay estimator."""

from decimal import Decimal

import pytest

from paywise.tax.estimator import (
    TaxInputs,
    compute_federal_tax,
    compute_fica_tax,
    estimate_take_home,
    federal_bracket_breakdown,
)
from paywise.tax.year_config import (
    TAX_YEAR_2024,
    TAX_YEAR_2025,
    TaxYearConfig,
    get_tax_year_config,
)

TAX_YEARS = [TAX_YEAR_2024, TAX_YEAR_2025]


# =============================================================================
# Federal tax
# =============================================================================


class TestFederalTax:
    """Marginal brackets after the standard deduction."""

    def test_federal_tax_50000_single_2024(self) -> None:
        """50k gross: 10% of 11,600 plus 12% of 23,800."""
        assert compute_federal_tax(Decimal("50000")) == Decimal("4016.00")

    def test_income_below_standard_deduction_owes_nothing(self) -> None:
        assert compute_federal_tax(Decimal("14000")) == Decimal("0")
        assert federal_bracket_breakdown(Decimal("14000")) == []

    def test_breakdown_rows_sum_to_total(self) -> None:
        gross = Decimal("250000")
        rows = federal_bracket_breakdown(gross)
        assert sum(row["tax_in_bracket"] for row in rows) == compute_federal_tax(gross)
        assert [row["rate"] for row in rows] == sorted(row["rate"] for row in rows)

    def test_top_bracket_reported_without_bound(self) -> None:
        rows = federal_bracket_breakdown(Decimal("1000000"))
        assert rows[-1]["bracket"] is None
        assert rows[-1]["rate"] == Decimal("0.37")

    def test_tax_at_second_bracket_top_2024(self) -> None:
        """14,600 deduction + 47,150: all of the 10% and 12% brackets."""
        gross = Decimal("14600") + Decimal("47150")
        assert compute_federal_tax(gross) == Decimal("5426.00")

    @pytest.mark.parametrize("config", TAX_YEARS, ids=lambda config: str(config.tax_year))
    def test_tax_at_each_bracket_top_is_sum_of_full_brackets(
        self, config: TaxYearConfig
    ) -> None:
        full_brackets = Decimal("0")
        prev_bound = Decimal("0")
        for upper_bound, rate in config.brackets:
            if upper_bound is None:
                break
            full_brackets += (upper_bound - prev_bound) * rate
            prev_bound = upper_bound
            gross = config.standard_deduction + upper_bound
            assert compute_federal_tax(gross, config) == full_brackets

    @pytest.mark.parametrize("config", TAX_YEARS, ids=lambda config: str(config.tax_year))
    def test_tax_never_decreases_as_gross_rises(self, config: TaxYearConfig) -> None:
        edges = [
            config.standard_deduction + upper + offset
            for upper, _ in config.brackets
            if upper is not None
            for offset in (Decimal("-0.01"), Decimal("0"), Decimal("0.01"))
        ]
        steps = [Decimal(step) * 7919 for step in range(120)]
        grosses = sorted({*edges, *steps, config.standard_deduction, Decimal("2000000")})
        taxes = [compute_federal_tax(gross, config) for gross in grosses]
        assert all(lower <= higher for lower, higher in zip(taxes, taxes[1:]))

    def test_2025_uses_its_own_deduction(self) -> None:
        tax_2024 = compute_federal_tax(Decimal("50000"), TAX_YEAR_2024)
        tax_2025 = compute_federal_tax(Decimal("50000"), TAX_YEAR_2025)
        assert tax_2025 < tax_2024


# =============================================================================
# FICA
# =============================================================================


class TestFica:
    def test_fica_is_flat_7_65_percent(self) -> None:
        total, social_security, medicare = compute_fica_tax(Decimal("50000"))
        assert social_security == Decimal("3100.000")
        assert medicare == Decimal("725.0000")
        assert total == Decimal("3825")

    def test_fica_not_capped_at_wage_base(self) -> None:
        """FICA applies to the whole gross, even above the SS wage base."""
        total, _, _ = compute_fica_tax(Decimal("200000"))
        assert total == Decimal("200000") * TAX_YEAR_2024.fica_rate


# =============================================================================
# Take-home
# =============================================================================


class TestEstimateTakeHome:
    def test_take_home_50000(self) -> None:
        result = estimate_take_home(TaxInputs(gross_annual_income=Decimal("50000")))

        assert result.federal_tax == Decimal("4016.00")
        assert result.fica_tax == Decimal("3825")
        assert result.state_tax == Decimal("0")
        assert result.net_annual == Decimal("42159")
        assert result.net_monthly == Decimal("42159") / 12
        assert result.total_deductions == Decimal("7841")

    def test_state_retirement_and_health_deductions(self) -> None:
        result = estimate_take_home(
            TaxInputs(
                gross_annual_income=Decimal("60000"),
                state_rate_percent=Decimal("5"),
                retirement_contribution_percent=Decimal("6"),
                monthly_health_premium=Decimal("200"),
            )
        )

        assert result.state_tax == Decimal("3000")
        assert result.retirement_contribution == Decimal("3600")
        assert result.health_premiums == Decimal("2400")
        expected_net = (
            Decimal("60000")
            - result.federal_tax
            - result.fica_tax
            - Decimal("3000")
            - Decimal("3600")
            - Decimal("2400")
        )
        assert result.net_annual == expected_net

    def test_effective_rate_excludes_retirement_and_health(self) -> None:
        with_extras = estimate_take_home(
            TaxInputs(
                gross_annual_income=Decimal("80000"),
                retirement_contribution_percent=Decimal("10"),
                monthly_health_premium=Decimal("300"),
            )
        )
        without = estimate_take_home(TaxInputs(gross_annual_income=Decimal("80000")))
        assert with_extras.effective_tax_rate == without.effective_tax_rate

    def test_zero_income(self) -> None:
        result = estimate_take_home(TaxInputs(gross_annual_income=Decimal("0")))
        assert result.net_annual == Decimal("0")
        assert result.effective_tax_rate == Decimal("0")

    @pytest.mark.parametrize("gross", ["30000", "75000", "150000", "400000"])
    def test_net_never_exceeds_gross(self, gross: str) -> None:
        result = estimate_take_home(TaxInputs(gross_annual_income=Decimal(gross)))
        assert Decimal("0") < result.net_annual < Decimal(gross)


# =============================================================================
# Year configuration
# =============================================================================


class TestTaxYearConfig:
    def test_get_known_year(self) -> None:
        assert get_tax_year_config(2024).standard_deduction == Decimal("14600")

    def test_unknown_year_raises(self) -> None:
        with pytest.raises(ValueError, match="No tax configuration for year 1999"):
            get_tax_year_config(1999)

    def test_top_bracket_must_be_unbounded(self) -> None:
        with pytest.raises(ValueError, match="unbounded"):
            TaxYearConfig(
                tax_year=2030,
                brackets=((Decimal("10000"), Decimal("0.10")),),
                standard_deduction=Decimal("0"),
                ss_wage_base=Decimal("0"),
            )
