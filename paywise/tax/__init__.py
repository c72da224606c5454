"""Tax calculation utilities and year-specific configurations."""

from paywise.tax.estimator import (
    TaxInputs,
    TaxResult,
    compute_federal_tax,
    compute_fica_tax,
    estimate_take_home,
    federal_bracket_breakdown,
)
from paywise.tax.year_config import (
    DEFAULT_TAX_YEAR,
    TAX_YEAR_2024,
    TAX_YEAR_2025,
    TAX_YEAR_CONFIGS,
    TaxYearConfig,
    get_tax_year_config,
)

__all__ = [
    "TaxYearConfig",
    "TAX_YEAR_2024",
    "TAX_YEAR_2025",
    "TAX_YEAR_CONFIGS",
    "DEFAULT_TAX_YEAR",
    "get_tax_year_config",
    "TaxInputs",
    "TaxResult",
    "compute_federal_tax",
    "compute_fica_tax",
    "estimate_take_home",
    "federal_bracket_breakdown",
]
