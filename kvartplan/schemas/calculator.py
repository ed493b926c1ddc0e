# This project was developed with assistance from AI tools.
"""Savings and mortgage calculator schemas."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

# Longest mortgage term accepted, in years
MAX_MORTGAGE_TERM = 50

# Bounds keep 600 months of compounding inside float range
Amount = Annotated[float, Field(ge=-1e12, le=1e12)]
AnnualPercent = Annotated[float, Field(ge=-100, le=1000)]


class CalculatorInputs(BaseModel):
    """Input for the savings/mortgage projection.

    Rates are annual percentages. Negative rates model a decline and are
    accepted as-is; the engine does not validate monetary values. NaN,
    infinity and magnitudes that would overflow the projection are rejected.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    # Property
    apartment_price: Amount = 10_000_000
    price_growth_rate: AnnualPercent = 8

    # Income and savings
    salary: Amount = 150_000
    salary_growth_rate: AnnualPercent = 5
    monthly_savings: Amount = 50_000
    initial_savings: Amount = 0
    savings_interest_rate: AnnualPercent = 10

    # Mortgage
    mortgage_rate: AnnualPercent = 18
    down_payment_percent: AnnualPercent = 20
    mortgage_term: int = Field(
        default=20, ge=1, le=MAX_MORTGAGE_TERM, description="Loan term in years."
    )


class MonthlyProjectionPoint(BaseModel):
    """State of the savings plan at the start of a given month, in whole rubles."""

    month: int
    apartment_price: int
    total_savings: int
    monthly_saving: int
    down_payment_target: int
    surplus: int = Field(description="Savings minus the down payment target; may be negative.")


class CalculationResults(BaseModel):
    """Projection results.

    ``months_to_down_payment`` and ``months_to_full_price`` are -1 when the
    target is not reached within the 50-year search horizon; the matching
    ``*_wait`` text then reads "Невозможно". ``yearly_projection`` holds at
    most 11 rows.
    """

    future_apartment_price: int
    required_down_payment: int
    loan_amount: int
    months_to_down_payment: int
    months_to_full_price: int
    down_payment_wait: str = Field(description="months_to_down_payment as ru-RU text.")
    full_price_wait: str = Field(description="months_to_full_price as ru-RU text.")
    monthly_mortgage_payment: int
    total_mortgage_payment: int
    mortgage_overpayment: int
    overpayment_percent: int
    recommended_monthly_savings: int
    projected_savings: int
    savings_share_percent: int
    monthly_projection: list[MonthlyProjectionPoint]
    yearly_projection: list[MonthlyProjectionPoint]
