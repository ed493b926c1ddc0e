# This project was developed with assistance from AI tools.
"""Bank of Russia reference rate schemas."""

from pydantic import BaseModel, Field


class ReferenceRates(BaseModel):
    key_rate: float = Field(description="Bank of Russia key rate, % per year.")
    inflation_rate: float = Field(description="Year-over-year inflation, %.")
    deposit_rate: float = Field(description="Suggested savings interest rate, % per year.")
    date: str
    source: str


class ReferenceRatesResponse(BaseModel):
    """Rate feed envelope. ``success`` is False when fallback data is served."""

    success: bool
    error: str | None = None
    data: ReferenceRates
