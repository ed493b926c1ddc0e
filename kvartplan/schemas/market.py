# This project was developed with assistance from AI tools.
"""Market price feed schemas (restate.ru price per square meter)."""

from pydantic import BaseModel


class ApartmentType(BaseModel):
    """Apartment category understood by the price feed."""

    value: str
    label: str
    avg_size: int


class SegmentPrices(BaseModel):
    """A value for each market segment."""

    new_building: int
    secondary: int


class AnnualizedGrowth(BaseModel):
    """Suggested annual price growth (%) per segment, derived from history."""

    new_building: float | None = None
    secondary: float | None = None


class PriceHistoryPoint(BaseModel):
    date: str
    new_building: float
    secondary: float


class MarketPrices(BaseModel):
    date: str | None
    type: str
    price_per_sqm: SegmentPrices
    average_price: SegmentPrices
    avg_size: int
    history: list[PriceHistoryPoint]
    annualized_growth: AnnualizedGrowth | None = None


class MarketPricesResponse(BaseModel):
    """Price feed envelope. ``success`` is False when fallback data is served."""

    success: bool
    error: str | None = None
    data: MarketPrices
