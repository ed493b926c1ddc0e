# This project was developed with assistance from AI tools.
"""Live market data used to pre-populate calculator defaults.

Both endpoints always answer 200: upstream failures are reported through
``success=False`` with fallback data.
"""

from typing import Literal

from fastapi import APIRouter, Query

from ..schemas.market import MarketPricesResponse
from ..schemas.rates import ReferenceRatesResponse
from ..services.market_prices import fetch_market_prices
from ..services.reference_rates import fetch_reference_rates

router = APIRouter()

PropertyType = Literal["1", "2", "3", "4", "5", "6"]
PricePeriod = Literal["1", "2", "3", "4", "5"]


@router.get("/prices", response_model=MarketPricesResponse)
async def market_prices(
    type: PropertyType = Query(default="1", description="Apartment type (1 all .. 6 studio)"),
    period: PricePeriod = Query(
        default="2", description="History period (1 quarter .. 5 seven years)"
    ),
    region: str = Query(
        default="2", pattern=r"^\d+$", description="restate.ru region id (2 = Moscow)"
    ),
) -> MarketPricesResponse:
    """Latest price per square meter for new and resale apartments, with history."""
    return await fetch_market_prices(type, period, region)


@router.get("/cbr", response_model=ReferenceRatesResponse)
async def reference_rates() -> ReferenceRatesResponse:
    """Bank of Russia key rate, inflation and a suggested deposit rate."""
    return await fetch_reference_rates()
