# This project was developed with assistance from AI tools.
"""Public calculator routes -- no authentication required."""

from fastapi import APIRouter

from ..schemas.calculator import CalculationResults, CalculatorInputs
from ..schemas.market import ApartmentType
from ..services.calculator import calculate_all
from ..services.market_prices import APARTMENT_TYPES

router = APIRouter()


@router.get("/defaults", response_model=CalculatorInputs)
async def default_inputs() -> CalculatorInputs:
    """Initial calculator values for a new session."""
    return CalculatorInputs()


@router.get("/apartment-types", response_model=list[ApartmentType])
async def list_apartment_types() -> list[ApartmentType]:
    """Apartment categories with their typical floor area."""
    return APARTMENT_TYPES


@router.post("/calculate", response_model=CalculationResults)
async def calculate(inputs: CalculatorInputs) -> CalculationResults:
    """Project savings against a growing apartment price and size the mortgage.

    ``months_to_down_payment`` / ``months_to_full_price`` are -1 when the goal
    is not reached within 50 years; the mortgage figures then use today's price.
    """
    return calculate_all(inputs)
