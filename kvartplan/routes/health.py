# This project was developed with assistance from AI tools.
"""Liveness endpoint."""

from fastapi import APIRouter

from ..schemas.health import ServiceHealth

router = APIRouter()


@router.get("/", response_model=list[ServiceHealth])
async def health() -> list[ServiceHealth]:
    """The calculator has no backing services, so only the API itself is reported."""
    return [ServiceHealth(name="API", status="healthy")]
