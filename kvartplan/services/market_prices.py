# This project was developed with assistance from AI tools.
"""Regional apartment prices from restate.ru.

Fetches the price-per-square-meter graph for new buildings and resale
apartments and turns the latest point into an average apartment price for
the chosen apartment type. The feed is only used to suggest defaults, so
every upstream or parsing failure degrades to a static fallback instead of
raising.

restate.ru query parameters:
  type:   1 all apartments, 2 one-room, 3 two-room, 4 three-room,
          5 multi-room, 6 studio
  period: 1 quarter, 2 one year, 3 three years, 4 five years, 5 seven years
  region: 2 is Moscow
"""

import logging
import math
import time

import httpx

from ..core.config import settings
from ..schemas.market import (
    AnnualizedGrowth,
    ApartmentType,
    MarketPrices,
    MarketPricesResponse,
    PriceHistoryPoint,
    SegmentPrices,
)

logger = logging.getLogger(__name__)

APARTMENT_TYPES: list[ApartmentType] = [
    ApartmentType(value="1", label="Все квартиры", avg_size=50),
    ApartmentType(value="2", label="1-комнатная", avg_size=38),
    ApartmentType(value="3", label="2-комнатная", avg_size=55),
    ApartmentType(value="4", label="3-комнатная", avg_size=75),
    ApartmentType(value="5", label="Многокомнатная", avg_size=100),
    ApartmentType(value="6", label="Студия", avg_size=28),
]

PRICE_PERIODS: dict[str, str] = {
    "1": "Квартал",
    "2": "1 год",
    "3": "3 года",
    "4": "5 лет",
    "5": "7 лет",
}

DEFAULT_AVG_SIZE = 50

_AVG_SIZES: dict[str, int] = {t.value: t.avg_size for t in APARTMENT_TYPES}

# Served when restate.ru is unreachable (Moscow, December 2025)
_FALLBACK_DATE = "09.12.2025"
_FALLBACK_NEW_BUILDING_SQM = 519306
_FALLBACK_SECONDARY_SQM = 475564

# History needs more than this many rows before a growth rate is suggested
_MIN_GROWTH_ROWS = 2

# ---------------------------------------------------------------------------
# Response cache
# ---------------------------------------------------------------------------

_cache: dict[tuple[str, str, str], tuple[float, MarketPricesResponse]] = {}


def _get_cached(key: tuple[str, str, str]) -> MarketPricesResponse | None:
    entry = _cache.get(key)
    if entry is None:
        return None
    fetched_at, response = entry
    if time.time() - fetched_at > settings.FEED_CACHE_TTL:
        del _cache[key]
        return None
    return response


def _store(key: tuple[str, str, str], response: MarketPricesResponse) -> None:
    """Cache ``response`` and drop every entry that has expired."""
    now = time.time()
    ttl = settings.FEED_CACHE_TTL
    for stale in [k for k, (fetched_at, _) in _cache.items() if now - fetched_at > ttl]:
        del _cache[stale]
    _cache[key] = (now, response)


def clear_cache() -> None:
    _cache.clear()


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _to_rubles(value: float) -> int:
    return math.floor(value + 0.5)


def _annualize(first: float, last: float, months: int) -> float | None:
    if first == 0:
        return None
    change = (last - first) / first * 100
    annual = change / months * 12
    # Nearest half percent, like the growth-rate slider step
    return math.floor(annual * 2 + 0.5) / 2


def annualized_growth(history: list[PriceHistoryPoint]) -> AnnualizedGrowth | None:
    """Suggest an annual price growth rate from the price history.

    Each history row is treated as one month. Returns None when the history
    is too short to say anything.
    """
    if len(history) <= _MIN_GROWTH_ROWS:
        return None

    first, last = history[0], history[-1]
    months = len(history)
    return AnnualizedGrowth(
        new_building=_annualize(first.new_building, last.new_building, months),
        secondary=_annualize(first.secondary, last.secondary, months),
    )


def _column(row: list, index: int):
    return row[index] if len(row) > index else None


def parse_price_rows(rows: list, property_type: str) -> MarketPrices:
    """Build MarketPrices from restate.ru ``rows`` ([date, new, secondary] triples).

    Missing or empty price columns count as 0.

    Raises:
        ValueError, TypeError: on rows that are not lists or hold non-numeric prices.
    """
    history = [
        PriceHistoryPoint(
            date=str(_column(row, 0) or ""),
            new_building=float(_column(row, 1) or 0),
            secondary=float(_column(row, 2) or 0),
        )
        for row in rows
    ]
    latest = history[-1] if history else None
    new_building = latest.new_building if latest else 0.0
    secondary = latest.secondary if latest else 0.0
    avg_size = _AVG_SIZES.get(property_type, DEFAULT_AVG_SIZE)

    return MarketPrices(
        date=latest.date if latest else None,
        type=property_type,
        price_per_sqm=SegmentPrices(
            new_building=_to_rubles(new_building),
            secondary=_to_rubles(secondary),
        ),
        average_price=SegmentPrices(
            new_building=_to_rubles(new_building * avg_size),
            secondary=_to_rubles(secondary * avg_size),
        ),
        avg_size=avg_size,
        history=history,
        annualized_growth=annualized_growth(history),
    )


def fallback_prices(property_type: str) -> MarketPricesResponse:
    """Static prices served when the feed fails."""
    return MarketPricesResponse(
        success=False,
        error="Failed to fetch prices",
        data=MarketPrices(
            date=_FALLBACK_DATE,
            type=property_type,
            price_per_sqm=SegmentPrices(
                new_building=_FALLBACK_NEW_BUILDING_SQM,
                secondary=_FALLBACK_SECONDARY_SQM,
            ),
            average_price=SegmentPrices(
                new_building=_FALLBACK_NEW_BUILDING_SQM * DEFAULT_AVG_SIZE,
                secondary=_FALLBACK_SECONDARY_SQM * DEFAULT_AVG_SIZE,
            ),
            avg_size=DEFAULT_AVG_SIZE,
            history=[],
        ),
    )


# ---------------------------------------------------------------------------
# Fetching
# ---------------------------------------------------------------------------


async def _fetch_rows(
    client: httpx.AsyncClient, property_type: str, period: str, region: str
) -> list:
    """Fetch the raw ``rows`` array. Raises on HTTP or payload errors."""
    params = {
        "region": region,
        "type": property_type,
        "period": period,
        "influence": "1",
        "money": "",
        "metro": "",
        "area": "",
        "okrug": "",
        "op": "1",
        "form": "9",
        "sy": "1",
        "cjs": "1",
    }
    headers = {"Accept": "application/json", "User-Agent": settings.FEED_USER_AGENT}
    response = await client.get(settings.RESTATE_URL, params=params, headers=headers)
    response.raise_for_status()

    payload = response.json()
    if not isinstance(payload, dict):
        raise ValueError(f"Unexpected restate.ru payload: {type(payload).__name__}")
    return payload.get("rows") or []


async def fetch_market_prices(
    property_type: str = "1",
    period: str = "2",
    region: str = "2",
    *,
    client: httpx.AsyncClient | None = None,
) -> MarketPricesResponse:
    """Latest price per square meter plus history for an apartment type.

    Args:
        property_type: restate.ru apartment type ("1".."6").
        period: restate.ru history period ("1".."5").
        region: restate.ru region id.
        client: Optional shared client; a short-lived one is created if omitted.

    Returns:
        A live response (cached for FEED_CACHE_TTL seconds) or the static
        fallback with ``success=False``. Never raises for upstream failures.
    """
    key = (property_type, period, region)
    cached = _get_cached(key)
    if cached is not None:
        logger.debug("Market prices cache hit (type=%s, period=%s)", property_type, period)
        return cached

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.FEED_TIMEOUT_SECONDS) as owned:
                rows = await _fetch_rows(owned, property_type, period, region)
        else:
            rows = await _fetch_rows(client, property_type, period, region)
        data = parse_price_rows(rows, property_type)
    except (httpx.HTTPError, ValueError, TypeError) as exc:
        logger.warning(
            "Failed to fetch market prices (type=%s, period=%s): %s",
            property_type,
            period,
            exc,
        )
        return fallback_prices(property_type)

    result = MarketPricesResponse(success=True, data=data)
    _store(key, result)
    return result
