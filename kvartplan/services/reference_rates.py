# This project was developed with assistance from AI tools.
"""Bank of Russia key rate and inflation.

The cbr.ru JSON API needs authorization, so the public key-indicators page
is scraped instead. Figures are only used to suggest a savings interest
rate; on any failure static fallback figures are returned.
"""

import logging
import re
import time
from datetime import date

import httpx

from ..core.config import settings
from ..schemas.rates import ReferenceRates, ReferenceRatesResponse

logger = logging.getLogger(__name__)

# Indicator label, then two tags, then the value (decimal comma on cbr.ru)
_KEY_RATE_PATTERN = re.compile(
    r"Ключевая ставка[^<]*<[^>]*>[^<]*<[^>]*>(\d+(?:[.,]\d+)?)"
)
_INFLATION_PATTERN = re.compile(
    r"Инфляция[^<]*<[^>]*>[^<]*<[^>]*>(\d+(?:[.,]\d+)?)"
)

# December 2024 figures
FALLBACK_KEY_RATE = 21.0
FALLBACK_INFLATION_RATE = 8.9
FALLBACK_DEPOSIT_RATE = 19.0
FALLBACK_DATE = "13.12.2024"

_cache: tuple[float, ReferenceRatesResponse] | None = None


def clear_cache() -> None:
    global _cache  # noqa: PLW0603
    _cache = None


def deposit_rate_for(key_rate: float) -> float:
    """Typical deposit rate: the key rate less 1-2 points."""
    return max(key_rate - 2, key_rate * 0.9)


def _parse_indicator(pattern: re.Pattern[str], html: str, default: float) -> float:
    match = pattern.search(html)
    if match is None:
        return default
    return float(match.group(1).replace(",", "."))


def parse_key_indicators(html: str) -> tuple[float, float]:
    """Extract (key_rate, inflation_rate) from the key-indicators page.

    Values that cannot be found keep their fallback figure.
    """
    key_rate = _parse_indicator(_KEY_RATE_PATTERN, html, FALLBACK_KEY_RATE)
    inflation_rate = _parse_indicator(_INFLATION_PATTERN, html, FALLBACK_INFLATION_RATE)
    return key_rate, inflation_rate


def fallback_rates() -> ReferenceRatesResponse:
    """Static figures served when cbr.ru is unreachable."""
    return ReferenceRatesResponse(
        success=False,
        error="Failed to fetch CBR data",
        data=ReferenceRates(
            key_rate=FALLBACK_KEY_RATE,
            inflation_rate=FALLBACK_INFLATION_RATE,
            deposit_rate=FALLBACK_DEPOSIT_RATE,
            date=FALLBACK_DATE,
            source="fallback",
        ),
    )


async def _fetch_page(client: httpx.AsyncClient) -> httpx.Response:
    headers = {"Accept": "text/html", "User-Agent": settings.FEED_USER_AGENT}
    return await client.get(settings.CBR_URL, headers=headers)


async def fetch_reference_rates(
    *,
    client: httpx.AsyncClient | None = None,
    today: date | None = None,
) -> ReferenceRatesResponse:
    """Current key rate, inflation and a suggested deposit rate.

    A page that loads with a non-2xx status keeps the fallback figures but
    still reports cbr.ru as the source; a transport failure returns
    ``fallback_rates()``. Never raises for upstream failures.
    """
    global _cache  # noqa: PLW0603

    if _cache is not None and time.time() - _cache[0] <= settings.FEED_CACHE_TTL:
        logger.debug("Reference rates cache hit")
        return _cache[1]

    try:
        if client is None:
            async with httpx.AsyncClient(
                timeout=settings.FEED_TIMEOUT_SECONDS, follow_redirects=True
            ) as owned:
                response = await _fetch_page(owned)
        else:
            response = await _fetch_page(client)
    except httpx.HTTPError as exc:
        logger.warning("Failed to fetch CBR key indicators: %s", exc)
        return fallback_rates()

    key_rate, inflation_rate = FALLBACK_KEY_RATE, FALLBACK_INFLATION_RATE
    if response.is_success:
        key_rate, inflation_rate = parse_key_indicators(response.text)
    else:
        logger.warning("CBR key indicators returned status %d", response.status_code)

    result = ReferenceRatesResponse(
        success=True,
        data=ReferenceRates(
            key_rate=key_rate,
            inflation_rate=inflation_rate,
            deposit_rate=deposit_rate_for(key_rate),
            date=(today or date.today()).strftime("%d.%m.%Y"),
            source="cbr.ru",
        ),
    )
    if response.is_success:
        _cache = (time.time(), result)
    return result
