"""Display-currency conversion rate."""

import logging
import math
from typing import Any, Optional

import httpx

from .config import DEFAULT_RATE, DEFAULT_RATE_URL

logger = logging.getLogger(__name__)


def _extract_rate(data: Any, currency_code: str) -> Optional[float]:
    """Pull ``rates[<code>]`` out of a rate-source body; None unless finite and > 0."""
    if not isinstance(data, dict):
        return None
    rates = data.get("rates")
    if not isinstance(rates, dict):
        return None
    value = rates.get(currency_code)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def convert(price: float, rate: float) -> float:
    return round(float(price) * rate, 2)


def format_money(value: float, symbol: str, decimals: int = 2) -> str:
    return f"{symbol}{value:.{decimals}f}"


class RateProvider:
    """Holds the base-to-display multiplier.

    ``rate`` starts at the default and is only ever overwritten by a
    successful ``refresh()``. Failures never propagate.
    """

    def __init__(
        self,
        url: str = DEFAULT_RATE_URL,
        currency_code: str = "INR",
        default_rate: float = DEFAULT_RATE,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.currency_code = currency_code
        self.rate = default_rate
        self.timeout = timeout
        self._transport = transport

    async def refresh(self) -> Optional[float]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.get(self.url)
            if not r.is_success:
                logger.debug("Rate source returned %s; keeping %s", r.status_code, self.rate)
                return None
            data = r.json()
        except Exception as e:
            logger.debug("Rate fetch failed (%s); keeping %s", e, self.rate)
            return None

        value = _extract_rate(data, self.currency_code)
        if value is None:
            logger.debug("Rate source body has no usable %s rate; keeping %s", self.currency_code, self.rate)
            return None
        self.rate = value
        logger.info("Display rate USD->%s set to %s", self.currency_code, value)
        return value
