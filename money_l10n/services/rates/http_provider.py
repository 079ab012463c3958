"""
HTTP Exchange Rate Provider

Reads USD rates from the public fawazahmed0 currency API:

    GET {base_url}/v1/currencies/usd.json
    -> {"date": "2024-03-01", "usd": {"vnd": 24650.12, ...}}

Only the VND entry is used. A response without a positive, finite
"vnd" value is a failure, never a zero rate.
"""

import math
from typing import Any, Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from money_l10n.audit import get_logger
from money_l10n.config import CurrencySettings, get_settings
from money_l10n.models.currency import ExchangeRate
from money_l10n.services.rates.interface import ExchangeRateProvider, RateFetchError


logger = get_logger(__name__)

RATES_PATH = "/v1/currencies/usd.json"


def parse_rate_payload(payload: Any) -> ExchangeRate:
    """
    Pull the USD -> VND rate out of an API response body.

    Raises:
        RateFetchError: If the body has no usable VND rate
    """
    if not isinstance(payload, dict):
        raise RateFetchError("Rate response is not a JSON object")

    rates = payload.get("usd")
    if not isinstance(rates, dict):
        raise RateFetchError("Rate response has no 'usd' table")

    vnd = rates.get("vnd")
    if isinstance(vnd, bool) or not isinstance(vnd, (int, float)):
        raise RateFetchError(f"Rate response has no numeric 'vnd' rate: {vnd!r}")
    if not math.isfinite(vnd) or vnd <= 0:
        raise RateFetchError(f"Rate response has an invalid 'vnd' rate: {vnd!r}")

    return ExchangeRate(usd_to_vnd=float(vnd))


class HttpExchangeRateProvider(ExchangeRateProvider):
    """
    Fetches rates over HTTP with httpx.

    Transport errors and error statuses are retried; a malformed body is not.
    """

    def __init__(
        self,
        settings: Optional[CurrencySettings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            settings: Currency settings (default: from environment)
            client: Preconfigured client, e.g. one with a mock transport
        """
        self._settings = settings or get_settings().currency
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            base_url=self._settings.exchange_api_base_url,
            timeout=self._settings.exchange_api_timeout_seconds,
            headers={"Accept": "application/json"},
        )

    @property
    def url(self) -> str:
        return f"{self._settings.exchange_api_base_url}{RATES_PATH}"

    async def close(self):
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            await self.client.aclose()

    @retry(
        retry=retry_if_exception_type(httpx.HTTPError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _get_payload(self) -> Any:
        response = await self.client.get(self.url)
        response.raise_for_status()
        return response.json()

    async def fetch_rate(self) -> ExchangeRate:
        """
        Fetch the current USD -> VND rate.

        Raises:
            RateFetchError: On transport failure, a bad status or a bad body
        """
        try:
            payload = await self._get_payload()
        except httpx.HTTPError as e:
            logger.error("rate_request_failed", url=self.url, error=str(e))
            raise RateFetchError(f"Exchange rate request failed: {e}") from e
        except ValueError as e:
            raise RateFetchError(f"Exchange rate response is not JSON: {e}") from e

        rate = parse_rate_payload(payload)
        logger.info("rate_received", usd_to_vnd=rate.usd_to_vnd, date=payload.get("date"))
        return rate
