"""Exchange rate provider client.

Fetches the latest rate table for a base currency from the exchange rate
service and picks a single target rate out of it. One attempt per call, no
caching: rates are never stored.
"""

import contextlib
import json
from decimal import Decimal
from time import monotonic
from typing import Optional

import httpx
import pydantic
import structlog
from django.conf import settings

from rates.entities import LatestRates
from rates.exceptions import (
    RateParseError,
    RateProviderNetworkError,
    RateProviderResponseError,
    RateProviderTimeout,
    RateUnavailableError,
)

logger = structlog.get_logger()

DEFAULT_TIMEOUT_SECONDS = 5.0


class ExchangeRateClient:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        """
        Args:
            base_url: Provider root, e.g. ``https://v6.exchangerate-api.com/v6``
            api_key: Key inserted as the first path segment
            timeout: Seconds allowed per connect, read and write phase. The
                total deadline is checked as body chunks arrive, so a stalled
                read can overrun it by up to one more phase timeout.
            http_client: Shared client to send requests with. When omitted a
                client is opened and closed around every call.
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._http = http_client

    @classmethod
    def from_settings(cls) -> "ExchangeRateClient":
        return cls(
            base_url=settings.EXCHANGE_RATE_API_URL,
            api_key=settings.EXCHANGE_RATE_API_KEY,
            timeout=settings.EXCHANGE_RATE_TIMEOUT,
        )

    def get_rate(self, base_currency: str, target_currency: str) -> Decimal:
        """Return how many ``target_currency`` units one ``base_currency`` buys.

        Raises:
            RateProviderTimeout: request not completed within ``timeout``
            RateProviderNetworkError: connection could not be made or broke
            RateProviderResponseError: provider answered with a non-2xx status
            RateParseError: body is not a rate table
            RateUnavailableError: target currency missing from the table
        """
        base_currency = base_currency.upper()
        target_currency = target_currency.upper()
        logger.debug(
            "rates.client.get_rate.start", base=base_currency, target=target_currency
        )

        body = self._fetch(self._latest_url(base_currency))
        rates = self._parse(body)

        rate = rates.rate_for(target_currency)
        if rate is None:
            raise RateUnavailableError(target_currency)

        logger.debug(
            "rates.client.get_rate.end",
            base=base_currency,
            target=target_currency,
            rate=str(rate),
        )
        return rate

    def _latest_url(self, base_currency: str) -> str:
        return f"{self.base_url}/{self.api_key}/latest/{base_currency}"

    def _open_client(self):
        if self._http is not None:
            return contextlib.nullcontext(self._http)
        return httpx.Client(timeout=self.timeout)

    def _fetch(self, url: str) -> bytes:
        # httpx timeouts apply per phase, the deadline bounds the body as a whole
        deadline = monotonic() + self.timeout
        try:
            with self._open_client() as client:
                with client.stream("GET", url, timeout=self.timeout) as response:
                    if not response.is_success:
                        raise RateProviderResponseError(
                            response.status_code, response.reason_phrase
                        )
                    chunks = []
                    for chunk in response.iter_bytes():
                        if monotonic() > deadline:
                            raise RateProviderTimeout(self.timeout)
                        chunks.append(chunk)
                    return b"".join(chunks)
        except httpx.TimeoutException as exc:
            raise RateProviderTimeout(self.timeout) from exc
        except httpx.HTTPError as exc:
            raise RateProviderNetworkError(str(exc)) from exc

    def _parse(self, body: bytes) -> LatestRates:
        try:
            payload = json.loads(body, parse_float=Decimal)
            return LatestRates.model_validate(payload)
        except (ValueError, pydantic.ValidationError) as exc:
            raise RateParseError("Invalid rate table in provider response") from exc
