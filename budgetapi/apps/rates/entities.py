from decimal import Decimal
from typing import Optional

import pydantic


class LatestRates(pydantic.BaseModel):
    """Payload of the provider's ``latest/<base>`` endpoint."""

    result: Optional[str] = None
    base_code: Optional[str] = None
    conversion_rates: dict[str, Decimal]

    def rate_for(self, currency_code: str) -> Optional[Decimal]:
        rate = self.conversion_rates.get(currency_code.upper())
        if rate is None or not rate.is_finite() or rate <= 0:
            return None
        return rate
