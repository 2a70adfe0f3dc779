class RateProviderError(Exception):
    """Base class for every failed exchange rate lookup."""


class RateProviderTimeout(RateProviderError):
    def __init__(self, timeout: float):
        self.timeout = timeout
        super().__init__(f"Request timed out after {timeout} seconds")


class RateProviderNetworkError(RateProviderError):
    pass


class RateProviderResponseError(RateProviderError):
    def __init__(self, status_code: int, message: str = ""):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Currency API error: {status_code} {message}".rstrip())


class RateParseError(RateProviderError):
    pass


class RateUnavailableError(RateProviderError):
    def __init__(self, currency_code: str):
        self.currency_code = currency_code
        super().__init__(f"{currency_code} rate not available")
