class PortfolioError(Exception):
    """Base class for portfolio view failures."""


class ConfigurationError(PortfolioError):
    """A required deployment value (credential, URL, secret) is missing."""


class DataFetchError(PortfolioError):
    """The holdings repository could not list or mutate records."""


class MarketDataUnavailable(PortfolioError):
    """A quote or profile could not be obtained for a symbol.

    Never surfaces to callers of the view: providers translate it into
    ``None`` and the aggregator drops or defaults accordingly.
    """

    def __init__(self, symbol: str, reason: str) -> None:
        super().__init__(f"{symbol}: {reason}")
        self.symbol = symbol
        self.reason = reason


class AuthenticationError(PortfolioError):
    """The submitted management password did not match."""
