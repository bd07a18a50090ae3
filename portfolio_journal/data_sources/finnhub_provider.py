import math
from typing import Any

import httpx

from portfolio_journal.errors import ConfigurationError, MarketDataUnavailable
from portfolio_journal.finnhub_client import FinnhubClient
from portfolio_journal.schemas import UNKNOWN_INDUSTRY, ProfileSnapshot, QuoteSnapshot
from portfolio_journal.telemetry import get_logger


logger = get_logger(__name__)

_TRANSPORT_ERRORS = (httpx.HTTPError, ValueError)


def _parse_required_float(value: Any, symbol: str, field_name: str) -> float:
    try:
        if value is None or isinstance(value, bool):
            raise ValueError
        parsed = float(value)
    except (TypeError, ValueError):
        raise MarketDataUnavailable(symbol, f"invalid numeric field '{field_name}'")
    if not math.isfinite(parsed):
        raise MarketDataUnavailable(symbol, f"non-finite numeric field '{field_name}'")
    return parsed


class FinnhubQuoteProvider:
    """Quotes from Finnhub ``/quote``: ``c`` = price, ``d`` = change, ``dp`` = percent change.

    Never raises; every miss is logged and reported as ``None``.
    """

    def __init__(self, client: FinnhubClient) -> None:
        self.client = client

    @staticmethod
    def parse_quote(symbol: str, payload: Any) -> QuoteSnapshot:
        if not isinstance(payload, dict):
            raise MarketDataUnavailable(symbol, "expected quote object")
        # Unknown symbols come back as {"c": 0, "d": null, "dp": null}.
        return QuoteSnapshot(
            price=_parse_required_float(payload.get("c"), symbol, "c"),
            absolute_change=_parse_required_float(payload.get("d"), symbol, "d"),
            percent_change=_parse_required_float(payload.get("dp"), symbol, "dp"),
        )

    async def fetch(self, symbol: str) -> QuoteSnapshot | None:
        try:
            payload = await self.client.get_quote(symbol)
            return self.parse_quote(symbol, payload)
        except ConfigurationError:
            logger.warning("quote_unavailable", extra={"symbol": symbol, "reason": "missing_api_key"})
        except MarketDataUnavailable as exc:
            logger.warning("quote_unavailable", extra={"symbol": symbol, "reason": exc.reason})
        except _TRANSPORT_ERRORS as exc:
            logger.warning("quote_unavailable", extra={"symbol": symbol, "reason": str(exc)})
        return None


class FinnhubProfileProvider:
    def __init__(self, client: FinnhubClient) -> None:
        self.client = client

    @staticmethod
    def parse_profile(symbol: str, payload: Any) -> ProfileSnapshot:
        if not isinstance(payload, dict) or not payload:
            raise MarketDataUnavailable(symbol, "empty profile")
        industry = payload.get("finnhubIndustry")
        if not isinstance(industry, str) or not industry.strip():
            return ProfileSnapshot(industry=UNKNOWN_INDUSTRY)
        return ProfileSnapshot(industry=industry.strip())

    async def fetch(self, symbol: str) -> ProfileSnapshot | None:
        try:
            payload = await self.client.get_company_profile(symbol)
            return self.parse_profile(symbol, payload)
        except ConfigurationError:
            logger.warning("profile_unavailable", extra={"symbol": symbol, "reason": "missing_api_key"})
        except MarketDataUnavailable as exc:
            logger.warning("profile_unavailable", extra={"symbol": symbol, "reason": exc.reason})
        except _TRANSPORT_ERRORS as exc:
            logger.warning("profile_unavailable", extra={"symbol": symbol, "reason": str(exc)})
        return None
