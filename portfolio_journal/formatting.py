"""Display strings for the portfolio card (USD amounts, signed percentages)."""

import httpx


def format_currency(value: float) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_percent(value: float) -> str:
    return f"{'+' if value > 0 else ''}{value:.2f}%"


def format_pl(value: float) -> str:
    return f"{'+' if value > 0 else ''}{format_currency(value)}"


def format_error_detail(response: httpx.Response) -> str:
    """FastAPI's ``detail`` when the body is JSON, else the raw text (e.g. a plain 500)."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return response.text
