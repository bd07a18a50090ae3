from typing import Any

import httpx

from portfolio_journal.telemetry import get_logger


logger = get_logger(__name__)


async def request_json(
    service: str,
    method: str,
    url: str,
    *,
    headers: dict[str, str],
    timeout_seconds: float,
    attempts: int = 1,
    params: dict[str, Any] | None = None,
    json: dict[str, Any] | None = None,
) -> Any:
    """Send one request, retrying transport failures up to ``attempts`` times in total.

    HTTP status errors are raised immediately. An empty body decodes to ``None``.
    """
    for attempt in range(1, attempts + 1):
        try:
            async with httpx.AsyncClient(timeout=timeout_seconds) as client:
                response = await client.request(method, url, headers=headers, params=params, json=json)
            response.raise_for_status()
        except httpx.RequestError as exc:
            logger.warning(
                f"{service}_http_retryable_error",
                extra={"method": method, "url": url, "attempt": attempt, "error": str(exc)},
            )
            if attempt >= attempts:
                raise
            continue

        logger.debug(
            f"{service}_http_success",
            extra={"method": method, "url": url, "status_code": response.status_code, "attempt": attempt},
        )
        return response.json() if response.content else None

    raise ValueError("attempts must be at least 1")
