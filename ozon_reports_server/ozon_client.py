from __future__ import annotations

import asyncio
import os
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Tuple

import httpx

from .errors import DecodeError, OzonClientError, TransportError
from .models import CommonResponse

__all__ = ["OzonClient", "OzonClientError", "TransportError", "DecodeError"]


logger = logging.getLogger("ozon_reports_server.http")

DEFAULT_BASE_URL = "https://api-seller.ozon.ru/"
MAX_RETRIES = 3
RETRY_DELAYS = [1.0, 2.0, 4.0]


def _redact_headers(headers: Dict[str, Any]) -> Dict[str, Any]:
    redacted = {}
    for k, v in headers.items():
        if str(k).lower() in {"client-id", "api-key", "authorization"}:
            redacted[k] = "[REDACTED]"
        else:
            redacted[k] = v
    return redacted


def _truncate(text: str, max_len: int = 1000) -> str:
    if text is None:
        return ""
    if len(text) <= max_len:
        return text
    return text[:max_len] + "... [truncated]"


@dataclass
class OzonClient:
    """Minimal async client for the Ozon Seller API.

    Uses per-request httpx.AsyncClient with automatic retry on transient errors.
    """

    base_url: str
    client_id: str
    api_key: str
    max_retries: int = MAX_RETRIES

    @classmethod
    def from_env(cls) -> "OzonClient":
        """Create a client using environment variables loaded via dotenv.

        Required env vars:
        - OZON_CLIENT_ID
        - OZON_API_KEY
        Optional:
        - OZON_BASE_URL (defaults to https://api-seller.ozon.ru/)
        """
        base_url = os.getenv("OZON_BASE_URL", DEFAULT_BASE_URL)
        client_id = os.getenv("OZON_CLIENT_ID")
        api_key = os.getenv("OZON_API_KEY")

        if not client_id or not api_key:
            raise OzonClientError("Missing OZON_CLIENT_ID or OZON_API_KEY in environment.")

        if not base_url.endswith("/"):
            base_url = base_url + "/"

        return cls(base_url=base_url, client_id=client_id, api_key=api_key)

    def _headers(self) -> dict:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Client-Id": self.client_id,
            "Api-Key": self.api_key,
        }

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute HTTP request with per-request client and retry logic."""
        logger.debug(
            "HTTP %s %s headers=%s", method.upper(), path, _redact_headers(self._headers())
        )
        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._headers(),
            timeout=httpx.Timeout(30.0, connect=10.0),
        ) as client:
            return await self._execute_with_retry(client, method, path, **kwargs)

    async def _execute_with_retry(
        self, client: httpx.AsyncClient, method: str, path: str, **kwargs
    ) -> httpx.Response:
        last_error: Exception | None = None
        for attempt in range(self.max_retries):
            try:
                start = time.perf_counter()
                response = await client.request(method.upper(), path, **kwargs)
                elapsed_ms = (time.perf_counter() - start) * 1000.0

                logger.debug(
                    "HTTP %s %s status=%s elapsed_ms=%.2f",
                    method.upper(),
                    path,
                    response.status_code,
                    elapsed_ms,
                )

                # Retry on rate limit (429) and server errors (5xx)
                if response.status_code == 429 or response.status_code >= 500:
                    if attempt < self.max_retries - 1:
                        logger.warning(
                            "Retrying %s %s (status %s, attempt %d/%d)",
                            method.upper(), path, response.status_code,
                            attempt + 1, self.max_retries,
                        )
                        await asyncio.sleep(RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)])
                        continue

                return response

            except (httpx.TimeoutException, httpx.NetworkError) as e:
                last_error = e
                if attempt < self.max_retries - 1:
                    logger.warning(
                        "Retrying %s %s (%s, attempt %d/%d)",
                        method.upper(), path, type(e).__name__,
                        attempt + 1, self.max_retries,
                    )
                    await asyncio.sleep(RETRY_DELAYS[min(attempt, len(RETRY_DELAYS) - 1)])
                    continue
            except httpx.HTTPError as e:
                # any other httpx failure is not retried
                raise TransportError(f"{method.upper()} {path} failed: {e}") from e

        raise TransportError(
            f"Request failed after {self.max_retries} retries: {last_error}"
        ) from last_error

    async def request(
        self, method: str, path: str, payload: Dict[str, Any]
    ) -> Tuple[Dict[str, Any], CommonResponse]:
        """Send ``payload`` as JSON and return the decoded body with its envelope.

        Raises TransportError for non-2xx responses and DecodeError when a
        successful response is not a JSON object.
        """
        response = await self._request(method, path, json=payload)
        try:
            data = response.json()
        except ValueError:
            data = None

        if not 200 <= response.status_code < 300:
            envelope = CommonResponse.from_payload(
                data if isinstance(data, dict) else {},
                status_code=response.status_code,
                headers=response.headers,
            )
            detail = envelope.message or _truncate(response.text or "", 200)
            raise TransportError(
                f"{method.upper()} {path} error: {response.status_code} {detail}",
                status_code=response.status_code,
                envelope=envelope,
                body=_truncate(response.text or ""),
            )

        if not isinstance(data, dict):
            raise DecodeError(
                f"{method.upper()} {path} returned a non-object body: "
                f"{_truncate(response.text or '', 200)}"
            )

        envelope = CommonResponse.from_payload(
            data, status_code=response.status_code, headers=response.headers
        )
        return data, envelope

    # ----------------------------- API methods -----------------------------

    async def health_check(self) -> Dict[str, Any]:
        """Perform a lightweight authenticated request to verify connectivity."""
        data, envelope = await self.request(
            "post", "/v1/report/list", {"page": 1, "page_size": 1, "report_type": "ALL"}
        )
        result = data.get("result")
        total = result.get("total", 0) if isinstance(result, dict) else 0
        return {
            "ok": True,
            "status": envelope.status_code,
            "total": total,
            "base_url": self.base_url,
        }
