# =============================================================================
# core/affinity_client.py  -  Thin async client for the Affinity REST API
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Owns the one httpx.AsyncClient the process uses to talk to Affinity and
#   turns every failure into a RemoteCallFailed.  Handlers never see httpx
#   exceptions.
#
# AUTHENTICATION:
#   Affinity's v1 API takes the API key as the password of HTTP Basic auth
#   with an empty username.
#
# WHAT THIS CLIENT DELIBERATELY DOESN'T DO:
#   No retries, no backoff, no timeout, no caching.  A slow call is slow and a
#   failed call fails; the caller decides what to do about it.
#
# TESTING:
#   Pass transport=httpx.MockTransport(handler) and no real network is used.
# =============================================================================

import logging
from typing import Any, Optional

import httpx

from core.config import AFFINITY_BASE_URL
from core.errors import RemoteCallFailed


logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Best-effort human message from an Affinity error response."""
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return text[:200] if text else response.reason_phrase

    if isinstance(body, dict):
        for key in ("message", "error", "errors"):
            detail = body.get(key)
            if not detail:
                continue
            if isinstance(detail, list):
                return "; ".join(str(item) for item in detail)
            if isinstance(detail, dict):
                return str(detail.get("message", detail))
            return str(detail)
    return str(body)


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _expect_record(method: str, path: str, data: Any, keys: tuple) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise RemoteCallFailed(f"{method} {path} returned no record: {data!r}")
    missing = [key for key in keys if key not in data]
    if missing:
        raise RemoteCallFailed(f"{method} {path} response is missing {', '.join(missing)}")
    return data


class AffinityClient:
    """One method per HTTP verb; paths are relative to the Affinity base URL."""

    def __init__(
        self,
        api_key: str,
        base_url: str = AFFINITY_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url,
            auth=("", api_key),
            headers={"Content-Type": "application/json"},
            timeout=None,
            transport=transport,
        )

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, body: dict[str, Any]) -> Any:
        return await self._request("POST", path, json=body)

    async def put(self, path: str, body: dict[str, Any]) -> Any:
        return await self._request("PUT", path, json=body)

    async def delete(self, path: str) -> Any:
        return await self._request("DELETE", path)

    async def post_record(self, path: str, body: dict[str, Any], *keys: str) -> dict[str, Any]:
        """POST that must answer with a JSON object carrying `keys`."""
        return _expect_record("POST", path, await self.post(path, body), keys)

    async def put_record(self, path: str, body: dict[str, Any], *keys: str) -> dict[str, Any]:
        return _expect_record("PUT", path, await self.put(path, body), keys)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, Any]] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> Any:
        if params is not None:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            response = await self._http.request(method, path, params=params, json=json)
        except httpx.HTTPError as exc:
            reason = str(exc) or type(exc).__name__
            logger.warning("%s %s failed: %s", method, path, reason)
            raise RemoteCallFailed(f"{method} {path} failed: {reason}") from exc

        if response.is_error:
            message = _error_message(response)
            logger.warning("%s %s -> %s: %s", method, path, response.status_code, message)
            raise RemoteCallFailed(
                f"{method} {path} -> {response.status_code}: {message}",
                status_code=response.status_code,
            )

        logger.debug("%s %s -> %s", method, path, response.status_code)
        return _decode(response)
