"""
National Park Service API客户端
封装 parks / alerts / visitorcenters / campgrounds / events 查询
"""

from typing import Any, Dict, Optional

import httpx
from loguru import logger

from nps_mcp.core.config import settings
from nps_mcp.core.exceptions import NPSApiError


class NPSClient:
    """NPS API客户端，按调用创建并在退出时关闭连接"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.nps_api_key
        self.base_url = (base_url or settings.nps_api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.nps_request_timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": settings.nps_user_agent,
        }
        if self.api_key:
            headers["X-Api-Key"] = self.api_key
        return headers

    async def __aenter__(self) -> "NPSClient":
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self._headers(),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _get(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        if self._client is None:
            raise RuntimeError("NPSClient must be used as an async context manager")

        query = {key: value for key, value in params.items() if value is not None}
        logger.debug(f"NPS GET /{endpoint} {query}")

        try:
            response = await self._client.get(f"/{endpoint}", params=query)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise NPSApiError(f"request to /{endpoint} failed with status {status}", status) from exc
        except httpx.HTTPError as exc:
            raise NPSApiError(f"request to /{endpoint} failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise NPSApiError(f"invalid JSON from /{endpoint}", response.status_code) from exc

        if not isinstance(data, dict):
            raise NPSApiError(f"unexpected payload from /{endpoint}", response.status_code)
        return data

    async def get_parks(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._get("parks", params)

    async def get_alerts(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._get("alerts", params)

    async def get_visitor_centers(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._get("visitorcenters", params)

    async def get_campgrounds(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._get("campgrounds", params)

    async def get_events(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return await self._get("events", params)
