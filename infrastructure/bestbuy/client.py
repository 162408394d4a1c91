"""
Best Buy Categories API 异步客户端（httpx），作为本地类目匹配的远端回退数据源。

只实现类目相关接口：分页列表、按 ID 查询、查询子类目。错误统一转为 BestBuyError 子类抛出，
是否吞掉异常由调用方（如 core.fallback.RemoteCategoryCache）决定。
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from .errors import (
    BestBuyApiError,
    BestBuyConfigError,
    BestBuyNetworkError,
    BestBuyParseError,
)
from .models import CategorySearchResponse, RemoteCategory

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.bestbuy.com/v1"
DEFAULT_TIMEOUT_SECONDS = 30.0

_DEFAULT_ERROR_MESSAGES = {
    400: "Bad request: invalid query syntax",
    401: "Unauthorized: invalid API key",
    403: "Forbidden: API key lacks required permissions",
    404: "Resource not found",
    429: "Rate limit exceeded: too many requests",
    500: "Internal server error",
    502: "Bad gateway",
    503: "Service temporarily unavailable",
    504: "Gateway timeout",
}


def default_error_message(status_code: int) -> str:
    return _DEFAULT_ERROR_MESSAGES.get(status_code, f"HTTP error {status_code}")


class BestBuyClient:
    """
    使用方式：
        async with BestBuyClient(api_key="...") as client:
            page = await client.get_categories(page_size=20)
    http_client 可注入（如测试时使用 httpx.MockTransport），注入的客户端不由本对象关闭。
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not api_key or not api_key.strip():
            raise BestBuyConfigError("未配置 Best Buy API Key")
        self.api_key = api_key.strip()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> BestBuyClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    # ----- Categories API -----

    async def get_categories(self, page: int = 1, page_size: int = 100) -> CategorySearchResponse:
        """分页获取类目列表。"""
        params = {"format": "json", "page": str(page), "pageSize": str(page_size)}
        data = await self._request("/categories", params)
        return CategorySearchResponse.model_validate(data)

    async def get_category_by_id(self, category_id: str) -> RemoteCategory | None:
        """按 ID 获取类目；404 返回 None，其余错误照常抛出。"""
        try:
            data = await self._request(f"/categories(id={category_id})", {"format": "json"})
        except BestBuyApiError as e:
            if e.is_not_found:
                return None
            raise
        response = CategorySearchResponse.model_validate(data)
        return response.categories[0] if response.categories else None

    async def get_subcategories(self, parent_category_id: str) -> list[RemoteCategory]:
        """逐个查询父类目的子类目；父类目不存在或无子类目时返回空列表。"""
        parent = await self.get_category_by_id(parent_category_id)
        if parent is None or not parent.sub_categories:
            return []
        result: list[RemoteCategory] = []
        for sub_id in parent.sub_categories:
            sub = await self.get_category_by_id(sub_id)
            if sub is not None:
                result.append(sub)
        return result

    # ----- HTTP -----

    async def _request(self, path: str, params: dict[str, str]) -> dict[str, Any]:
        """发起 GET 请求并返回 JSON 对象；API Key 以查询参数附加。"""
        query = dict(params)
        query["apiKey"] = self.api_key
        url = f"{self.base_url}{path}"
        try:
            response = await self._http.get(url, params=query, timeout=self.timeout)
        except httpx.TimeoutException as e:
            raise BestBuyNetworkError(
                f"Request timed out after {self.timeout:g} seconds", is_timeout=True
            ) from e
        except httpx.HTTPError as e:
            raise BestBuyNetworkError(f"HTTP request failed: {e}") from e
        logger.debug("Best Buy GET %s -> %d", path, response.status_code)
        return self._handle_response(response)

    @staticmethod
    def _handle_response(response: httpx.Response) -> dict[str, Any]:
        body = response.text
        if response.status_code >= 400:
            message = default_error_message(response.status_code)
            error_code: str | None = None
            try:
                payload = json.loads(body)
            except (json.JSONDecodeError, ValueError):
                payload = None
            if isinstance(payload, dict):
                error = payload.get("error") if isinstance(payload.get("error"), dict) else {}
                message = error.get("message") or payload.get("message") or "API error occurred"
                code = error.get("code")
                error_code = str(code) if code is not None else None
            raise BestBuyApiError(response.status_code, message, error_code)

        try:
            data = json.loads(body)
        except (json.JSONDecodeError, ValueError) as e:
            raise BestBuyParseError(f"Failed to parse JSON response: {e}", response_body=body) from e
        if not isinstance(data, dict):
            raise BestBuyParseError(
                f"Expected JSON object, got {type(data).__name__}", response_body=body
            )
        return data
