"""Best Buy API 异常：接口错误、网络错误、解析错误、配置缺失。"""

from __future__ import annotations


class BestBuyError(Exception):
    """Best Buy 相关异常基类。"""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BestBuyApiError(BestBuyError):
    """接口返回 HTTP 错误状态码。"""

    def __init__(self, status_code: int, message: str, error_code: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code

    @property
    def is_rate_limit_error(self) -> bool:
        return self.status_code == 429

    @property
    def is_auth_error(self) -> bool:
        return self.status_code in (401, 403)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.status_code < 600

    @property
    def should_retry(self) -> bool:
        return self.is_server_error or self.is_rate_limit_error

    def __str__(self) -> str:
        suffix = f" [{self.error_code}]" if self.error_code else ""
        return f"BestBuyApiError({self.status_code}): {self.message}{suffix}"


class BestBuyNetworkError(BestBuyError):
    """连接失败、超时等网络错误。"""

    def __init__(self, message: str, is_timeout: bool = False) -> None:
        super().__init__(message)
        self.is_timeout = is_timeout

    def __str__(self) -> str:
        return f"BestBuyNetworkError: {self.message}{' (timeout)' if self.is_timeout else ''}"


class BestBuyParseError(BestBuyError):
    """响应体无法解析为 JSON 对象。"""

    def __init__(self, message: str, response_body: str | None = None) -> None:
        super().__init__(message)
        self.response_body = response_body


class BestBuyConfigError(BestBuyError):
    """缺少必要配置（如 API Key）。"""
