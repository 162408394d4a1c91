"""Best Buy Categories API 客户端与模型。"""

from .client import DEFAULT_BASE_URL, BestBuyClient
from .errors import (
    BestBuyApiError,
    BestBuyConfigError,
    BestBuyError,
    BestBuyNetworkError,
    BestBuyParseError,
)
from .models import CategoryPathItem, CategorySearchResponse, RemoteCategory

__all__ = [
    "DEFAULT_BASE_URL",
    "BestBuyClient",
    "BestBuyApiError",
    "BestBuyConfigError",
    "BestBuyError",
    "BestBuyNetworkError",
    "BestBuyParseError",
    "CategoryPathItem",
    "CategorySearchResponse",
    "RemoteCategory",
]
