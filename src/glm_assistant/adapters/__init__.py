"""External API adapters"""

from .zhipu_client import ZHIPU_API_BASE_URL, ZhipuAPIClient

__all__ = ["ZHIPU_API_BASE_URL", "ZhipuAPIClient"]
