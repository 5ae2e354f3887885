"""
HTTP adapters for typed requests.
"""

from .adapter import HTTPAdapter
from .requests_adapter import RequestsAdapter
from .aiohttp_adapter import AiohttpAdapter

__all__ = ["HTTPAdapter", "RequestsAdapter", "AiohttpAdapter"]
