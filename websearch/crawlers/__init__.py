"""검색 프로바이더 (HTTP + HTML 추출) 패키지."""

from .http_client import SharedHttpClient, get_shared_http_client, shutdown_shared_http_client
from .provider_client import ProviderClient, create_default_providers

__all__ = [
    "SharedHttpClient",
    "get_shared_http_client",
    "shutdown_shared_http_client",
    "ProviderClient",
    "create_default_providers",
]
