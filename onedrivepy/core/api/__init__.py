"""OneDrive API transport module."""
from .errors import RemoteError, InnerError, map_error_response
from .config import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig, RetryConfig, GRAPH_BASE_URL
from .async_client import AsyncAPIClient, RawResponse

__all__ = [
    # Async client
    'AsyncAPIClient',
    'RawResponse',

    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',
    'GRAPH_BASE_URL',

    # Errors
    'RemoteError',
    'InnerError',
    'map_error_response',
]
