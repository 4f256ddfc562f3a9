"""OneDrive API errors and exceptions."""
from .api_errors import RemoteError, InnerError, map_error_response

__all__ = [
    'RemoteError',
    'InnerError',
    'map_error_response',
]
