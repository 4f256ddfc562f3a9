"""
onedrivepy - Async Python library for OneDrive.

Usage:
    >>> from onedrivepy import OneDriveClient
    >>>
    >>> async with OneDriveClient(access_token) as drive:
    ...     for item in await drive.list():
    ...         print(item.name)
"""
import logging
from .client import OneDriveClient

# Configuration
from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    RetryConfig,
    AsyncAPIClient,
    RemoteError,
    InnerError
)

# Models
from .core.drive import (
    DriveItem,
    DriveItemsResponse,
    ConflictBehavior,
    DriveSpecialFolder,
    UploadSession
)
from .core.upload import (
    LargeFile,
    UploadLargeFileOptions,
    UploadProgress,
    AsyncFileReader,
    BytesReader
)

# Errors
from .core.exceptions import (
    OneDriveException,
    ValidationError,
    ProtocolError,
    DataTruncatedError,
    TransportError
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for onedrivepy modules.

    Ensures that all onedrivepy loggers are set to the given level
    and propagate to the root logger.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'onedrivepy',
        'onedrivepy.api',
        'onedrivepy.client',
        'onedrivepy.drive',
        'onedrivepy.upload',
        'onedrivepy.upload.coordinator',
        'onedrivepy.upload.chunk',
        'onedrivepy.upload.session',
        'onedrivepy.upload.file',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'OneDriveClient',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',
    'AsyncAPIClient',
    'DriveItem',
    'DriveItemsResponse',
    'ConflictBehavior',
    'DriveSpecialFolder',
    'UploadSession',
    'LargeFile',
    'UploadLargeFileOptions',
    'UploadProgress',
    'AsyncFileReader',
    'BytesReader',
    'OneDriveException',
    'ValidationError',
    'ProtocolError',
    'DataTruncatedError',
    'RemoteError',
    'InnerError',
    'TransportError',
    'setup_logging',
]
