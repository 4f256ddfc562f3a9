"""
Custom exceptions for OneDrive operations.

This module defines the exception classes raised by the SDK. Every error
surfaced to callers derives from OneDriveException.
"""
from typing import Optional


class OneDriveException(Exception):
    """Base exception for all OneDrive-related errors."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            status: HTTP status code (if available)
        """
        self.status = status
        super().__init__(message)


class ValidationError(OneDriveException, ValueError):
    """Exception raised for missing or invalid caller input, before any request is sent."""
    pass


class ProtocolError(OneDriveException):
    """Exception raised when a server response breaks the upload session contract."""
    pass


class DataTruncatedError(OneDriveException):
    """Exception raised when the local data source yields fewer bytes than required."""

    def __init__(
        self,
        message: str,
        offset: Optional[int] = None,
        expected: Optional[int] = None,
        received: Optional[int] = None
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            offset: Byte offset of the failed read
            expected: Number of bytes requested
            received: Number of bytes actually produced
        """
        self.offset = offset
        self.expected = expected
        self.received = received
        super().__init__(message)


class TransportError(OneDriveException):
    """Exception raised for network-level failures, including timeouts."""
    pass
