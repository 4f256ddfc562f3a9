"""OneDrive API error responses and exceptions."""
import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from ...exceptions import OneDriveException


@dataclass(frozen=True)
class InnerError:
    """Request diagnostics attached to an API error."""
    date: str = ''
    request_id: str = ''
    client_request_id: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'InnerError':
        return cls(
            date=data.get('date') or '',
            request_id=data.get('request-id') or data.get('requestId') or '',
            client_request_id=data.get('client-request-id') or data.get('clientRequestId') or ''
        )


class RemoteError(OneDriveException):
    """
    Exception raised for errors returned by the OneDrive API.

    Either decoded from the ``{"error": {...}}`` body, in which case
    ``code`` and ``message`` are set, or built from the raw status line
    and body text when the body does not have that shape.
    """

    def __init__(
        self,
        status: Optional[int] = None,
        code: str = '',
        message: str = '',
        localized_message: str = '',
        inner_error: Optional[InnerError] = None,
        status_line: str = '',
        raw_body: str = ''
    ):
        self.code = code
        self.message = message
        self.localized_message = localized_message
        self.inner_error = inner_error
        self.status_line = status_line
        self.raw_body = raw_body
        super().__init__(self._render(), status)

    @property
    def is_decoded(self) -> bool:
        """True if the error body had the expected error shape."""
        return bool(self.code or self.message)

    def _render(self) -> str:
        if not self.is_decoded:
            return f"{self.status_line}: {self.raw_body}"
        if self.inner_error is not None:
            return f"{self.code} - {self.message} ({self.inner_error.date})"
        return f"{self.code} - {self.message}"


def map_error_response(
    status: int,
    reason: Optional[str],
    body: Union[bytes, str]
) -> RemoteError:
    """
    Decode a non-success response into a RemoteError.

    Args:
        status: HTTP status code
        reason: HTTP reason phrase
        body: Raw response body

    Returns:
        RemoteError with decoded fields, or carrying the status line and raw body
    """
    text = body.decode('utf-8', errors='replace') if isinstance(body, bytes) else body
    status_line = f"{status} {reason}".strip() if reason else str(status)

    try:
        payload = json.loads(text)
    except ValueError:
        payload = None

    error = payload.get('error') if isinstance(payload, dict) else None
    if not isinstance(error, dict):
        return RemoteError(status=status, status_line=status_line, raw_body=text)

    inner = error.get('innerError')
    return RemoteError(
        status=status,
        code=error.get('code') or '',
        message=error.get('message') or '',
        localized_message=error.get('localizedMessage') or '',
        inner_error=InnerError.from_dict(inner) if isinstance(inner, dict) else None,
        status_line=status_line,
        raw_body=text
    )
