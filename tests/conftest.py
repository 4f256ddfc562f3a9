"""Pytest fixtures for onedrivepy tests."""
import json
import os
import re

import pytest

from onedrivepy.core.api.async_client import RawResponse


UPLOAD_URL = 'https://upload.example.com/session/abc123'

_CONTENT_RANGE = re.compile(r'^bytes (\d+)-(\d+)/(\d+)$')


def json_response(status, payload, reason=None, headers=None):
    """Build a RawResponse with a JSON body."""
    return RawResponse(
        status=status,
        reason=reason,
        body=json.dumps(payload).encode(),
        headers=headers or {}
    )


def parse_content_range(header):
    """Returns (start, end, total) of a Content-Range header."""
    match = _CONTENT_RANGE.match(header)
    assert match, f"bad Content-Range: {header}"
    return tuple(int(g) for g in match.groups())


class FakeUploadApi:
    """
    Stand-in for AsyncAPIClient recording upload traffic.

    JSON requests answer with the session payload. Chunk PUTs are passed
    to the responder, which returns a RawResponse. DELETEs answer 204.
    Chunk bytes are copied on arrival, since the engine reuses its buffer.
    """

    def __init__(self, responder, session_payload=None):
        self.responder = responder
        self.session_payload = session_payload if session_payload is not None else {
            'uploadUrl': UPLOAD_URL,
            'expirationDateTime': '2026-10-19T09:21:55.523Z',
            'nextExpectedRanges': ['0-'],
        }
        self.requests = []
        self.puts = []
        self.deletes = []
        self.delete_status = 204

    def build_url(self, path, params=None):
        return 'https://graph.example.com/' + path

    async def request(self, method, path, body=None, params=None):
        self.requests.append((method, path, body, params))
        return self.session_payload

    async def raw_request(self, method, url, data=None, headers=None):
        if method == 'DELETE':
            self.deletes.append(url)
            return RawResponse(status=self.delete_status)
        chunk = bytes(data)
        self.puts.append((url, chunk, dict(headers or {})))
        return await self.responder(self, chunk, headers)


class ContinuingServer:
    """
    Simulated upload endpoint.

    Accepts every chunk, answers 202 with "<received>-" until all bytes
    have arrived, then answers with the drive item.
    """

    def __init__(self, total, final_status=201):
        self.total = total
        self.final_status = final_status
        self.received = bytearray()

    async def __call__(self, api, chunk, headers):
        start, end, total = parse_content_range(headers['Content-Range'])
        assert total == self.total
        assert start == len(self.received)
        assert end - start + 1 == len(chunk) == int(headers['Content-Length'])
        self.received.extend(chunk)
        if len(self.received) == self.total:
            return json_response(self.final_status, {
                'id': 'ITEM1',
                'name': 'big.bin',
                'size': self.total,
                'file': {'mimeType': 'application/octet-stream'},
            })
        return json_response(202, {
            'expirationDateTime': '2026-10-19T09:21:55.523Z',
            'nextExpectedRanges': [f'{len(self.received)}-'],
        })


@pytest.fixture
def payload():
    """Returns 1 MiB of non-repeating test data."""
    return os.urandom(1024 * 1024)


@pytest.fixture
def drive_item_data():
    """Returns a sample drive item JSON object."""
    return {
        '@microsoft.graph.downloadUrl': 'https://download.example.com/f/ITEM1',
        'id': 'ITEM1',
        'name': 'report.pdf',
        'size': 2048,
        'webUrl': 'https://onedrive.example.com/report.pdf',
        'file': {'mimeType': 'application/pdf'},
        'parentReference': {'id': 'PARENT', 'driveId': 'DRIVE1', 'path': '/drive/root:'},
    }


@pytest.fixture
def folder_item_data():
    """Returns a sample folder JSON object."""
    return {
        'id': 'FOLDER1',
        'name': 'Documents',
        'folder': {'childCount': 3},
    }


@pytest.fixture
def make_response():
    """Returns the JSON RawResponse builder."""
    return json_response


@pytest.fixture
def make_api():
    """Returns the FakeUploadApi factory."""
    return FakeUploadApi


@pytest.fixture
def make_server():
    """Returns the ContinuingServer factory."""
    return ContinuingServer
