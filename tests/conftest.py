"""Pytest fixtures for dbxpy tests."""
import json
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, urlsplit

import pytest

from dbxpy import DropboxClient, Credentials
from dbxpy.core.api.transport import Response
from dbxpy.core.utils import BUFFER_SIZE


class BytesResponse(Response):
    """In-memory response."""
    
    def __init__(self, body: bytes = b'', status_code: int = 200, encoding: Optional[str] = None):
        super().__init__(status_code, 'OK', encoding)
        self._body = body
        self.closed = False
    
    def iter_content(self, chunk_size: int = BUFFER_SIZE):
        for i in range(0, len(self._body), chunk_size):
            yield self._body[i:i + chunk_size]
    
    def close(self):
        self.closed = True


@dataclass
class RecordedCall:
    """A request seen by FakeTransport, with its body already drained."""
    request: object
    body: Optional[bytes]
    
    @property
    def method(self) -> str:
        return self.request.method
    
    @property
    def url(self) -> str:
        return self.request.url
    
    @property
    def path(self) -> str:
        return urlsplit(self.request.url).path
    
    @property
    def query(self) -> dict:
        """Query parameters (single values)."""
        query = urlsplit(self.request.url).query
        return {k: v[0] for k, v in parse_qs(query, keep_blank_values=True).items()}
    
    @property
    def form(self) -> dict:
        """Form encoded body parameters (single values)."""
        text = (self.body or b'').decode('utf-8')
        return {k: v[0] for k, v in parse_qs(text, keep_blank_values=True).items()}
    
    @property
    def headers(self) -> dict:
        return dict(self.request.header_items())


class FakeTransport:
    """
    Transport replaying queued responses.
    
    Queue items may be bytes, str, JSON-able dicts/lists, Response
    objects or exceptions (raised instead of answering).
    """
    
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []
        self.closed = False
    
    def queue(self, *responses) -> 'FakeTransport':
        self.responses.extend(responses)
        return self
    
    def execute(self, request):
        body = request.body
        if body is not None and not isinstance(body, bytes):
            body = body.read()
        self.calls.append(RecordedCall(request, body))
        
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request}")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        if isinstance(item, Response):
            return item
        if isinstance(item, (dict, list)):
            item = json.dumps(item)
        if isinstance(item, str):
            item = item.encode('utf-8')
        return BytesResponse(item)
    
    def close(self):
        self.closed = True


@pytest.fixture
def transport():
    """Empty fake transport; queue responses in the test."""
    return FakeTransport()


@pytest.fixture
def app_credentials():
    return Credentials('app-key', 'app-secret')


@pytest.fixture
def token_credentials():
    return Credentials('token-key', 'token-secret')


@pytest.fixture
def client(app_credentials, token_credentials, transport):
    """Authenticated client on the fake transport."""
    return DropboxClient(app_credentials, token_credentials, transport=transport)


@pytest.fixture
def sample_entry_data():
    """Returns sample file metadata from the API."""
    return {
        'size': '225.4KB',
        'rev': '35e97029684fe',
        'thumb_exists': False,
        'bytes': 230783,
        'modified': 'Tue, 19 Jul 2011 21:55:38 +0000',
        'client_mtime': 'Mon, 18 Jul 2011 18:04:35 +0000',
        'path': '/Getting_Started.pdf',
        'is_dir': False,
        'icon': 'page_white_acrobat',
        'root': 'dropbox',
        'mime_type': 'application/pdf',
        'revision': 220823
    }


@pytest.fixture
def sample_folder_data(sample_entry_data):
    """Returns sample folder metadata with one child."""
    return {
        'hash': '528dda36e3150ba28040052bbf1bfbd1',
        'thumb_exists': False,
        'bytes': 0,
        'modified': 'Sat, 12 Jan 2008 23:10:10 +0000',
        'path': '/Public',
        'is_dir': True,
        'size': '0 bytes',
        'root': 'dropbox',
        'icon': 'folder_public',
        'contents': [sample_entry_data]
    }
