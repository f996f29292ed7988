"""Shared fixtures: a recording fake transport and a resolved config."""

import json

import pytest
import requests

from bugsink_cli.client import BugsinkClient
from bugsink_cli.config import Config


def make_response(status=200, body=None, text=None, reason=None):
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status
    response.reason = reason or ('OK' if 200 <= status < 300 else 'Error')
    if text is not None:
        response._content = text.encode('utf-8')
    elif body is not None:
        response._content = json.dumps(body).encode('utf-8')
    else:
        response._content = b''
    response.encoding = 'utf-8'
    return response


class FakeSession(requests.Session):
    """Session that records requests and replays queued responses."""

    def __init__(self, *responses):
        super().__init__()
        self.responses = list(responses)
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)

    def request(self, method, url, **kwargs):
        self.calls.append({'method': method, 'url': url, **kwargs})
        if not self.responses:
            raise AssertionError(f"unexpected request: {method} {url}")
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def environ():
    return {
        'BUGSINK_API_KEY': 'test-key',
        'BUGSINK_HOST': 'https://test.example.com',
    }


@pytest.fixture
def config(environ, tmp_path):
    return Config.resolve(environ=environ, cwd=str(tmp_path))


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(config, session):
    return BugsinkClient(config=config, session=session)
