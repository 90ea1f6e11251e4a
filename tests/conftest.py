"""Shared test fixtures."""
import pytest
from unittest.mock import Mock

from django.test import Client


@pytest.fixture
def make_response():
    """Build a fake requests.Response."""
    def _create(status_code: int = 200, body=None, cookies=None):
        resp = Mock()
        resp.status_code = status_code
        resp.ok = 200 <= status_code < 400
        if isinstance(body, Exception):
            resp.json.side_effect = body
        else:
            resp.json.return_value = body
        resp.cookies = cookies or {}
        return resp
    return _create


@pytest.fixture
def backend():
    """A stand-in BackendClient with get/post/patch/delete mocks."""
    return Mock()


@pytest.fixture
def auth_client():
    """Browser client holding both auth cookies."""
    client = Client()
    client.cookies["accessToken"] = "access-123"
    client.cookies["refreshToken"] = "refresh-456"
    return client
