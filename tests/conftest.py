"""Pytest shared fixtures for the IDAM client tests."""
import json
import pathlib
import sys
from typing import Any, Optional
from unittest.mock import Mock

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests

from idam.core.idam import UserAuthClient

BASE_URL = "https://idam.example.com"
APP_ID = "test-app"


# ─────────────────────────────────────────────────────────────────────────────
# HTTP fakes
# ─────────────────────────────────────────────────────────────────────────────
def build_response(status_code: int, body: Any = None, raw: Optional[bytes] = None) -> requests.Response:
    """Build a real requests.Response with a JSON (or raw) body."""
    response = requests.Response()
    response.status_code = status_code
    if raw is not None:
        response._content = raw
    elif body is not None:
        response._content = json.dumps(body).encode("utf-8")
    else:
        response._content = b""
    response.headers["Content-Type"] = "application/json"
    return response


@pytest.fixture
def make_response():
    return build_response


@pytest.fixture
def session():
    """Mock transport; tests set session.request.return_value or side_effect."""
    return Mock(spec=requests.Session)


@pytest.fixture
def client(session):
    return UserAuthClient(BASE_URL, session=session, timeout=5)


@pytest.fixture
def sent_request(session):
    """Return details of the single request sent through the mock session."""
    def _sent():
        assert session.request.call_count == 1
        args, kwargs = session.request.call_args
        method, url = args
        data = kwargs.get("data")
        return {
            "method": method,
            "url": url,
            "headers": kwargs.get("headers", {}),
            "json": json.loads(data) if data is not None else None,
            "timeout": kwargs.get("timeout"),
        }
    return _sent
