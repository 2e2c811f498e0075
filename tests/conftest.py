"""Shared fixtures: a running mock Okta server and a client pointed at it."""

import pytest

from okta_bulk.http_client import OktaClient
from tests.mock_okta_server import MockOktaServer

API_KEY = "test-token"


@pytest.fixture
def server():
    with MockOktaServer(api_key=API_KEY) as s:
        yield s


@pytest.fixture
def client(server):
    with OktaClient(server.base_url, API_KEY) as c:
        yield c


@pytest.fixture
def write_csv(tmp_path):
    """Write text to a csv file under tmp_path and return its path."""
    def _write(text, name="input.csv"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write
