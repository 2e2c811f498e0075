"""Thin HTTP abstraction for talking to the Okta management API.

The client is an explicit object handed to every workflow step rather than a
module-level singleton, so tests can point it at a local mock server or pass
in their own ``requests.Session``.

Key behaviors:
- ``Authorization: SSWS <api key>`` on every request
- Paths are relative to the tenant's ``/api/v1/`` root
- Non-2xx responses are returned, never raised; callers decide what a failure means
- ``redact_auth()`` helper for safe logging of headers
"""

import json
import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)


class OktaResponse:
    """Normalized HTTP response wrapper.

    Holds the decoded body text so it can be printed verbatim in error
    output and parsed lazily as JSON.
    """

    def __init__(self, status_code: int, reason: str, headers: Dict[str, str], body: str):
        self.status_code = status_code
        self.reason = reason
        self.headers = headers
        self.body = body
        self._json = None

    @property
    def ok(self) -> bool:
        """True for any 2xx status."""
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Parse and cache the response body as JSON."""
        if self._json is None:
            self._json = json.loads(self.body) if self.body else None
        return self._json


class OktaClient:
    """HTTP client for one Okta tenant.

    Args:
        base_url:  API root, e.g. ``https://mytenant.okta.com/api/v1/``
        api_key:   Okta API token
        timeout:   Per-request timeout in seconds
        session:   Optional ``requests.Session`` to send requests through;
                   one is created (and owned) by the client otherwise
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/") + "/"
        self.api_key = api_key
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()

    # -- Public API ----------------------------------------------------------

    def get(self, path: str, params: Optional[Dict[str, str]] = None) -> OktaResponse:
        """Send a GET request relative to the API root."""
        return self._request("GET", path, params=params)

    def post(self, path: str, payload: Dict[str, Any],
             params: Optional[Dict[str, str]] = None) -> OktaResponse:
        """Send a POST request with a JSON payload."""
        return self._request("POST", path, payload=payload, params=params)

    def put(self, path: str, payload: Optional[Dict[str, Any]] = None) -> OktaResponse:
        """Send a PUT request.  Without a payload the body is empty."""
        return self._request("PUT", path, payload=payload)

    def close(self):
        """Close the underlying session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    # -- Internals -----------------------------------------------------------

    def _build_headers(self) -> Dict[str, str]:
        """Build the default JSON request headers with the SSWS credential."""
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": f"SSWS {self.api_key}",
        }

    def _request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> OktaResponse:
        """Execute a single HTTP request.  No retries.

        Request lines are logged at DEBUG, below the ``--verbose`` trace level.
        """
        url = f"{self.base_url}{path.lstrip('/')}"
        headers = self._build_headers()
        logger.debug("%s %s params=%s headers=%s", method, url, params, redact_auth(headers))

        kwargs: Dict[str, Any] = {
            "headers": headers,
            "timeout": self.timeout,
        }
        if params:
            kwargs["params"] = params
        if payload is not None:
            kwargs["data"] = json.dumps(payload)
        elif method != "GET":
            kwargs["data"] = ""

        resp = self.session.request(method, url, **kwargs)
        return OktaResponse(resp.status_code, resp.reason or "", dict(resp.headers), resp.text)


def redact_auth(headers: Dict[str, str]) -> Dict[str, str]:
    """Return a copy of headers with Authorization values replaced by ``***REDACTED***``.

    Use this when including headers in logs or error messages to avoid
    leaking the API token.
    """
    redacted = dict(headers)
    for key in list(redacted.keys()):
        if key.lower() == "authorization":
            redacted[key] = "***REDACTED***"
    return redacted
