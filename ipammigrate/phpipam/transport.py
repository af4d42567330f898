"""phpIPAM REST API transport with token authentication."""

from __future__ import annotations

from datetime import datetime
from types import TracebackType
from typing import Any, Self

import requests
from loguru import logger

from ipammigrate.exceptions import APIError, AuthenticationError, NotFoundError

# Datetime format of the token expiry returned by the phpIPAM API.
TOKEN_TIME_LAYOUT = "%Y-%m-%d %H:%M:%S"


class PHPIPAMTransport:
    """HTTP transport for the phpIPAM API (1.2+).

    Login is a POST to ``{endpoint}/{app_id}/user/`` with Basic Auth. The
    response carries a session token and its expiry date; the token is sent in
    the ``token`` header of every later request and re-acquired once expired.

    Every response is wrapped in an envelope::

        {"code": 200, "success": true, "data": ...}
        {"code": 404, "success": false, "message": "No subnets found"}

    A 404 envelope is raised as ``NotFoundError`` so callers can tell "no such
    object" apart from real failures.
    """

    def __init__(
        self,
        endpoint: str,
        app_id: str,
        username: str,
        password: str,
        verify_ssl: bool = True,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.app_id = app_id
        self.username = username
        self.password = password
        self.verify_ssl = verify_ssl
        self.base_url = f"{self.endpoint}/{app_id}"
        self._session: requests.Session | None = None
        self._token: str | None = None
        self._expires: str = ""

    def connect(self) -> None:
        """Open the HTTP session and log in."""
        self._session = requests.Session()
        self._session.verify = self.verify_ssl
        try:
            self._login()
        except AuthenticationError:
            self.disconnect()
            raise

    def disconnect(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None
        self._token = None
        self._expires = ""

    def is_connected(self) -> bool:
        return self._session is not None and self._token is not None

    def is_expired(self) -> bool:
        """Check if the token has expired via the saved expiry date.

        An unparsable expiry counts as expired.
        """
        try:
            then = datetime.strptime(self._expires, TOKEN_TIME_LAYOUT)
        except ValueError:
            return True
        return datetime.now() > then

    def _login(self) -> None:
        assert self._session is not None
        url = f"{self.base_url}/user/"
        try:
            resp = self._session.post(url, auth=(self.username, self.password))
            resp.raise_for_status()
            body = resp.json()
        except (requests.RequestException, ValueError) as e:
            raise AuthenticationError(f"phpIPAM login failed: {e}") from e

        data = body.get("data") or {}
        token = data.get("token")
        if not token:
            raise AuthenticationError(f"phpIPAM login returned no token: {body.get('message', '')}")

        self._token = token
        self._expires = data.get("expires", "")
        self._session.headers["token"] = token
        logger.debug(f"phpIPAM login successful to {self.endpoint} (token expires {self._expires})")

    def _ensure_token(self) -> None:
        if self._session is None:
            raise APIError("Not connected. Call connect() first.")
        if self._token is None or self.is_expired():
            logger.debug("phpIPAM token missing or expired, logging in again")
            self._login()

    def request(self, method: str, path: str, data: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send a request and return the decoded response envelope.

        Args:
            method: HTTP method.
            path: Controller path relative to the application URL (e.g. "subnets/cidr/10.0.0.0/8").
            data: JSON body payload.
        """
        self._ensure_token()
        assert self._session is not None
        url = f"{self.base_url}/{path.strip('/')}/"
        try:
            resp = self._session.request(method, url, json=data)
        except requests.RequestException as e:
            raise APIError(f"{method} {path} failed: {e}") from e
        return self._decode(method, path, resp)

    @staticmethod
    def _decode(method: str, path: str, resp: requests.Response) -> dict[str, Any]:
        try:
            body = resp.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            if resp.ok:
                raise APIError(f"{method} {path} returned a non-JSON response", resp.status_code)
            raise APIError(f"{method} {path} failed with HTTP {resp.status_code}", resp.status_code)

        try:
            code = int(body.get("code", resp.status_code))
        except (TypeError, ValueError):
            code = resp.status_code
        message = body.get("message", "")

        if body.get("success") is False or not resp.ok:
            if code == 404 or resp.status_code == 404:
                raise NotFoundError(f"Error from API (404): {message}")
            raise APIError(f"Error from API ({code}): {message}", code)
        return body

    def get(self, path: str) -> Any:
        """GET ``path`` and return the envelope's ``data``."""
        return self.request("GET", path).get("data")

    def post(self, path: str, data: dict[str, Any]) -> dict[str, Any]:
        """POST ``data`` to ``path`` and return the whole envelope."""
        return self.request("POST", path, data)

    def __enter__(self) -> Self:
        self.connect()
        return self

    def __exit__(
        self, exc_type: type[BaseException] | None, exc_val: BaseException | None, exc_tb: TracebackType | None
    ) -> None:
        self.disconnect()
