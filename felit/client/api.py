"""HTTP API client for interacting with the chat server."""
from typing import Any, Dict, List, Optional

import requests


class AuthenticationError(Exception):
    """Raised when the server rejects credentials or the session."""


class APIClient:
    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _check(self, resp: requests.Response) -> requests.Response:
        if resp.status_code == 401:
            raise AuthenticationError(resp.text or "Unauthorized")
        resp.raise_for_status()
        return resp

    def login(self, username: str, password: str) -> None:
        resp = self.session.post(
            f"{self.base_url}/login",
            json={"username": username, "password": password},
            allow_redirects=False,
            timeout=self.timeout,
        )
        self._check(resp)

    def logout(self) -> None:
        resp = self.session.post(f"{self.base_url}/logout", allow_redirects=False, timeout=self.timeout)
        self._check(resp)

    def send_message(self, text: str) -> None:
        resp = self.session.post(f"{self.base_url}/send", json={"text": text}, timeout=self.timeout)
        self._check(resp)

    def get_messages(self) -> List[Dict[str, Any]]:
        resp = self.session.get(f"{self.base_url}/messages", timeout=self.timeout)
        return self._check(resp).json()

    def get_admin_snapshot(self) -> Dict[str, Any]:
        resp = self.session.get(f"{self.base_url}/admin", timeout=self.timeout)
        return self._check(resp).json()

    def health(self) -> Dict[str, Any]:
        resp = self.session.get(f"{self.base_url}/.well-known/health", timeout=self.timeout)
        return self._check(resp).json()
