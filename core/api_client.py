import requests
from typing import Dict, Optional

from django.conf import settings

from config.logging import get_logger

logger = get_logger(__name__)

# =====================================================
# CONSTANTS
# =====================================================

AUTH_COOKIES = ("accessToken", "refreshToken")

# =====================================================
# HELPERS
# =====================================================

def error_message(resp: requests.Response, default: str) -> str:
    """Pull a human-readable message out of a failed backend response."""
    try:
        data = resp.json()
    except ValueError:
        return default

    if isinstance(data, dict):
        return data.get("message") or data.get("error") or default
    return default

# =====================================================
# BACKEND CLIENT
# =====================================================

class BackendClient:
    """
    Thin wrapper around the external REST API.

    The admin's auth cookies are forwarded on every call, the way the
    browser would send them with ``credentials: include``.
    """

    def __init__(self, cookies: Optional[Dict[str, str]] = None):
        self.base_url = settings.BACKEND_API_URL
        self.timeout = settings.BACKEND_TIMEOUT
        self.session = requests.Session()
        for name in AUTH_COOKIES:
            value = (cookies or {}).get(name)
            if value:
                self.session.cookies.set(name, value)

    @classmethod
    def for_request(cls, request) -> "BackendClient":
        return cls(cookies=request.COOKIES)

    def _headers(self):
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def request(self, method: str, path: str, payload: Optional[Dict] = None) -> requests.Response:
        """
        Issue a call against the backend.

        Raises:
            requests.RequestException: transport failure (connection, timeout)
        """
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(
                method,
                url,
                headers=self._headers(),
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("backend_unreachable", method=method, path=path, error=str(e))
            raise

        if not resp.ok:
            logger.info("backend_error", method=method, path=path, status=resp.status_code)
        return resp

    def get(self, path: str) -> requests.Response:
        return self.request("GET", path)

    def post(self, path: str, payload: Optional[Dict] = None) -> requests.Response:
        return self.request("POST", path, payload)

    def patch(self, path: str, payload: Optional[Dict] = None) -> requests.Response:
        return self.request("PATCH", path, payload)

    def delete(self, path: str) -> requests.Response:
        return self.request("DELETE", path)
