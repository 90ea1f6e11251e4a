import re
import requests
from typing import Dict, Tuple

from django.conf import settings

from config.logging import get_logger
from core.api_client import AUTH_COOKIES, BackendClient, error_message

logger = get_logger(__name__)

# =====================================================
# CONSTANTS
# =====================================================

USERS_PATH = "/api/v1/users"

EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

# =====================================================
# HELPERS
# =====================================================

def _session_cookies(resp: requests.Response) -> Dict[str, str]:
    """Auth cookies the backend set on its response."""
    return {
        name: resp.cookies.get(name)
        for name in AUTH_COOKIES
        if resp.cookies.get(name)
    }

# =====================================================
# LOGIN SERVICE
# =====================================================

class LoginService:
    def __init__(self, data: Dict, client: BackendClient):
        self.email = (data.get("email") or "").strip()
        self.password = data.get("password") or ""
        self.client = client

    def authenticate(self) -> Tuple[bool, Dict]:
        """
        Log the admin in against the backend.

        Returns:
            (success: bool, result: Dict)

        On success, result contains:
            - cookies: {"accessToken": ..., "refreshToken": ...}

        On failure, result contains:
            - error (message)
        """
        if not self.email or not self.password:
            return False, {"error": "Please enter both email and password"}

        if self.email != settings.ADMIN_EMAIL:
            logger.warning("non_admin_login_rejected")
            return False, {"error": "Access denied. Only admin login is allowed."}

        try:
            resp = self.client.post(
                f"{USERS_PATH}/login",
                {"email": self.email, "password": self.password},
            )
        except requests.RequestException:
            return False, {"error": "Authentication service unavailable"}

        if not resp.ok:
            return False, {"error": error_message(resp, "Failed to login")}

        logger.info("admin_logged_in")
        return True, {"cookies": _session_cookies(resp)}

# =====================================================
# REGISTRATION SERVICE
# =====================================================

class RegistrationService:
    def __init__(self, data: Dict, client: BackendClient):
        self.name = (data.get("name") or "").strip()
        self.email = (data.get("email") or "").strip()
        self.password = data.get("password") or ""
        self.client = client
        self.errors = {}

    def validate(self) -> bool:
        if not self.name or not self.email or not self.password:
            self.errors["__all__"] = "Please fill in all fields"
            return False

        if not EMAIL_RE.match(self.email):
            self.errors["email"] = "Invalid email format."

        return not self.errors

    def register(self) -> Tuple[bool, Dict]:
        if not self.validate():
            return False, {"error": next(iter(self.errors.values()))}

        try:
            resp = self.client.post(
                f"{USERS_PATH}/register",
                {"name": self.name, "email": self.email, "password": self.password},
            )
        except requests.RequestException:
            return False, {"error": "Registration failed. Please try again."}

        if not resp.ok:
            return False, {"error": error_message(resp, "Failed to register")}

        logger.info("user_registered")
        return True, {}

# =====================================================
# LOGOUT
# =====================================================

def logout(client: BackendClient) -> Tuple[bool, Dict]:
    try:
        resp = client.post(f"{USERS_PATH}/logout")
    except requests.RequestException:
        return False, {"error": "Failed to logout. Please try again."}

    if not resp.ok:
        return False, {"error": error_message(resp, "Failed to logout. Please try again.")}

    return True, {}
