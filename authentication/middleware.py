from django.shortcuts import redirect

from config.logging import get_logger
from core.api_client import AUTH_COOKIES

logger = get_logger(__name__)

LOGIN_PATH = "/login"

# Never guarded: backend-facing endpoints and static assets.
EXEMPT_PREFIXES = ("/api/", "/static/", "/favicon.ico")


def has_session_cookies(request) -> bool:
    return all(request.COOKIES.get(name) for name in AUTH_COOKIES)


class CookieAuthMiddleware:
    """
    Route guard based on the backend's auth cookies.

    Only checks that both cookies are present; the backend validates them
    on every API call.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        path = request.path

        if path.startswith(EXEMPT_PREFIXES):
            return self.get_response(request)

        authenticated = has_session_cookies(request)
        is_auth_page = path.startswith(LOGIN_PATH)

        if not authenticated and not is_auth_page:
            logger.info("redirect_to_login", path=path)
            return redirect(f"{LOGIN_PATH}/")

        if authenticated and is_auth_page:
            return redirect("/")

        return self.get_response(request)
