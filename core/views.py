import requests
from django.http import JsonResponse

from config.logging import get_logger
from core.api_client import BackendClient

logger = get_logger(__name__)


def health_check(request):
    """Healthy only when the backend answers with a 2xx."""
    try:
        resp = BackendClient().get("/api/v1/doctors")
    except requests.RequestException:
        return JsonResponse({"status": "backend_unreachable"}, status=503)

    if not resp.ok:
        logger.warning("health_backend_error", backend_status=resp.status_code)
        return JsonResponse(
            {"status": "backend_error", "backend_status": resp.status_code},
            status=503,
        )

    return JsonResponse({"status": "ok"})
