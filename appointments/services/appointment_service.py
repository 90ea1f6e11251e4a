import requests
from typing import Dict, Tuple

from config.logging import get_logger
from core.api_client import BackendClient, error_message

logger = get_logger(__name__)

# =====================================================
# CONSTANTS
# =====================================================

APPOINTMENTS_PATH = "/api/v1/appointments"

STATUSES = ["pending", "approved", "completed", "rejected"]

# Target status -> statuses it can be reached from
ALLOWED_FROM = {
    "approved": {"pending", "rejected"},
    "completed": {"approved"},
    "rejected": {"pending", "approved"},
}

# =====================================================
# HELPERS
# =====================================================

def can_transition(current: str, target: str) -> bool:
    return current in ALLOWED_FROM.get(target, set())


def available_actions(current: str) -> Dict[str, bool]:
    """Which status buttons are enabled for an appointment."""
    return {target: can_transition(current, target) for target in ALLOWED_FROM}

# =====================================================
# APPOINTMENT SERVICE
# =====================================================

class AppointmentService:
    """
    Appointments via the backend API.
    Every method returns (success, result); failures carry result["error"].
    """

    def __init__(self, client: BackendClient):
        self.client = client

    # -------------------------------------------------
    # LIST APPOINTMENTS
    # -------------------------------------------------

    def list_appointments(self) -> Tuple[bool, Dict]:
        """
        Returns:
            (success: bool, result: dict)
            result contains {"appointments": [...], "count": n}
        """
        try:
            resp = self.client.get(APPOINTMENTS_PATH)
        except requests.RequestException:
            return False, {"error": "Failed to load appointments"}

        if not resp.ok:
            return False, {"error": "Failed to load appointments"}

        try:
            appointments = resp.json().get("data") or []
        except (ValueError, AttributeError):
            return False, {"error": "Failed to load appointments"}

        return True, {
            "appointments": appointments,
            "count": len(appointments),
        }

    # -------------------------------------------------
    # UPDATE STATUS
    # -------------------------------------------------

    def update_status(self, appointment_id: str, status: str) -> Tuple[bool, Dict]:
        """
        Update appointment status.

        Args:
            appointment_id: backend id of the appointment
            status: One of: approved, completed, rejected

        Returns:
            (success: bool, result: dict)
        """
        if status not in ALLOWED_FROM:
            return False, {
                "error": f"Invalid status. Must be one of: {', '.join(ALLOWED_FROM)}"
            }

        try:
            resp = self.client.patch(
                f"{APPOINTMENTS_PATH}/updateStatus",
                {"id": appointment_id, "status": status},
            )
        except requests.RequestException:
            return False, {"error": "Failed to update appointment status"}

        if not resp.ok:
            return False, {"error": error_message(resp, "Failed to update appointment status")}

        logger.info("appointment_status_updated", appointment_id=appointment_id, status=status)
        return True, {}
