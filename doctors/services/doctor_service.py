import requests
from typing import Dict, Tuple

from config.logging import get_logger
from core.api_client import BackendClient, error_message

logger = get_logger(__name__)

# =====================================================
# CONSTANTS
# =====================================================

DOCTORS_PATH = "/api/v1/doctors"

# =====================================================
# DOCTOR SERVICE
# =====================================================

class DoctorService:
    """
    Doctor records and availability via the backend API.
    Every method returns (success, result); failures carry result["error"].
    """

    def __init__(self, client: BackendClient):
        self.client = client

    # -------------------------------------------------
    # LIST DOCTORS
    # -------------------------------------------------

    def list_doctors(self) -> Tuple[bool, Dict]:
        try:
            resp = self.client.get(DOCTORS_PATH)
        except requests.RequestException:
            return False, {"error": "Failed to fetch doctors"}

        if not resp.ok:
            return False, {"error": "Failed to fetch doctors"}

        try:
            body = resp.json()
        except ValueError:
            return False, {"error": "Failed to fetch doctors"}

        if not isinstance(body, dict):
            return False, {"error": "Failed to fetch doctors"}

        data = body.get("data") or {}
        if body.get("statusCode") != 200 or "doctors" not in data:
            return False, {"error": body.get("message") or "Failed to fetch doctors"}

        return True, {"doctors": data["doctors"]}

    # -------------------------------------------------
    # GET DOCTOR
    # -------------------------------------------------

    def get_doctor(self, doctor_id: str) -> Tuple[bool, Dict]:
        """
        Fetch one doctor.

        Returns:
            (success: bool, result: dict)
            result contains {"doctor": {...}} including available_times
        """
        try:
            resp = self.client.get(f"{DOCTORS_PATH}/{doctor_id}")
        except requests.RequestException:
            return False, {"error": "Failed to fetch doctor"}

        if not resp.ok:
            return False, {"error": "Failed to fetch doctor"}

        try:
            body = resp.json()
        except ValueError:
            return False, {"error": "Failed to fetch doctor"}

        if not isinstance(body, dict):
            return False, {"error": "Failed to fetch doctor"}

        if body.get("statusCode") != 200 or not body.get("data"):
            return False, {"error": body.get("message") or "Failed to fetch doctor"}

        return True, {"doctor": body["data"]}

    # -------------------------------------------------
    # CREATE / UPDATE / DELETE
    # -------------------------------------------------

    def create_doctor(self, fields: Dict) -> Tuple[bool, Dict]:
        try:
            resp = self.client.post(f"{DOCTORS_PATH}/add-doctor", fields)
        except requests.RequestException:
            return False, {"error": "Failed to add doctor"}

        if not resp.ok:
            return False, {"error": error_message(resp, "Failed to add doctor")}

        logger.info("doctor_created", name=fields.get("name"))
        return True, {}

    def update_doctor(self, doctor_id: str, fields: Dict) -> Tuple[bool, Dict]:
        try:
            resp = self.client.patch(f"{DOCTORS_PATH}/update/{doctor_id}", fields)
        except requests.RequestException:
            return False, {"error": "Failed to update doctor"}

        if not resp.ok:
            return False, {"error": error_message(resp, "Failed to update doctor")}

        logger.info("doctor_updated", doctor_id=doctor_id, fields=sorted(fields))
        return True, {}

    def delete_doctor(self, doctor_id: str) -> Tuple[bool, Dict]:
        try:
            resp = self.client.delete(f"{DOCTORS_PATH}/{doctor_id}")
        except requests.RequestException:
            return False, {"error": "Failed to delete doctor"}

        if not resp.ok:
            return False, {"error": error_message(resp, "Failed to delete doctor")}

        logger.info("doctor_deleted", doctor_id=doctor_id)
        return True, {}

    # -------------------------------------------------
    # AVAILABILITY
    # -------------------------------------------------

    def update_availability(self, doctor_id: str, schedule: Dict) -> Tuple[bool, Dict]:
        """Persist the whole schedule as the doctor's available_times."""
        try:
            resp = self.client.patch(
                f"{DOCTORS_PATH}/update/{doctor_id}",
                {"available_times": schedule},
            )
        except requests.RequestException:
            return False, {"error": "Failed to update schedule"}

        if not resp.ok:
            return False, {"error": error_message(resp, "Failed to update schedule")}

        logger.info("schedule_saved", doctor_id=doctor_id, dates=len(schedule))
        return True, {}
