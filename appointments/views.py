from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods

from appointments.filters import DATE_ORDERS, consultation_types, filter_appointments
from appointments.services.appointment_service import (
    STATUSES,
    AppointmentService,
    available_actions,
    can_transition,
)
from core.api_client import BackendClient

# =====================================================
# HELPERS
# =====================================================

def _dashboard(request, service: AppointmentService, error=None, status=200):
    status_filter = request.GET.get("status", "all")
    type_filter = request.GET.get("type", "all")
    date_order = request.GET.get("order", "newest")
    if date_order not in DATE_ORDERS:
        date_order = "newest"

    success, result = service.list_appointments()
    appointments = result.get("appointments", []) if success else []
    if not success:
        error = error or result["error"]

    rows = [
        {"appointment": a, "actions": available_actions(a.get("status"))}
        for a in filter_appointments(appointments, status_filter, type_filter, date_order)
    ]

    return render(
        request,
        "appointments/dashboard.html",
        {
            "rows": rows,
            "error": error,
            "statuses": STATUSES,
            "consultation_types": consultation_types(appointments),
            "filters": {"status": status_filter, "type": type_filter, "order": date_order},
        },
        status=status,
    )

# =====================================================
# APPOINTMENT VIEWS
# =====================================================

@require_http_methods(["GET"])
def dashboard(request):
    """
    Appointment dashboard.

    GET /?status=approved&type=Online&order=oldest

    Query Parameters:
    - status: all | pending | approved | completed | rejected
    - type: all | any consultation type present in the data
    - order: newest (default) | oldest
    """
    return _dashboard(request, AppointmentService(BackendClient.for_request(request)))


@require_http_methods(["POST"])
def update_appointment_status(request, appointment_id):
    """
    POST /appointments/{appointment_id}/status/

    Form fields:
    - status: approved | completed | rejected

    The transition is checked against the status the backend currently
    holds for the appointment.
    """
    service = AppointmentService(BackendClient.for_request(request))
    target = request.POST.get("status", "")

    success, result = service.list_appointments()
    if not success:
        return _dashboard(request, service, error=result["error"], status=502)

    appointment = next(
        (a for a in result["appointments"] if str(a.get("id")) == appointment_id),
        None,
    )
    if appointment is None:
        return _dashboard(request, service, error="Appointment not found", status=404)

    current = appointment.get("status") or ""
    if not can_transition(current, target):
        return _dashboard(
            request,
            service,
            error=f"Cannot change status from {current or 'unknown'} to {target or 'unknown'}",
            status=400,
        )

    success, result = service.update_status(appointment_id, target)
    if not success:
        return _dashboard(request, service, error=result["error"], status=400)

    return redirect("dashboard")
