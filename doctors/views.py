from django.conf import settings
from django.shortcuts import redirect, render
from django.utils import timezone
from django.views.decorators.http import require_http_methods

from config.logging import get_logger
from core.api_client import BackendClient
from doctors.forms import DoctorForm
from doctors.listing import LOCATIONS, SPECIALTIES, build_listing
from doctors.schedule import (
    ACTIONS,
    PERIODS,
    TIME_SLOTS,
    EditorState,
    apply_action,
    normalize_schedule,
)
from doctors.services.doctor_service import DoctorService

logger = get_logger(__name__)

EDITOR_KEY_PREFIX = "schedule_editor:"

NOT_LOADED_ERROR = "Schedule not loaded, reload the page"

# =====================================================
# HELPERS
# =====================================================

def _service(request) -> DoctorService:
    return DoctorService(BackendClient.for_request(request))


def _editor_key(doctor_id: str) -> str:
    return f"{EDITOR_KEY_PREFIX}{doctor_id}"


def _drop_other_editors(session, keep: str) -> None:
    """Only one editor lives in the session; sessions are stored in a cookie."""
    for key in [k for k in session.keys() if k.startswith(EDITOR_KEY_PREFIX) and k != keep]:
        del session[key]

# =====================================================
# DOCTOR LIST
# =====================================================

@require_http_methods(["GET"])
def doctor_list(request):
    """
    GET /doctors/?q=smith&specialty=Cardiology&location=East+Wing&page=2
    """
    query = request.GET.get("q", "")
    specialty = request.GET.get("specialty", "")
    location = request.GET.get("location", "")

    success, result = _service(request).list_doctors()
    doctors = result.get("doctors", []) if success else []

    context = build_listing(
        doctors,
        query=query,
        specialty=specialty,
        location=location,
        page=request.GET.get("page", 1),
        per_page=settings.DOCTORS_PER_PAGE,
    )
    context.update({
        "error": None if success else result["error"],
        "query": query,
        "filters": {"specialty": specialty, "location": location},
        "specialties": SPECIALTIES,
        "locations": LOCATIONS,
        "debounce_ms": settings.SEARCH_DEBOUNCE_MS,
    })
    return render(request, "doctors/list.html", context)


@require_http_methods(["POST"])
def doctor_delete(request, doctor_id):
    """POST /doctors/{doctor_id}/delete/"""
    success, result = _service(request).delete_doctor(doctor_id)
    if not success:
        return render(request, "core/error.html", {"error": result["error"]}, status=400)
    return redirect("doctor_list")

# =====================================================
# ADD / EDIT
# =====================================================

@require_http_methods(["GET", "POST"])
def doctor_add(request):
    """
    GET  /doctors/add/
    POST /doctors/add/  (form fields: name, specialty, experience, degree, location, gender)
    """
    error = None
    form = DoctorForm(request.POST or None)

    if request.method == "POST" and form.is_valid():
        success, result = _service(request).create_doctor(form.cleaned_data)
        if success:
            return redirect("doctor_list")
        error = result["error"]

    return render(request, "doctors/form.html", {"form": form, "error": error, "title": "Add Doctor"})


@require_http_methods(["GET", "POST"])
def doctor_edit(request, doctor_id):
    """
    GET  /doctors/{doctor_id}/edit/
    POST /doctors/{doctor_id}/edit/
    """
    service = _service(request)
    error = None

    if request.method == "POST":
        form = DoctorForm(request.POST)
        if form.is_valid():
            success, result = service.update_doctor(doctor_id, form.cleaned_data)
            if success:
                return redirect("doctor_list")
            error = result["error"]
    else:
        success, result = service.get_doctor(doctor_id)
        if success:
            form = DoctorForm.from_doctor(result["doctor"])
        else:
            form = DoctorForm()
            error = result["error"]

    return render(request, "doctors/form.html", {"form": form, "error": error, "title": "Edit Doctor"})

# =====================================================
# SCHEDULE EDITOR
# =====================================================

@require_http_methods(["GET", "POST"])
def doctor_schedule(request, doctor_id):
    """
    Availability editor.

    GET /doctors/{doctor_id}/schedule/
        Loads the doctor's available_times from the backend (past dates
        dropped) and starts a fresh editor state. Editors for other doctors
        are dropped from the session.

    POST /doctors/{doctor_id}/schedule/
        action: add_date | edit_date | update_date | cancel_edit |
                remove_date | remove_slot | quick_add_week | save
        date:   YYYY-MM-DD (add_date, edit_date, remove_date, remove_slot)
        slots:  repeated HH:MM values (add_date, update_date)
        slot:   HH:MM (remove_slot)

        Every action is refused with 409 until a GET has loaded the
        schedule, so a failed load can never be saved over the stored one.
    """
    today = timezone.localdate()
    service = _service(request)
    key = _editor_key(doctor_id)

    if request.method == "GET":
        success, result = service.get_doctor(doctor_id)
        if success:
            state = EditorState(
                schedule=normalize_schedule(result["doctor"].get("available_times"), today),
                loaded=True,
            )
        else:
            state = EditorState(error=result["error"])
        _drop_other_editors(request.session, key)
        request.session[key] = state.to_dict()
        return _render_editor(request, doctor_id, state, today)

    state = EditorState.from_dict(request.session.get(key))
    action = request.POST.get("action", "")

    if not state.loaded:
        logger.warning("schedule_not_loaded", doctor_id=doctor_id, action=action)
        state.error = NOT_LOADED_ERROR
        return _render_editor(request, doctor_id, state, today, status=409)

    if action == "save":
        success, result = service.update_availability(doctor_id, state.schedule)
        if success:
            request.session.pop(key, None)
            return redirect("doctor_list")
        state.error = result["error"]
    elif action in ACTIONS:
        state = apply_action(
            state,
            action,
            {
                "date": request.POST.get("date", ""),
                "slots": request.POST.getlist("slots"),
                "slot": request.POST.get("slot", ""),
            },
            today,
        )
    else:
        state.error = "Unknown action"

    request.session[key] = state.to_dict()
    return _render_editor(request, doctor_id, state, today)


def _render_editor(request, doctor_id, state: EditorState, today, status=200):
    context = {
        "doctor_id": doctor_id,
        "state": state,
        "today": today.isoformat(),
        "periods": [(p, TIME_SLOTS[p]) for p in PERIODS],
        "scheduled": sorted(state.schedule.items()),
    }
    return render(request, "doctors/schedule.html", context, status=status)
