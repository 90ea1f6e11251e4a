from typing import Dict, List

from core.pagination import paginate

SPECIALTIES = [
    "Cardiology",
    "Neurology",
    "Pediatrics",
    "Orthopedics",
    "Dermatology",
    "Ophthalmology",
    "Gynecology",
    "Psychiatry",
    "Urology",
    "Oncology",
]

LOCATIONS = [
    "Main Clinic",
    "East Wing",
    "West Wing",
    "North Wing",
    "South Wing",
]

SEARCH_FIELDS = ("name", "specialty", "location")


def matches_query(doctor: Dict, query: str) -> bool:
    needle = query.strip().lower()
    if not needle:
        return True
    return any(needle in str(doctor.get(f) or "").lower() for f in SEARCH_FIELDS)


def filter_doctors(doctors: List[Dict], query: str = "", specialty: str = "", location: str = "") -> List[Dict]:
    return [
        d for d in doctors
        if matches_query(d, query)
        and (not specialty or d.get("specialty") == specialty)
        and (not location or d.get("location") == location)
    ]


def build_listing(doctors: List[Dict], query: str, specialty: str, location: str, page, per_page: int) -> Dict:
    """
    Everything the doctor list page shows, derived from {query, filters, page}.
    """
    matched = filter_doctors(doctors, query, specialty, location)
    page_obj, page_numbers = paginate(matched, page, per_page)
    return {
        "doctors": list(page_obj.object_list),
        "page": page_obj,
        "page_numbers": page_numbers,
        "total": len(matched),
    }
