from datetime import datetime, timezone
from typing import Dict, List

DATE_ORDERS = ("newest", "oldest")


def _parse_datetime(dt_str):
    """Parse ISO datetime string; unparseable values sort as the epoch."""
    try:
        parsed = datetime.fromisoformat(str(dt_str).replace('Z', '+00:00'))
    except (ValueError, TypeError):
        return datetime.min.replace(tzinfo=timezone.utc)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def consultation_types(appointments: List[Dict]) -> List[str]:
    """Distinct consultation types, first-seen order."""
    seen = []
    for a in appointments:
        t = a.get("consultation_type")
        if t and t not in seen:
            seen.append(t)
    return seen


def filter_appointments(
    appointments: List[Dict],
    status: str = "all",
    consultation_type: str = "all",
    date_order: str = "newest",
) -> List[Dict]:
    filtered = list(appointments)

    if status != "all":
        filtered = [a for a in filtered if a.get("status") == status]

    if consultation_type != "all":
        filtered = [a for a in filtered if a.get("consultation_type") == consultation_type]

    filtered.sort(
        key=lambda a: _parse_datetime(a.get("appointment_time")),
        reverse=(date_order != "oldest"),
    )
    return filtered
