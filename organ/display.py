from django.utils import timezone

from core.utils.dates import parse_api_date

ALL_ORGANS = "all"

AGE_UNKNOWN = "N/A"
UNKNOWN_LOCATION = "Unknown location"
ALL_ORGANS_LABEL = "All organs"
NOT_SPECIFIED = "Not specified"


def compute_age(date_of_birth, today=None):
    """
    Age in whole years on ``today`` (defaults to the local date).

    A birthday not yet reached this year takes one year off. Returns
    ``AGE_UNKNOWN`` when the birth date is missing or unparsable; a birth date
    in the future gives 0.
    """
    born = parse_api_date(date_of_birth)
    if born is None:
        return AGE_UNKNOWN

    today = parse_api_date(today) or timezone.localdate()
    age = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        age -= 1
    return max(age, 0)


def resolve_location(explicit_location, address) -> str:
    """
    Explicit location if given, otherwise the locality at the end of the
    address ("12 Oak St, Springfield, IL" -> "Springfield, IL").
    """
    explicit = (explicit_location or "").strip()
    if explicit:
        return explicit

    parts = [p.strip() for p in (address or "").split(",")]
    parts = [p for p in parts if p]
    if not parts:
        return UNKNOWN_LOCATION
    return ", ".join(parts[-2:])


def format_organ_list(organ_preferences) -> str:
    prefs = [p for p in (organ_preferences or []) if p]
    if ALL_ORGANS in prefs:
        return ALL_ORGANS_LABEL
    return ", ".join(prefs) or NOT_SPECIFIED
