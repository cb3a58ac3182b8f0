BLOOD_TYPES = ["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-"]

BLOOD_TYPE_COLORS = {
    "A+": "blood-red",
    "A-": "blood-red-dark",
    "B+": "blood-blue",
    "B-": "blood-blue-dark",
    "AB+": "blood-purple",
    "AB-": "blood-purple-dark",
    "O+": "blood-green",
    "O-": "blood-green-dark",
}

FALLBACK_COLOR = "blood-gray"
FALLBACK_LABEL = "?"


def is_canonical_blood_type(value) -> bool:
    return value in BLOOD_TYPE_COLORS


def blood_type_color(value) -> str:
    """CSS class for the blood type badge. Unknown types get a neutral colour."""
    return BLOOD_TYPE_COLORS.get(value, FALLBACK_COLOR)


def blood_type_label(value) -> str:
    return value if is_canonical_blood_type(value) else FALLBACK_LABEL


def availability_label(is_donor: bool) -> str:
    return "Available" if is_donor else "Unavailable"
