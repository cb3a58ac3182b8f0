from .display import BLOOD_TYPES

ALL_TYPES_LABEL = "All Blood Types"


# -------- Blood compatibility (donor groups allowed for recipient) --------
COMPATIBLE_DONORS = {
    "O-": {"O-"},
    "O+": {"O-", "O+"},
    "A-": {"O-", "A-"},
    "A+": {"O-", "O+", "A-", "A+"},
    "B-": {"O-", "B-"},
    "B+": {"O-", "O+", "B-", "B+"},
    "AB-": {"O-", "A-", "B-", "AB-"},
    "AB+": {"O-", "O+", "A-", "A+", "B-", "B+", "AB-", "AB+"},
}


def can_receive_from(blood_type):
    allowed = COMPATIBLE_DONORS.get(blood_type, set())
    return [t for t in BLOOD_TYPES if t in allowed]


def can_donate_to(blood_type):
    return [t for t in BLOOD_TYPES if blood_type in COMPATIBLE_DONORS[t]]


def _describe(types):
    if len(types) == len(BLOOD_TYPES):
        return ALL_TYPES_LABEL
    return ", ".join(types)


def compatibility_table():
    """Rows for the home page table, in the usual A/B/AB/O order."""
    return [
        {
            "type": t,
            "can_receive_from": _describe(can_receive_from(t)),
            "can_donate_to": _describe(can_donate_to(t)),
        }
        for t in BLOOD_TYPES
    ]
