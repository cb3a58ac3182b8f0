from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

from core.utils.dates import parse_api_date
from core.utils.records import InvalidRecord, as_bool, optional_text, require

from .display import ALL_ORGANS, compute_age, format_organ_list, resolve_location

ORGAN_CHOICES = [
    ("kidneys", "Kidneys"),
    ("liver", "Liver"),
    ("heart", "Heart"),
    ("lungs", "Lungs"),
    ("pancreas", "Pancreas"),
    ("intestines", "Intestines"),
    ("corneas", "Corneas"),
    ("tissue", "Tissue"),
    (ALL_ORGANS, "All organs and tissues"),
]


def _organ_tags(value) -> Tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        value = [value]
    return tuple(str(v).strip() for v in value if v is not None and str(v).strip())


@dataclass(frozen=True)
class OrganDonorRecord:
    """
    An organ donor pledge as returned by ``GET /users/organ-donors``.
    ``location`` is frequently missing; use ``display_location`` for output.
    """

    id: str
    full_name: str
    email: str
    phone: str
    address: str
    date_of_birth: Optional[date] = None
    location: Optional[str] = None
    organ_preferences: Tuple[str, ...] = ()
    medical_conditions: Optional[str] = None
    emergency_contact: Optional[str] = None
    consent: bool = False

    @classmethod
    def from_api(cls, data):
        if not isinstance(data, dict):
            raise InvalidRecord("Organ donor record must be a JSON object.")

        return cls(
            id=str(require(data, "_id", "id")),
            full_name=str(require(data, "fullName")),
            email=str(require(data, "email")),
            phone=str(require(data, "phone")),
            address=str(require(data, "address")),
            date_of_birth=parse_api_date(data.get("dateOfBirth")),
            location=optional_text(data.get("location")),
            organ_preferences=_organ_tags(data.get("organPreferences")),
            medical_conditions=optional_text(data.get("medicalConditions")),
            emergency_contact=optional_text(data.get("emergencyContact")),
            consent=as_bool(data.get("consent", False)),
        )

    @property
    def age(self):
        return compute_age(self.date_of_birth)

    @property
    def display_location(self):
        return resolve_location(self.location, self.address)

    @property
    def organ_list(self):
        return format_organ_list(self.organ_preferences)
