from dataclasses import dataclass
from datetime import date
from typing import Optional

from core.utils.dates import parse_api_date
from core.utils.records import InvalidRecord, as_bool, optional_text, require

from .display import (
    BLOOD_TYPES,
    availability_label,
    blood_type_color,
    blood_type_label,
)

BLOOD_TYPE_CHOICES = [(t, t) for t in BLOOD_TYPES]


@dataclass(frozen=True)
class BloodDonorRecord:
    """
    A blood donor as returned by ``GET /users/donors``.
    Snapshot only: the API owns the data, we never write it back from here.
    """

    id: str
    name: str
    blood_type: str
    location: str
    email: str
    phone: Optional[str] = None
    last_donation_date: Optional[date] = None
    is_donor: bool = False

    @classmethod
    def from_api(cls, data):
        if not isinstance(data, dict):
            raise InvalidRecord("Blood donor record must be a JSON object.")

        last_donation = data.get("lastDonation")
        if last_donation is None:
            last_donation = data.get("lastDonationDate")

        return cls(
            id=str(require(data, "_id", "id")),
            name=str(require(data, "name")),
            blood_type=str(require(data, "bloodType")).strip(),
            location=str(require(data, "location")),
            email=str(require(data, "email")),
            phone=optional_text(data.get("phone")),
            last_donation_date=parse_api_date(last_donation),
            is_donor=as_bool(data.get("isDonor", False)),
        )

    @property
    def blood_color(self):
        return blood_type_color(self.blood_type)

    @property
    def blood_label(self):
        return blood_type_label(self.blood_type)

    @property
    def availability(self):
        return availability_label(self.is_donor)
