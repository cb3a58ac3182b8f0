"""
Donor directory search.

Combines blood donors and organ donors fetched from the API into one list for
the search page. Everything in here is a pure function of its arguments so it
can be exercised without the API.
"""
from dataclasses import dataclass
from typing import List, Union

from blood.records import BloodDonorRecord
from organ.records import OrganDonorRecord

KIND_ALL = "all"
KIND_BLOOD = "blood"
KIND_ORGAN = "organ"

DONOR_KINDS = (KIND_ALL, KIND_BLOOD, KIND_ORGAN)

KIND_CHOICES = [
    (KIND_ALL, "All donors"),
    (KIND_BLOOD, "Blood donors"),
    (KIND_ORGAN, "Organ donors"),
]

ANY_BLOOD_TYPE = "all"


@dataclass(frozen=True)
class SearchFilter:
    term: str = ""
    blood_type: str = ""
    location: str = ""
    donor_kind: str = KIND_ALL

    def __post_init__(self):
        kind = (self.donor_kind or KIND_ALL).strip().lower()
        if kind not in DONOR_KINDS:
            raise ValueError(f"Unknown donor kind: {self.donor_kind!r}")

        object.__setattr__(self, "donor_kind", kind)
        # the term is matched as typed; only the API params are stripped
        object.__setattr__(self, "term", self.term or "")
        object.__setattr__(self, "blood_type", (self.blood_type or "").strip())
        object.__setattr__(self, "location", (self.location or "").strip())

    @property
    def includes_blood(self):
        return self.donor_kind != KIND_ORGAN

    @property
    def includes_organ(self):
        return self.donor_kind != KIND_BLOOD

    @property
    def blood_type_active(self):
        # blood type is not a property of organ donors
        if self.donor_kind == KIND_ORGAN:
            return False
        return bool(self.blood_type) and self.blood_type.lower() != ANY_BLOOD_TYPE

    @property
    def is_empty(self):
        return not (self.term or self.location or self.blood_type_active)

    def blood_params(self):
        """Query params for ``GET /users/donors``."""
        params = {}
        if self.term.strip():
            params["search"] = self.term.strip()
        if self.blood_type_active:
            params["bloodType"] = self.blood_type
        if self.location:
            params["location"] = self.location
        return params

    def organ_params(self):
        """Query params for ``GET /users/organ-donors``."""
        params = {}
        if self.term.strip():
            params["search"] = self.term.strip()
        if self.location:
            params["location"] = self.location
        return params


@dataclass(frozen=True)
class DisplayDonor:
    """A record tagged with its kind so one template loop can render both."""

    kind: str
    donor: Union[BloodDonorRecord, OrganDonorRecord]

    @property
    def is_blood(self):
        return self.kind == KIND_BLOOD

    @property
    def is_organ(self):
        return self.kind == KIND_ORGAN


def _contains(value, needle: str) -> bool:
    return needle.lower() in (value or "").lower()


def blood_donor_matches(donor: BloodDonorRecord, search_filter: SearchFilter) -> bool:
    f = search_filter
    if f.blood_type_active and donor.blood_type != f.blood_type:
        return False
    if f.location and not _contains(donor.location, f.location):
        return False
    if f.term and not (_contains(donor.name, f.term) or _contains(donor.location, f.term)):
        return False
    return True


def organ_donor_matches(donor: OrganDonorRecord, search_filter: SearchFilter) -> bool:
    f = search_filter
    if f.location and not (_contains(donor.location, f.location) or _contains(donor.address, f.location)):
        return False
    if f.term and not (
        _contains(donor.full_name, f.term)
        or _contains(donor.address, f.term)
        or _contains(donor.location, f.term)
    ):
        return False
    return True


def filter_donors(blood_donors, organ_donors, search_filter=None) -> List[DisplayDonor]:
    """
    Blood donors first, then organ donors, each in input order.
    All filter fields are ANDed; empty fields do not constrain.
    """
    f = search_filter or SearchFilter()

    results = []
    if f.includes_blood:
        results.extend(
            DisplayDonor(KIND_BLOOD, d) for d in (blood_donors or []) if blood_donor_matches(d, f)
        )
    if f.includes_organ:
        results.extend(
            DisplayDonor(KIND_ORGAN, d) for d in (organ_donors or []) if organ_donor_matches(d, f)
        )
    return results


def count_by_kind(results):
    counts = {KIND_BLOOD: 0, KIND_ORGAN: 0}
    for item in results:
        counts[item.kind] += 1
    counts["total"] = counts[KIND_BLOOD] + counts[KIND_ORGAN]
    return counts
