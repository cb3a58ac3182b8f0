from django import forms

from blood.records import BLOOD_TYPE_CHOICES

from .search import ANY_BLOOD_TYPE, KIND_ALL, KIND_CHOICES, SearchFilter


class DonorSearchForm(forms.Form):
    search = forms.CharField(
        required=False,
        strip=False,
        max_length=100,
        widget=forms.TextInput(attrs={"class": "form-control", "placeholder": "Search by name or location"}),
    )
    blood_type = forms.ChoiceField(
        required=False,
        choices=[(ANY_BLOOD_TYPE, "All Blood Types")] + BLOOD_TYPE_CHOICES,
        widget=forms.Select(attrs={"class": "form-control"}),
    )
    location = forms.CharField(
        required=False,
        max_length=100,
        widget=forms.TextInput(attrs={"class": "form-control", "placeholder": "Filter by location"}),
    )
    kind = forms.ChoiceField(
        required=False,
        choices=KIND_CHOICES,
        label="Donor type",
        widget=forms.Select(attrs={"class": "form-control"}),
    )

    def to_filter(self) -> SearchFilter:
        d = self.cleaned_data
        return SearchFilter(
            term=d.get("search") or "",
            blood_type=d.get("blood_type") or "",
            location=d.get("location") or "",
            donor_kind=d.get("kind") or KIND_ALL,
        )
