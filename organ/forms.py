from django import forms
from django.utils import timezone

from .display import ALL_ORGANS
from .records import ORGAN_CHOICES


class OrganDonorForm(forms.Form):
    full_name = forms.CharField(
        min_length=2,
        max_length=150,
        error_messages={
            "required": "Full name must be at least 2 characters.",
            "min_length": "Full name must be at least 2 characters.",
        },
        widget=forms.TextInput(attrs={"class": "form-control", "placeholder": "John Doe"}),
    )
    date_of_birth = forms.DateField(
        error_messages={"required": "Date of birth is required.", "invalid": "Enter a valid date."},
        widget=forms.DateInput(attrs={"class": "form-control", "type": "date"}),
    )
    phone = forms.CharField(
        min_length=10,
        max_length=20,
        error_messages={
            "required": "Please enter a valid phone number.",
            "min_length": "Please enter a valid phone number.",
        },
        widget=forms.TextInput(attrs={"class": "form-control", "type": "tel", "placeholder": "+1 (555) 123-4567"}),
    )
    email = forms.EmailField(
        error_messages={
            "required": "Please enter a valid email address.",
            "invalid": "Please enter a valid email address.",
        },
        widget=forms.EmailInput(attrs={"class": "form-control", "placeholder": "john@example.com"}),
    )
    address = forms.CharField(
        min_length=5,
        error_messages={
            "required": "Please enter your complete address.",
            "min_length": "Please enter your complete address.",
        },
        widget=forms.Textarea(attrs={"class": "form-control", "rows": 2, "placeholder": "Your full address"}),
    )
    emergency_contact = forms.CharField(
        min_length=5,
        error_messages={
            "required": "Please provide an emergency contact.",
            "min_length": "Please provide an emergency contact.",
        },
        widget=forms.TextInput(attrs={"class": "form-control", "placeholder": "Name and phone number"}),
    )
    medical_conditions = forms.CharField(
        required=False,
        label="Medical Conditions (Optional)",
        help_text="This information helps medical professionals make informed decisions.",
        widget=forms.Textarea(attrs={
            "class": "form-control",
            "rows": 3,
            "placeholder": "List any medical conditions that might be relevant",
        }),
    )
    organ_preferences = forms.MultipleChoiceField(
        choices=ORGAN_CHOICES,
        required=False,
        initial=[ALL_ORGANS],
        label="Organs and Tissues for Donation",
        widget=forms.CheckboxSelectMultiple,
    )
    consent = forms.BooleanField(
        required=False,
        label="I consent to organ and tissue donation",
        help_text=(
            "I understand that by registering, I am giving consent for the donation "
            "of my organs and tissues after my death."
        ),
        widget=forms.CheckboxInput(attrs={"class": "form-check-input"}),
    )

    def clean_date_of_birth(self):
        dob = self.cleaned_data.get("date_of_birth")
        if dob and dob > timezone.localdate():
            raise forms.ValidationError("Date of birth cannot be in the future.")
        return dob

    def clean_consent(self):
        ok = bool(self.cleaned_data.get("consent"))
        if not ok:
            raise forms.ValidationError("You must consent to organ donation.")
        return ok

    def to_api_payload(self):
        d = self.cleaned_data
        return {
            "fullName": d["full_name"],
            "dateOfBirth": d["date_of_birth"].isoformat(),
            "address": d["address"],
            "phone": d["phone"],
            "email": d["email"],
            "emergencyContact": d["emergency_contact"],
            "medicalConditions": d.get("medical_conditions") or "",
            "organPreferences": list(d.get("organ_preferences") or []),
            "consent": d["consent"],
        }
