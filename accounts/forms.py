from django import forms

from blood.records import BLOOD_TYPE_CHOICES
from core.utils.dates import parse_api_date


class DonorDetailsForm(forms.Form):
    """Fields shared by registration and the profile page."""

    name = forms.CharField(
        min_length=2,
        max_length=100,
        error_messages={
            "required": "Name must be at least 2 characters.",
            "min_length": "Name must be at least 2 characters.",
        },
        widget=forms.TextInput(attrs={"class": "form-control", "placeholder": "John Doe"}),
    )
    blood_type = forms.ChoiceField(
        choices=[("", "Select blood type")] + BLOOD_TYPE_CHOICES,
        error_messages={"required": "Please select a blood type."},
        widget=forms.Select(attrs={"class": "form-control"}),
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
    location = forms.CharField(
        min_length=2,
        max_length=150,
        error_messages={
            "required": "Please enter your location.",
            "min_length": "Please enter your location.",
        },
        widget=forms.TextInput(attrs={"class": "form-control", "placeholder": "City, Country"}),
    )
    is_donor = forms.BooleanField(
        required=False,
        label="Available as a blood donor",
        widget=forms.CheckboxInput(attrs={"class": "form-check-input"}),
    )

    def details_payload(self):
        d = self.cleaned_data
        return {
            "name": d["name"],
            "bloodType": d["blood_type"],
            "phone": d["phone"],
            "location": d["location"],
            "isDonor": bool(d.get("is_donor")),
        }


class RegistrationForm(DonorDetailsForm):
    email = forms.EmailField(
        error_messages={
            "required": "Please enter a valid email address.",
            "invalid": "Please enter a valid email address.",
        },
        widget=forms.EmailInput(attrs={"class": "form-control", "placeholder": "john@example.com"}),
    )
    password = forms.CharField(
        min_length=6,
        error_messages={"min_length": "Password must be at least 6 characters."},
        widget=forms.PasswordInput(attrs={"class": "form-control"}),
    )
    confirm_password = forms.CharField(widget=forms.PasswordInput(attrs={"class": "form-control"}))

    field_order = ["name", "email", "password", "confirm_password", "blood_type", "phone", "location", "is_donor"]

    def clean(self):
        cleaned_data = super().clean()
        password = cleaned_data.get("password")
        confirm_password = cleaned_data.get("confirm_password")

        if password and confirm_password and password != confirm_password:
            self.add_error("confirm_password", "Passwords do not match")
        return cleaned_data

    def to_api_payload(self):
        payload = self.details_payload()
        payload["email"] = self.cleaned_data["email"]
        payload["password"] = self.cleaned_data["password"]
        return payload


class LoginForm(forms.Form):
    email = forms.EmailField(widget=forms.EmailInput(attrs={"class": "form-control", "autofocus": True}))
    password = forms.CharField(widget=forms.PasswordInput(attrs={"class": "form-control"}))

    def to_api_payload(self):
        return {"email": self.cleaned_data["email"], "password": self.cleaned_data["password"]}


class ProfileForm(DonorDetailsForm):
    last_donation = forms.DateField(
        required=False,
        label="Last Donation Date (if applicable)",
        widget=forms.DateInput(attrs={"class": "form-control", "type": "date"}),
    )

    @staticmethod
    def initial_from_api(data):
        """Map a ``GET /users/{id}`` payload onto form initial values."""
        data = data if isinstance(data, dict) else {}
        return {
            "name": data.get("name") or "",
            "blood_type": data.get("bloodType") or "",
            "phone": data.get("phone") or "",
            "location": data.get("location") or "",
            "is_donor": bool(data.get("isDonor") or False),
            "last_donation": parse_api_date(data.get("lastDonation")),
        }

    def to_api_payload(self):
        payload = self.details_payload()
        last = self.cleaned_data.get("last_donation")
        payload["lastDonation"] = last.isoformat() if last else ""
        return payload
