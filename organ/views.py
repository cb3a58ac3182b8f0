import logging

from django.contrib import messages
from django.shortcuts import render, redirect

from core.services import ApiError, get_api_client
from core.utils.records import InvalidRecord
from .forms import OrganDonorForm
from .records import OrganDonorRecord

logger = logging.getLogger(__name__)

TABS = ("about", "register", "faq")

FACTS = [
    {"title": "Save Lives", "description": "One organ donor can save up to eight lives through organ donation."},
    {"title": "Legacy of Life", "description": "Your decision creates a lasting legacy of generosity and compassion."},
    {"title": "Critical Need", "description": "Every 10 minutes, someone is added to the organ transplant waiting list."},
    {"title": "Help Many", "description": "Beyond organs, tissue donation can enhance the lives of up to 75 people."},
]

FAQS = [
    (
        "Who can be an organ donor?",
        "People of all ages and medical histories should consider themselves potential donors. "
        "Your medical condition at the time of death will determine what organs and tissues can be donated.",
    ),
    (
        "Does my religion support organ donation?",
        "Most major religions support organ donation and consider it an act of charity and goodwill. "
        "If you are unsure, consult with your religious leader.",
    ),
    (
        "Will doctors try less hard to save me if they know I am a donor?",
        "No. Doctors and emergency personnel have one priority: to save your life. Organ donation is only "
        "considered after all lifesaving efforts have failed and death has been declared.",
    ),
    (
        "Will organ donation affect my funeral arrangements?",
        "No. Organ donation does not interfere with having an open-casket funeral. The body is treated with "
        "respect and dignity throughout the donation process.",
    ),
    (
        "Is there a cost to my family for organ donation?",
        "No. The donor's family pays for medical care and funeral costs, but all costs related to organ "
        "donation are paid by the recipient or their insurance.",
    ),
    (
        "Can I specify which organs I want to donate?",
        "Yes. You can specify which organs and tissues you wish to donate during the registration process.",
    ),
    (
        "Can I change my mind about being a donor?",
        "Yes. You can change or revoke your decision at any time by updating your donor registration.",
    ),
]


def organ_donation(request):
    """About / register / FAQ page. The registration form posts back here."""
    tab = request.GET.get("tab")
    if tab not in TABS:
        tab = "about"

    if request.method == "POST":
        tab = "register"
        form = OrganDonorForm(request.POST)
        if form.is_valid():
            try:
                get_api_client(request).register_organ_donor(form.to_api_payload())
            except ApiError as exc:
                logger.warning("Organ donor registration failed: %s", exc)
                messages.error(request, "Registration failed. Please try again later.")
            else:
                messages.success(request, "Registration successful! Thank you for registering as an organ donor.")
                return redirect("organ_donation")
        else:
            messages.error(request, "Please fix the errors.")
    else:
        form = OrganDonorForm()

    return render(request, "organ/organ_donation.html", {
        "form": form,
        "active_tab": tab,
        "facts": FACTS,
        "faqs": FAQS,
    })


def organ_donor_profile(request, donor_id):
    donor = None
    try:
        data = get_api_client(request).fetch_user_profile(donor_id)
    except ApiError as exc:
        messages.error(request, exc.server_message or "Failed to load donor profile.")
    else:
        try:
            donor = OrganDonorRecord.from_api(data)
        except InvalidRecord:
            messages.error(request, "Donor not found")

    return render(request, "organ/donor_profile.html", {"donor": donor})
