from django.contrib import messages
from django.shortcuts import render

from core.services import ApiError, get_api_client
from core.utils.records import InvalidRecord
from .records import BloodDonorRecord

RESULT_FILTERS = [
    ("bloodType", "Blood Type"),
    ("location", "Location"),
    ("search", "Search"),
]


# 1. Results for a search submitted from elsewhere (home page links, bookmarks)
def search_results_view(request):
    """
    Filtering here is left entirely to the API; the page just shows what
    came back and which criteria were applied.
    """
    params = {}
    chips = []
    for key, label in RESULT_FILTERS:
        value = (request.GET.get(key) or "").strip()
        if value:
            params[key] = value
            chips.append({"label": label, "value": value})

    donors = []
    try:
        donors = get_api_client(request).fetch_blood_donors(params)
    except ApiError:
        messages.error(request, "Failed to fetch search results. Please try again.")

    return render(request, "blood/search_results.html", {"donors": donors, "filters": chips})


# 2. Public profile of a single blood donor
def donor_profile_view(request, donor_id):
    donor = None
    try:
        data = get_api_client(request).fetch_user_profile(donor_id)
    except ApiError as exc:
        messages.error(request, exc.server_message or "Failed to load donor profile.")
    else:
        try:
            donor = BloodDonorRecord.from_api(data)
        except InvalidRecord:
            messages.error(request, "Donor not found")

    return render(request, "blood/donor_profile.html", {"donor": donor})
