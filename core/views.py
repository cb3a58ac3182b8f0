import logging

from django.contrib import messages
from django.shortcuts import render

from blood.compatibility import compatibility_table
from .forms import DonorSearchForm
from .search import SearchFilter, count_by_kind, filter_donors
from .services import ApiError, fetch_directory, get_api_client

logger = logging.getLogger(__name__)

WHY_DONATE = [
    {
        "title": "Save Lives",
        "description": (
            "One donation can save up to three lives. Blood is needed every two seconds "
            "for emergencies and regular treatments."
        ),
    },
    {
        "title": "Health Benefits",
        "description": (
            "Donating blood can help reduce the risk of heart disease and cancer. "
            "It also helps in maintaining good health."
        ),
    },
    {
        "title": "Community Impact",
        "description": (
            "By donating blood, you are directly contributing to your community's health "
            "and emergency preparedness."
        ),
    },
]


def home(request):
    return render(request, "core/home.html", {
        "blood_types": compatibility_table(),
        "reasons": WHY_DONATE,
    })


def search(request):
    """
    Donor directory. A plain visit lists everyone; submitting the form sends
    the criteria to the API and narrows the returned lists locally as well.
    """
    searched = bool(request.GET)
    form = DonorSearchForm(request.GET or None)

    search_filter = SearchFilter()
    if searched:
        if form.is_valid():
            search_filter = form.to_filter()
        else:
            messages.error(request, "Please fix the errors.")
            searched = False

    client = get_api_client(request)
    try:
        blood_donors, organ_donors = fetch_directory(client, search_filter, send_params=searched)
    except ApiError as exc:
        logger.warning("Donor directory fetch failed: %s", exc)
        messages.error(
            request,
            "Search failed. Please try again." if searched else "Failed to fetch donors. Please try again later.",
        )
        blood_donors, organ_donors = [], []

    results = filter_donors(blood_donors, organ_donors, search_filter)

    return render(request, "core/search.html", {
        "form": form,
        "search_filter": search_filter,
        "results": results,
        "counts": count_by_kind(results),
    })
