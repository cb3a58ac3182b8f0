from django.conf import settings
from django.urls import reverse

NAV_ITEMS = [
    ("Home", "home"),
    ("Search Donors", "search"),
    ("Organ Donation", "organ_donation"),
]


def site_settings(request):
    nav_items = []
    for label, url_name in NAV_ITEMS:
        url = reverse(url_name)
        nav_items.append({"label": label, "url": url, "active": request.path == url})

    return {
        "site_name": getattr(settings, "SITE_NAME", "BloodDonate"),
        "nav_items": nav_items,
    }
