from django.urls import path
from . import views

urlpatterns = [
    path("", views.organ_donation, name="organ_donation"),
    path("donors/<path:donor_id>/", views.organ_donor_profile, name="organ_donor_profile"),
]
