from django.urls import path
from . import views

urlpatterns = [
    path('results/', views.search_results_view, name='blood_search_results'),
    path('donors/<path:donor_id>/', views.donor_profile_view, name='blood_donor_profile'),
]
