from django.urls import path, include

urlpatterns = [
    path('', include('core.urls')),  # home + donor search
    path('accounts/', include('accounts.urls')),
    path('blood/', include('blood.urls')),
    path('organ/', include('organ.urls')),
]
