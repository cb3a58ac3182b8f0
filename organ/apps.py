from django.apps import AppConfig

class OrganConfig(AppConfig):
    name = "organ"
