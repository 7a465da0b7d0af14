from django.apps import AppConfig


class QuestionnairesConfig(AppConfig):
    """Configuration for the questionnaires app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "questionnaires"
