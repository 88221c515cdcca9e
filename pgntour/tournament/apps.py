from django.apps import AppConfig


class TournamentConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'pgntour.tournament'
    verbose_name = 'Imported Tournaments'
