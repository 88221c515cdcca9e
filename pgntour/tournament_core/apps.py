from django.apps import AppConfig


class TournamentCoreConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'pgntour.tournament_core'
    verbose_name = 'PGN Tournament Core'
