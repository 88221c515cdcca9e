from django.db import models

from pgntour.tournament_core.structure import GameResult, TournamentFormat


TOURNAMENT_TYPE_OPTIONS = (
    (TournamentFormat.ROUND_ROBIN.value, 'Round Robin'),
    (TournamentFormat.SWISS.value, 'Swiss'),
    (TournamentFormat.KNOCKOUT.value, 'Knockout'),
    (TournamentFormat.OTHER.value, 'Other'),
)

RESULT_OPTIONS = (
    (GameResult.WHITE_WIN.value, '1-0'),
    (GameResult.DRAW.value, '½-½'),
    (GameResult.BLACK_WIN.value, '0-1'),
    (GameResult.UNFINISHED.value, '*'),
)


class _BaseModel(models.Model):
    date_created = models.DateTimeField(auto_now_add=True)
    date_modified = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


# -------------------------------------------------------------------------------
class Tournament(_BaseModel):
    name = models.CharField(max_length=255)
    location = models.CharField(max_length=255, blank=True)
    # Raw PGN dates such as "2024.03.??" are kept as written
    start_date = models.CharField(max_length=32, blank=True)
    end_date = models.CharField(max_length=32, blank=True)
    tournament_type = models.CharField(max_length=32, choices=TOURNAMENT_TYPE_OPTIONS,
                                       default=TournamentFormat.OTHER.value)
    total_rounds = models.PositiveIntegerField(default=1)
    time_control = models.CharField(max_length=64, blank=True)
    country_code = models.CharField(max_length=8, blank=True)
    metadata = models.JSONField(default=dict, blank=True)

    class Meta:
        ordering = ('-date_created',)

    def __str__(self):
        return self.name


# -------------------------------------------------------------------------------
class Player(_BaseModel):
    fide_id = models.CharField(max_length=32, unique=True)
    full_name = models.CharField(max_length=255)
    title = models.CharField(max_length=8, blank=True)
    country_code = models.CharField(max_length=8, blank=True)

    class Meta:
        ordering = ('full_name',)

    def __str__(self):
        return f'{self.full_name} ({self.fide_id})'


# -------------------------------------------------------------------------------
class TournamentPlayer(_BaseModel):
    tournament = models.ForeignKey(Tournament, on_delete=models.CASCADE)
    player = models.ForeignKey(Player, on_delete=models.CASCADE)
    starting_rating = models.PositiveIntegerField(null=True, blank=True)
    seed_number = models.PositiveIntegerField(null=True, blank=True)
    final_score = models.DecimalField(max_digits=4, decimal_places=1, null=True, blank=True)
    final_rank = models.PositiveIntegerField(null=True, blank=True)

    class Meta:
        unique_together = ('tournament', 'player')
        ordering = ('tournament', 'seed_number', 'id')

    def __str__(self):
        return f'{self.player} - {self.tournament}'


# -------------------------------------------------------------------------------
class TournamentRound(_BaseModel):
    tournament = models.ForeignKey(Tournament, on_delete=models.CASCADE)
    round_number = models.PositiveIntegerField()

    class Meta:
        unique_together = ('tournament', 'round_number')
        ordering = ('tournament', 'round_number')

    def __str__(self):
        return f'{self.tournament} - Round {self.round_number}'


# -------------------------------------------------------------------------------
class TournamentGame(_BaseModel):
    tournament = models.ForeignKey(Tournament, on_delete=models.CASCADE)
    round = models.ForeignKey(TournamentRound, on_delete=models.CASCADE)
    white_fide_id = models.CharField(max_length=32)
    black_fide_id = models.CharField(max_length=32)
    result = models.CharField(max_length=16, choices=RESULT_OPTIONS,
                              default=GameResult.UNFINISHED.value)
    board_number = models.PositiveIntegerField(null=True, blank=True)
    game_date = models.CharField(max_length=32, blank=True)
    pgn = models.TextField(blank=True)
    analysis_id = models.CharField(max_length=64, blank=True)

    class Meta:
        ordering = ('round__round_number', 'board_number', 'id')

    def __str__(self):
        return f'{self.white_fide_id} - {self.black_fide_id} ({self.result})'
