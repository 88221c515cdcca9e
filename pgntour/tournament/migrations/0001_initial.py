from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Player',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date_created', models.DateTimeField(auto_now_add=True)),
                ('date_modified', models.DateTimeField(auto_now=True)),
                ('fide_id', models.CharField(max_length=32, unique=True)),
                ('full_name', models.CharField(max_length=255)),
                ('title', models.CharField(blank=True, max_length=8)),
                ('country_code', models.CharField(blank=True, max_length=8)),
            ],
            options={
                'ordering': ('full_name',),
            },
        ),
        migrations.CreateModel(
            name='Tournament',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date_created', models.DateTimeField(auto_now_add=True)),
                ('date_modified', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(max_length=255)),
                ('location', models.CharField(blank=True, max_length=255)),
                ('start_date', models.CharField(blank=True, max_length=32)),
                ('end_date', models.CharField(blank=True, max_length=32)),
                ('tournament_type', models.CharField(choices=[('round_robin', 'Round Robin'), ('swiss', 'Swiss'), ('knockout', 'Knockout'), ('other', 'Other')], default='other', max_length=32)),
                ('total_rounds', models.PositiveIntegerField(default=1)),
                ('time_control', models.CharField(blank=True, max_length=64)),
                ('country_code', models.CharField(blank=True, max_length=8)),
                ('metadata', models.JSONField(blank=True, default=dict)),
            ],
            options={
                'ordering': ('-date_created',),
            },
        ),
        migrations.CreateModel(
            name='TournamentRound',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date_created', models.DateTimeField(auto_now_add=True)),
                ('date_modified', models.DateTimeField(auto_now=True)),
                ('round_number', models.PositiveIntegerField()),
                ('tournament', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='tournament.tournament')),
            ],
            options={
                'ordering': ('tournament', 'round_number'),
                'unique_together': {('tournament', 'round_number')},
            },
        ),
        migrations.CreateModel(
            name='TournamentPlayer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date_created', models.DateTimeField(auto_now_add=True)),
                ('date_modified', models.DateTimeField(auto_now=True)),
                ('starting_rating', models.PositiveIntegerField(blank=True, null=True)),
                ('seed_number', models.PositiveIntegerField(blank=True, null=True)),
                ('final_score', models.DecimalField(blank=True, decimal_places=1, max_digits=4, null=True)),
                ('final_rank', models.PositiveIntegerField(blank=True, null=True)),
                ('player', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='tournament.player')),
                ('tournament', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='tournament.tournament')),
            ],
            options={
                'ordering': ('tournament', 'seed_number', 'id'),
                'unique_together': {('tournament', 'player')},
            },
        ),
        migrations.CreateModel(
            name='TournamentGame',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date_created', models.DateTimeField(auto_now_add=True)),
                ('date_modified', models.DateTimeField(auto_now=True)),
                ('white_fide_id', models.CharField(max_length=32)),
                ('black_fide_id', models.CharField(max_length=32)),
                ('result', models.CharField(choices=[('1-0', '1-0'), ('1/2-1/2', '½-½'), ('0-1', '0-1'), ('*', '*')], default='*', max_length=16)),
                ('board_number', models.PositiveIntegerField(blank=True, null=True)),
                ('game_date', models.CharField(blank=True, max_length=32)),
                ('pgn', models.TextField(blank=True)),
                ('analysis_id', models.CharField(blank=True, max_length=64)),
                ('round', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='tournament.tournamentround')),
                ('tournament', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, to='tournament.tournament')),
            ],
            options={
                'ordering': ('round__round_number', 'board_number', 'id'),
            },
        ),
    ]
