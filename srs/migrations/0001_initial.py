import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

import srs.data.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Deck",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("owner_id", models.UUIDField()),
                ("name", models.CharField(max_length=200)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("settings", models.JSONField(default=srs.data.models.default_deck_settings)),
            ],
            options={
                "indexes": [
                    models.Index(fields=["owner_id", "created_at"], name="srs_deck_owner_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Card",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("front", models.TextField()),
                ("back", models.TextField()),
                ("front_image", models.CharField(blank=True, default="", max_length=500)),
                ("back_image", models.CharField(blank=True, default="", max_length=500)),
                ("interval", models.FloatField(default=0.0)),
                ("ease", models.FloatField(default=2.5)),
                ("repetitions", models.PositiveIntegerField(default=0)),
                ("lifecycle_state", models.CharField(
                    choices=[("learning", "learning"), ("graduated", "graduated")],
                    default="learning",
                    max_length=16,
                )),
                ("step_index", models.PositiveIntegerField(default=0)),
                ("due_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("version", models.PositiveIntegerField(default=0)),
                ("deck", models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name="cards",
                    to="srs.deck",
                )),
            ],
            options={
                "indexes": [
                    models.Index(fields=["deck", "due_date"], name="srs_card_deck_due_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="StudyLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("user_id", models.UUIDField()),
                ("date", models.DateField()),
                ("count", models.PositiveIntegerField(default=0)),
            ],
            options={
                "indexes": [
                    models.Index(fields=["user_id", "date"], name="srs_studylog_user_date_idx"),
                ],
                "unique_together": {("user_id", "date")},
            },
        ),
    ]
