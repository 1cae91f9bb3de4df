import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

STATUS_CHOICES = [
    ("pending_acceptance", "pending acceptance"),
    ("accepted", "accepted"),
    ("declined", "declined"),
    ("expired", "expired"),
    ("confirmed", "confirmed"),
    ("used", "used"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("events", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Ticket",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("invitee_email", models.CharField(blank=True, max_length=254, null=True)),
                ("status", models.CharField(choices=STATUS_CHOICES, max_length=32)),
                ("expires_at", models.DateTimeField(blank=True, null=True)),
                ("audit_hash", models.CharField(blank=True, max_length=64, null=True)),
                ("created_at", models.DateTimeField()),
                ("updated_at", models.DateTimeField()),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="tickets",
                        to="events.event",
                    ),
                ),
                (
                    "holder",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="held_tickets",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "purchaser",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="purchased_tickets",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status", "expires_at"], name="tickets_status_expiry_idx"),
                    models.Index(fields=["invitee_email"], name="tickets_invitee_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="TicketAuditEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("old_status", models.CharField(blank=True, choices=STATUS_CHOICES, max_length=32, null=True)),
                ("new_status", models.CharField(choices=STATUS_CHOICES, max_length=32)),
                ("actor", models.CharField(max_length=64)),
                ("created_at", models.DateTimeField()),
                (
                    "ticket",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="audit_entries",
                        to="tickets.ticket",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at", "id"],
                "verbose_name_plural": "ticket audit entries",
            },
        ),
    ]
