"""Django ORM models (persistence layer).

Login details stay on Django's user model; the profile adds the role and
the identity verification record.
"""

from django.conf import settings
from django.db import models

from accounts.domain import Role

ROLE_CHOICES = [(role.value, role.value) for role in Role]


class Profile(models.Model):
    """Persistence model for account role and KYC status."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    name = models.CharField(max_length=255)
    role = models.CharField(max_length=16, choices=ROLE_CHOICES, default=Role.ATTENDEE.value)
    kyc_full_name = models.CharField(max_length=255, blank=True, default="")
    kyc_address = models.TextField(blank=True, default="")
    kyc_government_id_suffix = models.CharField(max_length=4, blank=True, default="")
    verified_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.role})"
