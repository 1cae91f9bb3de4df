from django.contrib import admin

from accounts.models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ["name", "user", "role", "verified_at"]
    search_fields = ["name", "user__email"]
    list_filter = ["role"]
    readonly_fields = [
        "kyc_full_name",
        "kyc_address",
        "kyc_government_id_suffix",
        "verified_at",
        "created_at",
    ]
