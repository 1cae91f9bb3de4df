from django.contrib import admin

from events.models import Event


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["name", "location", "date", "capacity", "tickets_sold", "tickets_reserved"]
    search_fields = ["name", "location"]
    list_filter = ["date"]
    readonly_fields = ["tickets_sold", "tickets_reserved", "created_at", "updated_at"]
