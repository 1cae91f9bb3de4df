from django.contrib import admin

from tickets.models import Ticket, TicketAuditEntry


class TicketAuditEntryInline(admin.TabularInline):
    model = TicketAuditEntry
    extra = 0
    can_delete = False
    readonly_fields = ["old_status", "new_status", "actor", "created_at"]

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Ticket)
class TicketAdmin(admin.ModelAdmin):
    """Read-only: status changes must go through the lifecycle engine."""

    list_display = ["id", "event", "status", "purchaser", "holder", "invitee_email", "expires_at"]
    list_filter = ["status", "event"]
    search_fields = ["invitee_email"]
    inlines = [TicketAuditEntryInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
