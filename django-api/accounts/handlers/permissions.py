from rest_framework.permissions import BasePermission

from accounts.services.factory import get_account_service


class IsOrganizer(BasePermission):
    """Allows only accounts registered with the Organizer role."""

    message = "Only organizer accounts can do that"
    code = "not_organizer"

    def has_permission(self, request, view) -> bool:
        if not (request.user and request.user.is_authenticated):
            return False
        return get_account_service().is_organizer(request.user.id)
