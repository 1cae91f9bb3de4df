"""Wire the account service to the Django store."""

from accounts.services.account_service import AccountService
from accounts.stores.django_store import DjangoAccountStore


def get_account_service() -> AccountService:
    return AccountService(DjangoAccountStore())
