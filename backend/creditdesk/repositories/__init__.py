from creditdesk.repositories.billing_entry_repository import BillingEntryRepository
from creditdesk.repositories.credit_account_repository import CreditAccountRepository
from creditdesk.repositories.user_repository import UserRepository

__all__ = [
    "BillingEntryRepository",
    "CreditAccountRepository",
    "UserRepository",
]
