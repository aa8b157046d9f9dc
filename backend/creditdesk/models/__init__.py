from creditdesk.models.billing_entry import BillingEntry, BillingEntryStatus
from creditdesk.models.credit_account import CreditAccount
from creditdesk.models.subscription import BillingCycle, Subscription, SubscriptionStatus
from creditdesk.models.user import User

__all__ = [
    "BillingCycle",
    "BillingEntry",
    "BillingEntryStatus",
    "CreditAccount",
    "Subscription",
    "SubscriptionStatus",
    "User",
]
