from creditdesk.schemas.billing import BillingEntryCreate
from creditdesk.schemas.common import CamelModel, Outcome
from creditdesk.schemas.credits import (
    CreditAccountCreate,
    CreditStatusView,
    DeductCreditsRequest,
    DeductionView,
    InsufficientCreditsView,
)
from creditdesk.schemas.reporting import BillingEntryView, DashboardView, PlanOverviewView
from creditdesk.schemas.subscription import SubscriptionCreate
from creditdesk.schemas.user import SetupUserRequest, SetupUserView, UserCreate

__all__ = [
    "BillingEntryCreate",
    "BillingEntryView",
    "CamelModel",
    "CreditAccountCreate",
    "CreditStatusView",
    "DashboardView",
    "DeductCreditsRequest",
    "DeductionView",
    "InsufficientCreditsView",
    "Outcome",
    "PlanOverviewView",
    "SetupUserRequest",
    "SetupUserView",
    "SubscriptionCreate",
    "UserCreate",
]
