"""User credit API endpoints."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from creditdesk.core.database import get_db
from creditdesk.core.exceptions import ErrorKind
from creditdesk.schemas.common import Outcome
from creditdesk.schemas.credits import DeductCreditsRequest
from creditdesk.schemas.user import SetupUserRequest
from creditdesk.services.user_operations import UserOperations

router = APIRouter()

STATUS_BY_ERROR = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INCOMPLETE_PROFILE: 400,
    ErrorKind.INSUFFICIENT_CREDITS: 400,
    ErrorKind.TRANSIENT_STORE_FAILURE: 503,
    ErrorKind.UNEXPECTED: 500,
}

_ENVELOPE_RESPONSES: dict[int | str, dict[str, str]] = {
    400: {"description": "Missing or invalid input"},
    404: {"description": "User not found"},
    500: {"description": "Unexpected failure"},
    503: {"description": "Store unavailable, safe to retry"},
}


def outcome_response(outcome: Outcome, success_status: int = 200) -> JSONResponse:
    """Serialize an outcome, picking the status code from its error kind."""
    status_code = success_status if outcome.error is None else STATUS_BY_ERROR[outcome.error]
    return JSONResponse(
        status_code=status_code,
        content=outcome.model_dump(mode="json", by_alias=True),
    )


@router.get(
    "/credit-status",
    response_model=Outcome,
    summary="Get credit status",
    responses=_ENVELOPE_RESPONSES,
)
async def get_credit_status(
    user_id: str | None = Query(default=None, alias="userId"),
    db: Session = Depends(get_db),
) -> JSONResponse:
    """Report whether the user has credits left and how many."""
    return outcome_response(UserOperations(db).get_credit_status(user_id))


@router.get(
    "/dashboard",
    response_model=Outcome,
    summary="Get usage dashboard",
    responses=_ENVELOPE_RESPONSES,
)
async def get_dashboard(
    user_id: str | None = Query(default=None, alias="userId"),
    db: Session = Depends(get_db),
) -> JSONResponse:
    return outcome_response(UserOperations(db).get_dashboard(user_id))


@router.get(
    "/plan-overview",
    response_model=Outcome,
    summary="Get plan overview",
    responses=_ENVELOPE_RESPONSES,
)
async def get_plan_overview(
    user_id: str | None = Query(default=None, alias="userId"),
    db: Session = Depends(get_db),
) -> JSONResponse:
    return outcome_response(UserOperations(db).get_plan_overview(user_id))


@router.get(
    "/billing-history",
    response_model=Outcome,
    summary="Get billing history",
    responses=_ENVELOPE_RESPONSES,
)
async def get_billing_history(
    user_id: str | None = Query(default=None, alias="userId"),
    db: Session = Depends(get_db),
) -> JSONResponse:
    """List billing entries, most recent first."""
    return outcome_response(UserOperations(db).get_billing_history(user_id))


@router.post(
    "/setup",
    response_model=Outcome,
    status_code=201,
    summary="Set up a new user",
    responses={200: {"description": "User already exists"}, **_ENVELOPE_RESPONSES},
)
async def setup_user(
    data: SetupUserRequest,
    db: Session = Depends(get_db),
) -> JSONResponse:
    """Create the user on the free plan. Repeated calls leave the user untouched."""
    outcome = UserOperations(db).setup_user(data.user_id, data.email, data.name)
    created = outcome.success and outcome.data is not None and outcome.data.created
    return outcome_response(outcome, success_status=201 if created else 200)


@router.post(
    "/deduct-credits",
    response_model=Outcome,
    summary="Deduct credits",
    responses=_ENVELOPE_RESPONSES,
)
async def deduct_credits(
    data: DeductCreditsRequest,
    db: Session = Depends(get_db),
) -> JSONResponse:
    return outcome_response(UserOperations(db).deduct_credits(data.user_id, data.amount))
