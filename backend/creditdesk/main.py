import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from creditdesk.core.config import settings
from creditdesk.core.exceptions import ErrorKind
from creditdesk.core.log import configure_logging
from creditdesk.routers import users
from creditdesk.routers.users import STATUS_BY_ERROR, outcome_response
from creditdesk.schemas.common import Outcome

configure_logging()
logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {"name": "Users", "description": "Credit status, usage dashboards, plans and billing."},
]

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description="Per-user credit quotas against subscription plans.",
    openapi_tags=OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        message = "Route not found"
        kind = ErrorKind.NOT_FOUND
    else:
        message = str(exc.detail)
        kind = ErrorKind.INVALID_INPUT if exc.status_code < 500 else ErrorKind.UNEXPECTED
    return JSONResponse(
        status_code=exc.status_code,
        content=Outcome.fail(kind, message).model_dump(mode="json", by_alias=True),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
    message = "Invalid request"
    if fields:
        message = f"Invalid request: {', '.join(fields)}"
    return outcome_response(Outcome.fail(ErrorKind.INVALID_INPUT, message))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=STATUS_BY_ERROR[ErrorKind.UNEXPECTED],
        content=Outcome.fail(ErrorKind.UNEXPECTED, "Something went wrong").model_dump(
            mode="json", by_alias=True
        ),
    )


app.include_router(users.router, prefix="/api/user", tags=["Users"])


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "domain": settings.APP_DOMAIN,
        "status": "running",
    }
