from pydantic import BaseModel, Field

from creditdesk.schemas.common import CamelModel


class UserCreate(BaseModel):
    external_id: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)


class SetupUserRequest(CamelModel):
    user_id: str | None = None
    email: str | None = None
    name: str | None = None


class SetupUserView(CamelModel):
    created: bool
