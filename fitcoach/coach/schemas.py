from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CoachRequest(BaseModel):
    """Incoming coach request.

    Any unrecognized ``type``, including non-strings, selects the general
    template instead of failing validation.
    """

    model_config = ConfigDict(populate_by_name=True)

    type: Any = None
    user_context: Any = Field(default=None, alias="userContext")
    message: str


class CoachResponse(BaseModel):
    response: str


class ErrorResponse(BaseModel):
    error: str


class AuthenticatedCaller(BaseModel):
    user_id: str
    email: str | None = None
